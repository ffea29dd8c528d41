"""
API tests for upload endpoints.

Tests cover:
- Accepting valid files (202) and creating pending jobs
- Validation failures (400)
- Oversize uploads rejected without storing anything
- Job status lookup, scoped to the owner
- Recording parsed rows against a job
"""

from fastapi.testclient import TestClient

from cryptotax.services.upload_validator import MB

from tests.conftest import auth_headers


def _upload(client: TestClient, name: str = "trades.csv", content: bytes = b"a,b\n1,2\n",
            content_type: str = "text/csv", user_id: str = "user-1", **form):
    return client.post(
        "/api/upload/transactions",
        files={"file": (name, content, content_type)},
        data=form,
        headers=auth_headers(user_id),
    )


class TestUploadAPI:
    """Tests for POST /api/upload/transactions."""

    def test_requires_auth(self, client: TestClient):
        response = client.post(
            "/api/upload/transactions",
            files={"file": ("trades.csv", b"x", "text/csv")},
        )

        assert response.status_code == 401

    def test_valid_upload_accepted(self, client: TestClient, api_settings):
        """
        GIVEN a valid CSV
        WHEN I upload it
        THEN 202 is returned with a job id and the file is stored
        """
        response = _upload(client, exchange_type="binance_spot")

        assert response.status_code == 202
        data = response.json()
        assert data["success"] is True
        assert data["job_id"]
        assert "trades.csv" in data["message"]
        stored = list(api_settings.upload_dir.iterdir())
        assert len(stored) == 1
        assert stored[0].name.endswith("-trades.csv")

    def test_unsupported_type_rejected(self, client: TestClient):
        response = _upload(client, name="notes.txt", content_type="text/plain")

        assert response.status_code == 400
        assert response.json() == {
            "error": "Unsupported file type. Supported formats: CSV, XLSX, XLS, PDF",
            "details": "VALIDATION_ERROR",
        }

    def test_oversize_upload_rejected(self, client: TestClient, api_settings):
        """
        GIVEN a CSV just over the 10MB ceiling
        WHEN I upload it
        THEN 400 is returned and no file is stored
        """
        response = _upload(client, name="big.csv", content=b"x" * (10 * MB + 1))

        assert response.status_code == 400
        assert response.json()["error"] == "File size exceeds 10MB limit for CSV files"
        assert list(api_settings.upload_dir.iterdir()) == []

    def test_mime_mismatch_still_accepted(self, client: TestClient):
        response = _upload(client, name="export.xlsx", content_type="application/octet-stream")

        assert response.status_code == 202

    def test_missing_file_rejected(self, client: TestClient):
        response = client.post(
            "/api/upload/transactions",
            data={"exchange_type": "auto"},
            headers=auth_headers(),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "No file provided"


class TestUploadStatusAPI:
    """Tests for GET /api/upload/transactions."""

    def test_job_status(self, client: TestClient):
        """
        GIVEN an accepted upload
        WHEN I query its job id
        THEN the pending job is returned with its settings
        """
        job_id = _upload(client, sheet_name="Sheet1").json()["job_id"]

        response = client.get("/api/upload/transactions", params={"job_id": job_id}, headers=auth_headers())

        assert response.status_code == 200
        job = response.json()["job"]
        assert job["id"] == job_id
        assert job["status"] == "pending"
        assert job["progress"] == 0
        assert job["original_name"] == "trades.csv"
        assert job["file_type"] == "csv"
        assert job["exchange_type"] == "auto"
        assert job["sheet_name"] == "Sheet1"

    def test_missing_job_id_returns_400(self, client: TestClient):
        response = client.get("/api/upload/transactions", headers=auth_headers())

        assert response.status_code == 400
        assert response.json()["error"] == "Job ID required"

    def test_unknown_job_returns_404(self, client: TestClient):
        response = client.get("/api/upload/transactions", params={"job_id": "nope"}, headers=auth_headers())

        assert response.status_code == 404

    def test_other_users_job_returns_404(self, client: TestClient):
        job_id = _upload(client, user_id="user-1").json()["job_id"]

        response = client.get(
            "/api/upload/transactions",
            params={"job_id": job_id},
            headers=auth_headers("user-2"),
        )

        assert response.status_code == 404


def _rows(*amounts: str) -> list[dict]:
    return [
        {
            "timestamp": f"2024-02-0{day}T12:00:00Z",
            "type": "buy",
            "symbol": "btc",
            "amount": amount,
            "price": "40000",
        }
        for day, amount in enumerate(amounts, start=1)
    ]


def _post_results(client: TestClient, job_id: str, body: dict, user_id: str = "user-1"):
    return client.post(f"/api/upload/jobs/{job_id}/results", json=body, headers=auth_headers(user_id))


class TestIngestionResultsAPI:
    """Tests for POST /api/upload/jobs/{job_id}/results."""

    def test_rows_saved_and_job_completed(self, client: TestClient):
        """
        GIVEN a pending job
        WHEN the pipeline posts two parsed rows and a warning
        THEN both are saved, the job is completed and the rows are listed
        """
        job_id = _upload(client).json()["job_id"]

        response = _post_results(
            client, job_id, {"transactions": _rows("0.5", "0.25"), "total_rows": 3, "warnings": ["Row 3: skipped"]}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "File processed successfully"
        assert data["results"] == {
            "total_rows": 3,
            "saved_transactions": 2,
            "duplicates_skipped": 0,
            "errors": 0,
            "warnings": 1,
        }
        assert data["job"]["status"] == "completed"
        assert data["job"]["processed_transactions"] == 2
        listed = client.get("/api/transactions", headers=auth_headers()).json()
        assert listed["count"] == 2
        assert {t["symbol"] for t in listed["transactions"]} == {"BTC"}

    def test_rows_already_stored_are_skipped(self, client: TestClient):
        """
        GIVEN rows already imported through one job
        WHEN the same rows arrive for a second job
        THEN they are reported as duplicates and nothing new is saved
        """
        first = _upload(client).json()["job_id"]
        second = _upload(client).json()["job_id"]
        _post_results(client, first, {"transactions": _rows("0.5", "0.25")})

        response = _post_results(client, second, {"transactions": _rows("0.5", "0.25")})

        assert response.status_code == 200
        results = response.json()["results"]
        assert results["saved_transactions"] == 0
        assert results["duplicates_skipped"] == 2

    def test_finished_job_returns_400(self, client: TestClient):
        job_id = _upload(client).json()["job_id"]
        _post_results(client, job_id, {"transactions": _rows("1")})

        response = _post_results(client, job_id, {"transactions": _rows("2")})

        assert response.status_code == 400
        assert response.json()["error"] == f"Processing job {job_id} is already completed"

    def test_no_rows_fails_job(self, client: TestClient):
        """
        GIVEN a pending job
        WHEN the pipeline posts no rows
        THEN 400 is returned and the job reads back as failed
        """
        job_id = _upload(client).json()["job_id"]

        response = _post_results(client, job_id, {"transactions": [], "errors": ["Row 1: bad date"]})

        assert response.status_code == 400
        assert response.json()["error"] == "File processing failed - no valid transactions found"
        job = client.get("/api/upload/transactions", params={"job_id": job_id}, headers=auth_headers()).json()["job"]
        assert job["status"] == "failed"
        assert job["errors"] == ["Row 1: bad date"]

    def test_other_users_job_returns_404(self, client: TestClient):
        job_id = _upload(client, user_id="user-1").json()["job_id"]

        response = _post_results(client, job_id, {"transactions": _rows("1")}, user_id="user-2")

        assert response.status_code == 404

    def test_requires_auth(self, client: TestClient):
        response = client.post("/api/upload/jobs/any/results", json={"transactions": []})

        assert response.status_code == 401
