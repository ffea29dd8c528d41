"""Server entrypoint. Starts uvicorn with host and port from env."""
import os
import uvicorn

from cryptotax.main import app


def main() -> None:
    host = os.environ.get("CRYPTOTAX_HOST", "127.0.0.1")
    port = int(os.environ.get("CRYPTOTAX_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
