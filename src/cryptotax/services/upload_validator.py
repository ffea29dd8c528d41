"""Upload validation against the table of supported transaction file types."""

import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

MB = 1024 * 1024


@dataclass(frozen=True)
class FileTypeSpec:
    """A supported upload type and its limits."""

    extension: str
    mime_types: tuple[str, ...]
    description: str
    max_size: int  # bytes


@dataclass
class FileValidationResult:
    is_valid: bool
    error: Optional[str] = None
    file_type: Optional[FileTypeSpec] = None


SUPPORTED_FILE_TYPES: tuple[FileTypeSpec, ...] = (
    FileTypeSpec(
        extension="csv",
        mime_types=("text/csv", "application/csv", "text/plain"),
        description="Comma Separated Values",
        max_size=10 * MB,
    ),
    FileTypeSpec(
        extension="xlsx",
        mime_types=("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",),
        description="Excel Workbook (XLSX)",
        max_size=25 * MB,
    ),
    FileTypeSpec(
        extension="xls",
        mime_types=("application/vnd.ms-excel",),
        description="Excel Workbook (XLS)",
        max_size=25 * MB,
    ),
    FileTypeSpec(
        extension="pdf",
        mime_types=("application/pdf",),
        description="Portable Document Format",
        max_size=50 * MB,
    ),
)


def get_file_extension(filename: str) -> str:
    """Lower-cased text after the last dot, or '' when there is none."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def get_file_type_by_name(filename: str) -> Optional[FileTypeSpec]:
    extension = get_file_extension(filename)
    for entry in SUPPORTED_FILE_TYPES:
        if entry.extension == extension:
            return entry
    return None


def get_supported_extensions() -> list[str]:
    return [entry.extension for entry in SUPPORTED_FILE_TYPES]


def size_limit_error(file_type: FileTypeSpec) -> str:
    """Rejection message for a file over its type's ceiling."""
    max_size_mb = round(file_type.max_size / MB)
    return f"File size exceeds {max_size_mb}MB limit for {file_type.extension.upper()} files"


def validate_file(filename: str, size: int, content_type: Optional[str] = None) -> FileValidationResult:
    """
    Check a file's extension and size against the supported types.

    A declared MIME type that does not match the extension is logged and
    accepted, since browsers often report it wrongly. Contents are not read.

    Args:
        filename: Original file name as uploaded
        size: File size in bytes
        content_type: Declared MIME type, if any

    Returns:
        FileValidationResult with the matched type when valid
    """
    file_type = get_file_type_by_name(filename)
    if file_type is None:
        supported = ", ".join(ext.upper() for ext in get_supported_extensions())
        return FileValidationResult(
            is_valid=False,
            error=f"Unsupported file type. Supported formats: {supported}",
        )

    if size > file_type.max_size:
        return FileValidationResult(is_valid=False, error=size_limit_error(file_type))

    if content_type and content_type not in file_type.mime_types:
        logger.warning(
            "MIME type mismatch for %s: expected %s, got %s",
            filename,
            " or ".join(file_type.mime_types),
            content_type,
        )

    return FileValidationResult(is_valid=True, file_type=file_type)
