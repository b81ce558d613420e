import mimetypes
import os
from typing import List, Optional

from django.conf import settings

from taskpilot.constants.messages import ValidationErrors
from taskpilot.exceptions.validation_exceptions import DomainValidationError

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# mimetypes does not know the office formats on every platform.
EXTRA_CONTENT_TYPES = {
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
}


def validate_upload(uploaded_file, allowed_extensions: Optional[List[str]] = None) -> None:
    """
    Check an uploaded file against the configured size limit and extension allow list.

    Args:
        uploaded_file: The Django UploadedFile, or None when nothing was sent
        allowed_extensions: Overrides `ATTACHMENTS["ALLOWED_EXTENSIONS"]`

    Raises:
        DomainValidationError: If no file was sent, the file is too large or its extension is not allowed
    """
    if uploaded_file is None:
        raise DomainValidationError(ValidationErrors.NO_FILE_UPLOADED, field="file")

    max_size = settings.ATTACHMENTS["MAX_UPLOAD_SIZE"]
    if uploaded_file.size > max_size:
        raise DomainValidationError(ValidationErrors.FILE_TOO_LARGE.format(max_size // (1024 * 1024)), field="file")

    allowed = allowed_extensions or settings.ATTACHMENTS["ALLOWED_EXTENSIONS"]
    extension = os.path.splitext(uploaded_file.name)[1].lower()
    if extension not in allowed:
        raise DomainValidationError(ValidationErrors.FILE_TYPE_NOT_ALLOWED.format(", ".join(allowed)), field="file")


def content_type_for(filename: str) -> str:
    extension = os.path.splitext(filename)[1].lower()
    if extension in EXTRA_CONTENT_TYPES:
        return EXTRA_CONTENT_TYPES[extension]
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or DEFAULT_CONTENT_TYPE


def is_external_url(path: str) -> bool:
    return path.startswith("http://") or path.startswith("https://")
