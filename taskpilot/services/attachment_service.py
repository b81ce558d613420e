import logging
import os
import uuid
from typing import List, Tuple

from django.conf import settings
from django.core.files.storage import default_storage

from taskpilot.constants.messages import NotFoundErrors
from taskpilot.exceptions.not_found_exceptions import AttachmentNotFoundError
from taskpilot.models.common.embedded import AttachmentModel
from taskpilot.utils.attachment_utils import content_type_for, is_external_url, validate_upload

logger = logging.getLogger(__name__)


class AttachmentService:
    """
    Moves uploaded files in and out of Django's default storage. The storage
    backend decides where bytes live; a stored `path` is either a storage
    name or an absolute URL for files kept by an external provider.
    """

    @classmethod
    def store(cls, uploaded_file, folder: str, uploaded_by) -> AttachmentModel:
        validate_upload(uploaded_file)

        extension = os.path.splitext(uploaded_file.name)[1].lower()
        storage_name = default_storage.save(f"{folder}/{uuid.uuid4().hex}{extension}", uploaded_file)
        logger.info(f"Stored attachment '{uploaded_file.name}' as {storage_name}")

        return AttachmentModel(filename=uploaded_file.name, path=storage_name, uploadedBy=uploaded_by)

    @classmethod
    def store_profile_image(cls, uploaded_file, user_id: str) -> str:
        """Returns the storage URL of the saved image; the user document is not touched."""
        validate_upload(uploaded_file, settings.ATTACHMENTS["PROFILE_IMAGE_EXTENSIONS"])

        extension = os.path.splitext(uploaded_file.name)[1].lower()
        storage_name = default_storage.save(f"profile-images/{user_id}/{uuid.uuid4().hex}{extension}", uploaded_file)
        logger.info(f"Stored profile image for user {user_id} as {storage_name}")
        return default_storage.url(storage_name)

    @staticmethod
    def find(attachments: List[AttachmentModel], attachment_id: str) -> AttachmentModel:
        for attachment in attachments:
            if str(attachment.id) == str(attachment_id):
                return attachment
        raise AttachmentNotFoundError()

    @classmethod
    def open(cls, attachment: AttachmentModel) -> Tuple[object, str]:
        """
        Returns an open file handle and the content type. Not for external
        URLs; callers redirect to those instead.
        """
        if not default_storage.exists(attachment.path):
            raise AttachmentNotFoundError(NotFoundErrors.ATTACHMENT_FILE_MISSING)
        return default_storage.open(attachment.path, "rb"), content_type_for(attachment.filename)

    @classmethod
    def discard(cls, attachment: AttachmentModel) -> None:
        """Best effort removal of the stored bytes after the reference is gone."""
        if is_external_url(attachment.path):
            return
        try:
            default_storage.delete(attachment.path)
        except OSError as e:
            logger.warning(f"Failed to delete stored file {attachment.path}: {str(e)}")
