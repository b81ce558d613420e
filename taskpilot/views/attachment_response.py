from django.http import FileResponse, HttpResponseRedirect

from taskpilot.models.common.embedded import AttachmentModel
from taskpilot.services.attachment_service import AttachmentService
from taskpilot.utils.attachment_utils import is_external_url


def build_attachment_response(attachment: AttachmentModel, as_attachment: bool):
    """
    Download (`as_attachment=True`) or inline preview of a stored attachment.
    Files kept by an external provider are served by redirecting to their URL.
    """
    if is_external_url(attachment.path):
        return HttpResponseRedirect(attachment.path)

    file, content_type = AttachmentService.open(attachment)
    return FileResponse(file, as_attachment=as_attachment, filename=attachment.filename, content_type=content_type)


UPLOAD_REQUEST_SCHEMA = {
    "multipart/form-data": {
        "type": "object",
        "properties": {"file": {"type": "string", "format": "binary"}},
        "required": ["file"],
    }
}
