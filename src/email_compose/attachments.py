"""Attachment resolution and encoding module."""

import base64
import logging
import mimetypes
from dataclasses import replace
from pathlib import Path
from urllib.parse import quote

from .errors import AttachmentUnreadableError
from .headers import is_ascii
from .request import AttachmentRef

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

# mimetypes encoding name -> type of the compressed file itself
COMPRESSED_MIME_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


def resolve_attachment(ref: AttachmentRef) -> AttachmentRef:
    """
    Fill in the filename, MIME type and bytes of an attachment.

    The caller's descriptor is left as is; a resolved copy is returned.

    Args:
        ref: Attachment descriptor, possibly incomplete

    Returns:
        New AttachmentRef with filename, mime_type and data set

    Raises:
        AttachmentUnreadableError: If there is no data and the path is
            missing or cannot be read
    """
    filename = ref.filename.strip()
    if not filename and ref.path:
        filename = Path(ref.path).name

    mime_type = ref.mime_type.strip()
    if not mime_type:
        guessed, encoding = mimetypes.guess_type(filename.lower())
        if encoding:
            # "notes.txt.gz" is a gzip file, not text
            guessed = COMPRESSED_MIME_TYPES.get(encoding)
        mime_type = guessed or DEFAULT_MIME_TYPE

    data = ref.data
    if not data:
        if not ref.path:
            raise AttachmentUnreadableError(
                f"attachment {filename or '<unnamed>'!r} has no data and no path"
            )
        try:
            data = Path(ref.path).read_bytes()
        except OSError as e:
            logger.error(f"Failed to read attachment {ref.path}: {e}")
            raise AttachmentUnreadableError(
                f"cannot read attachment {ref.path}: {e}"
            ) from e
        logger.debug(f"Read {len(data)} bytes from {ref.path}")

    return replace(ref, filename=filename, mime_type=mime_type, data=data)


def wrap_base64(data: bytes, width: int = 76) -> str:
    """
    Base64-encode bytes, hard-wrapped with CRLF line breaks.

    The result has no trailing line break.
    """
    encoded = base64.b64encode(data).decode("ascii")
    return "\r\n".join(
        encoded[i:i + width] for i in range(0, len(encoded), width)
    )


def content_disposition_filename(filename: str) -> str:
    """
    Build the filename parameter of a Content-Disposition header.

    ASCII names use the quoted form. Other names use the RFC 5987
    extended form with UTF-8 percent-encoding, spaces as %20.

    Args:
        filename: Attachment filename

    Returns:
        Parameter string, e.g. 'filename="report.pdf"'
    """
    filename = filename.strip()
    if not filename:
        return 'filename="attachment"'
    if is_ascii(filename):
        escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
        return f'filename="{escaped}"'
    return "filename*=UTF-8''" + quote(filename, safe="", encoding="utf-8")
