"""MIME body part composing module."""

from .attachments import content_disposition_filename, wrap_base64
from .headers import CRLF
from .request import AttachmentRef

TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html; charset=utf-8"


def normalize_crlf(text: str) -> str:
    """Convert CRLF, bare CR and bare LF line endings to CRLF."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.replace("\n", CRLF)


def body_with_trailing_crlf(body: str) -> str:
    if body.endswith(CRLF):
        return body
    return body + CRLF


def delimiter(boundary: str) -> str:
    return f"--{boundary}{CRLF}"


def close_delimiter(boundary: str) -> str:
    return f"--{boundary}--{CRLF}"


def text_part(boundary: str, content_type: str, body: str) -> str:
    """
    Compose one 7bit text part inside a multipart region.

    Args:
        boundary: Boundary of the enclosing multipart
        content_type: Full Content-Type value, including charset
        body: CRLF-normalized body text

    Returns:
        Part text, starting with the delimiter line
    """
    return (
        delimiter(boundary)
        + f"Content-Type: {content_type}{CRLF}"
        + f"Content-Transfer-Encoding: 7bit{CRLF}{CRLF}"
        + body_with_trailing_crlf(body)
    )


def attachment_part(
    boundary: str,
    attachment: AttachmentRef,
    line_length: int = 76
) -> str:
    """
    Compose one base64 attachment part inside a multipart region.

    Args:
        boundary: Boundary of the enclosing multipart/mixed
        attachment: Resolved attachment (filename, mime_type, data set)
        line_length: Base64 wrap width

    Returns:
        Part text, starting with the delimiter line
    """
    disposition = content_disposition_filename(attachment.filename)
    return (
        delimiter(boundary)
        + f"Content-Type: {attachment.mime_type}{CRLF}"
        + f"Content-Transfer-Encoding: base64{CRLF}"
        + f"Content-Disposition: attachment; {disposition}{CRLF}{CRLF}"
        + wrap_base64(attachment.data, line_length)
        + CRLF
    )
