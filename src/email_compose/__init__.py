"""
email-compose: RFC 5322 / MIME message encoder.

This library turns a structured compose request into transport-ready
email bytes. It is designed for applications that hand messages to a
mail provider API (as a base64url "raw" payload) or to an SMTP client
and need byte-exact, standards-compliant output.

Key Features:
    - Plain, HTML and multipart/alternative bodies
    - Attachments with base64 wrapping and RFC 5987 filenames
    - RFC 2047 encoded subjects
    - Header injection protection
    - Reply threading headers (In-Reply-To, References)
    - Injectable random source and clock for reproducible output

Basic Usage:
    >>> from email_compose import (
    ...     AttachmentRef,
    ...     ComposeRequest,
    ...     MessageEncoder
    ... )
    >>>
    >>> request = ComposeRequest(
    ...     from_="Alice <alice@example.com>",
    ...     to=["bob@example.com"],
    ...     subject="Quarterly report",
    ...     text="Report attached.",
    ...     attachments=[
    ...         AttachmentRef(filename="report.pdf", data=b"%PDF-1.4")
    ...     ]
    ... )
    >>>
    >>> message = MessageEncoder().encode(request)
    >>> message.raw[:5]
    b'From:'
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from .config import EncoderConfig
from .encoder import EncodedMessage, MessageEncoder, encode_message
from .errors import (
    AttachmentUnreadableError,
    ComposeError,
    InvalidHeaderValueError,
    MissingFieldError,
    RandomSourceError,
)
from .reply_chain import ReplyContext, apply_reply
from .request import AttachmentRef, ComposeRequest

__all__ = [
    "AttachmentRef",
    "AttachmentUnreadableError",
    "ComposeError",
    "ComposeRequest",
    "EncodedMessage",
    "EncoderConfig",
    "InvalidHeaderValueError",
    "MessageEncoder",
    "MissingFieldError",
    "RandomSourceError",
    "ReplyContext",
    "apply_reply",
    "encode_message",
]
