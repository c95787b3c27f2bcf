"""RFC 5322 / MIME message encoding module."""

import logging
from dataclasses import dataclass
from email.utils import format_datetime
from typing import Optional

from .attachments import resolve_attachment
from .config import EncoderConfig
from .errors import MissingFieldError
from .headers import (
    CRLF,
    encode_header_if_needed,
    validate_header_name,
    validate_header_value,
    write_header,
)
from .identifiers import random_boundary, random_message_id
from .parts import (
    TEXT_HTML,
    TEXT_PLAIN,
    attachment_part,
    body_with_trailing_crlf,
    close_delimiter,
    delimiter,
    normalize_crlf,
    text_part,
)
from .request import AttachmentRef, ComposeRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodedMessage:
    """
    A fully encoded message.

    Attributes:
        raw: Message bytes with CRLF line endings
        message_id: Message-ID written into the header, or the one the
                    caller supplied
    """

    raw: bytes
    message_id: Optional[str] = None

    def __bytes__(self) -> bytes:
        return self.raw

    def __len__(self) -> int:
        return len(self.raw)


class MessageEncoder:
    """
    Encoder turning a ComposeRequest into RFC 5322 message bytes.

    The body takes one of four shapes depending on which bodies are
    present and whether there are attachments:

    - text/plain or text/html single part
    - multipart/alternative (plain first, then HTML)
    - multipart/mixed wrapping one of the above plus attachments

    The encoder holds no per-message state, so one instance may be
    shared between threads.
    """

    def __init__(self, config: Optional[EncoderConfig] = None):
        """
        Initialize the encoder.

        Args:
            config: Encoder configuration (default: EncoderConfig())
        """
        self.config = config or EncoderConfig()

    def encode(self, request: ComposeRequest) -> EncodedMessage:
        """
        Encode a message.

        Every check runs, and every attachment is resolved, before the
        message is assembled, so a failure never yields partial output.

        Args:
            request: Message to encode

        Returns:
            EncodedMessage with the raw bytes and the Message-ID

        Raises:
            MissingFieldError: If From, To or Subject is blank
            InvalidHeaderValueError: If a header-bound value contains
                CR or LF, or an additional header name is malformed
            AttachmentUnreadableError: If attachment bytes cannot be read
            RandomSourceError: If the random source fails
        """
        self._validate(request)

        attachments = [resolve_attachment(a) for a in request.attachments]
        for attachment in attachments:
            validate_header_value(attachment.filename, "attachment filename")
            validate_header_value(attachment.mime_type, "attachment Content-Type")

        lines: list[str] = []
        message_id = self._write_headers(lines, request)

        text = normalize_crlf(request.text or "")
        html = normalize_crlf(request.html or "")
        has_text = bool(text.strip())
        has_html = bool(html.strip())

        if attachments:
            logger.debug(
                f"Encoding multipart/mixed with {len(attachments)} "
                f"attachment(s) (text={has_text}, html={has_html})"
            )
            self._write_mixed(lines, text, html, has_text, has_html, attachments)
        else:
            logger.debug(f"Encoding body (text={has_text}, html={has_html})")
            self._write_body(lines, text, html, has_text, has_html)

        raw = "".join(lines).encode("utf-8")
        logger.info(f"Encoded message {message_id} ({len(raw)} bytes)")
        return EncodedMessage(raw=raw, message_id=message_id)

    def _validate(self, request: ComposeRequest) -> None:
        """
        Check required fields and header values.

        Raises:
            MissingFieldError: If From, To or Subject is blank
            InvalidHeaderValueError: If any header-bound value is unsafe
        """
        if not (request.from_ or "").strip():
            raise MissingFieldError("From")
        if not any(a.strip() for a in request.to):
            raise MissingFieldError("To")
        if not (request.subject or "").strip():
            raise MissingFieldError("Subject")

        validate_header_value(request.from_, "From")
        for address in request.get_all_recipients():
            validate_header_value(address, "address")
        validate_header_value(request.reply_to or "", "Reply-To")
        validate_header_value(request.subject, "Subject")
        validate_header_value(request.in_reply_to or "", "In-Reply-To")
        validate_header_value(request.references or "", "References")
        for name, value in request.headers:
            if name.strip():
                validate_header_name(name.strip())
            validate_header_value(value or "", f"header {name}")

    def _write_headers(
        self,
        lines: list[str],
        request: ComposeRequest
    ) -> Optional[str]:
        """
        Write the header block, excluding the body Content-Type.

        Returns:
            The generated Message-ID, or the caller's one if supplied
        """
        write_header(lines, "From", request.from_.strip())
        write_header(lines, "To", _join_addresses(request.to))
        if _join_addresses(request.cc):
            write_header(lines, "Cc", _join_addresses(request.cc))
        if _join_addresses(request.bcc):
            write_header(lines, "Bcc", _join_addresses(request.bcc))
        if (request.reply_to or "").strip():
            write_header(lines, "Reply-To", request.reply_to.strip())
        write_header(lines, "Subject", encode_header_if_needed(request.subject))
        write_header(lines, "Date", format_datetime(self.config.clock()))

        if request.has_header("Message-ID"):
            message_id = (request.get_header("Message-ID") or "").strip() or None
            logger.debug("Using caller-supplied Message-ID")
        else:
            message_id = random_message_id(request.from_, self.config)
            write_header(lines, "Message-ID", message_id)

        write_header(lines, "MIME-Version", "1.0")
        if (request.in_reply_to or "").strip():
            write_header(lines, "In-Reply-To", request.in_reply_to.strip())
        if (request.references or "").strip():
            write_header(lines, "References", request.references.strip())

        for name, value in request.headers:
            if name.strip() and (value or "").strip():
                write_header(lines, name.strip(), value)

        return message_id

    def _write_body(
        self,
        lines: list[str],
        text: str,
        html: str,
        has_text: bool,
        has_html: bool
    ) -> None:
        """Write the Content-Type block and body of a message without attachments."""
        if has_text and has_html:
            boundary = random_boundary(self.config)
            write_header(
                lines,
                "Content-Type",
                f'multipart/alternative; boundary="{boundary}"'
            )
            lines.append(CRLF)
            self._write_alternative_parts(lines, boundary, text, html)
            return

        content_type, body = (TEXT_HTML, html) if has_html else (TEXT_PLAIN, text)
        write_header(lines, "Content-Type", content_type)
        write_header(lines, "Content-Transfer-Encoding", "7bit")
        lines.append(CRLF)
        lines.append(body_with_trailing_crlf(body))

    def _write_mixed(
        self,
        lines: list[str],
        text: str,
        html: str,
        has_text: bool,
        has_html: bool,
        attachments: list[AttachmentRef]
    ) -> None:
        """Write a multipart/mixed body: the message body, then attachments."""
        mixed = random_boundary(self.config)
        write_header(lines, "Content-Type", f'multipart/mixed; boundary="{mixed}"')
        lines.append(CRLF)

        # The body part uses the same shape rule as a message without attachments
        if has_text and has_html:
            alternative = random_boundary(self.config)
            lines.append(delimiter(mixed))
            lines.append(
                "Content-Type: multipart/alternative; "
                f'boundary="{alternative}"{CRLF}{CRLF}'
            )
            self._write_alternative_parts(lines, alternative, text, html)
        elif has_html:
            lines.append(text_part(mixed, TEXT_HTML, html))
        else:
            lines.append(text_part(mixed, TEXT_PLAIN, text))

        for attachment in attachments:
            logger.debug(
                f"Adding attachment {attachment.filename!r} "
                f"({attachment.mime_type}, {len(attachment.data)} bytes)"
            )
            lines.append(
                attachment_part(mixed, attachment, self.config.base64_line_length)
            )

        lines.append(close_delimiter(mixed))

    def _write_alternative_parts(
        self,
        lines: list[str],
        boundary: str,
        text: str,
        html: str
    ) -> None:
        lines.append(text_part(boundary, TEXT_PLAIN, text))
        lines.append(text_part(boundary, TEXT_HTML, html))
        lines.append(close_delimiter(boundary))


def _join_addresses(addresses: list[str]) -> str:
    return ", ".join(a.strip() for a in addresses if a.strip())


def encode_message(
    request: ComposeRequest,
    config: Optional[EncoderConfig] = None
) -> EncodedMessage:
    """
    Encode a message with a one-off encoder.

    Args:
        request: Message to encode
        config: Encoder configuration (default: EncoderConfig())

    Returns:
        EncodedMessage with the raw bytes and the Message-ID
    """
    return MessageEncoder(config).encode(request)
