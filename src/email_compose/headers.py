"""Header line writing and RFC 2047 encoding module."""

import logging
from email import quoprimime

from .errors import InvalidHeaderValueError

logger = logging.getLogger(__name__)

CRLF = "\r\n"

# RFC 2047: an encoded word is at most 75 characters long
MAX_ENCODED_WORD = 75
_WORD_PREFIX = "=?utf-8?q?"
_WORD_SUFFIX = "?="


def validate_header_value(value: str, field: str) -> None:
    """
    Reject a header value that contains a line break.

    This is the only barrier between caller input and the header
    block: a bare CR or LF would let a value start a new header or
    terminate the header section early.

    Args:
        value: The value that will be written into a header
        field: Header name, used in the error message

    Raises:
        InvalidHeaderValueError: If value contains CR or LF
    """
    if "\r" in value or "\n" in value:
        raise InvalidHeaderValueError(field)


def validate_header_name(name: str) -> None:
    """
    Reject a header field name that is not a single printable token.

    Raises:
        InvalidHeaderValueError: If name contains a colon, whitespace,
            a control character or a non-ASCII character
    """
    for ch in name:
        if ch == ":" or ord(ch) <= 32 or ord(ch) >= 127:
            raise InvalidHeaderValueError(
                f"header name {name!r}", "not a valid field name"
            )


def is_ascii(value: str) -> bool:
    return all(ord(ch) < 0x80 for ch in value)


def encode_header_if_needed(value: str) -> str:
    """
    Encode a header value as RFC 2047 encoded words when needed.

    ASCII values are returned unchanged. Anything else is encoded as
    UTF-8 using the "Q" scheme. Values too long for one encoded word
    are split into several words separated by a space; a character's
    UTF-8 sequence is never split between words.

    Args:
        value: Unencoded header text

    Returns:
        Header text safe for a 7-bit header block
    """
    if is_ascii(value):
        return value

    budget = MAX_ENCODED_WORD - len(_WORD_PREFIX) - len(_WORD_SUFFIX)
    words = []
    chunk = b""
    for ch in value:
        encoded = ch.encode("utf-8")
        if chunk and quoprimime.header_length(chunk + encoded) > budget:
            words.append(quoprimime.header_encode(chunk, charset="utf-8"))
            chunk = b""
        chunk += encoded
    if chunk:
        words.append(quoprimime.header_encode(chunk, charset="utf-8"))

    logger.debug(f"Encoded header value into {len(words)} encoded word(s)")
    return " ".join(words)


def write_header(lines: list[str], name: str, value: str) -> None:
    """
    Append one "name: value" header line terminated by CRLF.

    Args:
        lines: Output buffer the line is appended to
        name: Header field name
        value: Header field value (already encoded if needed)

    Raises:
        InvalidHeaderValueError: If the value contains CR or LF
    """
    validate_header_value(value, name)
    lines.append(f"{name}: {value}{CRLF}")
