"""Boundary and Message-ID generation module."""

import base64
import logging
from email.utils import parseaddr

from .config import EncoderConfig
from .errors import RandomSourceError

logger = logging.getLogger(__name__)

BOUNDARY_ENTROPY_BYTES = 18
MESSAGE_ID_ENTROPY_BYTES = 16


def _random_token(config: EncoderConfig, size: int) -> str:
    """
    Draw random bytes and encode them as unpadded URL-safe base64.

    Raises:
        RandomSourceError: If the source fails or returns too few bytes
    """
    try:
        raw = config.random_source(size)
    except Exception as e:
        logger.error(f"Random source failed: {e}", exc_info=True)
        raise RandomSourceError(f"random source failed: {e}") from e

    if raw is None or len(raw) != size:
        got = 0 if raw is None else len(raw)
        raise RandomSourceError(
            f"random source returned {got} bytes, expected {size}"
        )

    return base64.urlsafe_b64encode(bytes(raw)).rstrip(b"=").decode("ascii")


def random_boundary(config: EncoderConfig) -> str:
    """
    Generate a multipart boundary.

    Every call draws fresh entropy, so two boundaries in one message
    differ with overwhelming probability. Body content is not scanned
    for the generated token.

    Args:
        config: Encoder configuration supplying the random source

    Returns:
        Boundary token, e.g. "emailcompose_3q2-7wAAAB..."
    """
    return config.boundary_prefix + _random_token(config, BOUNDARY_ENTROPY_BYTES)


def message_id_domain(from_: str, fallback: str) -> str:
    """
    Pick the Message-ID domain from the sender.

    The From value is first parsed as a mailbox; if that yields no
    domain, the raw string is searched for "@" instead.

    Args:
        from_: Raw From header value
        fallback: Domain used when From has none

    Returns:
        Domain name
    """
    _, addr = parseaddr(from_.strip())
    at = addr.rfind("@")
    if at != -1 and addr[at + 1:].strip():
        return addr[at + 1:].strip()

    at = from_.rfind("@")
    if at != -1:
        domain = from_[at + 1:].strip().strip(" >")
        if domain:
            return domain

    return fallback


def random_message_id(from_: str, config: EncoderConfig) -> str:
    """
    Generate a Message-ID rooted at the sender's domain.

    Args:
        from_: Raw From header value
        config: Encoder configuration

    Returns:
        Message-ID string in standard format, "<local@domain>"
    """
    domain = message_id_domain(from_, config.fallback_domain)
    local = _random_token(config, MESSAGE_ID_ENTROPY_BYTES)
    message_id = f"<{local}@{domain}>"
    logger.debug(f"Generated Message-ID: {message_id}")
    return message_id
