"""Encoder configuration module."""

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable


def _local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class EncoderConfig:
    """
    Encoder configuration.

    This class holds the ambient capabilities the encoder depends on
    (randomness and the current time) together with the few constants
    that shape its output. Tests pass a deterministic random source and
    a fixed clock to assert exact bytes.

    Attributes:
        random_source: Callable returning n random bytes
                       (default: secrets.token_bytes)
        clock: Callable returning the Date header timestamp
               (default: current local time, timezone-aware)
        boundary_prefix: Fixed tag prepended to every boundary
        fallback_domain: Message-ID domain used when From has none
        base64_line_length: Wrap width for attachment payloads
    """

    random_source: Callable[[int], bytes] = field(default=secrets.token_bytes)
    clock: Callable[[], datetime] = field(default=_local_now)
    boundary_prefix: str = "emailcompose_"
    fallback_domain: str = "emailcompose.local"
    base64_line_length: int = 76

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not callable(self.random_source):
            raise ValueError("random_source must be callable")

        if not callable(self.clock):
            raise ValueError("clock must be callable")

        if any(c in self.boundary_prefix for c in ' "\r\n'):
            raise ValueError(
                f"Invalid boundary prefix: {self.boundary_prefix!r}"
            )

        # RFC 2046 caps boundaries at 70 characters; the token adds 24
        if len(self.boundary_prefix) > 46:
            raise ValueError(
                "boundary_prefix must be at most 46 characters, "
                f"got {len(self.boundary_prefix)}"
            )

        if not self.fallback_domain or "@" in self.fallback_domain:
            raise ValueError(
                f"Invalid fallback domain: {self.fallback_domain!r}"
            )

        if self.base64_line_length < 4 or self.base64_line_length > 76:
            raise ValueError(
                "base64_line_length must be between 4 and 76, "
                f"got {self.base64_line_length}"
            )
