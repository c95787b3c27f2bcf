"""Compose request data structures module."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class AttachmentRef:
    """
    One file to attach to an outgoing message.

    Any field may be left empty; missing values are filled in at encode
    time by the attachment resolver, which returns a new instance and
    leaves this one untouched.

    Attributes:
        path: Source location on disk (optional when data is given)
        filename: Name shown to the recipient (default: base name of path)
        mime_type: Content type (default: guessed from the filename)
        data: Raw bytes (default: read from path)
    """

    path: Optional[Union[str, Path]] = None
    filename: str = ""
    mime_type: str = ""
    data: bytes = b""

    def __repr__(self) -> str:
        return (
            f"AttachmentRef(path={self.path!r}, filename={self.filename!r}, "
            f"mime_type={self.mime_type!r}, data=<{len(self.data)} bytes>)"
        )


@dataclass
class ComposeRequest:
    """
    Structured description of a message to encode.

    A request is built once per send or draft operation and consumed by
    the encoder. Field checks (required fields, header injection) run at
    encode time, not here.

    Attributes:
        from_: Sender mailbox, e.g. "Alice <alice@example.com>"
        to: Recipient addresses
        subject: Subject line (may contain non-ASCII text)
        text: Plain text body (optional)
        html: HTML body (optional)
        cc: CC recipients (optional)
        bcc: BCC recipients (optional)
        reply_to: Reply-To address (optional)
        in_reply_to: Message-ID being replied to (optional)
        references: Space-separated Message-IDs of the thread (optional)
        headers: Additional headers as ordered (name, value) pairs. A
                 mapping is accepted and converted in iteration order.
        attachments: Files to attach, in order
    """

    from_: str
    to: list[str]
    subject: str
    text: str = ""
    html: str = ""
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    reply_to: str = ""
    in_reply_to: str = ""
    references: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)
    attachments: list[AttachmentRef] = field(default_factory=list)

    def __post_init__(self):
        """Normalize container fields after initialization."""
        if isinstance(self.to, str):
            self.to = [self.to]
        else:
            self.to = list(self.to or [])
        self.cc = list(self.cc or [])
        self.bcc = list(self.bcc or [])

        if isinstance(self.headers, Mapping):
            self.headers = list(self.headers.items())
        else:
            self.headers = [(name, value) for name, value in self.headers or []]

        self.attachments = list(self.attachments or [])

    def has_header(self, name: str) -> bool:
        """
        Check whether an additional header is present.

        Args:
            name: Header name, compared case-insensitively

        Returns:
            True if any additional header has this name
        """
        wanted = name.strip().lower()
        return any(key.strip().lower() == wanted for key, _ in self.headers)

    def get_header(self, name: str) -> Optional[str]:
        """Return the first additional header value with this name, if any."""
        wanted = name.strip().lower()
        for key, value in self.headers:
            if key.strip().lower() == wanted:
                return value
        return None

    def get_all_recipients(self) -> list[str]:
        """
        Get all recipients (to + cc + bcc).

        Returns:
            Combined list of all recipient addresses
        """
        return self.to + self.cc + self.bcc

    def __repr__(self) -> str:
        return (
            f"ComposeRequest(from_='{self.from_}', "
            f"to={self.to}, subject='{self.subject[:30]}', "
            f"attachments={len(self.attachments)})"
        )
