"""Reply threading headers module."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Union

from imap_tools import MailMessage

from .request import ComposeRequest

logger = logging.getLogger(__name__)

HeaderSource = Union[Mapping, Iterable[Any]]


@dataclass
class ReplyContext:
    """
    Threading information taken from the message being replied to.

    The lookup of the parent message (by provider message id, over
    IMAP, ...) happens outside this package; this class only reads the
    headers of a message that has already been fetched.

    Attributes:
        message_id: Message-ID of the parent message
        references: Message-IDs from the parent's References header
    """

    message_id: str
    references: list[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate reply context after initialization."""
        self.message_id = (self.message_id or "").strip()
        if not self.message_id:
            raise ValueError("Parent message has no Message-ID")

    @classmethod
    def from_headers(cls, headers: HeaderSource) -> "ReplyContext":
        """
        Build a reply context from a parent's raw headers.

        Args:
            headers: Either a mapping of header name to value (values
                     may be lists or tuples, as imap_tools returns
                     them), a sequence of {"name": ..., "value": ...}
                     dicts as returned by provider metadata APIs, or a
                     sequence of (name, value) pairs. Names are matched
                     case-insensitively.

        Returns:
            ReplyContext for the parent

        Raises:
            ValueError: If no Message-ID header is present
        """
        found: dict[str, str] = {}
        for name, value in _iter_headers(headers):
            key = name.strip().lower()
            if key in ("message-id", "references") and key not in found:
                found[key] = value

        return cls(
            message_id=found.get("message-id", ""),
            references=found.get("references", "").split(),
        )

    @classmethod
    def from_mail_message(cls, msg: MailMessage) -> "ReplyContext":
        """
        Build a reply context from a fetched imap_tools message.

        Args:
            msg: Parent message

        Returns:
            ReplyContext for the parent
        """
        context = cls.from_headers(msg.headers)
        logger.debug(
            f"Reply context from {context.message_id[:30]}... "
            f"({len(context.references)} reference(s))"
        )
        return context

    def in_reply_to_header(self) -> str:
        return self.message_id

    def references_header(self) -> str:
        """
        Build the References value for the reply.

        Returns:
            Parent's references followed by the parent's Message-ID,
            without duplicates, space-separated
        """
        references: list[str] = []
        for ref in self.references + [self.message_id]:
            if ref not in references:
                references.append(ref)
        return " ".join(references)


def apply_reply(request: ComposeRequest, context: ReplyContext) -> ComposeRequest:
    """
    Return a copy of a request that replies to the given parent.

    Args:
        request: Message being composed
        context: Parent's threading information

    Returns:
        New ComposeRequest with in_reply_to and references set
    """
    reply = replace(
        request,
        in_reply_to=context.in_reply_to_header(),
        references=context.references_header(),
    )
    logger.debug(
        f"Set In-Reply-To: {context.message_id[:30]}... "
        f"with {len(reply.references.split())} reference(s)"
    )
    return reply


def _iter_headers(headers: HeaderSource):
    if isinstance(headers, Mapping):
        items = headers.items()
    else:
        items = (
            (h.get("name", ""), h.get("value", "")) if isinstance(h, Mapping) else h
            for h in headers
        )

    for name, value in items:
        if isinstance(value, (list, tuple)):
            value = value[0] if value else ""
        yield str(name or ""), str(value or "").strip()
