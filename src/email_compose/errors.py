"""Exceptions raised while encoding a message."""


class ComposeError(Exception):
    """Base class for all encoder failures."""


class MissingFieldError(ComposeError, ValueError):
    """A required field (From, To or Subject) is absent or blank."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing {field}")


class InvalidHeaderValueError(ComposeError, ValueError):
    """A header-bound string would break the header block."""

    def __init__(self, field: str, reason: str = "header value contains newline"):
        self.field = field
        super().__init__(f"invalid {field}: {reason}")


class AttachmentUnreadableError(ComposeError, OSError):
    """Attachment bytes could not be obtained."""


class RandomSourceError(ComposeError, OSError):
    """The random source failed to supply entropy."""
