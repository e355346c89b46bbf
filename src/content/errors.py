"""Error types for content conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from content.formats import WireFormat


class ContentError(Exception):
    """Base class for content conversion errors."""


class DecodeError(ContentError, ValueError):
    """Raised when wire input cannot be decoded.

    Parameters
    ----------
    reason
        Human readable failure reason.
    wire_format
        Format the input was decoded as, or ``None`` for codec-level failures.
    """

    def __init__(self, reason: str, *, wire_format: WireFormat | None = None) -> None:
        self.reason = reason
        self.wire_format = wire_format
        if wire_format is None:
            super().__init__(reason)
        else:
            super().__init__(f"{wire_format.value}: {reason}")

    def with_format(self, wire_format: WireFormat) -> DecodeError:
        """Return a copy of this error tagged with ``wire_format``.

        Returns
        -------
        DecodeError
            Error carrying the same reason and the given format.
        """
        return DecodeError(self.reason, wire_format=wire_format)


class EncodeError(ContentError, ValueError):
    """Raised when a value cannot be written in the requested wire format."""


class ConfigurationError(ContentError, TypeError):
    """Raised when a target type cannot be mapped by any registered codec."""


class UnsupportedFormatError(ContentError, ValueError):
    """Raised when a MIME type or file extension names no supported format."""


__all__ = [
    "ConfigurationError",
    "ContentError",
    "DecodeError",
    "EncodeError",
    "UnsupportedFormatError",
]
