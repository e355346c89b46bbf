"""Second-precision UTC timestamps and their wire codec.

A ``TemporalValue`` stores whole seconds since 1970-01-01T00:00:00Z. Fractional
seconds are always truncated, so two values captured within the same second
compare equal. Two textual forms exist: the decimal epoch string used inside
the binary format, and the ISO-8601 form with an explicit ``Z`` used by the
text formats.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from functools import total_ordering

from content.errors import DecodeError

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_SECOND = timedelta(seconds=1)
_ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class TemporalForm(StrEnum):
    """Textual representation of a ``TemporalValue``."""

    EPOCH = "epoch"
    ISO = "iso"


@total_ordering
class TemporalValue:
    """Immutable point in time with second precision, always UTC."""

    __slots__ = ("_seconds",)

    def __init__(self, seconds: int) -> None:
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            msg = f"TemporalValue requires integer seconds, got {type(seconds).__name__}."
            raise TypeError(msg)
        self._seconds = seconds

    @property
    def seconds(self) -> int:
        """Return the epoch seconds."""
        return self._seconds

    @classmethod
    def now(cls) -> TemporalValue:
        """Capture the current UTC time with fractional seconds dropped.

        Returns
        -------
        TemporalValue
            Current time truncated to whole seconds.
        """
        return cls(time.time_ns() // 1_000_000_000)

    @classmethod
    def from_datetime(cls, value: datetime) -> TemporalValue:
        """Build a value from an aware datetime.

        Parameters
        ----------
        value
            Timezone-aware datetime in any offset.

        Returns
        -------
        TemporalValue
            Value converted to UTC and truncated to whole seconds.

        Raises
        ------
        DecodeError
            Raised when ``value`` carries no UTC offset.
        """
        if value.tzinfo is None or value.utcoffset() is None:
            msg = f"timestamp {value.isoformat()!r} has no UTC offset"
            raise DecodeError(msg)
        return cls((value - _EPOCH) // _ONE_SECOND)

    @classmethod
    def parse(cls, text: str) -> TemporalValue:
        """Parse an ISO-8601 timestamp with a ``Z`` or numeric offset.

        Returns
        -------
        TemporalValue
            Parsed value, converted to UTC and truncated to whole seconds.

        Raises
        ------
        DecodeError
            Raised when ``text`` is not a valid offset-qualified timestamp.
        """
        try:
            parsed = datetime.fromisoformat(text.strip())
        except ValueError as exc:
            msg = f"invalid ISO-8601 timestamp {text!r}"
            raise DecodeError(msg) from exc
        return cls.from_datetime(parsed)

    def to_datetime(self) -> datetime:
        """Return the value as an aware UTC datetime."""
        return _EPOCH + timedelta(seconds=self._seconds)

    def isoformat(self) -> str:
        """Return the ISO-8601 form, e.g. ``2020-06-12T04:36:25Z``."""
        return self.to_datetime().strftime(_ISO_FORMAT)

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"TemporalValue({self._seconds})"

    def __int__(self) -> int:
        return self._seconds

    def __hash__(self) -> int:
        return hash((TemporalValue, self._seconds))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemporalValue):
            return NotImplemented
        return self._seconds == other._seconds

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TemporalValue):
            return NotImplemented
        return self._seconds < other._seconds


class TemporalValueCodec:
    """Field codec mapping ``TemporalValue`` to and from its wire forms.

    Text formats carry the ISO form. The binary format carries the epoch form
    inside a MessagePack extension payload.
    """

    kind = TemporalValue

    def __init__(self, ext_code: int | None = None) -> None:
        self.ext_code = ext_code

    @staticmethod
    def encode(value: TemporalValue, form: TemporalForm = TemporalForm.ISO) -> str:
        """Render ``value`` in the requested textual form.

        Returns
        -------
        str
            Decimal epoch string or ISO-8601 timestamp.
        """
        if form is TemporalForm.EPOCH:
            return str(value.seconds)
        return value.isoformat()

    @staticmethod
    def decode(text: str, form: TemporalForm = TemporalForm.ISO) -> TemporalValue:
        """Parse ``text`` from the requested textual form.

        Returns
        -------
        TemporalValue
            Decoded value.

        Raises
        ------
        DecodeError
            Raised when ``text`` is not valid for ``form``.
        """
        if form is TemporalForm.ISO:
            return TemporalValue.parse(text)
        stripped = text.strip()
        try:
            return TemporalValue(int(stripped))
        except ValueError as exc:
            msg = f"invalid epoch seconds {text!r}"
            raise DecodeError(msg) from exc

    def to_builtins(self, value: TemporalValue) -> str:
        """Return the text-format representation of ``value``."""
        return self.encode(value, TemporalForm.ISO)

    def from_builtins(self, obj: object) -> TemporalValue:
        """Rebuild a value from a decoded text-format payload.

        Accepts the ISO string, a bare integer (epoch form) and a datetime,
        which YAML loaders produce for unquoted timestamps. Naive datetimes
        from YAML are read as UTC.

        Returns
        -------
        TemporalValue
            Decoded value.

        Raises
        ------
        DecodeError
            Raised when ``obj`` has no supported shape.
        """
        if isinstance(obj, TemporalValue):
            return obj
        if isinstance(obj, str):
            if obj.strip().lstrip("-").isdigit():
                return self.decode(obj, TemporalForm.EPOCH)
            return self.decode(obj, TemporalForm.ISO)
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                obj = obj.replace(tzinfo=UTC)
            return TemporalValue.from_datetime(obj)
        if isinstance(obj, int) and not isinstance(obj, bool):
            return TemporalValue(obj)
        msg = f"expected timestamp, got {type(obj).__name__}"
        raise DecodeError(msg)

    def to_ext(self, value: TemporalValue) -> bytes:
        """Return the extension payload for ``value``."""
        return self.encode(value, TemporalForm.EPOCH).encode("ascii")

    def from_ext(self, data: bytes) -> TemporalValue:
        """Rebuild a value from an extension payload.

        Returns
        -------
        TemporalValue
            Decoded value.

        Raises
        ------
        DecodeError
            Raised when the payload is not an ASCII epoch string.
        """
        try:
            text = data.decode("ascii")
        except UnicodeDecodeError as exc:
            msg = "temporal extension payload is not ASCII"
            raise DecodeError(msg) from exc
        return self.decode(text, TemporalForm.EPOCH)


__all__ = ["TemporalForm", "TemporalValue", "TemporalValueCodec"]
