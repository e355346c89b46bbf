"""Tests for second-precision timestamps and their wire forms."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from content.errors import DecodeError
from content.temporal import TemporalForm, TemporalValue, TemporalValueCodec
from tests.test_helpers.samples import FIXTURE_ISO, FIXTURE_SECONDS

CODEC = TemporalValueCodec(ext_code=1)


def test_iso_form_of_fixture() -> None:
    """Epoch seconds render as ISO-8601 with an explicit Z."""
    assert TemporalValue(FIXTURE_SECONDS).isoformat() == FIXTURE_ISO
    assert CODEC.encode(TemporalValue(FIXTURE_SECONDS)) == FIXTURE_ISO


def test_epoch_form_of_fixture() -> None:
    """The epoch form is the plain decimal seconds."""
    value = TemporalValue(FIXTURE_SECONDS)
    assert CODEC.encode(value, TemporalForm.EPOCH) == str(FIXTURE_SECONDS)
    assert CODEC.decode(str(FIXTURE_SECONDS), TemporalForm.EPOCH) == value


def test_parse_truncates_fractional_seconds() -> None:
    """Fractions are dropped, never rounded up."""
    parsed = TemporalValue.parse("2020-06-12T04:36:25.999Z")
    assert parsed.seconds == FIXTURE_SECONDS


def test_parse_converts_offsets_to_utc() -> None:
    """A numeric offset is normalized to UTC."""
    parsed = TemporalValue.parse("2020-06-12T06:36:25+02:00")
    assert parsed.seconds == FIXTURE_SECONDS
    assert parsed.isoformat() == FIXTURE_ISO


@pytest.mark.parametrize("text", ["2020-06-12T04:36:25", "yesterday", ""])
def test_parse_rejects_invalid_text(text: str) -> None:
    """Naive and malformed timestamps raise DecodeError."""
    with pytest.raises(DecodeError):
        TemporalValue.parse(text)


def test_epoch_decode_rejects_non_digits() -> None:
    """Non-numeric epoch text raises DecodeError."""
    with pytest.raises(DecodeError, match="invalid epoch seconds"):
        CODEC.decode("12ab", TemporalForm.EPOCH)


def test_from_datetime_truncates_microseconds() -> None:
    """Microseconds on an aware datetime are discarded."""
    moment = datetime(2020, 6, 12, 4, 36, 25, 750_000, tzinfo=UTC)
    assert TemporalValue.from_datetime(moment).seconds == FIXTURE_SECONDS
    shifted = moment.astimezone(timezone(timedelta(hours=-5)))
    assert TemporalValue.from_datetime(shifted).seconds == FIXTURE_SECONDS


def test_now_drops_fraction(monkeypatch: pytest.MonkeyPatch) -> None:
    """Capturing the current time truncates to whole seconds."""
    late_in_second = FIXTURE_SECONDS * 10**9 + 999_999_999
    monkeypatch.setattr("content.temporal.time.time_ns", lambda: late_in_second)
    assert TemporalValue.now() == TemporalValue(FIXTURE_SECONDS)


def test_ordering_and_hashing() -> None:
    """Values order by seconds and hash by value."""
    early, late = TemporalValue(1), TemporalValue(2)
    assert early < late
    assert max([late, early]) is late
    assert len({TemporalValue(1), early}) == 1


def test_rejects_non_integer_seconds() -> None:
    """Floats and bools are not accepted as seconds."""
    with pytest.raises(TypeError):
        TemporalValue(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        TemporalValue(True)


def test_from_builtins_accepts_loader_shapes() -> None:
    """ISO strings, epoch strings, ints and datetimes all decode."""
    expected = TemporalValue(FIXTURE_SECONDS)
    assert CODEC.from_builtins(FIXTURE_ISO) == expected
    assert CODEC.from_builtins(str(FIXTURE_SECONDS)) == expected
    assert CODEC.from_builtins(FIXTURE_SECONDS) == expected
    assert CODEC.from_builtins(datetime(2020, 6, 12, 4, 36, 25)) == expected
    assert CODEC.from_builtins(expected) is expected


def test_from_builtins_rejects_other_shapes() -> None:
    """Unsupported payload shapes raise DecodeError."""
    with pytest.raises(DecodeError, match="expected timestamp"):
        CODEC.from_builtins([FIXTURE_SECONDS])


def test_ext_payload_is_ascii_epoch() -> None:
    """The MessagePack extension payload is the ASCII epoch string."""
    value = TemporalValue(FIXTURE_SECONDS)
    assert CODEC.to_ext(value) == b"1591936585"
    assert CODEC.from_ext(b"1591936585") == value
    with pytest.raises(DecodeError):
        CODEC.from_ext(b"\xff\xfe")
