"""Decode failures surface as DecodeError tagged with the format."""

from __future__ import annotations

import pytest

from content.converter import converter_for
from content.errors import ContentError, DecodeError, EncodeError
from content.formats import WireFormat
from records.books import Book
from records.todos import Todo

MALFORMED: dict[WireFormat, bytes] = {
    WireFormat.JSON: b'{"isbn": "1", "title": ',
    WireFormat.XML: b"<Book><isbn>1</isbn>",
    WireFormat.YAML: b"isbn: [unclosed\ntitle: x\n",
    WireFormat.MSGPACK: b"\xc1",
}


@pytest.mark.parametrize("wire_format", list(WireFormat))
def test_malformed_input(wire_format: WireFormat) -> None:
    """Syntax errors become DecodeError carrying the wire format."""
    with pytest.raises(DecodeError) as excinfo:
        converter_for(Book, wire_format).decode(MALFORMED[wire_format])
    assert excinfo.value.wire_format is wire_format
    assert str(excinfo.value).startswith(f"{wire_format.value}: ")


def test_missing_required_field() -> None:
    """A book without a title does not decode."""
    with pytest.raises(DecodeError) as excinfo:
        converter_for(Book, WireFormat.JSON).decode(b'{"isbn": "1"}')
    assert "title" in excinfo.value.reason


def test_cover_without_marker() -> None:
    """A cover without the base64 marker fails the whole record."""
    payload = b'{"isbn": "1", "title": "t", "cover": {"data": "image/jpeg,AAAA"}}'
    with pytest.raises(DecodeError, match="missing base64 marker") as excinfo:
        converter_for(Book, WireFormat.JSON).decode(payload)
    assert excinfo.value.wire_format is WireFormat.JSON


def test_cover_without_content_type_in_xml() -> None:
    """The same cover check applies in XML."""
    payload = b"<Book><isbn>1</isbn><title>t</title><cover><data>;base64,AAAA</data></cover></Book>"
    with pytest.raises(DecodeError, match="missing content type") as excinfo:
        converter_for(Book, WireFormat.XML).decode(payload)
    assert excinfo.value.wire_format is WireFormat.XML


def test_invalid_timestamp_in_yaml() -> None:
    """An unparseable change stamp is rejected."""
    payload = "title: t\nchanged: not a time\n"
    with pytest.raises(DecodeError, match="timestamp") as excinfo:
        converter_for(Todo, WireFormat.YAML).decode(payload)
    assert excinfo.value.wire_format is WireFormat.YAML


def test_naive_timestamp_string_is_rejected() -> None:
    """Text timestamps must carry an offset."""
    with pytest.raises(DecodeError, match="no UTC offset"):
        converter_for(Todo, WireFormat.JSON).decode(b'{"title": "t", "changed": "2020-06-12T04:36:25"}')


def test_unknown_enum_value() -> None:
    """Priorities outside A-F and blank are rejected."""
    with pytest.raises(DecodeError):
        converter_for(Todo, WireFormat.JSON).decode(b'{"title": "t", "priority": "Z"}')


def test_msgpack_rejects_text_input() -> None:
    """MessagePack input must be bytes."""
    with pytest.raises(DecodeError) as excinfo:
        converter_for(Todo, WireFormat.MSGPACK).decode("title")
    assert excinfo.value.wire_format is WireFormat.MSGPACK


def test_decode_error_is_content_error() -> None:
    """Callers can catch every conversion failure at one base class."""
    with pytest.raises(ContentError):
        converter_for(Todo, WireFormat.XML).decode("<Todo><title>")


def test_xml_encode_rejects_control_characters() -> None:
    """A title XML cannot carry fails on encode; JSON still carries it."""
    todo = Todo(title="bell\x07")
    with pytest.raises(EncodeError, match="xml") as excinfo:
        converter_for(Todo, WireFormat.XML).encode(todo)
    assert isinstance(excinfo.value, ContentError)
    json_converter = converter_for(Todo, WireFormat.JSON)
    assert json_converter.decode(json_converter.encode(todo)) == todo
