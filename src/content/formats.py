"""Format registry: the closed set of wire formats and their MIME types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePath

from content.errors import UnsupportedFormatError
from content.mappers import JsonMapper, MsgpackMapper, StructuralMapper, XmlMapper, YamlMapper
from utils.registry_protocol import ImmutableRegistry

APPLICATION_JSON = "application/json"
APPLICATION_XML = "application/xml"
APPLICATION_YAML = "application/x-yaml"
APPLICATION_MSGPACK = "application/x-msgpack"
TEXT_HTML = "text/html"


class WireFormat(StrEnum):
    """Supported wire formats."""

    JSON = "json"
    XML = "xml"
    YAML = "yaml"
    MSGPACK = "msgpack"

    @property
    def mime_type(self) -> str:
        """Return the canonical MIME type."""
        return _MIME_BY_FORMAT[self]

    @property
    def extensions(self) -> tuple[str, ...]:
        """Return the file extensions (without dot) mapped to this format."""
        return tuple(ext for ext, fmt in _FORMAT_BY_EXTENSION.items() if fmt is self)

    @property
    def is_binary(self) -> bool:
        """Return whether payloads are raw bytes rather than text."""
        return self is WireFormat.MSGPACK

    @classmethod
    def from_mime_type(cls, mime_type: str) -> WireFormat:
        """Resolve a MIME type, ignoring case and parameters.

        Returns
        -------
        WireFormat
            Matching wire format.

        Raises
        ------
        UnsupportedFormatError
            Raised when the MIME type is not one of the supported formats.
        """
        essence = mime_type.split(";", 1)[0].strip().lower()
        resolved = _FORMAT_BY_MIME.get(essence)
        if resolved is None:
            msg = f"Unsupported media type {mime_type!r}."
            raise UnsupportedFormatError(msg)
        return resolved

    @classmethod
    def from_extension(cls, path: str | PurePath) -> WireFormat:
        """Resolve a format from a file name or bare extension.

        Returns
        -------
        WireFormat
            Matching wire format.

        Raises
        ------
        UnsupportedFormatError
            Raised when the extension is not recognised.
        """
        text = str(path)
        suffix = PurePath(text).suffix or text
        resolved = _FORMAT_BY_EXTENSION.get(suffix.lower().lstrip("."))
        if resolved is None:
            msg = f"Cannot infer wire format from {text!r}."
            raise UnsupportedFormatError(msg)
        return resolved


_MIME_BY_FORMAT: dict[WireFormat, str] = {
    WireFormat.JSON: APPLICATION_JSON,
    WireFormat.XML: APPLICATION_XML,
    WireFormat.YAML: APPLICATION_YAML,
    WireFormat.MSGPACK: APPLICATION_MSGPACK,
}
_FORMAT_BY_MIME: dict[str, WireFormat] = {
    **{mime: fmt for fmt, mime in _MIME_BY_FORMAT.items()},
    "text/xml": WireFormat.XML,
    "application/yaml": WireFormat.YAML,
}
_FORMAT_BY_EXTENSION: dict[str, WireFormat] = {
    "json": WireFormat.JSON,
    "xml": WireFormat.XML,
    "yaml": WireFormat.YAML,
    "yml": WireFormat.YAML,
    "msgpack": WireFormat.MSGPACK,
    "mpk": WireFormat.MSGPACK,
}


@dataclass(frozen=True)
class FormatHandle:
    """Registry entry binding a wire format to its mapper."""

    wire_format: WireFormat
    mime_type: str
    binary: bool
    mapper: StructuralMapper


FORMAT_REGISTRY: ImmutableRegistry[WireFormat, FormatHandle] = ImmutableRegistry.from_dict(
    {
        fmt: FormatHandle(
            wire_format=fmt,
            mime_type=fmt.mime_type,
            binary=mapper.binary,
            mapper=mapper,
        )
        for fmt, mapper in (
            (WireFormat.JSON, JsonMapper()),
            (WireFormat.XML, XmlMapper()),
            (WireFormat.YAML, YamlMapper()),
            (WireFormat.MSGPACK, MsgpackMapper()),
        )
    }
)


def format_handle(wire_format: WireFormat) -> FormatHandle:
    """Return the registry entry for ``wire_format``."""
    return FORMAT_REGISTRY.require(wire_format)


def _accept_entries(accept_header: str) -> list[tuple[float, int, str]]:
    entries: list[tuple[float, int, str]] = []
    for index, part in enumerate(accept_header.split(",")):
        media, *params = (piece.strip() for piece in part.split(";"))
        if not media:
            continue
        quality = 1.0
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            entries.append((-quality, index, media.lower()))
    entries.sort()
    return entries


def negotiate(accept_header: str | None) -> WireFormat:
    """Pick the best supported format for an HTTP ``Accept`` header.

    Parameters
    ----------
    accept_header
        Raw header value. Missing or blank headers select JSON.

    Returns
    -------
    WireFormat
        Highest-quality supported format; wildcards select JSON.

    Raises
    ------
    UnsupportedFormatError
        Raised when no listed media type is supported.
    """
    if accept_header is None or not accept_header.strip():
        return WireFormat.JSON
    for _, _, media in _accept_entries(accept_header):
        if media in {"*/*", "application/*"}:
            return WireFormat.JSON
        resolved = _FORMAT_BY_MIME.get(media)
        if resolved is not None:
            return resolved
    msg = f"None of the accepted media types are supported: {accept_header!r}."
    raise UnsupportedFormatError(msg)


__all__ = [
    "APPLICATION_JSON",
    "APPLICATION_MSGPACK",
    "APPLICATION_XML",
    "APPLICATION_YAML",
    "FORMAT_REGISTRY",
    "TEXT_HTML",
    "FormatHandle",
    "WireFormat",
    "format_handle",
    "negotiate",
]
