"""Structural mappers: one per wire format, all driven by msgspec type info."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any, Protocol

from content.codecs import CodecHooks
from serde_msgspec import (
    dumps_yaml,
    json_decoder,
    json_encoder,
    loads_yaml,
    msgpack_decoder,
    msgpack_encoder,
)
from serde_xml import dumps_xml, loads_xml

type Encode = Callable[[Any], bytes]
type Decode = Callable[[bytes | str], Any]


class StructuralMapper(Protocol):
    """Generic value-to-format mapping with pluggable field hooks."""

    @property
    def binary(self) -> bool:
        """Whether the format is a binary format."""
        ...

    def encoder(self, hooks: CodecHooks) -> Encode:
        """Return a callable encoding values to bytes."""
        ...

    def decoder(self, target_type: Any, hooks: CodecHooks) -> Decode:
        """Return a callable decoding bytes into ``target_type``."""
        ...


@dataclass(frozen=True)
class JsonMapper:
    """JSON via ``msgspec.json``."""

    binary: bool = False

    def encoder(self, hooks: CodecHooks) -> Encode:
        return json_encoder(enc_hook=hooks.enc_hook).encode

    def decoder(self, target_type: Any, hooks: CodecHooks) -> Decode:
        return json_decoder(target_type, dec_hook=hooks.dec_hook).decode


@dataclass(frozen=True)
class YamlMapper:
    """YAML via ``msgspec.yaml`` (PyYAML backend)."""

    binary: bool = False

    def encoder(self, hooks: CodecHooks) -> Encode:
        return partial(dumps_yaml, enc_hook=hooks.enc_hook)

    def decoder(self, target_type: Any, hooks: CodecHooks) -> Decode:
        return partial(loads_yaml, target_type=target_type, dec_hook=hooks.dec_hook)


@dataclass(frozen=True)
class XmlMapper:
    """XML via ElementTree, guided by msgspec type info."""

    binary: bool = False
    pretty: bool = False

    def encoder(self, hooks: CodecHooks) -> Encode:
        return partial(dumps_xml, enc_hook=hooks.enc_hook, pretty=self.pretty)

    def decoder(self, target_type: Any, hooks: CodecHooks) -> Decode:
        return partial(loads_xml, target_type=target_type, dec_hook=hooks.dec_hook)


@dataclass(frozen=True)
class MsgpackMapper:
    """MessagePack via ``msgspec.msgpack`` with extension types."""

    binary: bool = True

    def encoder(self, hooks: CodecHooks) -> Encode:
        return msgpack_encoder(enc_hook=hooks.enc_hook).encode

    def decoder(self, target_type: Any, hooks: CodecHooks) -> Decode:
        decoder = msgpack_decoder(target_type, dec_hook=hooks.dec_hook, ext_hook=hooks.ext_hook)

        def _decode(buf: bytes | str) -> Any:
            if isinstance(buf, str):
                msg = "MessagePack payloads must be bytes, not str."
                raise TypeError(msg)
            return decoder.decode(buf)

        return _decode


__all__ = [
    "JsonMapper",
    "MsgpackMapper",
    "StructuralMapper",
    "XmlMapper",
    "YamlMapper",
]
