"""Per-(type, format) conversion facade.

A ``Converter`` is built once for a target type and wire format. Construction
checks that every custom field kind reachable from the type has a registered
codec, then asks the format's structural mapper for an encoder and a decoder
wired to that registry's hooks. The resulting object holds no mutable state
and is safe to share between threads.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import msgspec

from content.codecs import DEFAULT_CODECS, CodecRegistry
from content.errors import ConfigurationError, DecodeError, EncodeError
from content.formats import WireFormat, format_handle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Converter[T]:
    """Encode and decode values of one type in one wire format."""

    target_type: Any
    wire_format: WireFormat
    _encode: Callable[[Any], bytes]
    _decode: Callable[[bytes | str], Any]

    @classmethod
    def for_type(
        cls,
        target_type: type[T] | Any,
        wire_format: WireFormat,
        *,
        codecs: CodecRegistry = DEFAULT_CODECS,
    ) -> Converter[T]:
        """Build a converter for ``target_type`` in ``wire_format``.

        Parameters
        ----------
        target_type
            Record type, or a container of records such as ``list[Todo]``.
        wire_format
            Wire format to read and write.
        codecs
            Registry of field codecs to consult.

        Returns
        -------
        Converter[T]
            Ready-to-use converter.

        Raises
        ------
        ConfigurationError
            Raised when the type references a field kind with no codec.
        """
        codecs.require_supported(target_type)
        handle = format_handle(wire_format)
        hooks = codecs.hooks(binary=handle.binary)
        logger.debug("Built %s converter for %r", wire_format.value, target_type)
        return cls(
            target_type=target_type,
            wire_format=wire_format,
            _encode=handle.mapper.encoder(hooks),
            _decode=handle.mapper.decoder(target_type, hooks),
        )

    def encode(self, value: T) -> bytes:
        """Serialize ``value`` to raw bytes.

        Returns
        -------
        bytes
            Encoded payload (UTF-8 for the text formats).

        Raises
        ------
        ConfigurationError
            Raised when the value contains an object no codec can encode.
        EncodeError
            Raised when the value holds data the wire format cannot carry.
        """
        try:
            return self._encode(value)
        except TypeError as exc:
            msg = f"Cannot encode {type(value).__name__} as {self.wire_format.value}: {exc}"
            raise ConfigurationError(msg) from exc
        except msgspec.EncodeError as exc:
            msg = f"Cannot encode {type(value).__name__} as {self.wire_format.value}: {exc}"
            raise EncodeError(msg) from exc

    def decode(self, buf: bytes | str) -> T:
        """Parse raw input into a value of the target type.

        Returns
        -------
        T
            Decoded value.

        Raises
        ------
        DecodeError
            Raised for malformed input, tagged with this converter's format.
        """
        try:
            return self._decode(buf)
        except DecodeError as exc:
            raise exc.with_format(self.wire_format) from exc
        except (msgspec.DecodeError, ValueError, TypeError) as exc:
            raise DecodeError(str(exc), wire_format=self.wire_format) from exc

    def to_text(self, value: T) -> str | bytes:
        """Serialize ``value`` to its wire text.

        Returns
        -------
        str | bytes
            ``bytes`` for binary formats, ``str`` otherwise.
        """
        raw = self.encode(value)
        if self.wire_format.is_binary:
            return raw
        return raw.decode("utf-8")

    def from_text(self, text: str | bytes) -> T:
        """Parse wire text into a value of the target type.

        Returns
        -------
        T
            Decoded value.
        """
        return self.decode(text)


@lru_cache(maxsize=128)
def converter_for(target_type: Any, wire_format: WireFormat) -> Converter[Any]:
    """Return the cached default-codec converter for a (type, format) pair."""
    return Converter.for_type(target_type, wire_format)


def to_text[T](target_type: type[T] | Any, wire_format: WireFormat, value: T) -> str | bytes:
    """Serialize ``value`` with the cached converter for its type and format.

    Returns
    -------
    str | bytes
        ``bytes`` for binary formats, ``str`` otherwise.
    """
    return converter_for(target_type, wire_format).to_text(value)


def from_text[T](target_type: type[T] | Any, wire_format: WireFormat, text: str | bytes) -> T:
    """Parse ``text`` with the cached converter for the type and format.

    Returns
    -------
    T
        Decoded value.
    """
    return converter_for(target_type, wire_format).from_text(text)


__all__ = ["Converter", "converter_for", "from_text", "to_text"]
