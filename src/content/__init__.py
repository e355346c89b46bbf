"""Content representation and conversion for the four wire formats."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from content.binary_asset import BinaryAsset, BinaryAssetCodec
    from content.codecs import DEFAULT_CODECS, CodecRegistry
    from content.converter import Converter, from_text, to_text
    from content.errors import (
        ConfigurationError,
        ContentError,
        DecodeError,
        EncodeError,
        UnsupportedFormatError,
    )
    from content.formats import FORMAT_REGISTRY, WireFormat, negotiate
    from content.temporal import TemporalForm, TemporalValue, TemporalValueCodec

__all__ = [
    "DEFAULT_CODECS",
    "FORMAT_REGISTRY",
    "BinaryAsset",
    "BinaryAssetCodec",
    "CodecRegistry",
    "ConfigurationError",
    "ContentError",
    "Converter",
    "DecodeError",
    "EncodeError",
    "TemporalForm",
    "TemporalValue",
    "TemporalValueCodec",
    "UnsupportedFormatError",
    "WireFormat",
    "from_text",
    "negotiate",
    "to_text",
]

_EXPORT_MAP: dict[str, str] = {
    "BinaryAsset": "content.binary_asset",
    "BinaryAssetCodec": "content.binary_asset",
    "CodecRegistry": "content.codecs",
    "ConfigurationError": "content.errors",
    "ContentError": "content.errors",
    "Converter": "content.converter",
    "DEFAULT_CODECS": "content.codecs",
    "DecodeError": "content.errors",
    "EncodeError": "content.errors",
    "FORMAT_REGISTRY": "content.formats",
    "TemporalForm": "content.temporal",
    "TemporalValue": "content.temporal",
    "TemporalValueCodec": "content.temporal",
    "UnsupportedFormatError": "content.errors",
    "WireFormat": "content.formats",
    "from_text": "content.converter",
    "negotiate": "content.formats",
    "to_text": "content.converter",
}


def __getattr__(name: str) -> object:
    module_name = _EXPORT_MAP.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    value = getattr(importlib.import_module(module_name), name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals()) + __all__)
