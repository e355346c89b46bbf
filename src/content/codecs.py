"""Field codec registry and the per-format hook tables built from it.

Each structural mapper (JSON, YAML, XML, MessagePack) consults the same
registry before falling back to its default scalar/object handling, so custom
field kinds are handled once for every format.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import msgspec
import msgspec.inspect as mi

from content.binary_asset import BinaryAssetCodec
from content.errors import ConfigurationError
from content.temporal import TemporalValueCodec
from serde_msgspec import DecHook, EncHook, ExtHook, default_enc_hook
from serde_msgspec_ext import TEMPORAL_VALUE_EXT_CODE
from utils.registry_protocol import MutableRegistry

logger = logging.getLogger(__name__)


@runtime_checkable
class FieldCodec(Protocol):
    """Strategy for one custom field kind."""

    kind: type
    ext_code: int | None

    def to_builtins(self, value: Any) -> object:
        """Return the text-format payload for ``value``."""
        ...

    def from_builtins(self, obj: object) -> Any:
        """Rebuild a value from a decoded payload."""
        ...


@runtime_checkable
class ExtFieldCodec(FieldCodec, Protocol):
    """Field codec that also owns a MessagePack extension payload."""

    def to_ext(self, value: Any) -> bytes:
        """Return the extension payload for ``value``."""
        ...

    def from_ext(self, data: bytes) -> Any:
        """Rebuild a value from an extension payload."""
        ...


@dataclass(frozen=True)
class CodecHooks:
    """Hooks handed to a structural mapper."""

    enc_hook: EncHook
    dec_hook: DecHook
    ext_hook: ExtHook | None = None


@dataclass
class CodecRegistry:
    """Registry of field codecs keyed by the field kind they own."""

    _codecs: MutableRegistry[type, FieldCodec] = field(default_factory=MutableRegistry)
    _by_ext_code: dict[int, ExtFieldCodec] = field(default_factory=dict)

    def register(self, codec: FieldCodec, *, overwrite: bool = False) -> None:
        """Register ``codec`` for its field kind.

        Raises
        ------
        ValueError
            Raised when the kind or extension code is already taken.
        """
        self._codecs.register(codec.kind, codec, overwrite=overwrite)
        if codec.ext_code is None:
            return
        if not isinstance(codec, ExtFieldCodec):
            msg = f"Codec for {codec.kind.__name__} declares ext_code but no ext payload."
            raise TypeError(msg)
        taken = self._by_ext_code.get(codec.ext_code)
        if taken is not None and taken.kind is not codec.kind and not overwrite:
            msg = f"Extension code {codec.ext_code} already registered for {taken.kind.__name__}."
            raise ValueError(msg)
        self._by_ext_code[codec.ext_code] = codec

    def lookup(self, kind: type) -> FieldCodec | None:
        """Return the codec for ``kind`` or one of its base classes."""
        for candidate in kind.__mro__:
            codec = self._codecs.get(candidate)
            if codec is not None:
                return codec
        return None

    def __contains__(self, kind: type) -> bool:
        return self.lookup(kind) is not None

    def __iter__(self) -> Iterator[type]:
        return iter(self._codecs)

    def __len__(self) -> int:
        return len(self._codecs)

    def require_supported(self, target_type: object) -> None:
        """Fail fast when ``target_type`` references an unmapped field kind.

        Raises
        ------
        ConfigurationError
            Raised when a custom class in ``target_type`` has no codec, or when
            msgspec cannot describe the type at all.
        """
        try:
            info = mi.type_info(target_type)
        except TypeError as exc:
            msg = f"Type {target_type!r} has no structural mapping: {exc}"
            raise ConfigurationError(msg) from exc
        missing = sorted(
            {cls.__qualname__ for cls in _custom_classes(info) if self.lookup(cls) is None}
        )
        if missing:
            msg = f"No codec registered for field kind(s) {', '.join(missing)} in {target_type!r}."
            raise ConfigurationError(msg)

    def hooks(self, *, binary: bool) -> CodecHooks:
        """Build the hook table for a text (``binary=False``) or binary format.

        Returns
        -------
        CodecHooks
            Hooks wired to this registry.
        """
        if binary:
            return CodecHooks(
                enc_hook=self._binary_enc_hook,
                dec_hook=self._dec_hook,
                ext_hook=self._ext_hook,
            )
        return CodecHooks(enc_hook=self._text_enc_hook, dec_hook=self._dec_hook)

    def _text_enc_hook(self, obj: object) -> object:
        codec = self.lookup(type(obj))
        if codec is None:
            return default_enc_hook(obj)
        return codec.to_builtins(obj)

    def _binary_enc_hook(self, obj: object) -> object:
        codec = self.lookup(type(obj))
        if codec is None:
            return default_enc_hook(obj)
        if isinstance(codec, ExtFieldCodec) and codec.ext_code is not None:
            return msgspec.msgpack.Ext(codec.ext_code, codec.to_ext(obj))
        return codec.to_builtins(obj)

    def _dec_hook(self, type_hint: type, obj: object) -> object:
        codec = self.lookup(type_hint) if isinstance(type_hint, type) else None
        if codec is None:
            return obj
        return codec.from_builtins(obj)

    def _ext_hook(self, code: int, data: memoryview) -> object:
        codec = self._by_ext_code.get(code)
        if codec is None:
            logger.debug("Leaving unknown msgpack extension code %s undecoded.", code)
            return msgspec.msgpack.Ext(code, data.tobytes())
        return codec.from_ext(data.tobytes())


def _custom_classes(info: mi.Type) -> Iterator[type]:
    seen: set[int] = set()
    stack: list[mi.Type] = [info]
    while stack:
        node = stack.pop()
        if id(node) in seen:
            continue
        seen.add(id(node))
        if isinstance(node, mi.CustomType):
            yield node.cls
        stack.extend(_children(node))


def _children(node: mi.Type) -> tuple[mi.Type, ...]:
    if isinstance(node, (mi.StructType, mi.DataclassType, mi.TypedDictType, mi.NamedTupleType)):
        return tuple(f.type for f in node.fields)
    if isinstance(node, (mi.ListType, mi.SetType, mi.FrozenSetType, mi.VarTupleType)):
        return (node.item_type,)
    if isinstance(node, mi.TupleType):
        return tuple(node.item_types)
    if isinstance(node, mi.DictType):
        return (node.key_type, node.value_type)
    if isinstance(node, mi.UnionType):
        return tuple(node.types)
    if isinstance(node, mi.Metadata):
        return (node.type,)
    return ()


def default_codecs() -> CodecRegistry:
    """Return a registry holding the built-in TemporalValue and BinaryAsset codecs.

    Returns
    -------
    CodecRegistry
        Fresh registry with both built-in codecs.
    """
    registry = CodecRegistry()
    registry.register(TemporalValueCodec(ext_code=TEMPORAL_VALUE_EXT_CODE))
    registry.register(BinaryAssetCodec())
    return registry


DEFAULT_CODECS = default_codecs()

__all__ = [
    "DEFAULT_CODECS",
    "CodecHooks",
    "CodecRegistry",
    "ExtFieldCodec",
    "FieldCodec",
    "default_codecs",
]
