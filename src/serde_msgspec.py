"""Shared msgspec policy and helpers."""

from __future__ import annotations

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

import msgspec
import yaml

type EncHook = Callable[[object], object]
type DecHook = Callable[[type, object], object]
type ExtHook = Callable[[int, memoryview], object]


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for strict contracts."""


class StructBaseCompat(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=False,
):
    """Base struct for forward-compatible records."""


StructBase = StructBaseStrict


_DEFAULT_ORDER: Literal["deterministic"] = "deterministic"

_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")


def default_enc_hook(obj: object) -> object:
    """Encode values msgspec does not support natively.

    Raises
    ------
    TypeError
        Raised for any value without a builtin representation.
    """
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    msg = f"Encoding objects of type {type(obj).__name__} is unsupported"
    raise TypeError(msg)


JSON_ENCODER = msgspec.json.Encoder(
    enc_hook=default_enc_hook,
    order=_DEFAULT_ORDER,
    decimal_format="string",
    uuid_format="canonical",
)


def json_encoder(*, enc_hook: EncHook | None = None) -> msgspec.json.Encoder:
    """Return a JSON encoder sharing the default policy.

    Returns
    -------
    msgspec.json.Encoder
        Encoder using ``enc_hook`` (or the default hook).
    """
    if enc_hook is None:
        return JSON_ENCODER
    return msgspec.json.Encoder(
        enc_hook=enc_hook,
        order=_DEFAULT_ORDER,
        decimal_format="string",
        uuid_format="canonical",
    )


def json_decoder[T](
    target_type: type[T],
    *,
    dec_hook: DecHook | None = None,
    strict: bool = True,
) -> msgspec.json.Decoder[T]:
    """Return a typed JSON decoder.

    Returns
    -------
    msgspec.json.Decoder[T]
        Decoder bound to ``target_type``.
    """
    return msgspec.json.Decoder(type=target_type, dec_hook=dec_hook, strict=strict)


def msgpack_encoder(*, enc_hook: EncHook | None = None) -> msgspec.msgpack.Encoder:
    """Return a MessagePack encoder sharing the default policy.

    Returns
    -------
    msgspec.msgpack.Encoder
        Encoder using ``enc_hook`` (or the default hook).
    """
    return msgspec.msgpack.Encoder(
        enc_hook=enc_hook or default_enc_hook,
        order=_DEFAULT_ORDER,
        decimal_format="string",
        uuid_format="canonical",
    )


def msgpack_decoder[T](
    target_type: type[T],
    *,
    dec_hook: DecHook | None = None,
    ext_hook: ExtHook | None = None,
    strict: bool = True,
) -> msgspec.msgpack.Decoder[T]:
    """Return a typed MessagePack decoder.

    Returns
    -------
    msgspec.msgpack.Decoder[T]
        Decoder bound to ``target_type``.
    """
    return msgspec.msgpack.Decoder(
        type=target_type,
        dec_hook=dec_hook,
        ext_hook=ext_hook,
        strict=strict,
    )


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Normalize a msgspec ValidationError for diagnostics.

    Parameters
    ----------
    exc
        ValidationError raised by msgspec decoding/conversion.

    Returns
    -------
    dict[str, str]
        Normalized error payload containing type, summary, and optional path.
    """
    message = str(exc).strip()
    match = _VALIDATION_RE.match(message)
    payload: dict[str, str] = {"type": exc.__class__.__name__}
    if match:
        summary = (match.group("summary") or "").strip()
        if summary:
            payload["summary"] = summary
        path = match.group("path")
        if path:
            payload["path"] = path
        return payload
    payload["summary"] = message
    return payload


def dumps_json(obj: object, *, enc_hook: EncHook | None = None, pretty: bool = False) -> bytes:
    """Serialize an object to JSON bytes.

    Parameters
    ----------
    obj
        Object to serialize.
    enc_hook
        Optional hook for custom field kinds.
    pretty
        Whether to format with indentation.

    Returns
    -------
    bytes
        JSON payload.
    """
    raw = json_encoder(enc_hook=enc_hook).encode(obj)
    if not pretty:
        return raw
    return msgspec.json.format(raw, indent=2)


def loads_json[T](
    buf: bytes | str,
    *,
    target_type: type[T],
    dec_hook: DecHook | None = None,
    strict: bool = True,
) -> T:
    """Deserialize JSON bytes into the requested type.

    Parameters
    ----------
    buf
        JSON payload.
    target_type
        Target type for decoding.
    dec_hook
        Optional hook for custom field kinds.
    strict
        Whether to enforce strict decoding.

    Returns
    -------
    T
        Decoded payload.
    """
    return json_decoder(target_type, dec_hook=dec_hook, strict=strict).decode(buf)


def dumps_yaml(obj: object, *, enc_hook: EncHook | None = None) -> bytes:
    """Serialize an object to YAML bytes.

    Returns
    -------
    bytes
        YAML payload.
    """
    return msgspec.yaml.encode(obj, enc_hook=enc_hook or default_enc_hook, order=_DEFAULT_ORDER)


def loads_yaml[T](
    buf: bytes | str,
    *,
    target_type: type[T],
    dec_hook: DecHook | None = None,
    strict: bool = True,
) -> T:
    """Deserialize YAML bytes into the requested type.

    Returns
    -------
    T
        Decoded payload.

    Raises
    ------
    msgspec.DecodeError
        Raised when the payload is not well-formed YAML.
    """
    try:
        return msgspec.yaml.decode(buf, type=target_type, dec_hook=dec_hook, strict=strict)
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML: {exc}"
        raise msgspec.DecodeError(msg) from exc


def dumps_msgpack(obj: object, *, enc_hook: EncHook | None = None) -> bytes:
    """Serialize an object to MessagePack bytes.

    Returns
    -------
    bytes
        MessagePack payload.
    """
    return msgpack_encoder(enc_hook=enc_hook).encode(obj)


def loads_msgpack[T](
    buf: bytes,
    *,
    target_type: type[T],
    dec_hook: DecHook | None = None,
    ext_hook: ExtHook | None = None,
    strict: bool = True,
) -> T:
    """Deserialize MessagePack bytes into the requested type.

    Returns
    -------
    T
        Decoded payload.
    """
    decoder = msgpack_decoder(target_type, dec_hook=dec_hook, ext_hook=ext_hook, strict=strict)
    return decoder.decode(buf)


def convert[T](
    obj: object,
    *,
    target_type: type[T],
    dec_hook: DecHook | None = None,
    strict: bool = True,
) -> T:
    """Convert builtin payloads into a target type.

    Returns
    -------
    T
        Converted payload.
    """
    return msgspec.convert(obj, type=target_type, strict=strict, dec_hook=dec_hook)


def to_builtins(obj: object, *, enc_hook: EncHook | None = None, str_keys: bool = True) -> Any:
    """Convert an object into builtin JSON-friendly types.

    Returns
    -------
    Any
        Builtin-friendly representation.
    """
    return msgspec.to_builtins(
        obj,
        order=_DEFAULT_ORDER,
        str_keys=str_keys,
        enc_hook=enc_hook or default_enc_hook,
    )


__all__ = [
    "JSON_ENCODER",
    "StructBase",
    "StructBaseCompat",
    "StructBaseStrict",
    "convert",
    "default_enc_hook",
    "dumps_json",
    "dumps_msgpack",
    "dumps_yaml",
    "json_decoder",
    "json_encoder",
    "loads_json",
    "loads_msgpack",
    "loads_yaml",
    "msgpack_decoder",
    "msgpack_encoder",
    "to_builtins",
    "validation_error_payload",
]
