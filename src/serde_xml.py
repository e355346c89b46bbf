"""XML structural mapping on top of msgspec builtins.

Values are first lowered to builtins with ``msgspec.to_builtins`` and then
written as an element tree:

- objects become one child element per field (``<entry key="...">`` when the
  key is not a valid element name);
- arrays become repeated ``<item>`` children;
- ``None`` becomes an empty element carrying ``nil="true"``;
- scalars become element text (booleans as ``true``/``false``); carriage
  returns are written as ``&#13;`` and characters XML 1.0 cannot carry are
  rejected.

Decoding walks the element tree guided by ``msgspec.inspect`` type info and
hands the resulting builtins to ``msgspec.convert`` in lax mode, which turns
element text back into ints, floats, bools and enums.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping, Sequence
from typing import Any

import msgspec
import msgspec.inspect as mi

from serde_msgspec import DecHook, EncHook, convert, to_builtins

ITEM_TAG = "item"
ENTRY_TAG = "entry"
KEY_ATTR = "key"
NIL_ATTR = "nil"

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")
# Characters outside the XML 1.0 Char production.
_INVALID_CHAR_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
_CONTAINER_TYPES = (
    mi.StructType,
    mi.DataclassType,
    mi.TypedDictType,
    mi.ListType,
    mi.SetType,
    mi.FrozenSetType,
    mi.VarTupleType,
    mi.TupleType,
    mi.DictType,
)


def _default_root_tag(obj: object) -> str:
    if isinstance(obj, msgspec.Struct):
        return type(obj).__name__
    if isinstance(obj, (list, tuple, set, frozenset)):
        return "items"
    return "value"


def _checked(text: str) -> str:
    match = _INVALID_CHAR_RE.search(text)
    if match is not None:
        msg = f"Character {match.group()!r} at index {match.start()} cannot be represented in XML"
        raise msgspec.EncodeError(msg)
    return text


def _scalar_text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _checked(str(value))


def _build(elem: ET.Element, value: object) -> None:
    if value is None:
        elem.set(NIL_ATTR, "true")
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            name = _checked(str(key))
            if _NAME_RE.match(name) and name != ENTRY_TAG:
                child = ET.SubElement(elem, name)
            else:
                child = ET.SubElement(elem, ENTRY_TAG, {KEY_ATTR: name})
            _build(child, item)
        return
    if isinstance(value, Sequence) and not isinstance(value, str):
        for item in value:
            _build(ET.SubElement(elem, ITEM_TAG), item)
        return
    elem.text = _scalar_text(value)


def dumps_xml(
    obj: object,
    *,
    enc_hook: EncHook | None = None,
    root_tag: str | None = None,
    pretty: bool = False,
) -> bytes:
    """Serialize an object to UTF-8 XML bytes.

    Parameters
    ----------
    obj
        Object to serialize.
    enc_hook
        Optional hook for custom field kinds.
    root_tag
        Root element name; defaults to the struct class name, ``items`` for
        sequences and ``value`` otherwise.
    pretty
        Whether to indent nested elements.

    Returns
    -------
    bytes
        XML document with declaration.

    Raises
    ------
    msgspec.EncodeError
        Raised when a string holds a character XML 1.0 cannot carry.
    """
    root = ET.Element(root_tag or _default_root_tag(obj))
    _build(root, to_builtins(obj, enc_hook=enc_hook))
    if pretty:
        ET.indent(root)
    # Parsers fold raw carriage returns into newlines; a reference survives.
    return ET.tostring(root, encoding="utf-8", xml_declaration=True).replace(b"\r", b"&#13;")


def _is_nil(elem: ET.Element) -> bool:
    return elem.get(NIL_ATTR) == "true"


def _child_key(child: ET.Element) -> str:
    if child.tag == ENTRY_TAG and KEY_ATTR in child.attrib:
        return child.attrib[KEY_ATTR]
    return child.tag


def _generic(elem: ET.Element) -> Any:
    if _is_nil(elem):
        return None
    children = list(elem)
    if not children:
        return elem.text or ""
    if all(child.tag == ITEM_TAG for child in children):
        return [_generic(child) for child in children]
    return {_child_key(child): _generic(child) for child in children}


def _pick_union_member(elem: ET.Element, info: mi.UnionType) -> mi.Type:
    members = [t for t in info.types if not isinstance(t, mi.NoneType)]
    if len(members) == 1:
        return members[0]
    has_children = len(elem) > 0
    for member in members:
        if isinstance(member, _CONTAINER_TYPES) == has_children:
            return member
    return mi.AnyType()


def _unwrap(info: mi.Type) -> mi.Type:
    while isinstance(info, mi.Metadata):
        info = info.type
    return info


def _guided(elem: ET.Element, info: mi.Type) -> Any:
    info = _unwrap(info)
    if _is_nil(elem):
        return None
    if isinstance(info, mi.UnionType):
        return _guided(elem, _pick_union_member(elem, info))
    if isinstance(info, (mi.StructType, mi.DataclassType, mi.TypedDictType)):
        fields = {f.encode_name: f.type for f in info.fields}
        out: dict[str, Any] = {}
        for child in elem:
            key = _child_key(child)
            field_info = fields.get(key)
            out[key] = _generic(child) if field_info is None else _guided(child, field_info)
        return out
    if isinstance(info, (mi.ListType, mi.SetType, mi.FrozenSetType, mi.VarTupleType)):
        return [_guided(child, info.item_type) for child in elem]
    if isinstance(info, mi.TupleType):
        return [
            _guided(child, item_info)
            for child, item_info in zip(elem, info.item_types, strict=False)
        ]
    if isinstance(info, mi.DictType):
        return {_child_key(child): _guided(child, info.value_type) for child in elem}
    if isinstance(info, (mi.CustomType, mi.AnyType)):
        return _generic(elem)
    return elem.text or ""


def loads_xml[T](
    buf: bytes | str,
    *,
    target_type: type[T],
    dec_hook: DecHook | None = None,
) -> T:
    """Deserialize XML into the requested type.

    Parameters
    ----------
    buf
        XML payload.
    target_type
        Target type for decoding.
    dec_hook
        Optional hook for custom field kinds.

    Returns
    -------
    T
        Decoded payload.

    Raises
    ------
    msgspec.DecodeError
        Raised when the payload is not well-formed XML.
    """
    try:
        root = ET.fromstring(buf)
    except ET.ParseError as exc:
        msg = f"Invalid XML: {exc}"
        raise msgspec.DecodeError(msg) from exc
    builtins = _guided(root, mi.type_info(target_type))
    return convert(builtins, target_type=target_type, dec_hook=dec_hook, strict=False)


__all__ = ["ITEM_TAG", "NIL_ATTR", "dumps_xml", "loads_xml"]
