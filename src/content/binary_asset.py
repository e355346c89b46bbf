"""Binary payloads paired with their content type."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from pathlib import Path

from content.errors import DecodeError

BASE64_MARKER = "base64,"
WIRE_FIELD = "data"


class BinaryAsset:
    """Opaque bytes (for example a cover image) and their content type."""

    __slots__ = ("_content_type", "_data")

    def __init__(self, data: bytes, content_type: str) -> None:
        if not content_type:
            msg = "BinaryAsset requires a content type."
            raise ValueError(msg)
        self._data = bytes(data)
        self._content_type = content_type

    @property
    def data(self) -> bytes:
        """Return the raw payload."""
        return self._data

    @property
    def content_type(self) -> str:
        """Return the content type label, e.g. ``image/jpeg``."""
        return self._content_type

    @classmethod
    def from_file(cls, path: Path, content_type: str) -> BinaryAsset:
        """Read ``path`` as raw bytes.

        Returns
        -------
        BinaryAsset
            Asset carrying the file contents.
        """
        return cls(path.read_bytes(), content_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryAsset):
            return NotImplemented
        return self._content_type == other._content_type and self._data == other._data

    def __hash__(self) -> int:
        return hash((self._content_type, self._data))

    def __repr__(self) -> str:
        return f"BinaryAsset(content_type={self._content_type!r}, size={len(self._data)})"


class BinaryAssetCodec:
    """Field codec for ``BinaryAsset``.

    The wire text is ``<content-type>;base64,<payload>`` and travels nested
    as ``{"data": <wire text>}`` in every format.
    """

    kind = BinaryAsset
    ext_code: int | None = None

    @staticmethod
    def encode(asset: BinaryAsset) -> str:
        """Return the data-URI-like wire text for ``asset``."""
        payload = base64.b64encode(asset.data).decode("ascii")
        return f"{asset.content_type};{BASE64_MARKER}{payload}"

    @staticmethod
    def decode(text: str) -> BinaryAsset:
        """Parse wire text back into an asset.

        Returns
        -------
        BinaryAsset
            Decoded asset.

        Raises
        ------
        DecodeError
            Raised when the base64 marker or content type is missing, or the
            payload is not valid base64.
        """
        pos = text.find(BASE64_MARKER)
        if pos < 0:
            msg = "missing base64 marker"
            raise DecodeError(msg)
        # The character before the marker is the ';' separator.
        content_type = text[: pos - 1] if pos > 0 else ""
        if not content_type:
            msg = "missing content type"
            raise DecodeError(msg)
        payload = "".join(text[pos + len(BASE64_MARKER) :].split())
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as exc:
            msg = f"invalid base64 payload: {exc}"
            raise DecodeError(msg) from exc
        return BinaryAsset(data, content_type)

    def wrap(self, asset: BinaryAsset) -> dict[str, str]:
        """Return the nested single-field wire object."""
        return {WIRE_FIELD: self.encode(asset)}

    def unwrap(self, obj: object) -> BinaryAsset:
        """Rebuild an asset from the nested wire object.

        Returns
        -------
        BinaryAsset
            Decoded asset.

        Raises
        ------
        DecodeError
            Raised when ``obj`` is not an object with a string ``data`` field.
        """
        if not isinstance(obj, Mapping):
            msg = f"expected object with {WIRE_FIELD!r} field, got {type(obj).__name__}"
            raise DecodeError(msg)
        text = obj.get(WIRE_FIELD)
        if not isinstance(text, str):
            msg = f"expected string {WIRE_FIELD!r} field"
            raise DecodeError(msg)
        return self.decode(text)

    def to_builtins(self, value: BinaryAsset) -> dict[str, str]:
        """Return the text-format representation of ``value``."""
        return self.wrap(value)

    def from_builtins(self, obj: object) -> BinaryAsset:
        """Rebuild an asset from a decoded payload.

        Returns
        -------
        BinaryAsset
            Decoded asset.
        """
        if isinstance(obj, BinaryAsset):
            return obj
        return self.unwrap(obj)


__all__ = ["BASE64_MARKER", "BinaryAsset", "BinaryAssetCodec"]
