"""Convert record files between wire formats."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated, Any, Literal

from cyclopts import Parameter

from cli.groups import content_group
from cli.result import CliResult
from content.converter import converter_for
from content.errors import ContentError
from content.formats import WireFormat
from records.books import Book
from records.movies import Movie
from records.todos import Todo
from utils.file_io import write_atomic

logger = logging.getLogger(__name__)

type RecordKind = Literal["book", "books", "movie", "movies", "todo", "todos"]

RECORD_TYPES: dict[str, Any] = {
    "book": Book,
    "books": list[Book],
    "movie": Movie,
    "movies": list[Movie],
    "todo": Todo,
    "todos": list[Todo],
}


def _resolve_formats(
    source: Path,
    output: Path | None,
    from_format: WireFormat | None,
    to_format: WireFormat | None,
) -> tuple[WireFormat, WireFormat]:
    src = from_format or WireFormat.from_extension(source)
    if to_format is not None:
        return src, to_format
    if output is not None:
        return src, WireFormat.from_extension(output)
    return src, WireFormat.JSON


def convert_command(
    source: Annotated[Path, Parameter(help="Record file to read.")],
    *,
    kind: Annotated[
        RecordKind,
        Parameter(name=["--kind", "-k"], help="Record kind stored in SOURCE."),
    ] = "book",
    from_format: Annotated[
        WireFormat | None,
        Parameter(
            name="--from",
            help="Input format (default: inferred from SOURCE).",
            group=content_group,
        ),
    ] = None,
    to_format: Annotated[
        WireFormat | None,
        Parameter(
            name="--to",
            help="Output format (default: inferred from --output, else json).",
            group=content_group,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Write here instead of stdout."),
    ] = None,
) -> CliResult | None:
    """Convert a record file from one wire format to another.

    Returns
    -------
    CliResult | None
        Result describing the written file, or ``None`` after writing to stdout.
    """
    target_type = RECORD_TYPES[kind]
    try:
        src_format, dst_format = _resolve_formats(source, output, from_format, to_format)
        value = converter_for(target_type, src_format).decode(source.read_bytes())
        payload = converter_for(target_type, dst_format).encode(value)
        if output is not None:
            write_atomic(output, payload)
    except (ContentError, OSError) as exc:
        logger.debug("Conversion of %s failed", source, exc_info=True)
        return CliResult.from_error(exc, summary=f"Cannot convert {source}: {exc}")
    if output is None:
        sys.stdout.buffer.write(payload)
        if not dst_format.is_binary:
            sys.stdout.buffer.write(b"\n")
        sys.stdout.flush()
        return None
    return CliResult.success(
        summary=f"Converted {source} ({src_format}) to {dst_format}.",
        artifacts={kind: output},
    )


__all__ = ["RECORD_TYPES", "convert_command"]
