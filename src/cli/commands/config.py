"""Configuration management commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from cli.config_source import ConfigWithSources
from cli.context import RunContext, current_run_context
from cli.groups import admin_group
from config import CONFIG_FILENAME, flatten_config

_TEMPLATE = """# comfortable.toml

[books]
# path = "~/comfortable-data-service/books"

[books.import]
enabled = false

[movies]
# path = "~/comfortable-data-service/movies"

[todos]
# path = "~/comfortable-data-service/todos.json"

[todos.export]
enabled = false
fixed_rate_s = 5.0
initial_delay_s = 5.0
"""


def show_config(
    *,
    with_sources: Annotated[
        bool,
        Parameter(
            name="--with-sources",
            help="Show the source of each configuration value.",
        ),
    ] = False,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> int:
    """Show the effective configuration.

    Returns
    -------
    int
        Exit status code.
    """
    resolved = (run_context or current_run_context()).config
    if with_sources:
        payload: object = ConfigWithSources.from_resolved(resolved).to_display_dict()
    else:
        payload = flatten_config(resolved.spec)
    sys.stdout.write(json.dumps(payload, indent=2, sort_keys=True) + "\n")
    return 0


def init_config(
    *,
    path: Annotated[
        Path | None,
        Parameter(
            name="--path",
            help=f"Path to write the configuration template (default: {CONFIG_FILENAME}).",
        ),
    ] = None,
    force: Annotated[
        bool,
        Parameter(
            name="--force",
            help="Overwrite existing config file.",
            group=admin_group,
        ),
    ] = False,
) -> int:
    """Write a configuration template to disk.

    Returns
    -------
    int
        Exit status code.

    Raises
    ------
    FileExistsError
        Raised when the target exists and ``force`` is false.
    """
    target_path = path if path is not None else Path(CONFIG_FILENAME)
    if target_path.exists() and not force:
        msg = f"Config file already exists: {target_path}."
        raise FileExistsError(msg)
    target_path.write_text(_TEMPLATE, encoding="utf-8")
    return 0


__all__ = ["init_config", "show_config"]
