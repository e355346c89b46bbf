"""Main application setup for the comfortable CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter

from cli.commands.version import get_version
from cli.context import RunContext, set_run_context
from cli.exit_codes import ExitCode
from cli.groups import admin_group, session_group
from cli.result_action import cli_result_action
from config import load_service_config
from content.errors import ContentError
from obs.logging import configure_logging
from obs.tracing import ScopeName, get_tracer

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_HELP_EPILOGUE = """
Examples:
  comfortable convert book.yaml --to json      Convert a book to JSON on stdout
  comfortable convert todos.json -k todos -o todos.msgpack
  comfortable import-books ~/books             Import <title>.yaml files
  comfortable export-todos todos.yaml -o out.json
  comfortable config show --with-sources       Show config precedence

Environment Variables:
  COMFORTABLE_LOG_LEVEL                 Default log level
  COMFORTABLE_BOOKS_PATH                Book import folder
  COMFORTABLE_TODOS_PATH                Todo export file
  COMFORTABLE_TODOS_EXPORT_ENABLED      Enable the scheduled todo export
  COMFORTABLE_TODOS_EXPORT_FIXED_RATE_S Seconds between todo exports
"""

tracer = get_tracer(ScopeName.CLI)

app = App(
    name="comfortable",
    help="Books, movies and todos in JSON, XML, YAML and MessagePack.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(show_default=True, show_env_var=True),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to configuration file (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="COMFORTABLE_LOG_LEVEL",
            group=session_group,
        ),
    ] = "INFO"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Configure logging and configuration, then dispatch the command.

    Returns
    -------
    int
        Exit status code from command execution.
    """
    configure_logging(session.log_level.upper())
    try:
        resolved = load_service_config(session.config_file)
    except (OSError, ValueError) as exc:
        app.console.print(f"[bold red]Configuration error:[/] {exc}")
        return ExitCode.CONFIG_ERROR
    run_context = RunContext(
        log_level=session.log_level,
        config=resolved,
        config_file=session.config_file,
    )
    set_run_context(run_context)
    command, bound, ignored = app.parse_args(list(tokens))
    injected = {name: run_context for name in ignored if name == "run_context"}
    with tracer.start_as_current_span("cli.invocation") as span:
        span.set_attribute("cli.command", getattr(command, "__qualname__", repr(command)))
        try:
            result = command(*bound.args, **bound.kwargs, **injected)
        except (ContentError, OSError, ValueError) as exc:
            span.record_exception(exc)
            app.console.print(f"[bold red]Error:[/] {exc}")
            result = ExitCode.from_exception(exc)
        exit_code = cli_result_action(app, command, result)
        span.set_attribute("cli.exit_code", exit_code)
    return exit_code


app.command("cli.commands.convert:convert_command", name="convert", alias="c")
app.command("cli.commands.formats:formats_command", name="formats")
app.command("cli.commands.import_books:import_books_command", name="import-books")
app.command("cli.commands.export_todos:export_todos_command", name="export-todos")

_config_app = App(name="config", help="Configuration management.")
_config_app.command("cli.commands.config:show_config", name="show")
_config_app.command("cli.commands.config:init_config", name="init")
app.command(_config_app, alias="cfg")
app.command("cli.commands.version:version_command", name="version", alias="v")

app.register_install_completion_command(
    name="--install-completion",
    add_to_startup=False,
    group=admin_group,
    help="Install shell completion scripts.",
)


def main() -> None:
    """Run the comfortable CLI."""
    raise SystemExit(app.meta())


__all__ = ["app", "main"]
