"""CLI adapter for ``lib_dotenv_flow`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the cascade resolver and loader on the command line so operators can
check which ``.env*`` files apply to an environment, inspect the merged
variables, or launch a process with the cascade applied.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling and log verbosity.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_list` – prints the resolved cascade as JSON.
* :func:`cli_parse` – prints the overwrite-merged variables of given files.
* :func:`cli_config` – runs :func:`lib_dotenv_flow.config` against a copy of the
  process environment and prints the outcome.
* :func:`cli_run` – runs a command with the cascade applied to its environment.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost adapter. Options come from the environment variables recognised by
:func:`lib_dotenv_flow.options_from_env` and are overridden by flags. The CLI
never mutates its own process environment.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Callable, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.store.environ import EnvironStore
from .application.cascade import list_files
from .core import config, parse
from .domain.errors import NoFilesFound
from .domain.options import ConfigOptions, options_from_env
from .domain.pattern import DEFAULT_PATTERN
from .observability import get_logger

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_CLI_HANDLER_NAME: Final[str] = "lib_dotenv_flow.cli"


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_dotenv_flow")
    except metadata.PackageNotFoundError:
        return "0.0.0"


class _ContextFormatter(logging.Formatter):
    """Render structured records as ``LEVEL message {context}`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        context = {key: value for key, value in getattr(record, "context", {}).items() if value is not None}
        line = f"lib_dotenv_flow {record.levelname.lower()}: {record.getMessage()}"
        if context:
            line = f"{line} {json.dumps(context, sort_keys=True, default=str)}"
        return line


def _configure_logging(ctx: click.Context, debug: bool) -> None:
    """Attach a stderr handler to the package logger for the lifetime of *ctx*."""

    logger = get_logger()
    previous_level = logger.level
    level = logging.DEBUG if debug else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_CLI_HANDLER_NAME)
    handler.setFormatter(_ContextFormatter())
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)

    def _restore() -> None:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

    ctx.call_on_close(_restore)


@click.group(
    help="Load .env* files in environment-cascade order",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_dotenv_flow",
    message="lib_dotenv_flow version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option("--debug", is_flag=True, default=False, help="Log debug events to stderr")
@click.pass_context
def cli(ctx: click.Context, traceback: bool, debug: bool) -> None:
    """Root command configuring traceback handling and log verbosity.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color`` and installs a
        stderr handler on the ``lib_dotenv_flow`` logger.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    _configure_logging(ctx, debug)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_dotenv_flow")
    except metadata.PackageNotFoundError:
        click.echo("lib_dotenv_flow (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_dotenv_flow')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("list", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--path",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    default=None,
    help="Directory holding the .env* files (defaults to CWD)",
)
@click.option("--pattern", default=DEFAULT_PATTERN, show_default=True, help="Naming convention pattern")
@click.option("--node-env", default=None, help="Environment name (development, test, production, ...)")
def cli_list(path: Optional[Path], pattern: str, node_env: Optional[str]) -> None:
    """Print the existing cascade files as a JSON array, lowest priority first.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> result = CliRunner().invoke(cli, ["list", "--path", tmp.name])
    >>> result.output.strip()
    '[]'
    >>> tmp.cleanup()
    """

    click.echo(json.dumps(list_files(path, pattern, node_env)))


@cli.command("parse", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path, dir_okay=False))
@click.option("--encoding", default="utf-8", show_default=True, help="Text encoding of the files")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_parse(files: Sequence[Path], encoding: str, indent: Optional[int]) -> None:
    """Parse FILES in order (later files win) and print the variables as JSON.

    Read failures propagate and end the command with a non-zero exit code.
    """

    click.echo(json.dumps(parse(list(files), encoding=encoding), indent=indent))


def _cascade_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate *func* with the options shared by ``config`` and ``run``."""

    decorators = [
        click.option(
            "--path",
            type=click.Path(file_okay=False, dir_okay=True),
            default=None,
            help="Directory holding the .env* files [env: DOTENV_FLOW_PATH]",
        ),
        click.option("--pattern", default=None, help=f"Naming convention pattern (default: {DEFAULT_PATTERN})"),
        click.option("--node-env", default=None, help="Environment name [env: NODE_ENV]"),
        click.option("--default-node-env", default=None, help="Fallback environment name [env: DEFAULT_NODE_ENV]"),
        click.option(
            "--file",
            "files",
            multiple=True,
            help="Explicit file to load instead of the cascade (repeatable, ordered)",
        ),
        click.option("--encoding", default=None, help="Text encoding of the files [env: DOTENV_FLOW_ENCODING]"),
        click.option(
            "--purge-dotenv/--no-purge-dotenv",
            default=None,
            help="Unload values of a previously loaded .env first [env: DOTENV_FLOW_PURGE_DOTENV]",
        ),
        click.option("--silent/--no-silent", default=None, help="Suppress warnings about predefined variables"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _build_options(**flags: Any) -> ConfigOptions:
    """Merge environment-provided options with explicit CLI flags (flags win)."""

    files = flags.pop("files", ())
    base = ConfigOptions.from_mapping(options_from_env())
    return base.merged(files=tuple(files) if files else None, **flags)


def _load_into(environ: dict[str, str], options: ConfigOptions, *, allow_missing: bool = False) -> dict[str, Any]:
    """Run :func:`config` against *environ*; raise ``ClickException`` on an error result.

    With *allow_missing* an empty cascade is not an error: ``config`` has
    already logged the warning (unless silenced) and *environ* is unchanged.
    """

    result = config(options, store=EnvironStore(environ))
    if allow_missing and isinstance(result.error, NoFilesFound):
        return {"parsed": {}, "skipped": [], "files": []}
    if result.error is not None:
        raise click.ClickException(str(result.error))
    return {"parsed": dict(result.parsed or {}), "skipped": list(result.skipped), "files": list(result.files)}


@cli.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@_cascade_options
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_config(indent: Optional[int], **flags: Any) -> None:
    """Resolve and load the cascade against a copy of the environment; print JSON.

    The output holds ``parsed`` (all variables read), ``skipped`` (names
    already defined in the environment), and ``files`` (cascade order).
    """

    payload = _load_into(dict(os.environ), _build_options(**flags))
    click.echo(json.dumps(payload, indent=indent))


@cli.command(
    "run",
    context_settings={**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True},
)
@_cascade_options
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
def cli_run(command: Sequence[str], **flags: Any) -> None:
    """Run COMMAND with the cascade applied to its environment.

    Separate the command from the options with ``--``, e.g.
    ``lib_dotenv_flow run --node-env production -- python app.py``. The exit
    code of COMMAND becomes the exit code of this command. An empty cascade
    only logs a warning; unreadable files stop COMMAND from starting.
    """

    environ = dict(os.environ)
    _load_into(environ, _build_options(**flags), allow_missing=True)
    completed = subprocess.run(list(command), env=environ, check=False)
    raise SystemExit(completed.returncode)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_dotenv_flow",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
