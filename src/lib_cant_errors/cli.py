"""CLI adapter for ``lib_cant_errors`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let developers preview error messages and log records, and let operators check
routing files, without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_count` – counts the placeholders of a template.
* :func:`cli_render` – prints the message a definition produces.
* :func:`cli_log` – writes the JSON log record a definition produces.
* :func:`cli_routes` – loads a routing file and prints the resolved routes.
* :func:`cli_fail` – raises the demo error from :mod:`lib_cant_errors.testing`.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It drives the public builder API and
never reaches into the kind internals. ``lib_cli_exit_tools`` centralises the
exit code strategy so all commands behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .application.factory import CAUSE, ErrorFactory
from .application.routing_config import load_sink_registry
from .domain.formatting import count_placeholders
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_STDOUT_SINK: Final[str] = "-"


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_cant_errors")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Build and preview \"Can't X because Y\" errors",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_cant_errors",
    message="lib_cant_errors version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_cant_errors")
    except metadata.PackageNotFoundError:
        click.echo("lib_cant_errors (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_cant_errors')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("count", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("template")
def cli_count(template: str) -> None:
    """Print how many %s/%d/%j placeholders TEMPLATE contains.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["count", "access %s as %j"])
    >>> result.output.strip()
    '2'
    """

    click.echo(str(count_placeholders(template)))


_definition_options = [
    click.option("--cant", "cant_template", default="", help="Format string of the \"Can't X\" clause"),
    click.option(
        "--because",
        "because_template",
        default="",
        help="Format string of the \"because Y\" clause",
    ),
    click.option(
        "--cause/--no-cause",
        default=False,
        help="Treat the last argument as a cause message instead of using --because",
    ),
    click.option("--name", default="Error", show_default=True, help="Name of the error kind"),
    click.option("--level", default=None, help="Severity level (e.g. info, warn, error)"),
    click.option("--status", type=int, default=None, help="HTTP status code"),
]


def _with_definition_options(command: Any) -> Any:
    for option in reversed(_definition_options):
        command = option(command)
    return command


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@_with_definition_options
@click.argument("args", nargs=-1)
def cli_render(
    cant_template: str,
    because_template: str,
    cause: bool,
    name: str,
    level: Optional[str],
    status: Optional[int],
    args: Sequence[str],
) -> None:
    """Print the message produced for ARGS.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["render", "--cant", "open %s", "--because", "%s is locked", "db", "db"])
    >>> result.output.strip()
    "Can't open db because db is locked"
    """

    factory = _build_factory(cant_template, because_template, cause, name, level, status)
    click.echo(factory.finalize()(*args).message)


@cli.command("log", context_settings=CLICK_CONTEXT_SETTINGS)
@_with_definition_options
@click.option(
    "--sink",
    "sinks",
    multiple=True,
    help="File path to append the record to, or '-' for stdout (repeatable, default stdout)",
)
@click.option("--stack/--no-stack", default=False, help="Include the construction stack trace")
@click.argument("args", nargs=-1)
def cli_log(
    cant_template: str,
    because_template: str,
    cause: bool,
    name: str,
    level: Optional[str],
    status: Optional[int],
    sinks: Sequence[str],
    stack: bool,
    args: Sequence[str],
) -> None:
    """Write the JSON log record produced for ARGS to every sink."""

    factory = _build_factory(cant_template, because_template, cause, name, level, status)
    factory.set_sinks(_resolve_cli_sinks(sinks))
    factory.finalize()(*args).log(stack)


@cli.command("routes", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument(
    "config",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_routes(config: Path, indent: Optional[int]) -> None:
    """Load the routing file CONFIG and print severity -> sink descriptions as JSON."""

    registry = load_sink_registry(config)
    payload = {level: [_describe_sink(sink) for sink in sinks] for level, sinks in registry.items()}
    click.echo(json.dumps(payload, indent=indent))


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Raise the demo error for testing traceback handling.

    This mirrors the helper exposed by `lib_cant_errors.testing.i_should_fail`.
    """

    i_should_fail()


def _build_factory(
    cant_template: str,
    because_template: str,
    cause: bool,
    name: str,
    level: Optional[str],
    status: Optional[int],
) -> ErrorFactory:
    """Translate the shared definition options into a configured builder."""

    return (
        ErrorFactory()
        .set_name(name)
        .set_cant_template(cant_template)
        .set_because_template(CAUSE if cause else because_template)
        .set_severity_level(level)
        .set_http_status(status)
    )


def _resolve_cli_sinks(values: Sequence[str]) -> list[Any]:
    """Map ``-`` to the current stdout and keep paths; default to stdout."""

    if not values:
        return [sys.stdout]
    return [sys.stdout if value == _STDOUT_SINK else value for value in values]


def _describe_sink(sink: Any) -> str:
    """Return a short human-readable label for *sink*."""

    if sink is sys.stderr:
        return "stderr"
    if sink is sys.stdout:
        return "stdout"
    name = getattr(sink, "name", None)
    if isinstance(name, str):
        return name
    return repr(sink)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_cant_errors",
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
