"""Main CLI application entry point.

Defines the ``rbh-gc`` Typer application.
"""

import logging
import os
from contextlib import ExitStack
from pathlib import Path
from typing import Annotated

import click
import typer
from rich.logging import RichHandler
from typer.core import TyperCommand

from rbhgc import __version__
from rbhgc.backends.uri import backend_from_uri
from rbhgc.core.config import ConfigError, LogLevel, load_config
from rbhgc.errors import GCError
from rbhgc.gc.mount import MountHandle
from rbhgc.gc.pipeline import collect_garbage
from rbhgc.gc.resolver import UnsupportedResolver, load_resolver
from rbhgc.utils.formatting import err_console, print_error, print_success, print_warning

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = os.EX_USAGE


class GCCommand(TyperCommand):
    """Command reporting usage errors with the sysexits usage status."""

    def make_context(
        self,
        info_name: str | None,
        args: list[str],
        parent: click.Context | None = None,
        **extra,
    ) -> click.Context:
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = EXIT_USAGE
            raise


app = typer.Typer(
    name="rbh-gc",
    help="Garbage collect a robinhood backend.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rbh-gc version {__version__}")
        raise typer.Exit()


def configure_logging(level: LogLevel) -> None:
    """Route log records to stderr through Rich.

    Args:
        level: Minimum level of the records to show.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command(cls=GCCommand)
def main(
    backend: Annotated[
        str,
        typer.Argument(
            metavar="BACKEND",
            help="A URI describing a robinhood backend (rbh:<type>:<name>).",
            show_default=False,
        ),
    ],
    path: Annotated[
        Path,
        typer.Argument(
            metavar="PATH",
            help="A path in the filesystem which BACKEND mirrors.",
            show_default=False,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file (default: ~/.config/rbhgc/config.toml).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every probe decision.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress the summary line.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Iterate on a robinhood BACKEND's entries ready for garbage collection.

    If these entries are absent from the filesystem mounted at PATH,
    delete them from BACKEND for good.
    """
    try:
        settings = load_config(config)
        configure_logging("DEBUG" if verbose else settings.log_level)
        resolver = load_resolver(settings.resolver)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE) from e

    if isinstance(resolver, UnsupportedResolver):
        print_warning("No identity resolver configured, any candidate will abort the run.")

    try:
        # Released in reverse order: mount handle first, then backend
        with ExitStack() as stack:
            gc_backend = stack.enter_context(backend_from_uri(backend))
            mount = stack.enter_context(MountHandle.open(path))
            stats = collect_garbage(gc_backend, mount.fileno(), resolver)
    except GCError as e:
        print_error(str(e))
        raise typer.Exit(code=EXIT_FAILURE) from e

    if not quiet:
        print_success(
            f"{stats.deleted} record(s) deleted, {stats.examined} candidate(s) examined."
        )


if __name__ == "__main__":
    app()
