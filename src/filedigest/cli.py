"""Typer-based command line interface for filedigest."""
from __future__ import annotations

import sys
from typing import Optional, Sequence

import structlog
import typer
from tqdm import tqdm

from . import __version__
from .config import CONFIG
from .logging import LogLevel, configure_logging
from .services.digest import digest_file
from .storage.strategy import Strategy
from .utils.errors import FileDigestError, UsageError

PROG_NAME = "filedigest"
USAGE_EXIT_CODE = 2

app = typer.Typer(help="Print the SHA-256 digest of a file", add_completion=False)
logger = structlog.get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


def _report(exc: FileDigestError) -> None:
    typer.echo(f"{PROG_NAME}: {exc}", err=True)


@app.command()
def digest(
    path: str = typer.Argument(..., metavar="PATH", help="File to hash"),
    strategy: Strategy = typer.Option(Strategy.AUTO, "--strategy", case_sensitive=False, help="Force an access strategy"),
    allow_empty: bool = typer.Option(False, "--allow-empty", help="Print the digest of empty input instead of failing"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar on stderr"),
    log_level: LogLevel = typer.Option(LogLevel.WARNING, "--log-level", case_sensitive=False, help="Structured log verbosity on stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Print SHA256(PATH) = <hex digest>"""
    configure_logging(log_level)
    config = CONFIG.model_copy(update={"allow_empty": True}) if allow_empty else CONFIG
    try:
        with tqdm(unit="B", unit_scale=True, desc=path, file=sys.stderr, disable=not progress) as bar:
            result = digest_file(path, strategy=strategy, config=config, progress=bar.update if progress else None)
    except FileDigestError as exc:
        logger.error("cli.failed", path=path, error_type=type(exc).__name__, error=str(exc))
        _report(exc)
        raise typer.Exit(code=1)
    typer.echo(result.format_line())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command and return its exit status; every failure maps to 1.

    Typer prints usage errors itself and exits 2; that status is folded into 1.
    """
    args = list(argv) if argv is not None else sys.argv[1:]
    try:
        app(args=args, prog_name=PROG_NAME)
    except SystemExit as exc:
        code = exc.code
    else:
        code = 0
    if code is None:
        return 0
    if not isinstance(code, int):
        typer.echo(f"{PROG_NAME}: {code}", err=True)
        return 1
    if code == USAGE_EXIT_CODE:
        _report(UsageError("invalid arguments; see --help"))
        return 1
    return code


if __name__ == "__main__":
    raise SystemExit(main())
