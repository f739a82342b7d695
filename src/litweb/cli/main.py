from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..chunking.expander import expand, references
from ..core.config import Settings
from ..core.errors import LitwebError
from ..core.logging import log, setup_logging
from ..pipeline.commands import Command, parse_command
from ..pipeline.runner import run as run_command
from ..pipeline.runner import scan

app = typer.Typer(add_completion=False, help="litweb: tangle and weave literate documents")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        help="Config file (.litweb.yaml auto-discovered)",
    ),
    log_format: Optional[str] = typer.Option(None, "--log-format", help="Log format: json|plain|auto"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Minimum log level"),
    strict: bool = typer.Option(False, "--strict", help="Fail on chunks that are never closed with '@'"),
) -> None:
    """Load settings and configure logging before any command runs."""
    try:
        settings = Settings.load_config(config_file)
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e

    # CLI flags have the highest precedence
    if log_format:
        settings.LOG_FORMAT = log_format
    if log_level:
        settings.LOG_LEVEL = log_level
    if strict:
        settings.STRICT_CHUNKS = True

    try:
        setup_logging(settings.LOG_FORMAT, level=settings.LOG_LEVEL, no_color=settings.NO_COLOR)  # type: ignore[arg-type]
    except ValueError as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e
    log.debug("config.loaded", config_file=config_file or "auto-discovered")
    ctx.obj = settings

    # If no command was provided, show help
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


def _fail(e: LitwebError) -> NoReturn:
    typer.echo(f"❌ {e}", err=True)
    raise typer.Exit(e.exit_code) from e


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def config(ctx: typer.Context) -> None:
    """Show the effective settings (config file < env vars < CLI flags)."""
    settings = _settings(ctx)
    for key, value in settings.model_dump().items():
        typer.echo(f"{key}={value}")


@app.command()
def tangle(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Literate source document"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Output directory (default: document's directory)"),
) -> None:
    """Write every chunk whose name looks like a file path to disk."""
    try:
        report = run_command(Command.TANGLE, document, _settings(ctx), target=target)
    except LitwebError as e:
        _fail(e)

    for result in report.files:  # type: ignore[union-attr]
        status = "wrote" if result.written else "unchanged"
        typer.echo(f"{status} {result.path}", err=True)


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Literate source document"),
) -> None:
    """Print the names of the chunks that tangle would write, one per line."""
    try:
        run_command(Command.LIST, document, _settings(ctx))
    except LitwebError as e:
        _fail(e)


@app.command()
def weave(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Literate source document"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Markup output path (default: <document>.html)"),
) -> None:
    """Write the document with chunk bodies escaped and wrapped in named blocks."""
    try:
        report = run_command(Command.WEAVE, document, _settings(ctx), output=output)
    except LitwebError as e:
        _fail(e)

    typer.echo(f"wrote {report.path}", err=True)  # type: ignore[union-attr]


@app.command("run")
def run_cmd(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="list | tangle | weave"),
    document: Path = typer.Argument(..., help="Literate source document"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Tangle output directory"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Weave output path"),
) -> None:
    """Run a command chosen by name (for scripting)."""
    try:
        selected = parse_command(command)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from e

    try:
        run_command(selected, document, _settings(ctx), target=target, output=output)
    except LitwebError as e:
        _fail(e)


@app.command("expand")
def expand_cmd(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Literate source document"),
    chunk: str = typer.Argument(..., help="Chunk name"),
    indent: str = typer.Option("", "--indent", help="Prefix for every output line"),
) -> None:
    """Print the expansion of a single chunk to stdout."""
    try:
        store = scan(document, _settings(ctx)).store
        typer.echo(expand(store, chunk, indent))
    except LitwebError as e:
        _fail(e)


@app.command()
def chunks(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Literate source document"),
) -> None:
    """Show every chunk with its kind, size and references."""
    settings = _settings(ctx)
    try:
        store = scan(document, settings).store
    except LitwebError as e:
        _fail(e)

    table = Table(title=str(document))
    table.add_column("Chunk", style="bold")
    table.add_column("Kind")
    table.add_column("Line", justify="right")
    table.add_column("Parts", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("References")

    for chunk in store.values():
        table.add_row(
            chunk.name,
            "file" if chunk.is_file else "macro",
            str(chunk.first_line),
            str(chunk.occurrences),
            str(chunk.raw_body.count("\n")),
            ", ".join(references(chunk.raw_body)),
        )

    Console(no_color=settings.NO_COLOR).print(table)


if __name__ == "__main__":
    app()
