"""clippydiag CLI."""

import asyncio
from pathlib import Path
from typing import TextIO

import click

from clippydiag import __version__
from clippydiag.cli.output import echo_json, pluralize, render_table, status
from clippydiag.config import ClippyConfig, load_config
from clippydiag.core.errors import ConfigError
from clippydiag.core.logging import configure_logging
from clippydiag.lint.ops import ClippyOps
from clippydiag.lint.pipeline import extract
from clippydiag.lint.runner import find_crate_root
from clippydiag.lint.sink import MemorySink


def _load(ctx: click.Context, start: Path, **overrides: object) -> ClippyConfig:
    """Load config for the crate around ``start`` and set up logging from it."""
    project_root = find_crate_root(start) or Path.cwd()
    try:
        config = load_config(project_root, **overrides)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    if ctx.obj.get("verbose"):
        configure_logging(level="DEBUG")
    elif "level" in config.logging.model_fields_set:
        configure_logging(config=config.logging)
    else:
        # Run events would interleave with the status lines on stderr
        configure_logging(config=config.logging.model_copy(update={"level": "WARNING"}))
    return config


@click.group()
@click.version_option(version=__version__, prog_name="clippydiag")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """clippydiag - cargo clippy diagnostics for a single Rust file."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


@cli.command("check")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "-a",
    "--arg",
    "extra_args",
    multiple=True,
    help="Extra argument for cargo clippy (repeatable, replaces configured extra_args)",
)
@click.pass_context
def check_command(
    ctx: click.Context, file: Path, as_json: bool, extra_args: tuple[str, ...]
) -> None:
    """Run cargo clippy and show diagnostics for FILE."""
    overrides: dict[str, object] = {"enabled": True}
    if extra_args:
        overrides["extra_args"] = list(extra_args)
    config = _load(ctx, file, **overrides)

    ops = ClippyOps(config, MemorySink())
    if not as_json:
        status(f"Running clippy for {file}...")
    result = asyncio.run(ops.check(file))

    if result.status == "error":
        raise click.ClickException(result.error_detail or "clippy failed")
    if result.status == "skipped":
        raise click.ClickException(f"Not a Rust source file: {file}")

    if as_json:
        echo_json(result.diagnostics)
        return

    if result.diagnostics:
        render_table(result.diagnostics)
        status(pluralize(len(result.diagnostics), "diagnostic"), style="warning")
    else:
        status("No diagnostics", style="success")
    if result.exit_status:
        status(f"cargo exited with status {result.exit_status}", style="warning")


@cli.command("parse")
@click.argument("file", type=click.Path(path_type=Path))
@click.option(
    "-i",
    "--input",
    "source",
    type=click.File("r"),
    default="-",
    help="Captured clippy JSON output (default: stdin)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def parse_command(ctx: click.Context, file: Path, source: TextIO, as_json: bool) -> None:
    """Extract diagnostics for FILE from already captured clippy output."""
    config = _load(ctx, file)
    report = extract(source.read(), str(file.resolve()), config.severity_table())

    if as_json:
        echo_json(report.diagnostics)
        return

    if report.diagnostics:
        render_table(report.diagnostics)
    if report.parse_failures:
        status(f"Skipped {pluralize(report.parse_failures, 'malformed line')}", style="warning")
    if report.all_lines_failed:
        raise click.ClickException("No line of the input was valid JSON")
    status(pluralize(len(report.diagnostics), "diagnostic"), style="success")


@cli.command("config")
@click.argument("path", default=".", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_command(ctx: click.Context, path: Path) -> None:
    """Show the configuration in effect for the crate at PATH."""
    config = _load(ctx, path)
    click.echo(ClippyOps(config, MemorySink()).describe_config())


if __name__ == "__main__":
    cli()
