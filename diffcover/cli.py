"""
Command-line interface for diffcover.
"""

import logging
import sys
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from diffcover import __version__
from diffcover.core.config import DiffCoverConfig, get_default_config, load_config
from diffcover.core.errors import ConfigurationError, InputReadError, OutputWriteError
from diffcover.core.pipeline import DiffCoverageResult, Pipeline
from diffcover.io.coverage import write_profile
from diffcover.io.reports import write_summary

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

USAGE = "Usage: diffcover diff.path coverage.out diff_coverage.out 80"


def _fail(message: str) -> NoReturn:
    """Report a fatal error on stderr and exit with status 1."""
    err_console.print(f"❌ {message}", style="red", markup=False, highlight=False, soft_wrap=True)
    sys.exit(1)


def _load_config(config: Optional[str], exclude: tuple[str, ...]) -> DiffCoverConfig:
    if config:
        dc_config = load_config(config)
        logger.info(f"Loaded configuration from {config}")
    else:
        dc_config = get_default_config()

    if exclude:
        dc_config.exclude = [*dc_config.exclude, *exclude]
    return dc_config


def _print_file_table(result: DiffCoverageResult) -> None:
    """Print per-file diff coverage as a table."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("File", style="cyan")
    table.add_column("Covered", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Coverage", justify="right")

    for stats in result.files:
        style = "green" if stats.covered == stats.total else "yellow"
        table.add_row(
            escape(stats.file),
            str(stats.covered),
            str(stats.total),
            f"[{style}]{stats.percent:.2f}%[/{style}]",
        )

    console.print(table)


@click.command(context_settings={"ignore_unknown_options": True})
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(), help="Configuration file")
@click.option("--exclude", "-e", multiple=True, help="Diff path pattern to leave out (repeatable)")
@click.option("--show-files", is_flag=True, help="Print per-file diff coverage")
@click.option("--summary", "summary_path", type=click.Path(), help="Write a summary report to this path")
@click.option(
    "--summary-format",
    type=click.Choice(["json", "markdown"]),
    default=None,
    help="Summary report format",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.argument("args", nargs=-1, metavar="DIFF COVERAGE OUTPUT THRESHOLD")
@click.pass_context
def main(
    ctx: click.Context,
    config: Optional[str],
    exclude: tuple[str, ...],
    show_files: bool,
    summary_path: Optional[str],
    summary_format: Optional[str],
    verbose: bool,
    args: tuple[str, ...],
) -> None:
    """Diffcover - coverage of the lines changed by a patch.

    Filters a coverage profile down to the blocks touching lines added in a
    unified diff, writes the filtered profile to OUTPUT and fails when the
    covered share of their statements is below THRESHOLD percent.
    """

    # Configure logging
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )

    if len(args) != 4:
        click.echo(USAGE)
        ctx.exit(1)

    diff_path, coverage_path, output_path, threshold_arg = args

    try:
        threshold = float(threshold_arg)
    except ValueError as e:
        _fail(f"error parsing threshold: {e}")

    try:
        dc_config = _load_config(config, exclude)
    except ConfigurationError as e:
        _fail(f"error loading configuration: {e.message}")

    try:
        result = Pipeline(dc_config).run(diff_path, coverage_path)
    except InputReadError as e:
        _fail(f"error parsing input: {e.message}")

    try:
        write_profile(output_path, result.filtered)
    except OutputWriteError as e:
        _fail(f"error creating output: {e.message}")

    click.echo(result.summary_line)

    if show_files or dc_config.report.show_files:
        _print_file_table(result)

    summary_path = summary_path or dc_config.report.summary_path
    if summary_path:
        try:
            write_summary(
                result,
                summary_path,
                summary_format or dc_config.report.summary_format,
                threshold,
            )
        except OutputWriteError as e:
            _fail(f"error writing summary: {e.message}")

    if not result.passes(threshold):
        err_console.print(
            f"diff coverage {result.percent:.2f}% is below threshold {threshold:.2f}%",
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        ctx.exit(1)


if __name__ == "__main__":
    main()
