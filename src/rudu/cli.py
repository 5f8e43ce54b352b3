"""CLI interface for rudu."""

import logging
from pathlib import Path

import typer
from rich.logging import RichHandler
from rich.markup import escape

from rudu import __version__
from rudu.display import console, err_console, show_error, show_report, show_scanning_progress
from rudu.models import BAR_LENGTH, ReportConfig
from rudu.report import DirectoryListingError, PathNotFoundError, ReportBuilder

app = typer.Typer(
    name="rudu",
    help="A disk usage analyzer",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"rudu version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def main(
    path: Path = typer.Argument(Path("."), help="Directory to analyze"),
    bar_width: int = typer.Option(
        BAR_LENGTH, "--bar-width", "-w", min=1, help="Number of slots in the percentage bar"
    ),
    jobs: int = typer.Option(1, "--jobs", "-j", min=1, help="Threads used to measure entries"),
    files: bool = typer.Option(False, "--files", "-f", help="Show file counts per entry"),
    verbose: bool = typer.Option(False, "--verbose", help="Log skipped entries to stderr"),
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Show how much disk space each entry in PATH uses."""
    setup_logging(verbose)

    builder = ReportBuilder(ReportConfig(bar_width=bar_width, workers=jobs))

    try:
        if err_console.is_terminal:
            with show_scanning_progress() as progress:
                task = progress.add_task("Scanning...", total=None)

                def update_progress(name: str, current: int, total: int):
                    progress.update(
                        task,
                        completed=current,
                        total=total,
                        description=f"Scanning {escape(name)}...",
                    )

                report = builder.build(path, progress_callback=update_progress)
        else:
            report = builder.build(path)
    except (PathNotFoundError, DirectoryListingError) as e:
        show_error(str(e))
        raise typer.Exit(1)

    show_report(report, show_files=files)


if __name__ == "__main__":
    app()
