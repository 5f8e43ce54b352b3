"""Rich terminal display for rudu."""

from rich import box
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

from rudu.models import Band, PercentageBar, Report, ScaledSize

console = Console()
err_console = Console(stderr=True)

BAND_STYLES = {
    Band.TINY: "white",
    Band.SMALL: "green",
    Band.MEDIUM: "blue",
    Band.LARGE: "yellow",
    Band.HUGE: "red",
}

NAME_STYLE = "green"


def band_style(band: Band) -> str:
    """Get colour for a band."""
    return BAND_STYLES.get(band, "white")


def styled_size(size: ScaledSize) -> Text:
    """Size text coloured by its magnitude band."""
    return Text(size.text, style=band_style(size.band))


def styled_bar(bar: PercentageBar) -> Text:
    """Bar text coloured by its percentage band."""
    return Text(bar.text, style=band_style(bar.band))


def build_table(report: Report, show_files: bool = False) -> Table:
    """Build the listing table for a report."""
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("File Name", style=NAME_STYLE)
    table.add_column("")
    table.add_column("Size", justify="right")
    if show_files:
        table.add_column("Files", justify="right")

    for entry in report.entries:
        # Text keeps brackets in file names from being read as markup
        row = [Text(entry.name), styled_bar(entry.bar), styled_size(entry.size)]
        if show_files:
            row.append(str(entry.file_count))
        table.add_row(*row)

    return table


def show_report(report: Report, show_files: bool = False) -> None:
    """Display a report and its grand total."""
    if report.entries:
        console.print(build_table(report, show_files=show_files))
    else:
        console.print(Text(f"No entries found in {report.root}", style="dim"), soft_wrap=True)

    total = Text("Total size: ")
    total.append_text(styled_size(report.total_size))
    console.print(total)

    if report.total_skipped:
        err_console.print(
            f"[dim]{report.total_skipped} entries could not be read and were skipped[/dim]"
        )


def show_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(f"Error: {message}", style="red"), soft_wrap=True)


def show_scanning_progress() -> Progress:
    """Create progress display for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=err_console,
        transient=True,
    )
