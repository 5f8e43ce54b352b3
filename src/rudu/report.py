"""Report building for rudu."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional

from rudu.bars import render_bar
from rudu.models import Entry, Report, ReportConfig
from rudu.scanner import get_directory_size
from rudu.units import scale_size

logger = logging.getLogger(__name__)

SizeFunc = Callable[[Path], tuple[int, int, int]]
ProgressCallback = Callable[[str, int, int], None]


class RuduError(Exception):
    """Base class for errors that stop a report."""


class PathNotFoundError(RuduError):
    """The directory to report on does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Path '{display_name(str(path))}' does not exist")


class DirectoryListingError(RuduError):
    """The directory to report on exists but cannot be listed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot list '{display_name(str(path))}': {reason}")


def display_name(name: str) -> str:
    """
    Printable form of a file name.

    Undecodable bytes in POSIX names arrive as lone surrogates, which cannot
    be written to the terminal; they become U+FFFD instead.
    """
    return os.fsencode(name).decode("utf-8", "replace")


def percentage_of(size: int, total: int) -> float:
    """Share of the total in percent, 0 when the total is 0."""
    if total <= 0:
        return 0.0
    return min(100.0, max(0.0, size / total * 100))


class ReportBuilder:
    """
    Builds a Report for the immediate children of a directory.

    Children are listed in name order and sorted by size with a stable
    sort, so entries of equal size keep their name order.
    """

    def __init__(
        self,
        config: Optional[ReportConfig] = None,
        size_func: SizeFunc = get_directory_size,
    ):
        self.config = config or ReportConfig()
        self.size_func = size_func

    def list_children(self, root: Path) -> list[Path]:
        """
        List the immediate children of root.

        Raises:
            PathNotFoundError: root does not exist
            DirectoryListingError: root cannot be listed
        """
        if not root.exists():
            raise PathNotFoundError(root)

        try:
            with os.scandir(root) as entries:
                names = sorted(entry.name for entry in entries)
        except OSError as e:
            raise DirectoryListingError(root, e.strerror or str(e)) from e

        return [root / name for name in names]

    def _measure(
        self,
        children: list[Path],
        progress_callback: Optional[ProgressCallback],
    ) -> list[tuple[int, int, int]]:
        total = len(children)

        if self.config.workers <= 1 or total <= 1:
            results = []
            for i, child in enumerate(children, 1):
                results.append(self.size_func(child))
                if progress_callback:
                    progress_callback(display_name(child.name), i, total)
            return results

        ordered: list[Optional[tuple[int, int, int]]] = [None] * total
        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures = {
                executor.submit(self.size_func, child): index
                for index, child in enumerate(children)
            }
            for completed, future in enumerate(as_completed(futures), 1):
                index = futures[future]
                ordered[index] = future.result()
                if progress_callback:
                    progress_callback(display_name(children[index].name), completed, total)
        return ordered

    def build(
        self,
        root: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Report:
        """
        Aggregate every child of root and return the ordered report.

        Args:
            root: Directory to report on
            progress_callback: Optional callback(name, current, total) per child

        Returns:
            Report with entries sorted largest first
        """
        root = Path(root)
        children = self.list_children(root)
        logger.debug("Measuring %d entries in %s", len(children), root)

        measured = self._measure(children, progress_callback)
        total_bytes = sum(size for size, _, _ in measured)

        config = self.config
        entries = []
        for child, (size, file_count, skipped) in zip(children, measured):
            percentage = percentage_of(size, total_bytes)
            entries.append(
                Entry(
                    name=display_name(child.name),
                    path=str(child),
                    size_bytes=size,
                    file_count=file_count,
                    skipped=skipped,
                    percentage=percentage,
                    size=scale_size(size, config.units),
                    bar=render_bar(
                        percentage,
                        config.bar_width,
                        config.fill_char,
                        config.empty_char,
                    ),
                )
            )
            if skipped:
                logger.debug("%s: skipped %d unreadable entries", display_name(str(child)), skipped)

        entries.sort(key=lambda e: e.size_bytes, reverse=True)

        return Report(
            root=display_name(str(root)),
            entries=tuple(entries),
            total_bytes=total_bytes,
            total_size=scale_size(total_bytes, config.units),
            config=config,
        )


def build_report(
    root: Path,
    config: Optional[ReportConfig] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> Report:
    """Build a report for root with the given configuration."""
    return ReportBuilder(config).build(root, progress_callback=progress_callback)
