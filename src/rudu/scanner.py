"""On-disk size aggregation for rudu."""

import logging
import os
import stat
from pathlib import Path

logger = logging.getLogger(__name__)

BLOCK_SIZE = 512  # st_blocks is always counted in 512-byte units


def allocated_size(st: os.stat_result) -> int:
    """Bytes allocated on disk, falling back to apparent size without st_blocks."""
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    return blocks * BLOCK_SIZE


def _stat_entry(entry: os.DirEntry) -> os.stat_result:
    return entry.stat(follow_symlinks=False)


def get_directory_size(path: Path) -> tuple[int, int, int]:
    """
    Sum the allocated size of every regular file under a path.

    Symlinks are neither followed nor counted. Directories are descended
    into but add no bytes of their own. Entries that cannot be read are
    skipped and traversal carries on with their siblings.

    Args:
        path: File or directory to measure

    Returns:
        Tuple of (total_bytes, file_count, skipped_count)
    """
    total_size = 0
    file_count = 0
    skipped = 0

    try:
        st = os.lstat(path)
    except OSError as e:
        logger.debug("Skipping %s: %s", path, e)
        return 0, 0, 1

    if stat.S_ISREG(st.st_mode):
        return allocated_size(st), 1, 0
    if not stat.S_ISDIR(st.st_mode):
        return 0, 0, 0

    pending = [os.fspath(path)]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    try:
                        if entry.is_symlink():
                            continue
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            total_size += allocated_size(_stat_entry(entry))
                            file_count += 1
                    except OSError as e:
                        logger.debug("Skipping %s: %s", entry.path, e)
                        skipped += 1
        except OSError as e:
            logger.debug("Skipping directory %s: %s", current, e)
            skipped += 1

    return total_size, file_count, skipped


def calculate_dir_size(path: Path) -> int:
    """Allocated bytes under a path, ignoring anything unreadable."""
    size, _, _ = get_directory_size(path)
    return size
