# launchpd/utils/file_utils.py
"""File operation utilities"""

import mimetypes
import os
from pathlib import Path
from typing import Iterator, List, Tuple

from ..core.ignore import is_ignored


def iter_deployable_files(directory: Path) -> Iterator[Path]:
    """
    Walk a folder yielding every file that would be deployed

    Ignored directories are pruned without descending into them and
    ignored files are skipped. Scanning, size calculation and upload
    all go through this walk so they observe the same file set.

    Args:
        directory: Root folder

    Yields:
        Absolute file paths, in directory walk order
    """
    for root, dirs, files in os.walk(directory):
        dirs[:] = sorted(d for d in dirs if not is_ignored(d, is_directory=True))
        for name in sorted(files):
            if is_ignored(name):
                continue
            path = Path(root) / name
            if path.is_file():
                yield path


def scan_directory(directory: Path) -> List[Path]:
    """
    List deployable files in a folder

    Args:
        directory: Directory to scan

    Returns:
        List of file paths
    """
    return list(iter_deployable_files(directory))


def calculate_directory_size(directory: Path) -> Tuple[int, int]:
    """
    Calculate total size of the deployable files in a folder

    Files that disappear between listing and stat are skipped.

    Args:
        directory: Directory path

    Returns:
        Tuple of (file count, total size in bytes)
    """
    count = 0
    total_size = 0

    for path in iter_deployable_files(directory):
        try:
            total_size += path.stat().st_size
        except OSError:
            continue
        count += 1

    return count, total_size


def to_posix_relative(path: Path, root: Path) -> str:
    """
    Relative path of ``path`` under ``root`` using forward slashes

    Args:
        path: File path
        root: Root folder

    Returns:
        POSIX style relative path
    """
    return path.relative_to(root).as_posix()


def get_mime_type(file_path: Path) -> str:
    """
    Get MIME type of file

    Args:
        file_path: File path

    Returns:
        MIME type string
    """
    mime_type, _ = mimetypes.guess_type(str(file_path))
    return mime_type or 'application/octet-stream'

