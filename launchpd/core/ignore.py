"""Shared ignore predicate for scanning, sizing and upload"""

from ..constants import IGNORE_DIRECTORIES, IGNORE_FILES

IGNORE_ALL = IGNORE_DIRECTORIES | IGNORE_FILES


def is_ignored(name: str, is_directory: bool = False) -> bool:
    """Check whether a path component must be skipped

    Directories match only the ignored-directory set. Files match the
    union of both sets, so a file named like an ignored directory
    (for example ``.env``) is skipped too.

    Args:
        name: Base name of the entry
        is_directory: Whether the entry is a directory

    Returns:
        True if the entry is excluded from deployment
    """
    if is_directory:
        return name in IGNORE_DIRECTORIES
    return name in IGNORE_ALL
