"""Human readable formatting helpers"""


def format_size(size: float) -> str:
    """
    Format a byte count in human-readable format

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    if size < 1024:
        return f"{int(size)} B"
    for unit in ['KB', 'MB', 'GB']:
        size /= 1024.0
        if size < 1024.0:
            return f"{size:.2f} {unit}"
    return f"{size / 1024.0:.2f} TB"


def progress_bar(used: float, limit: float, width: int = 20) -> str:
    """
    Text bar such as ``[████░░░░] 40%``

    Args:
        used: Amount consumed
        limit: Maximum amount
        width: Bar width in characters

    Returns:
        Bar string with percentage
    """
    ratio = min(used / limit, 1.0) if limit else 0.0
    filled = round(ratio * width)
    return f"[{'█' * filled}{'░' * (width - filled)}] {round(ratio * 100)}%"
