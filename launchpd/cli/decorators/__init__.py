# launchpd/cli/decorators/__init__.py
"""CLI decorators"""

from .errors import handle_errors

__all__ = [
    'handle_errors',
]
