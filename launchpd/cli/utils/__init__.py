"""CLI utility functions"""

from .progress import RichStatusReporter
from .interactive import RichPrompter, choose_login_method

__all__ = [
    # Progress utilities
    'RichStatusReporter',

    # Interactive utilities
    'RichPrompter',
    'choose_login_method',
]
