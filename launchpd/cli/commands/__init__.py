# launchpd/cli/commands/__init__.py
"""CLI commands"""

from . import auth
from . import deploy
from . import init
from . import listing
from . import rollback
from . import status
from . import versions

__all__ = [
    "auth",
    "deploy",
    "init",
    "listing",
    "rollback",
    "status",
    "versions",
]
