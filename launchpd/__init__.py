"""LaunchPd CLI - deploy static sites from the command line.

Validates that a folder holds only static assets, checks quota, uploads
the files and records a versioned deployment that can be listed and
rolled back.
"""

from .__version__ import __version__

# Settings
from .config import Settings

# API client
from .api.client import ApiClient

# Services
from .services import (
    AuthService,
    DeployOptions,
    DeployService,
    ProjectService,
    UploadService,
    VersionService,
)

# Data models
from .models import (
    Deployment,
    DeploymentVersion,
    VersionListing,
    DeployResult,
    RollbackResult,
    QuotaSnapshot,
)

# Exceptions
from .api.exceptions import (
    LaunchpdError,
    APIError,
    NetworkError,
    AuthError,
    DeployError,
    ValidationError,
    ConfigError,
    VersionNotFoundError,
    RollbackError,
)

__all__ = [
    # Version information
    "__version__",

    # Settings and client
    "Settings",
    "ApiClient",

    # Services
    "AuthService",
    "DeployOptions",
    "DeployService",
    "ProjectService",
    "UploadService",
    "VersionService",

    # Data models
    "Deployment",
    "DeploymentVersion",
    "VersionListing",
    "DeployResult",
    "RollbackResult",
    "QuotaSnapshot",

    # Exceptions
    "LaunchpdError",
    "APIError",
    "NetworkError",
    "AuthError",
    "DeployError",
    "ValidationError",
    "ConfigError",
    "VersionNotFoundError",
    "RollbackError",
]
