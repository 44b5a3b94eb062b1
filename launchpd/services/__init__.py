"""Business logic services for launchpd"""

from .upload_service import UploadService
from .version_service import (
    VersionService,
    VersionProvider,
    ApiVersionProvider,
    LegacyMetadataProvider,
    LocalHistoryProvider,
)
from .deploy_service import DeployService, DeployOptions
from .auth_service import AuthService
from .project_service import ProjectService

__all__ = [
    "UploadService",
    "VersionService",
    "VersionProvider",
    "ApiVersionProvider",
    "LegacyMetadataProvider",
    "LocalHistoryProvider",
    "DeployService",
    "DeployOptions",
    "AuthService",
    "ProjectService",
]
