"""Data models for launchpd"""

from .deployment import Deployment, DeploymentVersion, VersionListing
from .project import Credentials, ProjectLink
from .quota import QuotaCheckResult, QuotaLimits, QuotaSnapshot, QuotaUsage
from .result import (
    DeployResult,
    DeploymentList,
    InitResult,
    ProjectStatus,
    RollbackResult,
    UploadResult,
)

__all__ = [
    # Deployment models
    "Deployment",
    "DeploymentVersion",
    "VersionListing",

    # Project models
    "Credentials",
    "ProjectLink",

    # Quota models
    "QuotaCheckResult",
    "QuotaLimits",
    "QuotaSnapshot",
    "QuotaUsage",

    # Result models
    "DeployResult",
    "DeploymentList",
    "InitResult",
    "ProjectStatus",
    "RollbackResult",
    "UploadResult",
]
