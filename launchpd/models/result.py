"""Operation result models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .deployment import Deployment, DeploymentVersion
from .quota import QuotaCheckResult


@dataclass
class UploadResult:
    """Upload engine outcome"""
    uploaded: int = 0
    total_bytes: int = 0


@dataclass
class DeployResult:
    """Deploy pipeline outcome"""
    subdomain: str
    version: int
    url: str
    file_count: int = 0
    total_bytes: int = 0
    folder_name: str = ""
    message: str = ""
    expires_at: Optional[str] = None
    authenticated: bool = False
    is_new_site: bool = True
    quota: Optional[QuotaCheckResult] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subdomain": self.subdomain,
            "version": self.version,
            "url": self.url,
            "fileCount": self.file_count,
            "totalBytes": self.total_bytes,
            "folderName": self.folder_name,
            "message": self.message,
            "expiresAt": self.expires_at,
        }


@dataclass
class RollbackResult:
    """Rollback outcome; ``changed`` is False for a no-op"""
    subdomain: str
    from_version: Optional[int]
    to_version: int
    changed: bool = True
    source: str = ""
    warnings: List[str] = field(default_factory=list)


@dataclass
class InitResult:
    """Outcome of linking a folder to a subdomain"""
    subdomain: str
    project_root: Path
    relinked: bool = False
    owned: bool = False


@dataclass
class ProjectStatus:
    """Linked subdomain of a project and its active deployment, if known"""
    project_root: Path
    subdomain: str
    url: str
    active: Optional[DeploymentVersion] = None
    error: Optional[str] = None


@dataclass
class DeploymentList:
    """Deployments for display, newest first"""
    deployments: List[Deployment] = field(default_factory=list)
    source: str = "local"

    @property
    def synced(self) -> bool:
        return self.source == "api"

    def to_list(self) -> List[Dict[str, Any]]:
        items = []
        for d in self.deployments:
            item = d.to_dict()
            item["isActive"] = d.is_active
            items.append(item)
        return items
