"""Deployment and version data models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string"""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Deployment:
    """One successful upload of a folder to a subdomain"""

    subdomain: str
    version: int
    folder_name: str
    file_count: int
    total_bytes: int
    message: str = ""
    timestamp: str = field(default_factory=utc_now_iso)
    expires_at: Optional[str] = None
    is_active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the local history record format"""
        return {
            "subdomain": self.subdomain,
            "folderName": self.folder_name,
            "fileCount": self.file_count,
            "totalBytes": self.total_bytes,
            "version": self.version,
            "timestamp": self.timestamp,
            "expiresAt": self.expires_at,
            "message": self.message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Deployment':
        """Create from a local record or an API deployment entry"""
        is_active = bool(data.get("isActive", False))
        if "active_version" in data:
            is_active = data["active_version"] == data.get("version")

        return cls(
            subdomain=data["subdomain"],
            version=int(data.get("version") or 1),
            folder_name=data.get("folderName") or data.get("folder_name") or "",
            file_count=int(data.get("fileCount") or data.get("file_count") or 0),
            total_bytes=int(data.get("totalBytes") or data.get("total_bytes") or 0),
            message=data.get("message") or "",
            timestamp=data.get("timestamp") or data.get("created_at") or "",
            expires_at=data.get("expiresAt") or data.get("expires_at"),
            is_active=is_active,
        )


@dataclass
class DeploymentVersion:
    """A single version in a subdomain's history"""

    version: int
    created_at: str = ""
    file_count: int = 0
    total_bytes: int = 0
    message: str = ""
    expires_at: Optional[str] = None
    is_active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "createdAt": self.created_at,
            "fileCount": self.file_count,
            "totalBytes": self.total_bytes,
            "message": self.message,
            "expiresAt": self.expires_at,
            "isActive": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeploymentVersion':
        return cls(
            version=int(data["version"]),
            created_at=data.get("created_at") or data.get("timestamp") or "",
            file_count=int(data.get("file_count") or data.get("fileCount") or 0),
            total_bytes=int(data.get("total_bytes") or data.get("totalBytes") or 0),
            message=data.get("message") or "",
            expires_at=data.get("expires_at") or data.get("expiresAt"),
        )


@dataclass
class VersionListing:
    """Versions of one subdomain, newest first, with the active one flagged"""

    subdomain: str
    versions: List[DeploymentVersion] = field(default_factory=list)
    active_version: Optional[int] = None
    source: str = ""

    def __post_init__(self):
        self.versions.sort(key=lambda v: v.version, reverse=True)
        if self.active_version is None and self.versions:
            self.active_version = self.versions[0].version
        for entry in self.versions:
            entry.is_active = entry.version == self.active_version

    @property
    def version_numbers(self) -> List[int]:
        """Version numbers, newest first"""
        return [v.version for v in self.versions]

    def has_version(self, version: int) -> bool:
        return version in self.version_numbers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subdomain": self.subdomain,
            "activeVersion": self.active_version,
            "source": self.source,
            "versions": [v.to_dict() for v in self.versions],
        }
