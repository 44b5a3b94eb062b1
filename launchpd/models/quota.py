"""Quota data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

_MB = 1024 * 1024


@dataclass
class QuotaUsage:
    """Current consumption reported by the service"""
    site_count: int = 0
    storage_used: int = 0
    storage_used_mb: float = 0.0
    sites_remaining: Optional[int] = None
    storage_remaining_mb: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuotaUsage':
        data = data or {}
        return cls(
            site_count=int(data.get("siteCount") or 0),
            storage_used=int(data.get("storageUsed") or 0),
            storage_used_mb=float(data.get("storageUsedMB") or 0),
            sites_remaining=data.get("sitesRemaining"),
            storage_remaining_mb=data.get("storageRemainingMB"),
        )


@dataclass
class QuotaLimits:
    """Tier limits reported by the service"""
    max_sites: int = 0
    max_storage_bytes: int = 0
    max_versions_per_site: Optional[int] = None
    retention_days: Optional[int] = None

    @property
    def max_storage_mb(self) -> float:
        return self.max_storage_bytes / _MB

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuotaLimits':
        data = data or {}
        max_bytes = data.get("maxStorageBytes")
        if max_bytes is None and data.get("maxStorageMB") is not None:
            max_bytes = float(data["maxStorageMB"]) * _MB
        return cls(
            max_sites=int(data.get("maxSites") or 0),
            max_storage_bytes=int(max_bytes or 0),
            max_versions_per_site=data.get("maxVersionsPerSite"),
            retention_days=data.get("retentionDays"),
        )


@dataclass
class QuotaSnapshot:
    """One quota response; never cached"""
    usage: QuotaUsage = field(default_factory=QuotaUsage)
    limits: QuotaLimits = field(default_factory=QuotaLimits)
    can_deploy: bool = True
    can_create_new_site: bool = True
    blocked: bool = False
    upgrade_message: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    tier: Optional[str] = None
    authenticated: bool = False
    user: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuotaSnapshot':
        """Create from the quota endpoint response"""
        can_create = data.get("canCreateNewSite")
        can_deploy = data.get("canDeploy")
        return cls(
            usage=QuotaUsage.from_dict(data.get("usage")),
            limits=QuotaLimits.from_dict(data.get("limits")),
            can_deploy=True if can_deploy is None else bool(can_deploy),
            can_create_new_site=True if can_create is None else bool(can_create),
            blocked=bool(data.get("blocked", False)),
            upgrade_message=data.get("upgradeMessage"),
            warnings=list(data.get("warnings") or []),
            tier=data.get("tier"),
            authenticated=bool(data.get("authenticated", False)),
            user=dict(data.get("user") or {}),
            raw=dict(data),
        )


@dataclass
class QuotaCheckResult:
    """Outcome of the pre-deploy quota gate"""
    allowed: bool
    is_new_site: bool
    quota: Optional[QuotaSnapshot] = None
    warnings: List[str] = field(default_factory=list)
    reason: Optional[str] = None
