"""Project link and account models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import DEFAULT_TIER
from .deployment import utc_now_iso


@dataclass
class ProjectLink:
    """Folder-to-subdomain binding stored in the project marker file"""

    subdomain: str
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subdomain": self.subdomain,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectLink':
        now = utc_now_iso()
        return cls(
            subdomain=data["subdomain"],
            created_at=data.get("createdAt") or now,
            updated_at=data.get("updatedAt") or now,
        )


@dataclass
class Credentials:
    """Stored login; absence means anonymous"""

    api_key: str
    api_secret: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None
    tier: str = DEFAULT_TIER
    saved_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "apiKey": self.api_key,
            "apiSecret": self.api_secret,
            "userId": self.user_id,
            "email": self.email,
            "tier": self.tier,
            "savedAt": self.saved_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Credentials':
        return cls(
            api_key=data["apiKey"],
            api_secret=data.get("apiSecret"),
            user_id=data.get("userId"),
            email=data.get("email"),
            tier=data.get("tier") or DEFAULT_TIER,
            saved_at=data.get("savedAt") or utc_now_iso(),
        )
