"""Legacy metadata client

Unsigned requests that carry only the environment or public key. Used
as a fallback source of version information when the authenticated
API path yields nothing. Network failures return ``None`` so callers
can move on to the next source.
"""

import logging
from typing import Any, Dict, List, Optional

from .client import ApiClient
from .exceptions import NetworkError, NotAvailableError

logger = logging.getLogger(__name__)


class LegacyMetadataClient:
    """Version metadata lookups without stored credentials"""

    def __init__(self, settings, transport=None):
        self._client = ApiClient(settings, transport=transport, use_credentials=False)

    async def _request(self, endpoint: str, **kwargs) -> Optional[Dict[str, Any]]:
        try:
            return await self._client.request(endpoint, **kwargs)
        except NetworkError as e:
            logger.debug(f"Metadata request {endpoint} unavailable: {e}")
            return None

    async def get_versions(self, subdomain: str) -> List[Dict[str, Any]]:
        result = await self._request(f"/api/versions/{subdomain}")
        return list((result or {}).get("versions") or [])

    async def get_active_version(self, subdomain: str) -> int:
        result = await self._request(f"/api/versions/{subdomain}")
        return int((result or {}).get("activeVersion") or 1)

    async def get_next_version(self, subdomain: str) -> Optional[int]:
        """Next version number, or None when the service is unreachable"""
        result = await self._request(f"/api/versions/{subdomain}")
        if result is None:
            return None
        versions = result.get("versions") or []
        if not versions:
            return 1
        return max(int(v["version"]) for v in versions) + 1

    async def set_active_version(self, subdomain: str, version: int) -> Optional[Dict[str, Any]]:
        return await self._request(f"/api/versions/{subdomain}/rollback",
                                   method="PUT", json_body={"version": version})

    async def list_deployments(self) -> List[Dict[str, Any]]:
        result = await self._request("/api/deployments")
        return list((result or {}).get("deployments") or [])

    async def delete_subdomain(self, subdomain: str) -> None:
        raise NotAvailableError("Subdomain deletion is not available in the CLI. Contact support.")

    async def remove_deployment_records(self, subdomain: str) -> None:
        raise NotAvailableError(
            "Deployment record removal is not available in the CLI. Contact support."
        )
