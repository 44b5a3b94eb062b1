"""Pre-deploy quota gate"""

import logging
from typing import List, Optional

from ..api.exceptions import LaunchpdError
from ..constants import MSG_QUOTA_UNVERIFIED, QUOTA_WARNING_RATIO
from ..models.quota import QuotaCheckResult, QuotaSnapshot
from ..utils.format_utils import format_size
from .credential_store import is_valid_client_token

logger = logging.getLogger(__name__)


class QuotaGate:
    """Asks the service whether a deployment of a given size may proceed

    The gate fails open: when quota cannot be fetched the deployment is
    allowed with a warning and the server stays the final authority.
    Ownership lookups fail closed, so an unknown site counts as new.
    """

    def __init__(self, api_client, credential_store):
        self.api = api_client
        self.credentials = credential_store

    async def fetch_quota(self, is_update: bool = False) -> Optional[QuotaSnapshot]:
        """Fetch a quota snapshot for the current identity

        Returns:
            Snapshot, or None when the service could not provide one
        """
        creds = await self.credentials.get_credentials()
        try:
            if creds:
                data = await self.api.get_quota(is_update=is_update)
            else:
                token = await self.credentials.get_client_token()
                if not is_valid_client_token(token):
                    logger.debug("Stored client token is malformed; not sending it")
                    return None
                data = await self.api.get_anonymous_quota(token)
            return QuotaSnapshot.from_dict(data)
        except (LaunchpdError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.debug(f"Quota unavailable: {e}")
            return None

    async def user_owns_site(self, subdomain: str) -> bool:
        """Whether the logged-in user owns ``subdomain``; False on any failure"""
        if not await self.credentials.is_logged_in():
            return False
        try:
            owned = await self.api.list_subdomains()
        except LaunchpdError as e:
            logger.debug(f"Ownership check failed: {e}")
            return False
        return subdomain in owned

    async def check_quota(self, subdomain: Optional[str], estimated_bytes: int = 0,
                          is_update: bool = False) -> QuotaCheckResult:
        """
        Decide whether a deployment may proceed

        Args:
            subdomain: Target subdomain, None for a brand new site
            estimated_bytes: Local size estimate of the upload
            is_update: Caller already knows the site exists and is owned

        Returns:
            QuotaCheckResult
        """
        quota = await self.fetch_quota(is_update=is_update)
        if quota is None:
            return QuotaCheckResult(
                allowed=True,
                is_new_site=True,
                quota=None,
                warnings=[MSG_QUOTA_UNVERIFIED],
            )

        if is_update:
            is_new_site = False
        elif subdomain:
            is_new_site = not await self.user_owns_site(subdomain)
        else:
            is_new_site = True

        warnings: List[str] = list(quota.warnings)

        if quota.blocked:
            return QuotaCheckResult(
                allowed=False,
                is_new_site=is_new_site,
                quota=quota,
                warnings=[],
                reason=quota.upgrade_message or "Deployment blocked by quota policy",
            )

        limits = quota.limits
        if is_new_site and not quota.can_create_new_site:
            return QuotaCheckResult(
                allowed=False,
                is_new_site=is_new_site,
                quota=quota,
                warnings=warnings,
                reason=f"Site limit reached ({limits.max_sites} sites)",
            )

        storage_after = quota.usage.storage_used + estimated_bytes
        if limits.max_storage_bytes:
            if storage_after > limits.max_storage_bytes:
                over_by = storage_after - limits.max_storage_bytes
                return QuotaCheckResult(
                    allowed=False,
                    is_new_site=is_new_site,
                    quota=quota,
                    warnings=warnings,
                    reason=(
                        f"Storage limit exceeded by {format_size(over_by)} "
                        f"({format_size(quota.usage.storage_used)} used of "
                        f"{format_size(limits.max_storage_bytes)})"
                    ),
                )

            ratio = storage_after / limits.max_storage_bytes
            if ratio > QUOTA_WARNING_RATIO:
                warnings.append(
                    f"Storage {round(ratio * 100)}% used "
                    f"({format_size(storage_after)} / {format_size(limits.max_storage_bytes)})"
                )

        if is_new_site and limits.max_sites:
            sites_after = quota.usage.site_count + 1
            if sites_after / limits.max_sites > QUOTA_WARNING_RATIO:
                warnings.append(
                    f"{max(limits.max_sites - sites_after, 0)} site(s) remaining after this deploy"
                )

        return QuotaCheckResult(
            allowed=True,
            is_new_site=is_new_site,
            quota=quota,
            warnings=warnings,
        )
