"""Version listing and rollback over an ordered chain of providers"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..api.exceptions import (
    APIError,
    NetworkError,
    RollbackError,
    VersionNotFoundError,
)
from ..models.deployment import DeploymentVersion, VersionListing
from ..models.result import RollbackResult

logger = logging.getLogger(__name__)


class VersionProvider(ABC):
    """One source of version information

    Each method returns None when the source has nothing to offer, which
    moves the lookup on to the next provider.
    """

    name = "provider"

    @abstractmethod
    async def list_versions(self, subdomain: str) -> Optional[VersionListing]:
        pass

    @abstractmethod
    async def next_version(self, subdomain: str) -> Optional[int]:
        pass

    @abstractmethod
    async def set_active(self, subdomain: str, version: int) -> bool:
        pass


class ApiVersionProvider(VersionProvider):
    """Authenticated API"""

    name = "api"

    def __init__(self, api_client):
        self.api = api_client

    async def list_versions(self, subdomain: str) -> Optional[VersionListing]:
        try:
            result = await self.api.get_versions(subdomain)
        except NetworkError as e:
            logger.debug(f"Versions API unreachable: {e}")
            return None
        except APIError as e:
            if e.status_code != 404:
                raise
            return None

        entries = result.get("versions")
        if not entries:
            return None
        return VersionListing(
            subdomain=subdomain,
            versions=[DeploymentVersion.from_dict(v) for v in entries],
            active_version=result.get("activeVersion"),
            source=self.name,
        )

    async def next_version(self, subdomain: str) -> Optional[int]:
        try:
            return await self.api.get_next_version(subdomain)
        except (NetworkError, APIError) as e:
            logger.debug(f"Next version from API failed: {e}")
            return None

    async def set_active(self, subdomain: str, version: int) -> bool:
        try:
            result = await self.api.rollback_version(subdomain, version)
        except NetworkError as e:
            logger.debug(f"Rollback API unreachable: {e}")
            return False
        return bool(result) and result.get("success", True) is not False


class LegacyMetadataProvider(VersionProvider):
    """Unsigned metadata endpoints"""

    name = "metadata"

    def __init__(self, metadata_client):
        self.metadata = metadata_client

    async def list_versions(self, subdomain: str) -> Optional[VersionListing]:
        try:
            entries = await self.metadata.get_versions(subdomain)
            if not entries:
                return None
            active = await self.metadata.get_active_version(subdomain)
        except APIError as e:
            logger.debug(f"Metadata versions failed: {e}")
            return None
        return VersionListing(
            subdomain=subdomain,
            versions=[DeploymentVersion.from_dict(v) for v in entries],
            active_version=active,
            source=self.name,
        )

    async def next_version(self, subdomain: str) -> Optional[int]:
        try:
            return await self.metadata.get_next_version(subdomain)
        except APIError as e:
            logger.debug(f"Metadata next version failed: {e}")
            return None

    async def set_active(self, subdomain: str, version: int) -> bool:
        try:
            result = await self.metadata.set_active_version(subdomain, version)
        except APIError as e:
            logger.debug(f"Metadata set active failed: {e}")
            return False
        return bool(result) and result.get("success", True) is not False


class LocalHistoryProvider(VersionProvider):
    """Deployments recorded on this machine; read only"""

    name = "local"

    def __init__(self, history):
        self.history = history

    async def list_versions(self, subdomain: str) -> Optional[VersionListing]:
        records = await self.history.for_subdomain(subdomain)
        if not records:
            return None
        versions = [
            DeploymentVersion(
                version=d.version,
                created_at=d.timestamp,
                file_count=d.file_count,
                total_bytes=d.total_bytes,
                message=d.message,
                expires_at=d.expires_at,
            )
            for d in records
        ]
        return VersionListing(subdomain=subdomain, versions=versions, source=self.name)

    async def next_version(self, subdomain: str) -> Optional[int]:
        return await self.history.next_version(subdomain)

    async def set_active(self, subdomain: str, version: int) -> bool:
        return False


class VersionService:
    """Lists versions and moves the active pointer"""

    def __init__(self, providers: List[VersionProvider], reporter=None):
        self.providers = list(providers)
        self.reporter = reporter

    def _warn(self, message: str) -> None:
        if self.reporter:
            self.reporter.warning(message)
        else:
            logger.warning(message)

    async def list_versions(self, subdomain: str) -> VersionListing:
        """
        First non-empty listing across providers

        Raises:
            VersionNotFoundError: No provider knows the subdomain
        """
        for provider in self.providers:
            listing = await provider.list_versions(subdomain)
            if listing and listing.versions:
                logger.debug(f"Versions for {subdomain} from {provider.name}")
                return listing
        raise VersionNotFoundError(subdomain)

    async def next_version(self, subdomain: str) -> int:
        """Next version number; 1 when no provider has an answer"""
        for provider in self.providers:
            version = await provider.next_version(subdomain)
            if version is not None:
                logger.debug(f"Next version for {subdomain} from {provider.name}: {version}")
                return version
        return 1

    @staticmethod
    def select_target(listing: VersionListing, target: Optional[int] = None) -> int:
        """
        Pick the rollback target

        Args:
            listing: Fetched versions
            target: Explicit version, or None for the one before the active

        Returns:
            Target version number

        Raises:
            RollbackError: Target missing, or nothing older to roll back to
        """
        numbers = listing.version_numbers
        if target is not None:
            if target not in numbers:
                raise RollbackError(f"Version {target} does not exist.", numbers)
            return target

        if len(numbers) < 2:
            raise RollbackError("Only one version exists. Nothing to rollback to.", numbers)

        active = listing.active_version
        older = [n for n in numbers if active is None or n < active]
        if not older:
            raise RollbackError("Already at the oldest version. Cannot rollback further.", numbers)
        return older[0]

    async def rollback(self, subdomain: str, target: Optional[int] = None) -> RollbackResult:
        """
        Make ``target`` (or the previous version) the active version

        Rolling back to the already active version is a no-op.

        Returns:
            RollbackResult
        """
        listing = await self.list_versions(subdomain)
        to_version = self.select_target(listing, target)
        active = listing.active_version

        if to_version == active:
            return RollbackResult(subdomain, active, to_version, changed=False,
                                  source=listing.source,
                                  warnings=[f"Version {to_version} is already active."])

        result = RollbackResult(subdomain, active, to_version, source=listing.source)
        names = [p.name for p in self.providers]
        start = names.index(listing.source) if listing.source in names else 0

        for provider in self.providers[start:]:
            if await provider.set_active(subdomain, to_version):
                result.source = provider.name
                return result
            if provider.name == "api":
                message = "API unavailable, falling back to local rollback"
            else:
                message = f"Could not set active version via {provider.name}"
            result.warnings.append(message)
            self._warn(message)

        raise RollbackError(f"Could not switch {subdomain} to v{to_version}", listing.version_numbers)
