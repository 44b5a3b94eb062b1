"""Append-only local deployment history"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import aiofiles

from ..constants import DEPLOYMENTS_FILE, DEPLOYMENTS_FILE_VERSION
from ..models.deployment import Deployment

logger = logging.getLogger(__name__)


class LocalHistory:
    """Deployments recorded on this machine, used as an offline fallback"""

    def __init__(self, config_dir: Path):
        self.path = Path(config_dir) / DEPLOYMENTS_FILE

    async def load(self) -> List[Deployment]:
        if not self.path.exists():
            return []
        try:
            async with aiofiles.open(self.path, 'r', encoding='utf-8') as f:
                data = json.loads(await f.read())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable deployment history: {e}")
            return []

        records = data.get("deployments", []) if isinstance(data, dict) else []
        deployments = []
        for record in records:
            try:
                deployments.append(Deployment.from_dict(record))
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Skipping malformed history record: {record!r}")
        return deployments

    async def append(self, deployment: Deployment) -> None:
        deployments = await self.load()
        deployments.append(deployment)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "version": DEPLOYMENTS_FILE_VERSION,
            "deployments": [d.to_dict() for d in deployments],
        }
        async with aiofiles.open(self.path, 'w', encoding='utf-8') as f:
            await f.write(json.dumps(payload, indent=2))

    async def for_subdomain(self, subdomain: str) -> List[Deployment]:
        return [d for d in await self.load() if d.subdomain == subdomain]

    async def next_version(self, subdomain: str) -> Optional[int]:
        """Next version from local records, or None with no records"""
        versions = [d.version for d in await self.for_subdomain(subdomain)]
        if not versions:
            return None
        return max(versions) + 1
