"""Project link marker file with upward directory search"""

import json
import logging
from pathlib import Path
from typing import Optional

import aiofiles

from ..constants import PROJECT_LINK_FILE
from ..models.deployment import utc_now_iso
from ..models.project import ProjectLink

logger = logging.getLogger(__name__)


class ProjectLinkStore:
    """Reads and writes ``.launchpd.json`` project markers"""

    def find_project_root(self, start: Path) -> Optional[Path]:
        """Walk up from ``start`` to the nearest directory holding a marker

        Args:
            start: Directory to start from

        Returns:
            Directory containing the marker, or None at the filesystem root
        """
        current = Path(start).resolve()
        while True:
            if (current / PROJECT_LINK_FILE).is_file():
                return current
            parent = current.parent
            if parent == current:
                return None
            current = parent

    async def get_link(self, start: Path) -> Optional[ProjectLink]:
        """Nearest project link at or above ``start``"""
        root = self.find_project_root(start)
        if root is None:
            return None
        return await self.read_link(root)

    async def read_link(self, root: Path) -> Optional[ProjectLink]:
        """Read the marker in exactly ``root``"""
        path = Path(root) / PROJECT_LINK_FILE
        if not path.is_file():
            return None
        try:
            async with aiofiles.open(path, 'r', encoding='utf-8') as f:
                data = json.loads(await f.read())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable project link {path}: {e}")
            return None
        if not isinstance(data, dict) or not data.get("subdomain"):
            return None
        return ProjectLink.from_dict(data)

    async def write_link(self, root: Path, subdomain: str) -> ProjectLink:
        """Create the marker in ``root``, keeping ``createdAt`` if it exists"""
        existing = await self.read_link(root)
        if existing:
            link = ProjectLink(subdomain=subdomain, created_at=existing.created_at,
                               updated_at=utc_now_iso())
        else:
            link = ProjectLink(subdomain=subdomain)

        path = Path(root) / PROJECT_LINK_FILE
        async with aiofiles.open(path, 'w', encoding='utf-8') as f:
            await f.write(json.dumps(link.to_dict(), indent=2))
        logger.debug(f"Wrote project link {path} -> {subdomain}")
        return link

    async def update_link(self, start: Path, subdomain: str) -> Optional[ProjectLink]:
        """Point the nearest existing marker at a new subdomain"""
        root = self.find_project_root(start)
        if root is None:
            return None
        return await self.write_link(root, subdomain)
