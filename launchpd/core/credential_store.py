"""Local identity: saved credentials and the anonymous client token"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import aiofiles

from ..constants import CLIENT_TOKEN_FILE, CLIENT_TOKEN_PATTERN, CREDENTIALS_FILE
from ..models.project import Credentials
from ..utils.id_utils import generate_client_token

logger = logging.getLogger(__name__)


class CredentialStore:
    """Reads and writes the per-user credentials and client token files"""

    def __init__(self, config_dir: Path):
        self.config_dir = Path(config_dir)
        self.credentials_path = self.config_dir / CREDENTIALS_FILE
        self.client_token_path = self.config_dir / CLIENT_TOKEN_FILE

    async def get_credentials(self) -> Optional[Credentials]:
        """Load saved credentials

        Returns:
            Credentials, or None when absent or unreadable
        """
        if not self.credentials_path.exists():
            return None

        try:
            async with aiofiles.open(self.credentials_path, 'r', encoding='utf-8') as f:
                data = json.loads(await f.read())
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable credentials file: {e}")
            return None

        if not isinstance(data, dict) or not data.get("apiKey"):
            return None
        return Credentials.from_dict(data)

    async def save_credentials(self, credentials: Credentials) -> None:
        """Persist credentials, readable only by the current user"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.credentials_path, 'w', encoding='utf-8') as f:
            await f.write(json.dumps(credentials.to_dict(), indent=2))
        try:
            os.chmod(self.credentials_path, 0o600)
        except OSError as e:
            logger.debug(f"Could not restrict credentials file permissions: {e}")

    async def clear_credentials(self) -> bool:
        """Remove saved credentials

        Returns:
            True if a credentials file was removed
        """
        if not self.credentials_path.exists():
            return False
        self.credentials_path.unlink()
        return True

    async def is_logged_in(self) -> bool:
        return await self.get_credentials() is not None

    async def get_client_token(self) -> str:
        """Return the persisted anonymous token, creating it on first use

        An existing token is returned as stored, even if malformed; callers
        validate it before sending.
        """
        if self.client_token_path.exists():
            async with aiofiles.open(self.client_token_path, 'r', encoding='utf-8') as f:
                token = (await f.read()).strip()
            if token:
                return token

        token = generate_client_token()
        self.config_dir.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.client_token_path, 'w', encoding='utf-8') as f:
            await f.write(token)
        logger.debug("Created new anonymous client token")
        return token


def is_valid_client_token(token: Optional[str]) -> bool:
    """Check the ``cli_`` + 32 hex format"""
    return bool(token) and bool(CLIENT_TOKEN_PATTERN.match(token))
