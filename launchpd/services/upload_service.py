"""Upload engine: per-file transfer followed by a single finalize call"""

import logging
from pathlib import Path
from typing import Callable, Optional

import aiofiles

from ..models.result import UploadResult
from ..utils.file_utils import get_mime_type, iter_deployable_files, to_posix_relative

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class UploadService:
    """Streams a folder to the API one file at a time"""

    def __init__(self, api_client):
        self.api = api_client

    async def upload_folder(self, path: Path, subdomain: str, version: int,
                            on_progress: Optional[ProgressCallback] = None) -> UploadResult:
        """
        Upload every deployable file under ``path``

        Files are read whole and sent sequentially in walk order. The
        version is not visible until :meth:`finalize_upload` succeeds.

        Args:
            path: Folder to upload
            subdomain: Target subdomain
            version: Version number being created
            on_progress: Called as (uploaded, total, relative_path) after each file

        Returns:
            UploadResult with file count and bytes sent
        """
        root = Path(path)
        files = list(iter_deployable_files(root))
        total = len(files)
        result = UploadResult()

        for file_path in files:
            relative = to_posix_relative(file_path, root)
            async with aiofiles.open(file_path, 'rb') as f:
                content = await f.read()

            await self.api.upload_file(
                content,
                subdomain,
                version,
                relative,
                get_mime_type(file_path),
            )

            result.uploaded += 1
            result.total_bytes += len(content)
            logger.debug(f"Uploaded ({result.uploaded}/{total}): {relative}")
            if on_progress:
                on_progress(result.uploaded, total, relative)

        return result

    async def finalize_upload(self, subdomain: str, version: int, file_count: int,
                              total_bytes: int, folder_name: str,
                              expires_at: Optional[str] = None,
                              message: Optional[str] = None):
        """Commit the version; it becomes listed and active"""
        return await self.api.complete_upload(
            subdomain=subdomain,
            version=version,
            file_count=file_count,
            total_bytes=total_bytes,
            folder_name=folder_name,
            expires_at=expires_at,
            message=message,
        )
