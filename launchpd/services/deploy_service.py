"""Deploy service: the end-to-end deployment pipeline"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..api.exceptions import (
    DeployError,
    EmptyFolderError,
    ErrorKind,
    FolderNotFoundError,
    LaunchpdError,
    MissingMessageError,
    QuotaExceededError,
    StaticContentError,
    UploadError,
)
from ..constants import MAX_LISTED_VIOLATIONS, MSG_LOGIN_REQUIRED
from ..core.reporter import LoggingReporter
from ..core.validation_engine import ValidationEngine
from ..models.deployment import Deployment
from ..models.result import DeployResult
from ..utils.expiration import calculate_expires_at
from ..utils.file_utils import calculate_directory_size, scan_directory
from ..utils.format_utils import format_size

logger = logging.getLogger(__name__)


@dataclass
class DeployOptions:
    """Parsed options of one deploy run"""
    folder: Path
    message: Optional[str] = None
    name: Optional[str] = None
    expires: Optional[str] = None
    yes: bool = False
    force: bool = False

    def __post_init__(self):
        self.folder = Path(self.folder)


def upload_error_suggestions(error: BaseException) -> List[str]:
    """Best-effort suggestions derived from an error's message text"""
    message = str(error)
    lowered = message.lower()

    if "fetch failed" in lowered or "enotfound" in lowered or "connect" in lowered:
        return [
            "Check your internet connection",
            "The API server may be temporarily unavailable",
        ]
    if "401" in message or "unauthorized" in lowered:
        return [
            MSG_LOGIN_REQUIRED,
            "Your API key may have expired",
        ]
    if "413" in message or "too large" in lowered:
        return [
            "Try deploying fewer or smaller files",
            'Check your storage quota with "launchpd quota"',
        ]
    if "429" in message or "rate limit" in lowered:
        return [
            "Wait a few minutes and try again",
            "You may be deploying too frequently",
        ]
    return [
        "Try running with --verbose for more details",
        "Check the service status page for outages",
    ]


def classify_upload_error(error: LaunchpdError, status_url: str) -> UploadError:
    """Turn a late-stage failure into a user-facing UploadError by kind"""
    kind = error.kind
    if kind == ErrorKind.MAINTENANCE:
        return UploadError("LaunchPd is under maintenance", [
            "Please try again in a few minutes",
            f"Check {status_url} for updates",
        ], cause=error)
    if kind == ErrorKind.NETWORK:
        return UploadError("Unable to connect to LaunchPd", [
            "Check your internet connection",
            "The API server may be temporarily unavailable",
            f"Check {status_url} for service status",
        ], cause=error)
    if kind == ErrorKind.AUTH:
        return UploadError("Authentication failed", [
            MSG_LOGIN_REQUIRED,
            "Your API key may have expired or been revoked",
        ], cause=error)
    if kind == ErrorKind.RATE_LIMIT:
        return UploadError(f"Upload failed: {error}", [
            "Wait a few minutes and try again",
            "You may be deploying too frequently",
        ], cause=error)
    return UploadError(f"Upload failed: {error}", upload_error_suggestions(error), cause=error)


class DeployService:
    """Service for deploying a folder as a new version of a subdomain

    Stages run strictly in order; a hard failure raises a DeployError
    subclass carrying the message and suggestions for the user.
    """

    def __init__(self, settings, history, quota_gate, resolver, uploader, versions,
                 reporter=None, validator: Optional[ValidationEngine] = None):
        self.settings = settings
        self.history = history
        self.quota_gate = quota_gate
        self.resolver = resolver
        self.uploader = uploader
        self.versions = versions
        self.reporter = reporter or LoggingReporter()
        self.validator = validator or ValidationEngine()

    async def deploy(self, options: DeployOptions) -> DeployResult:
        """
        Run the deployment pipeline

        Args:
            options: Deploy options

        Returns:
            DeployResult for the finalized version
        """
        reporter = self.reporter
        folder = options.folder.expanduser().resolve()

        # 1. Expiration
        expires_at = None
        if options.expires:
            expires_at = calculate_expires_at(options.expires)
        expires_iso = expires_at.isoformat().replace("+00:00", "Z") if expires_at else None

        # 2. Message
        if not options.message or not options.message.strip():
            raise MissingMessageError()

        # 3. Folder
        if not folder.is_dir():
            raise FolderNotFoundError(str(folder))

        # 4. Scan
        reporter.start("Scanning folder...")
        files = scan_directory(folder)
        if not files:
            reporter.fail("Folder is empty or only contains ignored files")
            raise EmptyFolderError(str(folder))
        file_count = len(files)
        reporter.succeed(f"Found {file_count} file(s) (ignored system files skipped)")

        # 5. Static content
        warnings: List[str] = []
        reporter.start("Validating files...")
        validation = self.validator.validate_static_only(folder)
        if not validation.success:
            if not options.force:
                reporter.fail("Deployment blocked: Non-static files detected")
                raise StaticContentError(validation.violations, MAX_LISTED_VIOLATIONS)
            reporter.warn("Static-only validation failed, but proceeding due to --force")
            for violation in validation.violations:
                reporter.warning(f"Non-static file: {violation}")
            warnings.append("Non-static files detected; they will be served as plain files")
        else:
            reporter.succeed("Project validated (Static files only)")

        # 6. Subdomain
        resolution = await self.resolver.resolve(folder, options.name)
        subdomain = resolution.subdomain
        originally_linked = resolution.linked_subdomain
        await self.resolver.handle_mismatch(resolution, auto_yes=options.yes)

        # 7. Availability, then offer to link
        owned = await self.resolver.check_availability(subdomain)
        await self.resolver.auto_init(resolution, folder, auto_yes=options.yes)

        # 8. Size
        reporter.start("Calculating folder size...")
        _, estimated_bytes = calculate_directory_size(folder)
        reporter.succeed(f"Size: {format_size(estimated_bytes)}")

        # 9. Quota
        is_update = owned or subdomain == originally_linked
        reporter.start("Checking quota...")
        quota = await self.quota_gate.check_quota(subdomain, estimated_bytes, is_update=is_update)
        if not quota.allowed:
            if not options.force:
                reporter.fail("Deployment blocked due to quota limits")
                raise QuotaExceededError(quota.reason or "Deployment blocked due to quota limits")
            reporter.warn("Deployment blocked due to quota limits, but proceeding due to --force")
            reporter.warning("Uploading anyway... (server might still reject if physical limit is hit)")
        else:
            reporter.succeed("Quota check passed")
        for message in quota.warnings:
            reporter.warning(message)
        warnings.extend(quota.warnings)

        try:
            # 10. Version
            reporter.start("Fetching version info...")
            version = await self.versions.next_version(subdomain)
            reporter.succeed(f"Deploying as version {version}")

            # 11. Upload
            reporter.start(f"Uploading files... 0/{file_count}")

            def on_progress(uploaded: int, total: int, name: str) -> None:
                reporter.update(f"Uploading files... {uploaded}/{total} ({name})")

            upload = await self.uploader.upload_folder(folder, subdomain, version, on_progress)
            reporter.succeed(f"Uploaded {upload.uploaded} files ({format_size(upload.total_bytes)})")

            # 12. Finalize
            reporter.start("Finalizing deployment...")
            await self.uploader.finalize_upload(
                subdomain,
                version,
                upload.uploaded,
                upload.total_bytes,
                folder.name,
                expires_iso,
                options.message,
            )
            reporter.succeed("Deployment finalized")
        except DeployError:
            raise
        except LaunchpdError as e:
            reporter.fail()
            raise classify_upload_error(e, self.settings.status_url)
        except Exception as e:
            # Unreadable files, encoding failures and anything else raised mid-upload
            reporter.fail()
            raise UploadError(f"Upload failed: {e}", upload_error_suggestions(e), cause=e)

        await self.history.append(Deployment(
            subdomain=subdomain,
            version=version,
            folder_name=folder.name,
            file_count=upload.uploaded,
            total_bytes=upload.total_bytes,
            message=options.message,
            expires_at=expires_iso,
        ))

        return DeployResult(
            subdomain=subdomain,
            version=version,
            url=self.settings.site_url(subdomain),
            file_count=upload.uploaded,
            total_bytes=upload.total_bytes,
            folder_name=folder.name,
            message=options.message,
            expires_at=expires_iso,
            authenticated=resolution.authenticated,
            is_new_site=quota.is_new_site,
            quota=quota,
            warnings=warnings,
        )
