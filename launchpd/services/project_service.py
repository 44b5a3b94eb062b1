"""Project operations: link a folder, show its status, list deployments"""

import logging
from pathlib import Path
from typing import Optional

from ..api.exceptions import (
    APIError,
    InvalidProjectError,
    InvalidSubdomainError,
    LaunchpdError,
    LoginRequiredError,
    SubdomainTakenError,
    UserCancelledError,
)
from ..constants import PROJECT_LINK_FILE, PROMPT_RELINK
from ..core.reporter import AutoConfirmPrompter, LoggingReporter
from ..core.validation_engine import ValidationEngine
from ..models.deployment import Deployment, DeploymentVersion, VersionListing
from ..models.result import DeploymentList, InitResult, ProjectStatus

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for the project link and deployment overviews"""

    def __init__(self, settings, api_client, credential_store, link_store, history,
                 reporter=None, prompter=None, validator: Optional[ValidationEngine] = None):
        self.settings = settings
        self.api = api_client
        self.credentials = credential_store
        self.links = link_store
        self.history = history
        self.reporter = reporter or LoggingReporter()
        self.prompter = prompter or AutoConfirmPrompter()
        self.validator = validator or ValidationEngine()

    async def init(self, folder: Path, name: Optional[str] = None) -> InitResult:
        """
        Link ``folder`` (or the project it belongs to) to a subdomain

        Args:
            folder: Directory to link
            name: Subdomain; asked for interactively when omitted

        Returns:
            InitResult

        Raises:
            UserCancelledError: Re-linking was declined
            LoginRequiredError: No stored login
            InvalidSubdomainError: Name is not a valid DNS label
            SubdomainTakenError: Name belongs to somebody else
        """
        folder = Path(folder).resolve()
        project_root = self.links.find_project_root(folder)
        current = await self.links.read_link(project_root) if project_root else None

        if not await self.credentials.is_logged_in():
            raise LoginRequiredError("You must be logged in to initialize a project.")

        subdomain = (name or "").strip().lower()
        if not subdomain:
            self.reporter.info("Linking this directory to a LaunchPd subdomain...")
            subdomain = self.prompter.ask("Enter subdomain name (e.g. my-awesome-site)").strip().lower()

        if not subdomain or not self.validator.validate_subdomain(subdomain).is_valid:
            raise InvalidSubdomainError(subdomain)

        if current:
            if current.subdomain == subdomain:
                self.reporter.info(f"This project is already linked to {subdomain}")
                return InitResult(subdomain=subdomain, project_root=project_root, owned=True)
            self.reporter.warning(
                f"This directory is already part of a LaunchPd project linked to: {current.subdomain}"
            )
            question = PROMPT_RELINK.format(subdomain=current.subdomain, new_subdomain=subdomain)
            if not self.prompter.confirm(question, default=False):
                raise UserCancelledError()

        self.reporter.start(f'Checking if "{subdomain}" is available...')
        available = await self.api.check_subdomain_available(subdomain)
        owned = False
        if not available:
            owned = subdomain in await self.api.list_subdomains()
            if not owned:
                self.reporter.fail(f'Subdomain "{subdomain}" is already taken.')
                raise SubdomainTakenError(subdomain)
            self.reporter.succeed(f'Subdomain "{subdomain}" is already yours.')
        else:
            self.reporter.succeed(f'Subdomain "{subdomain}" is available!')

        if not owned:
            result = await self.api.reserve_subdomain(subdomain)
            if result.get("success") is False:
                raise APIError(result.get("error") or result.get("message")
                               or f"Could not reserve {subdomain}", 0, result)

        root = project_root or folder
        await self.links.write_link(root, subdomain)
        return InitResult(subdomain=subdomain, project_root=root,
                          relinked=current is not None, owned=owned)

    async def status(self, folder: Path) -> Optional[ProjectStatus]:
        """
        Linked subdomain of the enclosing project and its active version

        A failed lookup is reported on the result rather than raised.

        Returns:
            ProjectStatus, or None when ``folder`` is not in a project

        Raises:
            InvalidProjectError: The link file is unreadable
        """
        project_root = self.links.find_project_root(Path(folder).resolve())
        if project_root is None:
            return None

        link = await self.links.read_link(project_root)
        if link is None:
            raise InvalidProjectError(str(project_root / PROJECT_LINK_FILE))

        status = ProjectStatus(
            project_root=project_root,
            subdomain=link.subdomain,
            url=self.settings.site_url(link.subdomain),
        )

        try:
            data = await self.api.get_deployment(link.subdomain)
        except LaunchpdError as e:
            logger.debug(f"Deployment lookup failed: {e}")
            status.error = e.message
            return status

        entries = data.get("versions") or []
        if entries:
            listing = VersionListing(
                subdomain=link.subdomain,
                versions=[DeploymentVersion.from_dict(v) for v in entries],
                active_version=data.get("activeVersion"),
                source="api",
            )
            status.active = next((v for v in listing.versions if v.is_active), listing.versions[0])
        return status

    async def list_deployments(self, local_only: bool = False) -> DeploymentList:
        """
        Deployments from the service, or from local history when offline

        Args:
            local_only: Skip the service and read local history

        Returns:
            DeploymentList, newest first
        """
        if not local_only:
            try:
                data = await self.api.list_deployments()
            except LaunchpdError as e:
                logger.debug(f"Listing deployments from API failed: {e}")
                data = {}
            entries = data.get("deployments") or []
            if entries:
                return DeploymentList(
                    deployments=[Deployment.from_dict(d) for d in entries],
                    source="api",
                )

        records = await self.history.load()
        return DeploymentList(deployments=list(reversed(records)), source="local")
