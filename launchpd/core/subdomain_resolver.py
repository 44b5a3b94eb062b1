"""Target subdomain resolution and availability checks"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..api.exceptions import InvalidSubdomainError, LaunchpdError, SubdomainTakenError
from ..constants import (
    MSG_AVAILABILITY_UNVERIFIED,
    PROMPT_AUTO_INIT,
    PROMPT_UPDATE_LINK,
)
from ..utils.id_utils import generate_subdomain
from .validation_engine import ValidationEngine

logger = logging.getLogger(__name__)


@dataclass
class SubdomainResolution:
    """Which subdomain a deploy targets and where it came from"""
    subdomain: str
    linked_subdomain: Optional[str] = None
    project_root: Optional[Path] = None
    explicit: bool = False
    generated: bool = False
    authenticated: bool = False


class SubdomainResolver:
    """Reconciles --name, the project link and anonymous-tier rules"""

    def __init__(self, api_client, credential_store, link_store, reporter, prompter,
                 validator: Optional[ValidationEngine] = None):
        self.api = api_client
        self.credentials = credential_store
        self.links = link_store
        self.reporter = reporter
        self.prompter = prompter
        self.validator = validator or ValidationEngine()

    async def resolve(self, folder: Path, requested_name: Optional[str] = None) -> SubdomainResolution:
        """
        Decide the target subdomain

        An explicit name is honored only for logged-in users. Otherwise the
        nearest project link is used, and failing that a name is generated.

        Args:
            folder: Folder being deployed
            requested_name: Value of --name, if any

        Returns:
            SubdomainResolution

        Raises:
            InvalidSubdomainError: The resolved name is not a valid DNS label
        """
        authenticated = await self.credentials.is_logged_in()
        project_root = self.links.find_project_root(folder)
        link = await self.links.read_link(project_root) if project_root else None
        linked = link.subdomain if link else None

        if requested_name and not authenticated:
            self.reporter.warning("Custom subdomains require registration!")
            self.reporter.info("Anonymous deployments use random subdomains.")
            self.reporter.info('Run "launchpd register" to use --name option.')

        resolution = SubdomainResolution(
            subdomain="",
            linked_subdomain=linked,
            project_root=project_root,
            authenticated=authenticated,
        )

        if requested_name and authenticated:
            resolution.subdomain = requested_name.strip().lower()
            resolution.explicit = True
        elif linked:
            resolution.subdomain = linked
            self.reporter.info(f"Using project subdomain: {linked}")
        else:
            resolution.subdomain = generate_subdomain()
            resolution.generated = True

        check = self.validator.validate_subdomain(resolution.subdomain)
        if not check.is_valid:
            raise InvalidSubdomainError(resolution.subdomain)

        logger.debug(f"Resolved subdomain {resolution.subdomain} "
                     f"(explicit={resolution.explicit}, linked={linked})")
        return resolution

    async def handle_mismatch(self, resolution: SubdomainResolution, auto_yes: bool = False) -> bool:
        """
        Offer to repoint the project link when deploying elsewhere

        Returns:
            True if the link file was updated
        """
        linked = resolution.linked_subdomain
        if not linked or resolution.subdomain == linked or resolution.project_root is None:
            return False

        self.reporter.warning(
            f"Mismatch: This project is linked to {linked} "
            f"but you are deploying to {resolution.subdomain}"
        )

        should_update = auto_yes or self.prompter.confirm(
            PROMPT_UPDATE_LINK.format(subdomain=resolution.subdomain), default=False
        )
        if not should_update:
            return False

        await self.links.write_link(resolution.project_root, resolution.subdomain)
        resolution.linked_subdomain = resolution.subdomain
        self.reporter.success(f"Project configuration updated to: {resolution.subdomain}")
        return True

    async def check_availability(self, subdomain: str) -> bool:
        """
        Make sure the subdomain is free or already ours

        A failure of the check itself only produces a warning.

        Returns:
            True if the name is owned by the current user, False otherwise

        Raises:
            SubdomainTakenError: Somebody else owns the name
        """
        self.reporter.start("Checking subdomain availability...")
        try:
            available = await self.api.check_subdomain_available(subdomain)
            owned = False
            if not available:
                owned = subdomain in await self.api.list_subdomains()
        except LaunchpdError as e:
            logger.debug(f"Availability check failed: {e}")
            self.reporter.warn(MSG_AVAILABILITY_UNVERIFIED)
            return False

        if available:
            self.reporter.succeed(f'Subdomain "{subdomain}" is available')
            return False
        if owned:
            self.reporter.succeed(f'Deploying new version to your subdomain: "{subdomain}"')
            return True

        self.reporter.fail(f'Subdomain "{subdomain}" is already taken by another user')
        raise SubdomainTakenError(subdomain)

    async def auto_init(self, resolution: SubdomainResolution, folder: Path,
                        auto_yes: bool = False) -> bool:
        """
        Offer to link the folder when a name was given and nothing is linked

        Returns:
            True if a project link was created
        """
        if not resolution.explicit or resolution.linked_subdomain:
            return False

        should_link = auto_yes or self.prompter.confirm(
            PROMPT_AUTO_INIT.format(folder=folder, subdomain=resolution.subdomain),
            default=True,
        )
        if not should_link:
            return False

        await self.links.write_link(folder, resolution.subdomain)
        resolution.linked_subdomain = resolution.subdomain
        resolution.project_root = Path(folder)
        self.reporter.success("Project initialized! Future deploys here can skip --name.")
        return True
