# launchpd/cli/main.py
"""Main CLI entry point for launchpd"""

import logging
import sys
from typing import Mapping, Optional

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..__version__ import __version__
from ..api import ApiClient, LegacyMetadataClient
from ..api.exceptions import ConfigError
from ..config import Settings
from ..constants import APP_NAME, LOG_FORMAT
from ..core import (
    CredentialStore,
    LocalHistory,
    ProjectLinkStore,
    QuotaGate,
    SubdomainResolver,
)
from ..services import (
    ApiVersionProvider,
    AuthService,
    DeployService,
    LegacyMetadataProvider,
    LocalHistoryProvider,
    ProjectService,
    UploadService,
    VersionService,
)
from .utils import RichPrompter, RichStatusReporter

# Import all commands
from .commands import (
    auth,
    deploy,
    init,
    listing,
    rollback,
    status,
    versions,
)

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True,
    )

    # Adjust third-party loggers
    for name in ("httpx", "httpcore", "asyncio", "aiofiles"):
        logging.getLogger(name).setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy service construction

    Stores, the API client and services are built on first access.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            environ: Environment mapping used to resolve settings
            transport: httpx transport for all API traffic (used by tests)
        """
        self.environ = environ
        self.transport = transport
        self.verbose: bool = False
        self.debug: bool = False
        self._settings: Optional[Settings] = None
        self._credentials: Optional[CredentialStore] = None
        self._links: Optional[ProjectLinkStore] = None
        self._history: Optional[LocalHistory] = None
        self._api: Optional[ApiClient] = None
        self._reporter: Optional[RichStatusReporter] = None
        self._prompter: Optional[RichPrompter] = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = Settings.load(self.environ)
        return self._settings

    @property
    def credentials(self) -> CredentialStore:
        if self._credentials is None:
            self._credentials = CredentialStore(self.settings.config_dir)
        return self._credentials

    @property
    def links(self) -> ProjectLinkStore:
        if self._links is None:
            self._links = ProjectLinkStore()
        return self._links

    @property
    def history(self) -> LocalHistory:
        if self._history is None:
            self._history = LocalHistory(self.settings.config_dir)
        return self._history

    @property
    def api(self) -> ApiClient:
        if self._api is None:
            self._api = ApiClient(self.settings, self.credentials, transport=self.transport)
        return self._api

    @property
    def reporter(self) -> RichStatusReporter:
        if self._reporter is None:
            self._reporter = RichStatusReporter(console)
        return self._reporter

    @property
    def prompter(self) -> RichPrompter:
        if self._prompter is None:
            self._prompter = RichPrompter(console)
        return self._prompter

    def version_service(self) -> VersionService:
        metadata = LegacyMetadataClient(self.settings, transport=self.transport)
        return VersionService([
            ApiVersionProvider(self.api),
            LegacyMetadataProvider(metadata),
            LocalHistoryProvider(self.history),
        ], reporter=self.reporter)

    def deploy_service(self) -> DeployService:
        resolver = SubdomainResolver(self.api, self.credentials, self.links,
                                     self.reporter, self.prompter)
        return DeployService(
            settings=self.settings,
            history=self.history,
            quota_gate=QuotaGate(self.api, self.credentials),
            resolver=resolver,
            uploader=UploadService(self.api),
            versions=self.version_service(),
            reporter=self.reporter,
        )

    def auth_service(self) -> AuthService:
        return AuthService(self.settings, self.api, self.credentials,
                           reporter=self.reporter, prompter=self.prompter)

    def project_service(self) -> ProjectService:
        return ProjectService(self.settings, self.api, self.credentials, self.links,
                              self.history, reporter=self.reporter, prompter=self.prompter)


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.version_option(__version__, prog_name=APP_NAME)
@click.pass_context
def cli(ctx, verbose, debug):
    """LaunchPd - Deploy static sites instantly

    Upload a folder of static files and get a live URL. Every deploy
    creates a new version that can be listed and rolled back.
    """
    if ctx.obj is None:
        ctx.obj = Context()

    try:
        settings = ctx.obj.settings
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    debug = debug or settings.debug

    # Setup logging
    setup_logging(verbose=verbose, debug=debug)

    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(listing.list_deployments)
cli.add_command(versions.versions)
cli.add_command(rollback.rollback)
cli.add_command(init.init)
cli.add_command(status.status)
cli.add_command(auth.login)
cli.add_command(auth.logout)
cli.add_command(auth.register)
cli.add_command(auth.whoami)
cli.add_command(auth.quota)
cli.add_command(auth.verify)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts (exit code 130)
    - Usage errors
    - Unexpected exceptions with proper error display
    """
    try:
        # Without standalone mode click returns the code passed to ctx.exit()
        exit_code = cli.main(prog_name=APP_NAME, standalone_mode=False)

    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)

    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
