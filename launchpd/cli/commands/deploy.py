"""Deploy command implementation"""

from pathlib import Path

import click

from ..decorators import handle_errors
from ..utils.output import (
    console,
    format_deploy_result,
    open_url,
    print_info,
    show_anonymous_limits,
    show_qr_code,
)
from ...services import DeployOptions
from ...utils.async_utils import run_async


@click.command()
@click.argument('folder', default='.', type=click.Path(file_okay=False, path_type=Path))
@click.option('--name', help='Custom subdomain (requires login)')
@click.option('-m', '--message', help='Deployment message (required)')
@click.option('--expires', help='Expiration time, e.g. 30m, 2h, 1d')
@click.option('-y', '--yes', is_flag=True, help='Answer yes to every prompt')
@click.option('--force', is_flag=True, help='Deploy even if validation or quota checks fail')
@click.option('-o', '--open', 'open_browser', is_flag=True, help='Open the site in a browser')
@click.option('--verbose', is_flag=True, help='Show detailed error information')
@click.option('--qr', is_flag=True, help='Show a QR code for the deployed URL')
@click.pass_context
@handle_errors
def deploy(ctx, folder, name, message, expires, yes, force, open_browser, verbose, qr):
    """Deploy a folder of static files

    Every deploy creates a new version of the target subdomain. The
    subdomain comes from --name, the project link (.launchpd.json) or
    is generated for you.

    Examples:

        # Deploy the current directory
        launchpd deploy . -m "Initial deployment"

        # Deploy to a named site that expires in two hours
        launchpd deploy ./dist --name my-site -m "Preview" --expires 2h
    """
    options = DeployOptions(
        folder=folder,
        message=message,
        name=name,
        expires=expires,
        yes=yes,
        force=force,
    )

    service = ctx.obj.deploy_service()
    result = run_async(service.deploy(options))

    if result.authenticated:
        creds = run_async(ctx.obj.credentials.get_credentials())
        if creds and creds.email:
            print_info(f"Deployed as: {creds.email}")
    else:
        print_info('Deployed as: anonymous (run "launchpd login" for more quota)')

    format_deploy_result(result)

    if open_browser:
        open_url(result.url)

    if not result.authenticated:
        show_anonymous_limits()

    if qr:
        show_qr_code(result.url, verbose=verbose or ctx.obj.verbose)

    console.print()
