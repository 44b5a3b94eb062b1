"""Init command implementation"""

from pathlib import Path

import click

from ..decorators import handle_errors
from ..utils.output import print_info, print_success
from ...utils.async_utils import run_async


@click.command()
@click.option('--name', help='Subdomain to link this directory to')
@click.pass_context
@handle_errors
def init(ctx, name):
    """Link the current directory to a subdomain

    Writes .launchpd.json so later deploys from this directory (or any
    directory below it) target the linked subdomain without --name.
    Requires login.
    """
    service = ctx.obj.project_service()
    result = run_async(service.init(Path.cwd(), name))

    host = ctx.obj.settings.site_url(result.subdomain)
    if result.relinked:
        print_success(f"Project re-linked! New subdomain: {host}")
    else:
        print_success(f"Project initialized! Linked to: {host}")
    print_info('Now you can run "launchpd deploy" without specifying a name.')
