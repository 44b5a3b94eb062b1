"""Versions command implementation"""

import click

from ..decorators import handle_errors
from ..utils.output import console, format_version_list, print_info, print_json
from ...utils.async_utils import run_async


@click.command()
@click.argument('subdomain')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('--verbose', is_flag=True, help='Show detailed error information')
@click.pass_context
@handle_errors
def versions(ctx, subdomain, as_json, verbose):
    """List all versions of a subdomain

    The active version is marked. Versions come from the service, then
    the legacy metadata store, then local history.
    """
    service = ctx.obj.version_service()

    if as_json:
        listing = run_async(service.list_versions(subdomain))
        print_json(listing.to_dict())
        return

    with console.status(f"Fetching versions for {subdomain}..."):
        listing = run_async(service.list_versions(subdomain))

    console.print()
    format_version_list(listing, ctx.obj.settings.site_url(subdomain))
    print_info(f"Use 'launchpd rollback {subdomain} --to <n>' to restore a version.")
    console.print()
