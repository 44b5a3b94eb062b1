"""List command implementation"""

import click

from ..decorators import handle_errors
from ..utils.output import (
    console,
    format_deployment_list,
    print_error,
    print_info,
    print_json,
)
from ...api.exceptions import LaunchpdError
from ...utils.async_utils import run_async


@click.command(name='list')
@click.option('--json', 'as_json', is_flag=True, help='Output as JSON')
@click.option('--local', is_flag=True, help='Only show deployments recorded on this machine')
@click.option('--verbose', is_flag=True, help='Show detailed error information')
@click.pass_context
@handle_errors
def list_deployments(ctx, as_json, local, verbose):
    """List your deployments

    Deployments are fetched from the service; when it is unreachable
    the local history is shown instead.
    """
    service = ctx.obj.project_service()

    try:
        if as_json:
            listing = run_async(service.list_deployments(local_only=local))
        else:
            with console.status("Fetching deployments..."):
                listing = run_async(service.list_deployments(local_only=local))
    except LaunchpdError as e:
        print_error(f"Failed to list deployments: {e.message}", [
            "Check your internet connection",
            "Use --local flag to show local deployments only",
            "Try running with --verbose for more details",
        ], verbose=verbose or ctx.obj.verbose, cause=e)
        ctx.exit(1)

    if as_json:
        print_json(listing.to_list())
        return

    if not listing.deployments:
        console.print("[yellow]No deployments found[/yellow]")
        print_info("Deploy a folder with: launchpd deploy ./my-folder")
        return

    console.print(f"[green]Found {len(listing.deployments)} deployment(s)[/green]\n")
    format_deployment_list(listing, ctx.obj.settings.site_url)
