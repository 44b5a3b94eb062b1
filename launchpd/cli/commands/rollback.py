"""Rollback command implementation"""

import click

from ..decorators import handle_errors
from ..utils.output import console, print_error, print_info, print_warning
from ...api.exceptions import RollbackError
from ...constants import MSG_ROLLBACK_SUCCESS
from ...utils.async_utils import run_async


@click.command()
@click.argument('subdomain')
@click.option('--to', 'to_version', type=click.IntRange(min=1), help='Version to roll back to')
@click.option('--verbose', is_flag=True, help='Show detailed error information')
@click.pass_context
@handle_errors
def rollback(ctx, subdomain, to_version, verbose):
    """Roll a subdomain back to an earlier version

    Without --to the version just before the active one is restored.
    Rolling back to the version that is already active changes nothing.

    Examples:

        launchpd rollback my-site

        launchpd rollback my-site --to 2
    """
    service = ctx.obj.version_service()
    print_info(f"Checking versions for {subdomain}...")

    try:
        result = run_async(service.rollback(subdomain, to_version))
    except RollbackError as e:
        print_error(f"Rollback failed: {e.message}", verbose=verbose or ctx.obj.verbose)
        if e.available_versions and to_version is not None:
            print_info("Available versions: " + ", ".join(f"v{n}" for n in e.available_versions))
        ctx.exit(1)

    if not result.changed:
        for message in result.warnings:
            print_warning(message)
        return

    if result.from_version is not None:
        print_info(f"Rolled back from v{result.from_version}")
    console.print(f"[green]{MSG_ROLLBACK_SUCCESS.format(subdomain=subdomain, version=result.to_version)}[/green]")
    console.print(f"\n  🔄 [cyan]{ctx.obj.settings.site_url(subdomain)}[/cyan]\n")
