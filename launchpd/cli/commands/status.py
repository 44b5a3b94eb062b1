"""Status command implementation"""

from pathlib import Path

import click
from rich.markup import escape

from ..decorators import handle_errors
from ..utils.output import console, print_info, print_warning
from ...utils.async_utils import run_async
from ...utils.expiration import format_time_remaining
from ...utils.format_utils import format_size


@click.command()
@click.pass_context
@handle_errors
def status(ctx):
    """Show the linked subdomain and its active deployment"""
    service = ctx.obj.project_service()

    with console.status("Fetching latest deployment info..."):
        project = run_async(service.status(Path.cwd()))

    if project is None:
        print_warning("Not a LaunchPd project (no .launchpd.json found)")
        print_info('Run "launchpd init" to link this directory to a subdomain.')
        return

    print_info(f"Project root: {project.project_root}")
    print_info(f"Linked subdomain: {project.url}")

    if project.error:
        print_warning(f"Failed to fetch deployment status: {project.error}")
        print_info(f"Subdomain: {project.subdomain}")
        return

    active = project.active
    if active is None:
        print_warning("No deployments found for this project yet.")
        print_info('Run "launchpd deploy <folder>" to push your first version.')
        return

    console.print("\n[bold]Deployment Status:[/bold]")
    console.print(f"  Active Version:  [cyan]v{active.version}[/cyan]")
    console.print(f"  Deployed At:     {active.created_at or '-'}")
    if active.message:
        console.print(f"  Message:         [italic]{escape(active.message)}[/italic]")
    console.print(f"  File Count:      {active.file_count}")
    console.print(f"  Total Size:      {format_size(active.total_bytes)}")
    if active.expires_at:
        remaining = format_time_remaining(active.expires_at)
        color = "red" if remaining == "expired" else "yellow"
        console.print(f"  Expires:         [{color}]{remaining}[/{color}]")
    console.print(f"  URL:             [underline blue]{project.url}[/underline blue]\n")
