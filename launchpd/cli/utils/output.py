"""Output formatting utilities"""

import io
import json
from typing import Any, List, Optional

import click
import qrcode
from qrcode.exceptions import DataOverflowError
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...api.exceptions import LaunchpdError, StaticContentError
from ...constants import (
    ANONYMOUS_LIMITS,
    EMOJI_ERROR,
    EMOJI_INFO,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    MAX_SUGGESTIONS,
    MSG_DEPLOY_SUCCESS,
    REGISTERED_LIMITS,
)
from ...models import DeploymentList, DeployResult, QuotaSnapshot, VersionListing
from ...utils.expiration import format_time_remaining, is_expired
from ...utils.format_utils import format_size, progress_bar

console = Console()


def print_error(message: str, suggestions: Optional[List[str]] = None,
                verbose: bool = False, cause: Optional[BaseException] = None,
                max_suggestions: Optional[int] = MAX_SUGGESTIONS) -> None:
    """Print an error with optional suggestions and cause

    Args:
        message: Short error message
        suggestions: Actionable hints shown beneath the message
        verbose: Also show the underlying cause
        cause: Underlying exception
        max_suggestions: Cap on the number of hints, None for all
    """
    console.print(f"[red]{EMOJI_ERROR} {escape(message)}[/red]")

    shown = list(suggestions or [])
    if max_suggestions is not None:
        shown = shown[:max_suggestions]
    if shown:
        console.print("\n[bold]Suggestions:[/bold]")
        for suggestion in shown:
            console.print(f"  [dim]•[/dim] {escape(suggestion)}")

    if verbose and cause is not None:
        console.print(f"\n[dim]Cause: {escape(type(cause).__name__)}: {escape(str(cause))}[/dim]")


def print_launchpd_error(error: LaunchpdError, verbose: bool = False) -> None:
    """Print a LaunchpdError with its suggestions and cause"""
    print_error(
        error.message,
        error.suggestions,
        verbose=verbose,
        cause=getattr(error, "cause", None),
        max_suggestions=None if isinstance(error, StaticContentError) else MAX_SUGGESTIONS,
    )


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]{EMOJI_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print info message"""
    console.print(f"[blue]{EMOJI_INFO}[/blue] {escape(message)}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]{EMOJI_SUCCESS} {escape(message)}[/green]")


def print_json(data: Any) -> None:
    """Write plain JSON to stdout for scripting"""
    click.echo(json.dumps(data, indent=2, default=str))


def open_url(url: str) -> None:
    """Open ``url`` in the default browser, or print it if that fails"""
    if click.launch(url) != 0:
        console.print(f"Please open this URL in your browser:\n  [cyan]{url}[/cyan]\n")


def show_qr_code(url: str, verbose: bool = False) -> None:
    """Print a QR code for ``url`` when the terminal is wide enough"""
    try:
        qr = qrcode.QRCode(border=1)
        qr.add_data(url)
        qr.make(fit=True)
        width = len(qr.get_matrix()[0])
        buffer = io.StringIO()
        qr.print_ascii(out=buffer, invert=True)
    except (ValueError, DataOverflowError) as e:
        print_warning("Could not generate QR code.")
        if verbose:
            console.print(f"[dim]{escape(str(e))}[/dim]")
        return

    if width > console.width:
        print_warning("Terminal is too narrow to display the QR code correctly.")
        print_info(f"Please expand your terminal to at least {width} columns.")
        print_info(f"URL: {url}")
        return

    console.print("\nScan this QR code to view your site on mobile:")
    console.out(buffer.getvalue(), highlight=False)


def show_anonymous_limits() -> None:
    console.print()
    print_warning("Anonymous deployment limits:")
    console.print(f"   • {ANONYMOUS_LIMITS['max_sites']} active sites per IP")
    console.print(f"   • {ANONYMOUS_LIMITS['max_storage_mb']}MB total storage")
    console.print(f"   • {ANONYMOUS_LIMITS['retention_days']}-day site expiration")
    console.print()
    print_info('Run "launchpd register" to unlock unlimited sites and permanent storage!')


def show_registration_benefits() -> None:
    anon = ANONYMOUS_LIMITS
    reg = REGISTERED_LIMITS
    print_info("Registration benefits:")
    console.print(f"  [green]{EMOJI_SUCCESS}[/green] {reg['max_sites']} sites "
                  f"[dim](instead of {anon['max_sites']})[/dim]")
    console.print(f"  [green]{EMOJI_SUCCESS}[/green] {reg['max_storage_mb']}MB storage "
                  f"[dim](instead of {anon['max_storage_mb']}MB)[/dim]")
    console.print(f"  [green]{EMOJI_SUCCESS}[/green] {reg['retention_days']}-day retention "
                  f"[dim](instead of {anon['retention_days']} days)[/dim]")
    console.print(f"  [green]{EMOJI_SUCCESS}[/green] {reg['max_versions']} versions per site")
    console.print()


def format_deploy_result(result: DeployResult) -> None:
    """Format and display a finished deployment"""
    console.print()
    console.print(f"[bold green]{MSG_DEPLOY_SUCCESS.format(version=result.version)}[/bold green]")
    console.print(f"\n[bold cyan]{result.url}[/bold cyan]\n")
    console.print(f"[dim]Files:[/dim] {result.file_count}  "
                  f"[dim]Size:[/dim] {format_size(result.total_bytes)}")
    if result.expires_at:
        print_warning(f"Expires: {format_time_remaining(result.expires_at)}")


def _status_cell(expires_at: Optional[str]) -> str:
    if not expires_at:
        return "[bold green]● active[/bold green]"
    if is_expired(expires_at):
        return "[bold red]● expired[/bold red]"
    return f"[yellow]⏱ {format_time_remaining(expires_at)}[/yellow]"


def format_deployment_list(listing: DeploymentList, site_url) -> None:
    """Display deployments as a table

    Args:
        listing: Deployments, newest first
        site_url: Callable mapping a subdomain to its public URL
    """
    table = Table(title="Your Deployments", box=box.SIMPLE)
    table.add_column("URL", style="cyan")
    table.add_column("Folder")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Date", style="dim")
    table.add_column("Status")

    for dep in listing.deployments:
        table.add_row(
            site_url(dep.subdomain),
            escape(dep.folder_name or "-"),
            str(dep.file_count),
            format_size(dep.total_bytes) if dep.total_bytes else "-",
            (dep.timestamp or "")[:10] or "-",
            f"{_status_cell(dep.expires_at)} [magenta]v{dep.version}[/magenta]",
        )

    console.print(table)
    sync = ("[green] ✓ synced[/green]" if listing.synced
            else "[yellow] ⚠ local only[/yellow]")
    console.print(f"[dim]Total: {len(listing.deployments)} deployment(s)[/dim]{sync}\n")


def format_version_list(listing: VersionListing, url: str) -> None:
    """Display the versions of one subdomain, newest first"""
    table = Table(title=f"Versions for {url}", box=box.SIMPLE)
    table.add_column("Version", style="cyan")
    table.add_column("Created", style="dim")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Message")
    table.add_column("")

    for v in listing.versions:
        table.add_row(
            f"v{v.version}",
            v.created_at or "-",
            str(v.file_count),
            format_size(v.total_bytes) if v.total_bytes else "unknown size",
            escape(v.message or ""),
            "[green]← active[/green]" if v.is_active else "",
        )

    console.print(table)


def format_anonymous_status() -> None:
    """Limits shown to a user who is not logged in"""
    console.print("\n👤 Not logged in (anonymous mode)\n")
    console.print("Anonymous limits:")
    console.print(f"  • {ANONYMOUS_LIMITS['max_sites']} sites maximum")
    console.print(f"  • {ANONYMOUS_LIMITS['max_storage_mb']}MB total storage")
    console.print(f"  • {ANONYMOUS_LIMITS['retention_days']}-day retention")
    console.print(f"  • {ANONYMOUS_LIMITS['max_versions']} version per site")
    console.print('\nRun [cyan]"launchpd login"[/cyan] to authenticate')
    console.print('Run [cyan]"launchpd register"[/cyan] to create an account\n')


def format_account(snapshot: QuotaSnapshot, domain: str) -> None:
    """Display account, usage and limits for ``whoami``"""
    user = snapshot.user
    usage = snapshot.usage
    limits = snapshot.limits

    console.print(f"\nLogged in as: [cyan]{escape(str(user.get('email') or user.get('id')))}[/cyan]\n")

    console.print("[bold]Account Info:[/bold]")
    console.print(f"  User ID: {user.get('id')}")
    verified = ("[green]✓ Verified[/green]" if user.get("email_verified")
                else "[yellow]⚠ Unverified[/yellow]")
    console.print(f"  Email: {escape(str(user.get('email') or 'Not set'))} {verified}")

    totp = user.get("is_2fa_enabled")
    email_2fa = user.get("is_email_2fa_enabled")
    if totp and email_2fa:
        two_factor = "[green]✓ Enabled[/green] [dim](App + Email)[/dim]"
    elif totp:
        two_factor = "[green]✓ Enabled[/green] [dim](Authenticator App)[/dim]"
    elif email_2fa:
        two_factor = "[green]✓ Enabled[/green] [dim](Email)[/dim]"
    else:
        two_factor = "[dim]Not enabled[/dim]"
    console.print(f"  2FA: {two_factor}")
    console.print(f"  Tier: {snapshot.tier}\n")

    console.print("[bold]Usage:[/bold]")
    console.print(f"  Sites: {usage.site_count} / {limits.max_sites}")
    console.print(f"  Storage: {usage.storage_used_mb:g}MB / {limits.max_storage_mb:g}MB")
    console.print(f"  Sites remaining: {usage.sites_remaining or 0}")
    console.print(f"  Storage remaining: {usage.storage_remaining_mb or 0}MB\n")

    console.print("[bold]Limits:[/bold]")
    console.print(f"  Max versions per site: {limits.max_versions_per_site}")
    console.print(f"  Retention: {limits.retention_days} days\n")

    if snapshot.warnings:
        console.print("[bold]Warnings:[/bold]")
        for warning in snapshot.warnings:
            console.print(f"  {escape(warning)}")
        console.print()

    if not snapshot.can_create_new_site:
        print_warning("You cannot create new sites (limit reached)")
        print_info("You can still update existing sites")

    if user.get("email") and not user.get("email_verified"):
        console.print()
        print_warning("Your email is not verified")
        print_info(f"Verify at: https://{domain}/auth/verify-pending")
        print_info("Some features may be limited until verified")

    if not totp and not email_2fa:
        console.print()
        print_info("Tip: Enable 2FA for better security")
        console.print(f"   [dim]Visit: https://{domain}/settings/security[/dim]")


def format_anonymous_quota() -> None:
    """Anonymous tier table for ``quota``"""
    anon = ANONYMOUS_LIMITS
    reg = REGISTERED_LIMITS
    console.print("\n[bold]Anonymous Quota Status[/bold]\n")
    console.print("[dim]You are not logged in.[/dim]\n")

    table = Table(title="Anonymous tier limits", box=box.ROUNDED, show_header=False)
    table.add_column("Limit", style="dim")
    table.add_column("Value")
    table.add_row("Sites", f"{anon['max_sites']} maximum")
    table.add_row("Storage", f"{anon['max_storage_mb']}MB total")
    table.add_row("Retention", f"{anon['retention_days']} days")
    table.add_row("Versions", f"{anon['max_versions']} per site")
    console.print(table)

    console.print("\n[cyan]Register for FREE[/cyan] to unlock more:")
    console.print(f"   [green]→[/green] {reg['max_sites']} sites")
    console.print(f"   [green]→[/green] {reg['max_storage_mb']}MB storage")
    console.print(f"   [green]→[/green] {reg['retention_days']}-day retention")
    console.print(f"   [green]→[/green] {reg['max_versions']} versions per site")
    console.print("\nRun: [cyan]launchpd register[/cyan]\n")


def _usage_color(ratio: float) -> str:
    if ratio >= 0.9:
        return "red"
    if ratio >= 0.7:
        return "yellow"
    return "green"


def format_quota(snapshot: QuotaSnapshot, email: Optional[str] = None) -> None:
    """Usage bars for ``quota``"""
    usage = snapshot.usage
    limits = snapshot.limits
    who = snapshot.user.get("email") or email or ""
    console.print(f"\n[bold]Quota Status for:[/bold] [cyan]{escape(who)}[/cyan]\n")

    max_sites = limits.max_sites or REGISTERED_LIMITS["max_sites"]
    site_ratio = usage.site_count / max_sites
    color = _usage_color(site_ratio)
    console.print(f"[dim]Sites:[/dim]    [{color}]{escape(progress_bar(usage.site_count, max_sites))}[/{color}] "
                  f"{usage.site_count}/{max_sites}")

    max_bytes = limits.max_storage_bytes or REGISTERED_LIMITS["max_storage_mb"] * 1024 * 1024
    storage_ratio = usage.storage_used / max_bytes
    color = _usage_color(storage_ratio)
    console.print(f"[dim]Storage:[/dim]  [{color}]{escape(progress_bar(usage.storage_used, max_bytes))}[/{color}] "
                  f"{format_size(usage.storage_used)}/{format_size(max_bytes)}")

    console.print()
    console.print(f"[dim]Tier:[/dim]         [green]{snapshot.tier or 'free'}[/green]")
    console.print(f"[dim]Retention:[/dim]    "
                  f"{limits.retention_days or REGISTERED_LIMITS['retention_days']} days")
    console.print(f"[dim]Max versions:[/dim] "
                  f"{limits.max_versions_per_site or REGISTERED_LIMITS['max_versions']} per site\n")

    if not snapshot.can_create_new_site:
        print_warning("Site limit reached - cannot create new sites")
    if storage_ratio > 0.8:
        print_warning(f"Storage {round(storage_ratio * 100)}% used - consider cleaning up old deployments")
    console.print()
