"""Authentication commands: login, logout, register, whoami, quota, verify"""

import click

from ..decorators import handle_errors
from ..utils import choose_login_method
from ..utils.output import (
    console,
    format_account,
    format_anonymous_quota,
    format_anonymous_status,
    format_quota,
    open_url,
    print_error,
    print_info,
    print_success,
    print_warning,
    show_registration_benefits,
)
from ...constants import ANONYMOUS_LIMITS
from ...utils.async_utils import run_async


@click.command()
@click.pass_context
@handle_errors
def login(ctx):
    """Log in with an API key or email and password"""
    creds = run_async(ctx.obj.credentials.get_credentials())
    if creds is not None:
        print_warning(f"Already logged in as {creds.email or creds.user_id}")
        print_info('Run "launchpd logout" to switch accounts')
        return

    service = ctx.obj.auth_service()
    prompter = ctx.obj.prompter
    choice = choose_login_method(console)

    if choice == "2":
        email = prompter.ask("Email").strip()
        if not email:
            print_error("Email is required")
            ctx.exit(1)
        password = prompter.ask_secret("Password")
        if not password:
            print_error("Password is required")
            ctx.exit(1)
        snapshot = run_async(service.login_with_password(email, password))
    else:
        console.print("\nEnter your API key from the dashboard.")
        console.print('[dim]Don\'t have one? Run "launchpd register" first.[/dim]\n')
        api_key = prompter.ask_secret("API Key").strip()
        if not api_key:
            print_error("API key is required", [
                'Get your API key from the dashboard',
                'Run "launchpd register" if you don\'t have an account',
            ])
            ctx.exit(1)
        snapshot = run_async(service.login_with_api_key(api_key))

    user = snapshot.user
    console.print()
    print_success(f"Logged in as: {user.get('email') or user.get('id')}")
    console.print(f"  Tier: {snapshot.tier}")
    console.print(f"  Sites: {snapshot.usage.site_count}/{snapshot.limits.max_sites}")
    console.print(f"  Storage: {snapshot.usage.storage_used_mb:g}MB/"
                  f"{snapshot.limits.max_storage_mb:g}MB")

    if user.get("email") and not user.get("email_verified"):
        console.print()
        print_warning("Your email is not verified")
        print_info(f"Verify at: https://{ctx.obj.settings.domain}/auth/verify-pending")
    console.print()


@click.command()
@click.pass_context
@handle_errors
def logout(ctx):
    """Clear stored credentials"""
    creds = run_async(ctx.obj.auth_service().logout())
    if creds is None:
        print_warning("Not currently logged in")
        return

    print_success("Logged out successfully")
    if creds.email:
        print_info(f"Was logged in as: {creds.email}")
    console.print(f"\n[dim]You can still deploy anonymously "
                  f"(limited to {ANONYMOUS_LIMITS['max_sites']} sites, "
                  f"{ANONYMOUS_LIMITS['max_storage_mb']}MB).[/dim]")


@click.command()
@click.pass_context
@handle_errors
def register(ctx):
    """Open the registration page in a browser"""
    url = ctx.obj.settings.register_url
    console.print("\n[bold]Register for LaunchPd[/bold]\n")
    console.print(f"Opening registration page: [cyan]{url}[/cyan]\n")
    open_url(url)

    console.print("After registering:")
    console.print("  1. Get your API key from the dashboard")
    console.print('  2. Run: [cyan]launchpd login[/cyan]\n')
    show_registration_benefits()


@click.command()
@click.pass_context
@handle_errors
def whoami(ctx):
    """Show the current user and account status"""
    service = ctx.obj.auth_service()
    creds = run_async(ctx.obj.credentials.get_credentials())
    if creds is None:
        format_anonymous_status()
        return

    with console.status("Fetching account status..."):
        snapshot = run_async(service.account_status())
    format_account(snapshot, ctx.obj.settings.domain)


@click.command()
@click.pass_context
@handle_errors
def quota(ctx):
    """Show quota usage for the current account"""
    creds = run_async(ctx.obj.credentials.get_credentials())
    if creds is None:
        format_anonymous_quota()
        return

    with console.status("Fetching quota..."):
        snapshot = run_async(ctx.obj.auth_service().account_status(clear_invalid=False))
    format_quota(snapshot, creds.email)


@click.command()
@click.pass_context
@handle_errors
def verify(ctx):
    """Resend the email verification link"""
    with console.status("Requesting verification email..."):
        result = run_async(ctx.obj.auth_service().resend_verification())

    if result.get("already_verified"):
        print_success("Your email is already verified!")
        return

    if result.get("success"):
        print_success("Verification email sent!")
        print_info("Check your inbox and spam folder")
        return

    print_error(str(result.get("message") or "Failed to send verification email"))
    seconds = result.get("seconds_remaining")
    if seconds:
        print_info(f"You can request another email in {seconds} seconds")
    ctx.exit(1)
