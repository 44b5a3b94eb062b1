"""Error handling decorator for CLI commands"""

from functools import wraps
from typing import Callable

import click

from ..utils.output import console, print_launchpd_error
from ...api.exceptions import LaunchpdError, UserCancelledError


def handle_errors(func: Callable) -> Callable:
    """Decorator that turns LaunchpdError into a printed message and exit code

    A command may pass ``verbose=True`` through its own ``--verbose`` flag;
    the global ``-v`` flag works as well.

    Args:
        func: Command function to decorate

    Returns:
        Decorated function
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        try:
            return func(*args, **kwargs)
        except UserCancelledError as e:
            ctx.obj.reporter.stop()
            console.print(f"[yellow]{e.message}[/yellow]")
            ctx.exit(0)
        except LaunchpdError as e:
            ctx.obj.reporter.stop()
            verbose = kwargs.get("verbose") or ctx.obj.verbose or ctx.obj.debug
            print_launchpd_error(e, verbose=verbose)
            ctx.exit(1)

    return wrapper
