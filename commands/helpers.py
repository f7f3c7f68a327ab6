"""
Helper functions shared by the CLI commands.
"""

import functools

import click

from core.exceptions import HmIpError, NotFoundError, TransportError
from models.utils import find_similar_strings, get_controller


def suggest_names(kind: str, name: str) -> list[str]:
    """Return up to three known names of a kind that resemble name."""
    try:
        candidates = get_controller().mapping.get_names(kind)
    except (KeyError, HmIpError):
        return []
    return find_similar_strings(name, candidates, limit=3)


def report_errors(func):
    """Print CCU errors in colour instead of a traceback.

    Not-found errors are followed by similar names where there are any.
    The command then exits with status 1.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except NotFoundError as e:
            click.secho(f"✗ Error: {e}", fg='red')
            suggestions = suggest_names(e.kind, str(e.identifier))
            if suggestions:
                click.secho("Did you mean one of these?", fg='yellow')
                for suggestion in suggestions:
                    click.secho(f"  • {suggestion}", fg='green')
        except TransportError as e:
            click.secho(f"✗ Connection error: {e}", fg='red')
        except HmIpError as e:
            click.secho(f"✗ Error: {e}", fg='red')
        raise SystemExit(1)
    return wrapper


def format_flag(value: bool) -> str:
    return click.style('yes', fg='green') if value else click.style('no', fg='yellow')
