"""Cache management CLI commands.

This module provides CLI commands for inspecting and clearing the
persistent cache of CCU data.
"""

import click

from models.utils import get_controller


@click.command(name='cache-info')
def cache_info_command():
    """Show cache status and information.

    Displays where the cache is stored and how many items each cache pool
    holds. Structural data is kept for a month, values for an hour.
    """
    info = get_controller().get_cache_info()

    click.echo()
    click.secho("=== Cache Information ===", fg='cyan', bold=True)
    click.echo()

    if not info['persistent']:
        click.secho("Cache is disabled (memory only)", fg='yellow')
        click.echo()
        return

    click.echo(f"{click.style('Cache directory:', fg='cyan')} {info['directory']}")

    counts = info['counts']
    if not counts:
        click.secho("No cached data found", fg='yellow')
        click.echo()
        return

    click.secho("\nCached items:", fg='cyan')
    max_label_len = max(len(name) for name in counts)
    max_num_len = max(len(str(count)) for count in counts.values())
    for name, count in counts.items():
        click.echo(f"  {name:<{max_label_len}} {count:>{max_num_len}}")
    click.echo()


@click.command(name='clear-cache')
@click.confirmation_option(prompt='Drop all cached CCU data?')
def clear_cache_command():
    """Drop all cached CCU data.

    Use this after changing devices, rooms or programs on the CCU; the
    next command fetches everything again.
    """
    get_controller().clear_cache()
    click.secho("✓ Cache cleared", fg='green')
