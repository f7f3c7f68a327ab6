"""Location inspection commands - show rooms and functions with their channels."""

import click

from commands.helpers import report_errors
from models.utils import get_controller


def _show_groups(title: str, groups: list, channels: bool):
    if not groups:
        click.echo(f"No {title.lower()} found.")
        return

    click.echo()
    click.secho(f"=== {title} ===", fg='cyan', bold=True)
    click.echo()
    for group_id, group in sorted(groups, key=lambda item: item[1].get_name().lower()):
        click.echo(f"  {group_id:>6}  {click.style(group.get_name(), fg='green')}")
        if channels:
            for channel_id, channel in group.get_channels():
                click.echo(f"          {channel_id:<20} {channel.get_name()}")
    click.echo()


@click.command(name='rooms')
@click.option('--channels', '-c', is_flag=True, help='Show the channels in each room')
@report_errors
def rooms_command(channels: bool):
    """List all rooms.

    \b
    Examples:
      python ccu_control.py rooms
      python ccu_control.py rooms --channels
    """
    _show_groups('Rooms', list(get_controller().get_rooms()), channels)


@click.command(name='functions')
@click.option('--channels', '-c', is_flag=True, help='Show the channels of each function')
@report_errors
def functions_command(channels: bool):
    """List all functions (trades) such as heating or lighting."""
    _show_groups('Functions', list(get_controller().get_functions()), channels)


@click.command(name='room')
@click.argument('name')
@report_errors
def room_command(name: str):
    """Show a room with its channels and their current values.

    NAME is matched case-insensitively; localized names of the CCU's
    built-in rooms (e.g. "Kitchen" or "Küche") are accepted too.

    \b
    Examples:
      python ccu_control.py room kitchen
    """
    room = get_controller().get_room_by_name(name)

    click.echo()
    click.secho(f"=== {room.get_name()} ===", fg='cyan', bold=True)
    if room.get_description():
        click.echo(room.get_description())
    click.echo()
    for channel_id, channel in room.get_channels():
        click.secho(f"  {channel.get_name()} ({channel_id})", fg='green')
        for parameter_name, parameter in channel.get_parameters():
            click.echo(f"    {parameter_name:<28} {parameter.get_state(False)} {parameter.get_unit()}")
    click.echo()
