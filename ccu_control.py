#!/usr/bin/env python3
"""
CCU Control CLI
Inspect and control the devices, rooms, programs and system variables of a
Homematic CCU through its REST interface.
"""

import logging

import click

from core.config import load_configuration
from core.controller import Controller

from commands.setup import ColouredGroup, configure_command, setup_command
from commands.cache import cache_info_command, clear_cache_command
from commands.inspection import (
    devices_command,
    channels_command,
    rooms_command,
    functions_command,
    room_command,
    programs_command,
    variables_command,
)
from commands.control import (
    state_command,
    set_command,
    variable_command,
    run_program_command,
)


@click.group(
    cls=ColouredGroup,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 120,
    }
)
@click.version_option(version='0.1.0', prog_name='CCU Control')
@click.option('--url', help='Base URL of the CCU REST interface (overrides the configuration)')
@click.option('--language', type=click.Choice(['en', 'de']), help='Language of room and function names')
@click.option('--no-cache', is_flag=True, help='Keep cached data in memory only')
@click.option('--debug', is_flag=True, help='Log requests and cache activity')
@click.pass_context
def cli(ctx, url, language, no_cache, debug):
    """CCU Control CLI - Inspect and control a Homematic CCU.

Settings are read from ~/.ccu_control/config.json; run 'configure' to
create it. Data fetched from the CCU is cached in ~/.ccu_control/cache.

Use 'COMMAND -h' or 'COMMAND --help' for detailed help on a specific command."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    config = load_configuration(base_url=url, language=language)
    if no_cache:
        config.cache_dir = None

    controller = Controller(config)
    ctx.ensure_object(dict)['controller'] = controller
    # Persist deferred cache writes however the command ends
    ctx.call_on_close(controller.close)


# Register setup commands
cli.add_command(configure_command)
cli.add_command(setup_command)

# Register cache commands
cli.add_command(cache_info_command)
cli.add_command(clear_cache_command)

# Register inspection commands
cli.add_command(devices_command)
cli.add_command(channels_command)
cli.add_command(rooms_command)
cli.add_command(functions_command)
cli.add_command(room_command)
cli.add_command(programs_command)
cli.add_command(variables_command)

# Register control commands
cli.add_command(state_command)
cli.add_command(set_command)
cli.add_command(variable_command)
cli.add_command(run_program_command)


if __name__ == '__main__':
    cli()
