"""
Device listing commands.

Commands for viewing devices, their channels and the parameters of a channel.
"""

import click

from commands.helpers import format_flag, report_errors
from core.exceptions import InvalidDeviceError
from models.utils import get_controller


@click.command(name='devices')
@report_errors
def devices_command():
    """List all devices known to the CCU.

    \b
    Examples:
      python ccu_control.py devices
    """
    controller = get_controller()

    devices = list(controller.get_devices())
    if not devices:
        click.echo("No devices found.")
        return

    click.echo()
    click.secho("=== Devices ===", fg='cyan', bold=True)
    click.echo()
    for device_id, device in sorted(devices, key=lambda item: item[1].get_name().lower()):
        click.echo(f"  {click.style(device.get_name(), fg='green'):<40} "
                   f"{device_id:<16} {device.get_type():<20} "
                   f"fw {device.get_firmware():<8} secured: {format_flag(device.is_secured())}")
    click.echo()
    click.echo(f"{len(devices)} devices")


@click.command(name='channels')
@click.argument('device')
@click.option('--parameters', '-p', is_flag=True, help='Show the parameters of each channel')
@report_errors
def channels_command(device: str, parameters: bool):
    """List the channels of a device.

    DEVICE is a device name or a device id.

    \b
    Examples:
      python ccu_control.py channels "Thermostat Kitchen"
      python ccu_control.py channels ABC1234567 -p
    """
    controller = get_controller()

    try:
        handle = controller.get_device_by_name(device)
    except InvalidDeviceError:
        handle = controller.get_device(device)

    click.echo()
    click.secho(f"=== {handle.get_name()} ({handle.get_id()}) ===", fg='cyan', bold=True)
    click.echo()
    for number, channel in handle.get_channels():
        click.echo(f"  {number:>3}  {click.style(channel.get_name(), fg='green')}")
        if parameters:
            for name, parameter in channel.get_parameters():
                click.echo(f"         {name:<28} {parameter.get_type():<10} {parameter.get_unit()}")
    click.echo()
