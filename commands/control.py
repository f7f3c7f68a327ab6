"""
Control commands for reading and writing values on the CCU.

Includes parameter state, parameter writes, system variables and program execution.
"""

import click

from commands.helpers import report_errors
from models.utils import get_controller, parse_value


@click.command(name='state')
@click.argument('parameter_id')
@click.option('--cached', is_flag=True, help='Accept a cached value (up to one hour old)')
@report_errors
def state_command(parameter_id: str, cached: bool):
    """Show the current value of a parameter.

    PARAMETER_ID has the form DEVICE/CHANNEL/PARAMETER.

    \b
    Examples:
      python ccu_control.py state ABC1234567/1/ACTUAL_TEMPERATURE
      python ccu_control.py state ABC1234567/1/LEVEL --cached
    """
    parameter = get_controller().get_parameter(parameter_id)
    value = parameter.get_state(force_reload=not cached)
    updated = parameter.get_last_update()

    click.echo(f"{click.style(parameter_id, fg='green')} = {value} {parameter.get_unit()}".rstrip())
    click.echo(f"  Last update: {updated.strftime('%d %b %Y at %H:%M:%S')}")


@click.command(name='set')
@click.argument('parameter_id')
@click.argument('value')
@report_errors
def set_command(parameter_id: str, value: str):
    """Write a new value to a parameter.

    VALUE is parsed as JSON where possible (true, 21.5, 3), otherwise sent
    as a string.

    \b
    Examples:
      python ccu_control.py set ABC1234567/1/STATE true
      python ccu_control.py set ABC1234567/1/SET_POINT_TEMPERATURE 21.5
    """
    parameter = get_controller().get_parameter(parameter_id)
    new_value = parse_value(value)

    if parameter.set_state(new_value):
        click.secho(f"✓ {parameter_id} set to {new_value}", fg='green')
    else:
        click.secho(f"✗ The CCU did not confirm setting {parameter_id}", fg='red')
        raise SystemExit(1)


@click.command(name='variable')
@click.argument('name')
@click.option('--set', 'new_value', help='Write a new value to the variable')
@report_errors
def variable_command(name: str, new_value: str | None):
    """Show or change a system variable.

    \b
    Examples:
      python ccu_control.py variable "Presence"
      python ccu_control.py variable "Presence" --set false
    """
    variable = get_controller().get_variable_by_name(name)

    if new_value is not None:
        value = parse_value(new_value)
        if not variable.set_state(value):
            click.secho(f"✗ The CCU did not confirm setting {variable.get_name()}", fg='red')
            raise SystemExit(1)
        click.secho(f"✓ {variable.get_name()} set to {value}", fg='green')
        return

    click.echo(f"{click.style(variable.get_name(), fg='green')} = {variable.get_state()} {variable.get_unit()}".rstrip())
    click.echo(f"  Last update: {variable.get_last_update().strftime('%d %b %Y at %H:%M:%S')}")


@click.command(name='run-program')
@click.argument('name')
@report_errors
def run_program_command(name: str):
    """Execute a CCU program.

    \b
    Examples:
      python ccu_control.py run-program "All lights off"
    """
    program = get_controller().get_program_by_name(name)

    if program.execute():
        click.secho(f"✓ Program {program.get_name()} started", fg='green')
    else:
        click.secho(f"✗ The CCU did not confirm starting {program.get_name()}", fg='red')
        raise SystemExit(1)
