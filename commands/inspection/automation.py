"""
Program and system variable listing commands.
"""

import click

from commands.helpers import format_flag, report_errors
from models.utils import get_controller


@click.command(name='programs')
@click.option('--all', '-a', 'show_all', is_flag=True, help='Include programs hidden in the WebUI')
@report_errors
def programs_command(show_all: bool):
    """List the programs of the CCU."""
    programs = list(get_controller().get_programs())
    if not show_all:
        programs = [(program_id, program) for program_id, program in programs if program.is_visible()]

    if not programs:
        click.echo("No programs found.")
        return

    click.echo()
    click.secho("=== Programs ===", fg='cyan', bold=True)
    click.echo()
    for program_id, program in programs:
        click.echo(f"  {program_id:>6}  {click.style(program.get_name(), fg='green'):<40} "
                   f"active: {format_flag(program.is_active())}")
        if program.get_description():
            click.echo(f"          {program.get_description()}")
    click.echo()


@click.command(name='variables')
@click.option('--values', '-v', is_flag=True, help='Show the current value of each variable')
@report_errors
def variables_command(values: bool):
    """List the system variables of the CCU."""
    variables = list(get_controller().get_variables())
    if not variables:
        click.echo("No system variables found.")
        return

    click.echo()
    click.secho("=== System variables ===", fg='cyan', bold=True)
    click.echo()
    for variable_id, variable in variables:
        line = f"  {variable_id:>6}  {click.style(variable.get_name(), fg='green'):<40} {variable.get_type()}"
        if values:
            line += f"  = {variable.get_state()} {variable.get_unit()}"
        click.echo(line)
    click.echo()
