"""
Setup commands for the CCU Control CLI.

Contains custom Click group class for coloured help output and typo suggestions.
"""

import click

from core.config import DEFAULT_BASE_URL, USER_CONFIG_FILE, load_config, save_config
from core.exceptions import TransportError
from models.translation import TRANSLATIONS
from models.utils import get_controller, similarity_score


class ColouredGroup(click.Group):
    """Custom Group class that adds colour to help output and suggests similar commands."""

    def resolve_command(self, ctx, args):
        """Resolve command with suggestions for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg)
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        suggestions = []
        for command in self.list_commands(ctx):
            cmd_obj = self.get_command(ctx, command)
            if cmd_obj and not cmd_obj.hidden:
                score = similarity_score(cmd_name, command)
                if score > 0:
                    suggestions.append((score, command))

        suggestions.sort(reverse=True, key=lambda x: x[0])
        return [cmd for score, cmd in suggestions[:max_suggestions]]

    def format_commands(self, ctx, formatter):
        """Format commands with colour."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=500)))

        if commands:
            formatter.write_paragraph()
            formatter.write_text(click.style('Commands:', fg='yellow', bold=True))

            max_len = max(max(len(cmd[0]) for cmd in commands), 14)

            with formatter.indentation():
                for subcommand, help_text in commands:
                    formatter.write_text(
                        click.style(subcommand.ljust(max_len), fg='green') + '  ' +
                        click.style(help_text, fg='white', dim=True)
                    )


@click.command(name='configure')
@click.option('--url', prompt='CCU base URL', default=lambda: load_config().get('base_url', DEFAULT_BASE_URL),
              help='Base URL of the CCU REST interface')
@click.option('--language', prompt='Language', type=click.Choice(sorted(TRANSLATIONS)),
              default=lambda: load_config().get('language', 'en'),
              help='Language of room and function names')
@click.option('--username', default=None, help='User for HTTP basic authentication')
@click.option('--password', default=None, help='Password for HTTP basic authentication')
def configure_command(url, language, username, password):
    """Store CCU connection settings in the user configuration.

    \b
    Examples:
      python ccu_control.py configure
      python ccu_control.py configure --url https://192.168.1.10:2122 --language de
    """
    config = load_config()
    config['base_url'] = url.rstrip('/')
    config['language'] = language
    if username is not None:
        config['username'] = username
        config['password'] = password

    save_config(config)
    click.secho(f"✓ Configuration saved to {USER_CONFIG_FILE}", fg='green')


@click.command(name='setup')
def setup_command():
    """Show current configuration and test the connection to the CCU."""
    controller = get_controller()
    config = controller.config

    click.echo()
    click.secho("=== CCU Configuration ===", fg='cyan', bold=True)
    click.echo()
    click.echo(f"   Config file: {USER_CONFIG_FILE}")
    click.echo(f"   Base URL:    {config.base_url}")
    click.echo(f"   Language:    {config.language}")
    click.echo(f"   Cache:       {config.cache_dir or 'memory only'}")
    click.echo()

    click.echo(click.style("Connection Test", fg='cyan', bold=True))
    try:
        device_count = sum(1 for _ in controller.get_devices())
    except TransportError as e:
        click.secho(f"✗ Connection failed: {e}", fg='red', bold=True)
        click.echo()
        click.echo("Try reconfiguring:")
        click.echo(click.style("  python ccu_control.py configure", fg='green', bold=True))
        click.echo()
        return

    click.secho(f"✓ Connected to CCU at {config.base_url} ({device_count} devices)", fg='green', bold=True)
    click.echo()
