"""Test that the package layout is correct."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


def test_directories_exist():
    """Test that all expected directories exist."""
    for directory in ('core', 'models', 'commands', 'commands/inspection', 'tests'):
        assert (PROJECT_ROOT / directory).is_dir()


def test_init_files_exist():
    """Test that all __init__.py files exist."""
    for package in ('core', 'models', 'commands', 'commands/inspection'):
        assert (PROJECT_ROOT / package / '__init__.py').exists()


def test_main_script_exists():
    """Test that main entry point exists."""
    assert (PROJECT_ROOT / 'ccu_control.py').exists()


def test_all_commands_registered():
    from ccu_control import cli
    assert set(cli.commands) == {
        'configure', 'setup', 'cache-info', 'clear-cache',
        'devices', 'channels', 'rooms', 'functions', 'room', 'programs', 'variables',
        'state', 'set', 'variable', 'run-program',
    }
