"""CLI command modules.

This package contains:
- cache: Cache management commands (cache-info, clear-cache)
- inspection: Inspection commands (devices, channels, rooms, functions, room, programs, variables)
- control: Control commands (state, set, variable, run-program)
- setup: Setup commands and the coloured command group
- helpers: Shared error reporting
"""
