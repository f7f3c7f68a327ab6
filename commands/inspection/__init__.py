"""
Inspection command module.

Provides commands for inspecting the devices, rooms, functions, programs
and system variables of a CCU.

Structure:
- devices.py: Device and channel listings (2 commands)
- locations.py: Room and function listings (3 commands)
- automation.py: Program and system variable listings (2 commands)
"""

from .devices import devices_command, channels_command
from .locations import rooms_command, functions_command, room_command
from .automation import programs_command, variables_command
