"""Type definitions for the data cached from the CCU.

These records are stored as plain dicts in the JSON cache pools, so they are
declared as TypedDicts rather than classes.
"""

from typing import Any, TypedDict


class ChannelLink(TypedDict):
    """A channel as listed by its device."""
    id: str
    name: str


class DeviceRecord(TypedDict):
    name: str
    type: str
    secured: bool
    firmware: str
    channels: dict[str, ChannelLink]  # keyed by channel number, in CCU order


class ChannelRecord(TypedDict):
    name: str
    rooms: list[int]
    functions: list[int]
    parameters: list[str]


class RoomRecord(TypedDict):
    name: str
    description: str
    channels: list[str]


class FunctionRecord(TypedDict):
    name: str
    description: str
    channels: list[str]


class ParameterRecord(TypedDict):
    name: str
    type: str
    unit: str


class ProgramRecord(TypedDict):
    name: str
    description: str
    active: bool
    visible: bool


class VariableRecord(TypedDict):
    name: str
    description: str
    type: str
    unit: str


class StateRecord(TypedDict):
    """Current value of a parameter or variable.

    timestamp is the time of the last update in epoch seconds.
    """
    value: Any
    timestamp: int
