"""Controller class for accessing a Homematic CCU.

This module contains the main entry point of the library. A Controller
wires up the connection, the cache pools, the translation and the Mapping
for one session and exposes the entities of the CCU.

Deferred cache writes are only persisted when the controller is closed, so
use it as a context manager:

    with Controller(Configuration(base_url='https://ccu3-webui:2122')) as ccu:
        ccu.get_room_by_name('Kitchen')
"""

import logging
from collections.abc import Iterator

from core.cache import CacheManager
from core.config import Configuration
from core.connection import Connection
from core.mapping import Mapping
from models.entities import Channel, Device, Function, Parameter, Program, Room, Variable

_LOGGER = logging.getLogger(__name__)


class Controller:
    """Manages one session with a Homematic CCU."""

    def __init__(self, config: Configuration | None = None, connection: Connection | None = None,
                 cache_manager: CacheManager | None = None):
        """Initialise Controller.

        Args:
            config: Session settings (defaults apply if omitted)
            connection: Transport to use instead of a new Connection
            cache_manager: Cache pools to use instead of the configured ones
        """
        self.config = config or Configuration()
        self.connection = connection or Connection(self.config)
        self.cache_manager = cache_manager or CacheManager(self.config.cache_dir)
        self.translation = self.config.get_translation()
        self.mapping = Mapping(self.connection, self.cache_manager, self.translation)
        self._closed = False

    def close(self):
        """Commit all deferred cache writes of this session."""
        if self._closed:
            return
        _LOGGER.debug("Closing session with %s", self.config.base_url)
        self.cache_manager.commit()
        self._closed = True

    def __enter__(self) -> 'Controller':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def get_devices(self) -> Iterator[tuple[str, Device]]:
        yield from self.mapping.get_devices()

    def get_device(self, device_id: str) -> Device:
        return self.mapping.get_device(device_id)

    def get_device_by_name(self, device_name: str) -> Device:
        return self.mapping.get_device_by_name(device_name)

    def get_channel(self, channel_id: str) -> Channel:
        return self.mapping.get_channel(channel_id)

    def get_channel_by_name(self, channel_name: str) -> Channel:
        return self.mapping.get_channel_by_name(channel_name)

    def get_parameter(self, parameter_id: str) -> Parameter:
        return self.mapping.get_parameter(parameter_id)

    def get_rooms(self) -> Iterator[tuple[int, Room]]:
        yield from self.mapping.get_rooms()

    def get_room(self, room_id: int) -> Room:
        return self.mapping.get_room(room_id)

    def get_room_by_name(self, room_name: str) -> Room:
        return self.mapping.get_room_by_name(room_name)

    def get_functions(self) -> Iterator[tuple[int, Function]]:
        yield from self.mapping.get_functions()

    def get_function(self, function_id: int) -> Function:
        return self.mapping.get_function(function_id)

    def get_function_by_name(self, function_name: str) -> Function:
        return self.mapping.get_function_by_name(function_name)

    def get_programs(self) -> Iterator[tuple[int, Program]]:
        yield from self.mapping.get_programs()

    def get_program(self, program_id: int) -> Program:
        return self.mapping.get_program(program_id)

    def get_program_by_name(self, program_name: str) -> Program:
        return self.mapping.get_program_by_name(program_name)

    def get_variables(self) -> Iterator[tuple[int, Variable]]:
        yield from self.mapping.get_variables()

    def get_variable(self, variable_id: int) -> Variable:
        return self.mapping.get_variable(variable_id)

    def get_variable_by_name(self, variable_name: str) -> Variable:
        return self.mapping.get_variable_by_name(variable_name)

    def get_cache_info(self) -> dict:
        return self.cache_manager.get_cache_info()

    def clear_cache(self):
        """Drop all cached CCU data, persisted pools included."""
        self.cache_manager.clear()
