"""Entity handles for the objects of a CCU.

A handle only stores the id of an entity (and its parent where there is
one). Every attribute is read through the Mapping, which applies its own
caching, so handles never hold stale copies of CCU data.
"""

import time
from collections.abc import Iterator
from datetime import datetime
from typing import TYPE_CHECKING, Any

from core.cache import STATE_TTL
from models.types import StateRecord
from models.utils import join_id, split_id

if TYPE_CHECKING:
    from core.mapping import Mapping


class Entity:
    """Base class of all handles."""

    def __init__(self, mapping: 'Mapping', entity_id):
        self._mapping = mapping
        self._id = entity_id

    def get_id(self):
        return self._id

    def __eq__(self, other):
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self._id == other._id

    def __hash__(self):
        return hash((type(self).__name__, self._id))

    def __repr__(self):
        return f"{type(self).__name__}({self._id!r})"


class StatefulEntity(Entity):
    """An entity with a current value: a parameter or a system variable.

    Values live in their own cache pool with a short lifetime. Reads go to
    the CCU unless the caller explicitly accepts a cached value.
    """

    state_pool = ''

    def _state_path(self) -> list:
        raise NotImplementedError

    def _state_cache(self):
        return self._mapping.cache.get_item_pool(self.state_pool)

    def get_state(self, force_reload: bool = True) -> Any:
        """Get the current value.

        Args:
            force_reload: If False, a cached value is returned without asking
                the CCU

        Returns:
            The value as reported by the CCU
        """
        cache = self._state_cache()
        if not force_reload and cache.has(self._id):
            return cache.get(self._id)['value']

        result = self._mapping.connection.fetch(self._state_path())
        # The CCU reports the time of the last update in milliseconds
        data: StateRecord = {
            'value': result['v'],
            'timestamp': int(result['ts']) // 1000,
        }
        cache.save_deferred(self._id, data, STATE_TTL)
        return data['value']

    def set_state(self, value: Any) -> bool:
        """Send a new value to the CCU.

        Returns:
            True if the CCU confirmed the write; the cached value is only
            updated in that case
        """
        if not self._mapping.connection.send(self._state_path(), {'v': value}):
            return False
        data: StateRecord = {'value': value, 'timestamp': int(time.time())}
        self._state_cache().save_deferred(self._id, data, STATE_TTL)
        return True

    def get_last_update(self) -> datetime:
        """Get the time of the last update of the value."""
        self.get_state(False)
        return datetime.fromtimestamp(self._state_cache().get(self._id)['timestamp'])


class Room(Entity):

    def get_name(self) -> str:
        """Get the name of the room, translated if it is a built-in room."""
        return self._mapping.translation.translate(self._mapping.get_room_data(self._id)['name'])

    def get_description(self) -> str:
        return self._mapping.get_room_data(self._id)['description']

    def get_channels(self) -> Iterator[tuple[str, 'Channel']]:
        yield from self._mapping.get_channels_of_room(self._id)


class Function(Entity):

    def get_name(self) -> str:
        """Get the name of the function, translated if it is a built-in function."""
        return self._mapping.translation.translate(self._mapping.get_function_data(self._id)['name'])

    def get_description(self) -> str:
        return self._mapping.get_function_data(self._id)['description']

    def get_channels(self) -> Iterator[tuple[str, 'Channel']]:
        yield from self._mapping.get_channels_of_function(self._id)


class Device(Entity):

    def get_name(self) -> str:
        return self._mapping.get_device_data(self._id)['name']

    def get_type(self) -> str:
        return self._mapping.get_device_data(self._id)['type']

    def get_firmware(self) -> str:
        return self._mapping.get_device_data(self._id)['firmware']

    def is_secured(self) -> bool:
        return self._mapping.get_device_data(self._id)['secured']

    def get_channels(self) -> Iterator[tuple[int, 'Channel']]:
        """Iterate (channel number, channel) pairs in the order of the CCU."""
        yield from self._mapping.get_channels(self._id)

    def get_channel(self, number: int) -> 'Channel':
        return self._mapping.get_channel(join_id(self._id, number))


class Channel(Entity):

    def __init__(self, mapping: 'Mapping', channel_id: str, device: Device):
        super().__init__(mapping, channel_id)
        self._device = device

    def get_device(self) -> Device:
        return self._device

    def get_number(self) -> int:
        return int(split_id(self._id)[1])

    def get_name(self) -> str:
        return self._mapping.get_channel_data(self._id)['name']

    def get_rooms(self) -> Iterator[tuple[int, Room]]:
        yield from self._mapping.get_rooms_of_channel(self._id)

    def get_functions(self) -> Iterator[tuple[int, Function]]:
        yield from self._mapping.get_functions_of_channel(self._id)

    def get_parameters(self) -> Iterator[tuple[str, 'Parameter']]:
        yield from self._mapping.get_parameters(self._id)

    def get_parameter(self, name: str) -> 'Parameter':
        return self._mapping.get_parameter(join_id(self._id, name))


class Parameter(StatefulEntity):
    """A value point of a channel, e.g. 'LEVEL' or 'ACTUAL_TEMPERATURE'."""

    state_pool = 'parameters'

    def __init__(self, mapping: 'Mapping', name: str, channel: Channel):
        super().__init__(mapping, join_id(channel.get_id(), name))
        self._name = name
        self._channel = channel

    def _state_path(self) -> list:
        return ['device', *split_id(self._channel.get_id()), self._name, '~pv']

    def get_name(self) -> str:
        return self._name

    def get_channel(self) -> Channel:
        return self._channel

    def get_type(self) -> str:
        return self._mapping.get_parameter_data(self._id)['type']

    def get_unit(self) -> str:
        return self._mapping.get_parameter_data(self._id)['unit']


class Variable(StatefulEntity):
    """A system variable of the CCU."""

    state_pool = 'variables'

    def _state_path(self) -> list:
        return ['sysvar', self._id, '~pv']

    def get_name(self) -> str:
        return self._mapping.get_variable_data(self._id)['name']

    def get_description(self) -> str:
        return self._mapping.get_variable_data(self._id)['description']

    def get_type(self) -> str:
        return self._mapping.get_variable_data(self._id)['type']

    def get_unit(self) -> str:
        return self._mapping.get_variable_data(self._id)['unit']


class Program(Entity):
    """A CCU program. Execution state is always read live from the CCU."""

    def get_name(self) -> str:
        return self._mapping.get_program_data(self._id)['name']

    def get_description(self) -> str:
        return self._mapping.get_program_data(self._id)['description']

    def is_active(self) -> bool:
        return self._mapping.get_program_data(self._id)['active']

    def is_visible(self) -> bool:
        return self._mapping.get_program_data(self._id)['visible']

    def get_last_update(self) -> datetime:
        """Get the time of the last execution."""
        result = self._mapping.connection.fetch(['program', self._id, '~pv'])
        return datetime.fromtimestamp(int(result['ts']) // 1000)

    def execute(self) -> bool:
        """Trigger the program. Returns True if the CCU confirmed it."""
        return self._mapping.connection.send(['program', self._id, '~pv'], {'v': True})
