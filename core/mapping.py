"""Mapping between ids, names and entity handles.

The Mapping is the single place that knows how to turn ids and names into
entity handles and how to fetch the data behind them. All data coming from
the CCU passes through the cache pools:

- structural data (names, types, relations) is cached for a month
- the name indexes ('namesToIds') are cached for a month
- parameter and variable values are cached for an hour (see models.entities)

On top of the cache pools the Mapping memoizes every handle it creates, so
a given id always resolves to the same handle object during a session.
"""

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from core.cache import STRUCTURE_TTL, CacheItemPool
from core.exceptions import (
    InvalidChannelError,
    InvalidDeviceError,
    InvalidFunctionError,
    InvalidParameterError,
    InvalidProgramError,
    InvalidRoomError,
    InvalidVariableError,
    TransportError,
)
from models.entities import Channel, Device, Function, Parameter, Program, Room, Variable
from models.types import (
    ChannelRecord,
    DeviceRecord,
    FunctionRecord,
    ParameterRecord,
    ProgramRecord,
    RoomRecord,
    VariableRecord,
)
from models.utils import join_id, link_target, normalize_name, split_id, strip_prefix

if TYPE_CHECKING:
    from core.cache import CacheManager
    from core.connection import Connection
    from models.translation import Translation

_LOGGER = logging.getLogger(__name__)

# Key of the name index inside the '<kind>Names' cache pools
NAMES_KEY = 'namesToIds'

# Links of a channel that point to the channel's own device or master paramset
SELF_LINKS = ('..', '$MASTER')

DEVICE_PREFIX = '/device/'


class Mapping:
    """Resolves ids and names to entity handles and fetches their data."""

    def __init__(self, connection: 'Connection', cache: 'CacheManager', translation: 'Translation'):
        self.connection = connection
        self.cache = cache
        self.translation = translation

        # Handles constructed so far
        self._devices: dict[str, Device] = {}
        self._channels: dict[str, Channel] = {}
        self._parameters: dict[str, Parameter] = {}
        self._rooms: dict[int, Room] = {}
        self._functions: dict[int, Function] = {}
        self._programs: dict[int, Program] = {}
        self._variables: dict[int, Variable] = {}

        # Relation maps, built on first access
        self._devices_to_channels: dict[str, dict[int, Channel]] = {}
        self._channels_to_parameters: dict[str, dict[str, Parameter]] = {}
        self._rooms_to_channels: dict[int, dict[str, Channel]] = {}
        self._channels_to_rooms: dict[str, dict[int, Room]] = {}
        self._functions_to_channels: dict[int, dict[str, Channel]] = {}
        self._channels_to_functions: dict[str, dict[int, Function]] = {}

        # Name indexes, loaded on first lookup
        self._device_names_to_ids: dict[str, str] | None = None
        self._channel_names_to_ids: dict[str, str] | None = None
        self._room_names_to_ids: dict[str, int] | None = None
        self._function_names_to_ids: dict[str, int] | None = None
        self._program_names_to_ids: dict[str, int] | None = None
        self._variable_names_to_ids: dict[str, int] | None = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _pool(self, name: str) -> CacheItemPool:
        return self.cache.get_item_pool(name)

    def _verify(self, loader, entity_id, error_class, identifier=None):
        """Load the data of an entity to make sure it exists.

        A 404 from the CCU is reported as the kind's NotFoundError, every
        other transport error is passed on.
        """
        try:
            return loader(entity_id)
        except TransportError as e:
            if e.status == 404:
                raise error_class(identifier or entity_id) from e
            raise

    @staticmethod
    def _links(result: dict) -> list[dict]:
        return result.get('~links', [])

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def get_room(self, room_id: int, check_existence: bool = True) -> Room:
        room_id = int(room_id)
        if room_id not in self._rooms:
            if check_existence:
                self._verify(self.get_room_data, room_id, InvalidRoomError)
            self._rooms[room_id] = Room(self, room_id)
        return self._rooms[room_id]

    def get_rooms(self) -> Iterator[tuple[int, Room]]:
        for room_id in self._fetch_room_names().values():
            yield room_id, self.get_room(room_id, False)

    def get_room_by_name(self, room_name: str) -> Room:
        names_to_ids = self._fetch_room_names()
        room_name = normalize_name(room_name)
        if room_name not in names_to_ids:
            room_name = normalize_name(self.translation.inverse_translate(room_name))
            if room_name not in names_to_ids:
                raise InvalidRoomError(room_name)
        return self.get_room(names_to_ids[room_name], False)

    def get_channels_of_room(self, room_id: int) -> Iterator[tuple[str, Channel]]:
        room_id = int(room_id)
        if room_id not in self._rooms_to_channels:
            data = self.get_room_data(room_id)
            self._rooms_to_channels[room_id] = {
                channel_id: self.get_channel(channel_id, False) for channel_id in data['channels']
            }
        yield from self._rooms_to_channels[room_id].items()

    # ------------------------------------------------------------------
    # Devices and channels
    # ------------------------------------------------------------------

    def get_device(self, device_id: str, check_existence: bool = True) -> Device:
        if device_id not in self._devices:
            if check_existence:
                self._verify(self.get_device_data, device_id, InvalidDeviceError)
            self._devices[device_id] = Device(self, device_id)
        return self._devices[device_id]

    def get_devices(self) -> Iterator[tuple[str, Device]]:
        for device_id in self._fetch_device_names().values():
            yield device_id, self.get_device(device_id, False)

    def get_device_by_name(self, device_name: str) -> Device:
        names_to_ids = self._fetch_device_names()
        device_name = normalize_name(device_name)
        if device_name not in names_to_ids:
            raise InvalidDeviceError(device_name)
        return self.get_device(names_to_ids[device_name], False)

    def get_channel(self, channel_id: str, check_existence: bool = True) -> Channel:
        if channel_id not in self._channels:
            parts = split_id(channel_id)
            if len(parts) != 2 or not all(parts):
                raise InvalidChannelError(channel_id)
            if check_existence:
                self._verify(self.get_channel_data, channel_id, InvalidChannelError)
            self._channels[channel_id] = Channel(self, channel_id, self.get_device(parts[0], False))
        return self._channels[channel_id]

    def get_channels(self, device_id: str) -> Iterator[tuple[int, Channel]]:
        """Iterate the channels of a device as (channel number, channel) pairs."""
        if device_id not in self._devices_to_channels:
            data = self.get_device_data(device_id)
            self._devices_to_channels[device_id] = {
                int(number): self.get_channel(link['id'], False)
                for number, link in data['channels'].items()
            }
        yield from self._devices_to_channels[device_id].items()

    def get_channel_by_name(self, channel_name: str) -> Channel:
        names_to_ids = self._fetch_channel_names()
        channel_name = normalize_name(channel_name)
        if channel_name not in names_to_ids:
            raise InvalidChannelError(channel_name)
        return self.get_channel(names_to_ids[channel_name], False)

    def get_rooms_of_channel(self, channel_id: str) -> Iterator[tuple[int, Room]]:
        if channel_id not in self._channels_to_rooms:
            data = self.get_channel_data(channel_id)
            self._channels_to_rooms[channel_id] = {
                room_id: self.get_room(room_id, False) for room_id in data['rooms']
            }
        yield from self._channels_to_rooms[channel_id].items()

    def get_functions_of_channel(self, channel_id: str) -> Iterator[tuple[int, Function]]:
        if channel_id not in self._channels_to_functions:
            data = self.get_channel_data(channel_id)
            self._channels_to_functions[channel_id] = {
                function_id: self.get_function(function_id, False) for function_id in data['functions']
            }
        yield from self._channels_to_functions[channel_id].items()

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def get_parameter(self, parameter_id: str, check_existence: bool = True) -> Parameter:
        if parameter_id not in self._parameters:
            parts = split_id(parameter_id)
            if len(parts) != 3 or not all(parts):
                raise InvalidParameterError(parameter_id)
            device_id, channel_number, parameter_name = parts
            channel_id = join_id(device_id, channel_number)
            if check_existence:
                data = self._verify(self.get_channel_data, channel_id, InvalidParameterError, parameter_id)
                if parameter_name not in data['parameters']:
                    raise InvalidParameterError(parameter_id)
            self._parameters[parameter_id] = Parameter(
                self, parameter_name, self.get_channel(channel_id, False)
            )
        return self._parameters[parameter_id]

    def get_parameters(self, channel_id: str) -> Iterator[tuple[str, Parameter]]:
        if channel_id not in self._channels_to_parameters:
            data = self.get_channel_data(channel_id)
            self._channels_to_parameters[channel_id] = {
                name: self.get_parameter(join_id(channel_id, name), False) for name in data['parameters']
            }
        yield from self._channels_to_parameters[channel_id].items()

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------

    def get_function(self, function_id: int, check_existence: bool = True) -> Function:
        function_id = int(function_id)
        if function_id not in self._functions:
            if check_existence:
                self._verify(self.get_function_data, function_id, InvalidFunctionError)
            self._functions[function_id] = Function(self, function_id)
        return self._functions[function_id]

    def get_functions(self) -> Iterator[tuple[int, Function]]:
        for function_id in self._fetch_function_names().values():
            yield function_id, self.get_function(function_id, False)

    def get_function_by_name(self, function_name: str) -> Function:
        names_to_ids = self._fetch_function_names()
        function_name = normalize_name(function_name)
        if function_name not in names_to_ids:
            function_name = normalize_name(self.translation.inverse_translate(function_name))
            if function_name not in names_to_ids:
                raise InvalidFunctionError(function_name)
        return self.get_function(names_to_ids[function_name], False)

    def get_channels_of_function(self, function_id: int) -> Iterator[tuple[str, Channel]]:
        function_id = int(function_id)
        if function_id not in self._functions_to_channels:
            data = self.get_function_data(function_id)
            self._functions_to_channels[function_id] = {
                channel_id: self.get_channel(channel_id, False) for channel_id in data['channels']
            }
        yield from self._functions_to_channels[function_id].items()

    # ------------------------------------------------------------------
    # Programs and variables
    # ------------------------------------------------------------------

    def get_program(self, program_id: int, check_existence: bool = True) -> Program:
        program_id = int(program_id)
        if program_id not in self._programs:
            if check_existence:
                self._verify(self.get_program_data, program_id, InvalidProgramError)
            self._programs[program_id] = Program(self, program_id)
        return self._programs[program_id]

    def get_programs(self) -> Iterator[tuple[int, Program]]:
        for program_id in self._fetch_program_names().values():
            yield program_id, self.get_program(program_id, False)

    def get_program_by_name(self, program_name: str) -> Program:
        names_to_ids = self._fetch_program_names()
        program_name = normalize_name(program_name)
        if program_name not in names_to_ids:
            raise InvalidProgramError(program_name)
        return self.get_program(names_to_ids[program_name], False)

    def get_variable(self, variable_id: int, check_existence: bool = True) -> Variable:
        variable_id = int(variable_id)
        if variable_id not in self._variables:
            if check_existence:
                self._verify(self.get_variable_data, variable_id, InvalidVariableError)
            self._variables[variable_id] = Variable(self, variable_id)
        return self._variables[variable_id]

    def get_variables(self) -> Iterator[tuple[int, Variable]]:
        for variable_id in self._fetch_variable_names().values():
            yield variable_id, self.get_variable(variable_id, False)

    def get_variable_by_name(self, variable_name: str) -> Variable:
        names_to_ids = self._fetch_variable_names()
        variable_name = normalize_name(variable_name)
        if variable_name not in names_to_ids:
            raise InvalidVariableError(variable_name)
        return self.get_variable(names_to_ids[variable_name], False)

    # ------------------------------------------------------------------
    # Structural data
    # ------------------------------------------------------------------

    def get_device_data(self, device_id: str) -> DeviceRecord:
        """Get name, type, firmware and channel list of a device."""
        cache = self._pool('deviceData')
        if cache.has(device_id):
            return cache.get(device_id)

        _LOGGER.debug("Fetching data of device %s", device_id)
        result = self.connection.fetch(['device', device_id])
        data: DeviceRecord = {
            'name': result['title'].strip(),
            'type': result['type'].strip(),
            'secured': bool(result.get('aesActive')),
            'firmware': result.get('firmware', '').strip(),
            'channels': {},
        }
        for link in self._links(result):
            if link['rel'] == 'channel':
                number = link_target(link['href'])
                data['channels'][number] = {
                    'id': join_id(device_id, number),
                    'name': link.get('title', '').strip(),
                }
        cache.save_deferred(device_id, data, STRUCTURE_TTL)
        return data

    def get_channel_data(self, channel_id: str) -> ChannelRecord:
        """Get name, rooms, functions and parameter names of a channel."""
        cache = self._pool('channelData')
        if cache.has(channel_id):
            return cache.get(channel_id)

        _LOGGER.debug("Fetching data of channel %s", channel_id)
        result = self.connection.fetch(['device', *split_id(channel_id)])
        data: ChannelRecord = {
            'name': result['title'].strip(),
            'rooms': [],
            'functions': [],
            'parameters': [],
        }
        for link in self._links(result):
            if link['href'] in SELF_LINKS:
                continue
            if link['rel'] == 'room':
                data['rooms'].append(int(link_target(link['href'])))
            elif link['rel'] == 'function':
                data['functions'].append(int(link_target(link['href'])))
            elif link['rel'] == 'parameter':
                data['parameters'].append(link_target(link['href']))
        cache.save_deferred(channel_id, data, STRUCTURE_TTL)
        return data

    def _get_channel_group_data(self, kind: str, group_id: int) -> dict:
        """Fetch a room or function; both list their channels as links."""
        cache = self._pool(f'{kind}Data')
        if cache.has(group_id):
            return cache.get(group_id)

        _LOGGER.debug("Fetching data of %s %s", kind, group_id)
        result = self.connection.fetch([kind, group_id])
        data = {
            'name': result['title'].strip(),
            'description': result.get('description', '').strip(),
            'channels': [
                strip_prefix(link['href'], DEVICE_PREFIX)
                for link in self._links(result) if link['rel'] == 'channel'
            ],
        }
        cache.save_deferred(group_id, data, STRUCTURE_TTL)
        return data

    def get_room_data(self, room_id: int) -> RoomRecord:
        """Get name, description and channel ids of a room."""
        return self._get_channel_group_data('room', room_id)

    def get_function_data(self, function_id: int) -> FunctionRecord:
        """Get name, description and channel ids of a function."""
        return self._get_channel_group_data('function', function_id)

    def get_parameter_data(self, parameter_id: str) -> ParameterRecord:
        """Get name, data type and unit of a parameter."""
        cache = self._pool('parameterData')
        if cache.has(parameter_id):
            return cache.get(parameter_id)

        result = self.connection.fetch(['device', *split_id(parameter_id)])
        data: ParameterRecord = {
            'name': result['title'].strip(),
            'type': result.get('type', '').strip(),
            'unit': result.get('unit', '').strip(),
        }
        cache.save_deferred(parameter_id, data, STRUCTURE_TTL)
        return data

    def get_program_data(self, program_id: int) -> ProgramRecord:
        cache = self._pool('programData')
        if cache.has(program_id):
            return cache.get(program_id)

        result = self.connection.fetch(['program', program_id])
        data: ProgramRecord = {
            'name': result['title'].strip(),
            'description': result.get('description', '').strip(),
            'active': bool(result.get('active')),
            'visible': bool(result.get('visible')),
        }
        cache.save_deferred(program_id, data, STRUCTURE_TTL)
        return data

    def get_variable_data(self, variable_id: int) -> VariableRecord:
        cache = self._pool('variableData')
        if cache.has(variable_id):
            return cache.get(variable_id)

        result = self.connection.fetch(['sysvar', variable_id])
        data: VariableRecord = {
            'name': result['title'].strip(),
            'description': result.get('description', '').strip(),
            'type': result.get('type', '').strip(),
            'unit': result.get('unit', '').strip(),
        }
        cache.save_deferred(variable_id, data, STRUCTURE_TTL)
        return data

    # ------------------------------------------------------------------
    # Name indexes
    # ------------------------------------------------------------------

    def _load_names(self, pool_name: str, build) -> dict:
        """Return a name index from its cache pool, building it on a miss."""
        cache = self._pool(pool_name)
        if not cache.has(NAMES_KEY):
            _LOGGER.debug("Building name index %s", pool_name)
            cache.save(NAMES_KEY, build(), STRUCTURE_TTL)
        return cache.get(NAMES_KEY)

    def _index_collection(self, collection: str, rel: str, convert=str) -> dict:
        """Map the names of all links of a collection resource to their ids."""
        result = self.connection.fetch([collection])
        return {
            normalize_name(link.get('title', '')): convert(link_target(link['href']))
            for link in self._links(result) if link['rel'] == rel
        }

    def _fetch_room_names(self) -> dict[str, int]:
        if self._room_names_to_ids is None:
            self._room_names_to_ids = self._load_names(
                'roomNames', lambda: self._index_collection('room', 'room', int)
            )
        return self._room_names_to_ids

    def _fetch_device_names(self) -> dict[str, str]:
        if self._device_names_to_ids is None:
            self._device_names_to_ids = self._load_names(
                'deviceNames', lambda: self._index_collection('device', 'device')
            )
        return self._device_names_to_ids

    def _fetch_channel_names(self) -> dict[str, str]:
        # Channels have no collection resource, so walk all devices
        def build():
            names_to_ids = {}
            for device_id in self._fetch_device_names().values():
                for link in self.get_device_data(device_id)['channels'].values():
                    names_to_ids[normalize_name(link['name'])] = link['id']
            return names_to_ids

        if self._channel_names_to_ids is None:
            self._channel_names_to_ids = self._load_names('channelNames', build)
        return self._channel_names_to_ids

    def _fetch_function_names(self) -> dict[str, int]:
        if self._function_names_to_ids is None:
            self._function_names_to_ids = self._load_names(
                'functionNames', lambda: self._index_collection('function', 'function', int)
            )
        return self._function_names_to_ids

    def _fetch_program_names(self) -> dict[str, int]:
        if self._program_names_to_ids is None:
            self._program_names_to_ids = self._load_names(
                'programNames', lambda: self._index_collection('program', 'program', int)
            )
        return self._program_names_to_ids

    def _fetch_variable_names(self) -> dict[str, int]:
        if self._variable_names_to_ids is None:
            self._variable_names_to_ids = self._load_names(
                'variableNames', lambda: self._index_collection('sysvar', 'sysvar', int)
            )
        return self._variable_names_to_ids

    def get_names(self, kind: str) -> list[str]:
        """Return the normalised names of all entities of a kind.

        Used to suggest similar names when a lookup fails.
        """
        fetchers = {
            'device': self._fetch_device_names,
            'channel': self._fetch_channel_names,
            'room': self._fetch_room_names,
            'function': self._fetch_function_names,
            'program': self._fetch_program_names,
            'variable': self._fetch_variable_names,
        }
        return list(fetchers[kind]())
