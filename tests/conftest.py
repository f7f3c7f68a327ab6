"""Pytest configuration and fixtures for CCU client tests.

The fixtures serve a small CCU through a MagicMock connection: one
thermostat in the kitchen, one switch in the hall, a program and a system
variable. Resources follow the REST layout of the CCU, links included.
"""

import copy
from unittest.mock import MagicMock

import pytest

from core.cache import CacheManager
from core.config import Configuration
from core.connection import Connection
from core.controller import Controller
from core.exceptions import TransportError
from core.mapping import Mapping
from models.translation import EnglishTranslation

BASE_URL = 'https://ccu.test:2122'

THERMOSTAT_ID = 'ABC1234567'
SWITCH_ID = 'XYZ0000001'

CCU_RESOURCES = {
    'device': {
        '~links': [
            {'rel': 'device', 'href': THERMOSTAT_ID, 'title': 'Thermostat Kitchen'},
            {'rel': 'device', 'href': SWITCH_ID, 'title': 'Switch Hall'},
            {'rel': 'root', 'href': '..', 'title': 'Root'},
        ],
    },
    f'device/{THERMOSTAT_ID}': {
        'title': ' Thermostat Kitchen ',
        'type': 'HmIP-eTRV-2',
        'aesActive': 1,
        'firmware': '2.2.8 ',
        '~links': [
            {'rel': 'channel', 'href': '0', 'title': 'Thermostat Kitchen:0'},
            {'rel': 'channel', 'href': '1', 'title': 'Thermostat Kitchen:1'},
            {'rel': 'collection', 'href': '..', 'title': 'Devices'},
        ],
    },
    f'device/{SWITCH_ID}': {
        'title': 'Switch Hall',
        'type': 'HmIP-BSM',
        'aesActive': 0,
        'firmware': '1.6.2',
        '~links': [
            {'rel': 'channel', 'href': '3', 'title': 'Hall light'},
        ],
    },
    f'device/{THERMOSTAT_ID}/0': {
        'title': 'Thermostat Kitchen:0',
        '~links': [
            {'rel': 'device', 'href': '..', 'title': 'Thermostat Kitchen'},
            {'rel': 'parameter', 'href': 'UNREACH', 'title': 'UNREACH'},
        ],
    },
    f'device/{THERMOSTAT_ID}/1': {
        'title': 'Thermostat Kitchen:1',
        '~links': [
            {'rel': 'device', 'href': '..', 'title': 'Thermostat Kitchen'},
            {'rel': 'parameter', 'href': 'ACTUAL_TEMPERATURE', 'title': 'ACTUAL_TEMPERATURE'},
            {'rel': 'parameter', 'href': 'SET_POINT_TEMPERATURE', 'title': 'SET_POINT_TEMPERATURE'},
            {'rel': 'paramset', 'href': '$MASTER', 'title': 'Paramset MASTER'},
            {'rel': 'room', 'href': '/room/1234', 'title': 'roomKitchen'},
            {'rel': 'function', 'href': '/function/3', 'title': 'funcHeating'},
        ],
    },
    f'device/{SWITCH_ID}/3': {
        'title': 'Hall light',
        '~links': [
            {'rel': 'parameter', 'href': 'STATE', 'title': 'STATE'},
            {'rel': 'room', 'href': '/room/1235', 'title': 'Hall'},
            {'rel': 'function', 'href': '/function/4', 'title': 'Light'},
        ],
    },
    f'device/{THERMOSTAT_ID}/1/ACTUAL_TEMPERATURE': {
        'title': 'ACTUAL_TEMPERATURE', 'type': 'FLOAT', 'unit': '°C',
    },
    f'device/{THERMOSTAT_ID}/1/SET_POINT_TEMPERATURE': {
        'title': 'SET_POINT_TEMPERATURE', 'type': 'FLOAT', 'unit': '°C',
    },
    f'device/{THERMOSTAT_ID}/1/ACTUAL_TEMPERATURE/~pv': {'v': 21.5, 'ts': 1700000000000, 's': 0},
    f'device/{THERMOSTAT_ID}/1/SET_POINT_TEMPERATURE/~pv': {'v': 20.0, 'ts': 1700000000000, 's': 0},
    f'device/{SWITCH_ID}/3/STATE': {'title': 'STATE', 'type': 'BOOL', 'unit': ''},
    f'device/{SWITCH_ID}/3/STATE/~pv': {'v': False, 'ts': 1700000100000, 's': 0},
    'room': {
        '~links': [
            {'rel': 'room', 'href': '1234', 'title': 'roomKitchen'},
            {'rel': 'room', 'href': '1235', 'title': 'Hall'},
            {'rel': 'root', 'href': '..', 'title': 'Root'},
        ],
    },
    'room/1234': {
        'title': 'roomKitchen',
        'description': ' Ground floor ',
        '~links': [
            {'rel': 'channel', 'href': f'/device/{THERMOSTAT_ID}/1', 'title': 'Thermostat Kitchen:1'},
            {'rel': 'collection', 'href': '..', 'title': 'Rooms'},
        ],
    },
    'room/1235': {
        'title': 'Hall',
        'description': '',
        '~links': [
            {'rel': 'channel', 'href': f'/device/{SWITCH_ID}/3', 'title': 'Hall light'},
        ],
    },
    'function': {
        '~links': [
            {'rel': 'function', 'href': '3', 'title': 'funcHeating'},
            {'rel': 'function', 'href': '4', 'title': 'Light'},
        ],
    },
    'function/3': {
        'title': 'funcHeating',
        'description': 'Radiators',
        '~links': [
            {'rel': 'channel', 'href': f'/device/{THERMOSTAT_ID}/1', 'title': 'Thermostat Kitchen:1'},
        ],
    },
    'function/4': {
        'title': 'Light',
        'description': '',
        '~links': [
            {'rel': 'channel', 'href': f'/device/{SWITCH_ID}/3', 'title': 'Hall light'},
        ],
    },
    'program': {
        '~links': [
            {'rel': 'program', 'href': '1500', 'title': 'All lights off'},
            {'rel': 'program', 'href': '1501', 'title': 'Internal cleanup'},
        ],
    },
    'program/1500': {'title': 'All lights off ', 'description': 'Evening', 'active': True, 'visible': True},
    'program/1501': {'title': 'Internal cleanup', 'description': '', 'active': False, 'visible': False},
    'program/1500/~pv': {'v': False, 'ts': 1700000200000},
    'sysvar': {
        '~links': [
            {'rel': 'sysvar', 'href': '950', 'title': 'Presence'},
        ],
    },
    'sysvar/950': {'title': 'Presence', 'description': 'Someone at home', 'type': 'BOOL', 'unit': ''},
    'sysvar/950/~pv': {'v': True, 'ts': 1700000300000},
}


@pytest.fixture
def ccu_resources():
    """A private copy of the fake CCU, so tests can change resources."""
    return copy.deepcopy(CCU_RESOURCES)


@pytest.fixture
def connection(ccu_resources):
    """A connection answering from ccu_resources; unknown paths give a 404."""
    conn = MagicMock(spec=Connection)

    def fetch(path):
        key = '/'.join(str(segment) for segment in path)
        if key not in ccu_resources:
            raise TransportError.error_code(404, f'{BASE_URL}/{key}')
        return copy.deepcopy(ccu_resources[key])

    conn.fetch.side_effect = fetch
    conn.send.return_value = True
    return conn


@pytest.fixture
def fetched_paths(connection):
    """Return a function listing the resource paths fetched so far."""
    def paths() -> list[str]:
        return ['/'.join(str(s) for s in call.args[0]) for call in connection.fetch.call_args_list]
    return paths


@pytest.fixture
def cache_manager():
    """Cache pools kept in memory only."""
    return CacheManager()


@pytest.fixture
def mapping(connection, cache_manager):
    return Mapping(connection, cache_manager, EnglishTranslation())


@pytest.fixture
def controller(connection, cache_manager):
    return Controller(Configuration(base_url=BASE_URL, cache_dir=None),
                      connection=connection, cache_manager=cache_manager)
