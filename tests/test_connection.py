"""Tests for the HTTP transport in core/connection.py

The requests session is replaced by a MagicMock; no request leaves the
test process.
"""

from unittest.mock import MagicMock

import pytest
import requests

from core.config import Configuration
from core.connection import Connection
from core.exceptions import TransportError

BASE_URL = 'https://ccu.test:2122'


def make_response(status_code, body=None):
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def connection():
    conn = Connection(Configuration(base_url=BASE_URL + '/', timeout=2.0, cache_dir=None))
    conn.session = MagicMock()
    return conn


class TestSession:

    def test_unverified_by_default(self):
        conn = Connection(Configuration(cache_dir=None))
        assert conn.session.verify is False
        assert conn.session.auth is None

    def test_basic_auth(self):
        conn = Connection(Configuration(username='admin', password='secret', cache_dir=None))
        assert conn.session.auth == ('admin', 'secret')

    def test_build_url(self, connection):
        assert connection.build_url(['device', 'ABC1234567', 1]) == f'{BASE_URL}/device/ABC1234567/1'


class TestFetch:

    def test_success(self, connection):
        connection.session.get.return_value = make_response(200, {'title': 'Hall'})

        assert connection.fetch(['room', 1235]) == {'title': 'Hall'}
        connection.session.get.assert_called_once_with(f'{BASE_URL}/room/1235', timeout=2.0)

    @pytest.mark.parametrize('status', [204, 401, 404, 500])
    def test_other_status(self, connection, status):
        connection.session.get.return_value = make_response(status)

        with pytest.raises(TransportError) as error:
            connection.fetch(['room', 1])

        assert error.value.status == status
        assert error.value.code == TransportError.ERROR_CODE
        assert error.value.url == f'{BASE_URL}/room/1'
        assert str(status) in str(error.value)

    def test_connection_failure(self, connection):
        cause = requests.exceptions.ConnectionError('refused')
        connection.session.get.side_effect = cause

        with pytest.raises(TransportError) as error:
            connection.fetch(['device'])

        assert error.value.code == TransportError.REQUEST_ERROR
        assert error.value.status is None
        assert error.value.__cause__ is cause

    def test_invalid_json(self, connection):
        connection.session.get.return_value = make_response(200, ValueError('no json'))

        with pytest.raises(TransportError) as error:
            connection.fetch(['device'])
        assert error.value.code == TransportError.REQUEST_ERROR


class TestSend:

    @pytest.mark.parametrize('status, confirmed', [(200, True), (204, True), (202, False), (302, False)])
    def test_status(self, connection, status, confirmed):
        connection.session.put.return_value = make_response(status)
        assert connection.send(['sysvar', 950, '~pv'], {'v': True}) is confirmed

    def test_payload_as_json(self, connection):
        connection.session.put.return_value = make_response(200)

        connection.send(['program', 1500, '~pv'], {'v': True})

        connection.session.put.assert_called_once_with(
            f'{BASE_URL}/program/1500/~pv', json={'v': True}, timeout=2.0
        )

    @pytest.mark.parametrize('status', [400, 403, 500])
    def test_error_status(self, connection, status):
        connection.session.put.return_value = make_response(status)

        with pytest.raises(TransportError) as error:
            connection.send(['sysvar', 950, '~pv'], {'v': True})
        assert error.value.status == status

    def test_timeout(self, connection):
        connection.session.put.side_effect = requests.exceptions.Timeout()

        with pytest.raises(TransportError) as error:
            connection.send(['sysvar', 950, '~pv'], {'v': True})
        assert isinstance(error.value.__cause__, requests.exceptions.Timeout)
