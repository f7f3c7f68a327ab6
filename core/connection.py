"""HTTP transport to the CCU's REST interface.

Every resource of the CCU is addressed by a path below the configured base
URL, e.g. ['device', 'ABC1234567', '1', 'LEVEL', '~pv'].
"""

import logging
from collections.abc import Sequence
from typing import Any

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.config import Configuration
from core.exceptions import TransportError

_LOGGER = logging.getLogger(__name__)

# Status codes the CCU answers a successful PUT with
CONFIRMED_STATUS_CODES = (200, 204)


class Connection:
    """Issues GET/PUT requests against the CCU and decodes the JSON answers."""

    def __init__(self, config: Configuration):
        self.config = config
        self.session = requests.Session()
        self.session.verify = config.verify_ssl
        if config.username:
            self.session.auth = (config.username, config.password or '')
        if not config.verify_ssl:
            # The CCU ships a self-signed certificate
            requests.packages.urllib3.disable_warnings(InsecureRequestWarning)

    def build_url(self, path: Sequence) -> str:
        return self.config.base_url + '/' + '/'.join(str(segment) for segment in path)

    def fetch(self, path: Sequence) -> Any:
        """GET a resource and return its decoded JSON body.

        Args:
            path: Path segments below the base URL

        Raises:
            TransportError: On a status other than 200, a connection failure
                or a body that is not valid JSON
        """
        url = self.build_url(path)
        _LOGGER.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError.request_error(url, e) from e

        if response.status_code != 200:
            raise TransportError.error_code(response.status_code, url)

        try:
            return response.json()
        except ValueError as e:
            raise TransportError.request_error(url, e) from e

    def send(self, path: Sequence, payload: Any) -> bool:
        """PUT a JSON payload to a resource.

        Args:
            path: Path segments below the base URL
            payload: JSON-serialisable body

        Returns:
            True if the CCU confirmed the write, False for any other
            success answer

        Raises:
            TransportError: On an error status or a connection failure
        """
        url = self.build_url(path)
        _LOGGER.debug("PUT %s %s", url, payload)
        try:
            response = self.session.put(url, json=payload, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError.request_error(url, e) from e

        if response.status_code >= 400:
            raise TransportError.error_code(response.status_code, url)

        return response.status_code in CONFIRMED_STATUS_CODES

    def close(self):
        self.session.close()
