"""Exception types raised by the CCU client.

All errors derive from HmIpError so callers can catch everything coming
out of the library with a single except clause.
"""


class HmIpError(Exception):
    """Base class for all errors of the CCU client."""

    code = 0

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class TransportError(HmIpError):
    """A request to the CCU failed (bad status code or connection problem)."""

    ERROR_CODE = 1
    REQUEST_ERROR = 2

    def __init__(self, message: str, code: int, url: str, status: int | None = None):
        super().__init__(message, code)
        self.url = url
        self.status = status

    @classmethod
    def error_code(cls, status: int, url: str) -> 'TransportError':
        """The CCU answered with a non-success HTTP status."""
        return cls(f'error with no. {status} occurred on call of "{url}"', cls.ERROR_CODE, url, status)

    @classmethod
    def request_error(cls, url: str, cause: Exception | None = None) -> 'TransportError':
        """The request could not be completed at all.

        The originating exception is attached as __cause__.
        """
        error = cls(f'error on call of "{url}"', cls.REQUEST_ERROR, url)
        error.__cause__ = cause
        return error


class CacheError(HmIpError):
    """A cache pool was used with an invalid key or holds corrupt data."""


class NotFoundError(HmIpError):
    """An entity id or name could not be resolved."""

    kind = 'entity'

    def __init__(self, identifier):
        super().__init__(f'invalid {self.kind} "{identifier}"')
        self.identifier = identifier


class InvalidRoomError(NotFoundError):
    kind = 'room'
    code = 1


class InvalidDeviceError(NotFoundError):
    kind = 'device'
    code = 2


class InvalidChannelError(NotFoundError):
    kind = 'channel'
    code = 3


class InvalidParameterError(NotFoundError):
    kind = 'parameter'
    code = 4


class InvalidFunctionError(NotFoundError):
    kind = 'function'
    code = 5


class InvalidProgramError(NotFoundError):
    kind = 'program'
    code = 6


class InvalidVariableError(NotFoundError):
    kind = 'variable'
    code = 7
