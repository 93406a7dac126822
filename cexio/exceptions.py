"""
Exceptions used in the cexio client.
"""
from typing import Any, Optional


class CexioBaseException(Exception):
    """
    Most errors raised by the client inherit this class so they can be
    differentiated from errors that come from dependencies.
    """


class CexioConfigurationError(CexioBaseException):
    """
    A credential or currency pair required by the call is not configured
    """


class CexioAPIError(CexioBaseException):
    """
    The exchange answered, but the payload is missing or reports a failure.
    The decoded payload is kept in `data` for diagnostics.
    """

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.data = data


class CexioResponseFormatError(CexioBaseException):
    """
    The exchange reported success but a field the call depends on is absent
    """

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.data = data
