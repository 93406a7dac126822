from cexio.connector.cexio_client import CexioClient
from cexio.connector.cexio_utils import CexioConfigMap, format_decimal, parse_numeric_strings
from cexio.core.utils.async_retry import AllTriesFailedException, RetryPolicy
from cexio.exceptions import (
    CexioAPIError,
    CexioBaseException,
    CexioConfigurationError,
    CexioResponseFormatError,
)

__version__ = "1.0.0"

__all__ = [
    "AllTriesFailedException",
    "CexioAPIError",
    "CexioBaseException",
    "CexioClient",
    "CexioConfigMap",
    "CexioConfigurationError",
    "CexioResponseFormatError",
    "RetryPolicy",
    "format_decimal",
    "parse_numeric_strings",
]
