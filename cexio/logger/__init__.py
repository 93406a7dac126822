import logging

from .logger import NETWORK, CexioLogger

__all__ = [
    "CexioLogger",
    "NETWORK",
]

logging.addLevelName(NETWORK, "NETWORK")
logging.setLoggerClass(CexioLogger)
