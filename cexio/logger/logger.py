import logging
from logging import Logger as PythonLogger

NETWORK = logging.DEBUG + 6


class CexioLogger(PythonLogger):
    def __init__(self, name: str):
        super().__init__(name)

    def network(self, log_msg: str, *args, **kwargs):
        self.log(NETWORK, log_msg, *args, **kwargs)
