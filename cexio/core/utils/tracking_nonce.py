import time
from typing import Optional, Union


class NonceCreator:
    """
    Produces strictly increasing nonces from the wall clock. When two nonces are requested within the same
    clock tick the previous value is bumped by one instead of being repeated.
    """

    MILLISECONDS = int(1e3)

    def __init__(self, precision: int):
        self._precision = precision
        self._last_tracking_nonce = 0

    @classmethod
    def for_milliseconds(cls) -> "NonceCreator":
        return cls(precision=cls.MILLISECONDS)

    def get_tracking_nonce(self, timestamp: Optional[Union[float, int]] = None) -> int:
        """
        :param timestamp: seconds since epoch to derive the nonce from, defaults to now
        :return: a nonce in the configured precision, greater than any nonce returned before
        """
        timestamp = timestamp if timestamp is not None else self._time()
        nonce = int(timestamp * self._precision)
        self._last_tracking_nonce = nonce if nonce > self._last_tracking_nonce else self._last_tracking_nonce + 1
        return self._last_tracking_nonce

    @staticmethod
    def _time() -> float:
        """Mocked in test cases without affecting system `time.time()`."""
        return time.time()
