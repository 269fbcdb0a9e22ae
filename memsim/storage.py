"""Common request protocol shared by every level of simulated storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Optional

from .definitions import LINE_SIZE

RequestHandler = Callable[[int, int], None]


class Storage(ABC):
    """A storage device that serves one requester at a time with a fixed delay.

    A request is retried every cycle by calling the same access method again.
    Until the device is free and ``delay`` cycles have passed, the call reports
    that the request is not complete.
    """

    def __init__(self, delay: int) -> None:
        self._data: list[list[int]] = []
        self._delay = delay
        self._current_request: Optional[object] = None
        self._wait_time = delay

    @property
    def delay(self) -> int:
        """Number of cycles each access takes."""
        return self._delay

    @abstractmethod
    def write_word(self, requester: object, data: int, address: int) -> bool:
        """Write ``data`` at ``address``; return True once the request completes."""

    @abstractmethod
    def write_line(self, requester: object, line: Sequence[int], address: int) -> bool:
        """Write a whole line containing ``address``; return True once complete."""

    @abstractmethod
    def read_word(self, requester: object, address: int) -> Optional[int]:
        """Return the word at ``address``, or None while the request is pending."""

    @abstractmethod
    def read_line(self, requester: object, address: int) -> Optional[list[int]]:
        """Return the line containing ``address``, or None while pending."""

    def get_data(self) -> list[list[int]]:
        """Return a copy of the lines held by this device."""
        return [list(line) for line in self._data]

    @abstractmethod
    def _process(self, requester: object, address: int, handler: RequestHandler) -> bool:
        """Advance ``requester``'s request and call ``handler`` when it completes."""

    def _preprocess(self, requester: object) -> bool:
        """Claim the device for ``requester`` if free; return whether it owns it."""
        if requester is None:
            raise ValueError("Accessor cannot be None.")
        if self._current_request is None:
            self._current_request = requester
        return self._current_request is requester

    def _is_data_ready(self) -> bool:
        """Count down one cycle; on completion release the device and return True."""
        if self._wait_time == 0:
            self._current_request = None
            self._wait_time = self._delay
            return True
        self._wait_time -= 1
        return False

    @staticmethod
    def _as_line(line: Sequence[int]) -> list[int]:
        values = list(line)
        if len(values) != LINE_SIZE:
            raise ValueError(f"A line must hold exactly {LINE_SIZE} words, got {len(values)}.")
        return values