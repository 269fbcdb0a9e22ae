"""Main memory: the lowest level of the storage hierarchy."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

from .definitions import LINE_SIZE, MEM_LINES, wrap_address
from .storage import RequestHandler, Storage


class Dram(Storage):
    """Main memory of ``MEM_LINES`` lines, each access taking ``delay`` cycles."""

    def __init__(self, delay: int) -> None:
        super().__init__(delay)
        self._data = [[0] * LINE_SIZE for _ in range(MEM_LINES)]

    def write_word(self, requester: object, data: int, address: int) -> bool:
        def handler(line: int, word: int) -> None:
            self._data[line][word] = data

        return self._process(requester, address, handler)

    def write_line(self, requester: object, line: Sequence[int], address: int) -> bool:
        values = self._as_line(line)

        def handler(row: int, word: int) -> None:
            self._data[row] = list(values)

        return self._process(requester, address, handler)

    def read_word(self, requester: object, address: int) -> Optional[int]:
        value: Optional[int] = None

        def handler(line: int, word: int) -> None:
            nonlocal value
            value = self._data[line][word]

        self._process(requester, address, handler)
        return value

    def read_line(self, requester: object, address: int) -> Optional[list[int]]:
        value: Optional[list[int]] = None

        def handler(line: int, word: int) -> None:
            nonlocal value
            value = list(self._data[line])

        self._process(requester, address, handler)
        return value

    def load(self, program: Iterable[int]) -> None:
        """Place ``program`` in memory word by word, starting at address 0."""
        for address, word in enumerate(program):
            line, offset = self._memory_index(address)
            self._data[line][offset] = word

    def _process(self, requester: object, address: int, handler: RequestHandler) -> bool:
        if not self._preprocess(requester) or not self._is_data_ready():
            return False
        handler(*self._memory_index(address))
        return True

    @staticmethod
    def _memory_index(address: int) -> tuple[int, int]:
        return divmod(wrap_address(address), LINE_SIZE)