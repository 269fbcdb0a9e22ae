"""A write-back, set-associative cache level with LRU replacement."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .definitions import (
    LINE_SIZE,
    LINE_SPEC,
    MEM_WORD_SPEC,
    get_ls_bits,
    get_mid_bits,
    wrap_address,
)
from .storage import RequestHandler, Storage

INT_MAX = 2**31 - 1


@dataclass
class _LineState:
    """Bookkeeping for one line of the cache."""

    tag: int = -1
    dirty: bool = False
    last_used: int = -1


class Cache(Storage):
    """A cache of ``2 ** size`` lines grouped into sets of ``2 ** ways`` lines.

    Misses are served from ``lower``; dirty victims are written back to it
    before the missing line is fetched.
    """

    def __init__(self, lower: Storage, size: int, ways: int, delay: int) -> None:
        super().__init__(delay)
        lines = 1 << size
        self._data = [[0] * LINE_SIZE for _ in range(lines)]
        self._meta = [_LineState() for _ in range(lines)]
        self._lower = lower
        self._size = size
        self._ways = ways
        self._access_num = 0

    @property
    def size(self) -> int:
        """Number of bits needed to select a line of this cache."""
        return self._size

    @property
    def ways(self) -> int:
        """Number of bits needed to select a way within a set."""
        return self._ways

    @property
    def lower(self) -> Storage:
        """The next lower level of storage."""
        return self._lower

    def write_word(self, requester: object, data: int, address: int) -> bool:
        def handler(index: int, offset: int) -> None:
            self._data[index][offset] = data
            self._meta[index].dirty = True

        return self._process(requester, address, handler)

    def write_line(self, requester: object, line: Sequence[int], address: int) -> bool:
        values = self._as_line(line)

        def handler(index: int, offset: int) -> None:
            self._data[index] = list(values)
            self._meta[index].dirty = True

        return self._process(requester, address, handler)

    def read_word(self, requester: object, address: int) -> Optional[int]:
        value: Optional[int] = None

        def handler(index: int, offset: int) -> None:
            nonlocal value
            value = self._data[index][offset]

        self._process(requester, address, handler)
        return value

    def read_line(self, requester: object, address: int) -> Optional[list[int]]:
        value: Optional[list[int]] = None

        def handler(index: int, offset: int) -> None:
            nonlocal value
            value = list(self._data[index])

        self._process(requester, address, handler)
        return value

    def _fields(self, address: int) -> tuple[int, int, int]:
        """Split ``address`` into its tag, set index and word offset."""
        split = self._size + LINE_SPEC - self._ways
        tag = get_mid_bits(address, split, MEM_WORD_SPEC)
        index = get_mid_bits(address, LINE_SPEC, split)
        offset = get_ls_bits(address, LINE_SPEC)
        return tag, index, offset

    def _process(self, requester: object, address: int, handler: RequestHandler) -> bool:
        address = wrap_address(address)
        if (
            not self._preprocess(requester)
            or self._prime(address)
            or not self._is_data_ready()
        ):
            return False

        tag, index, offset = self._fields(address)
        slot = self._search_ways_for(index, tag)
        handler(slot, offset)
        self._meta[slot].last_used = self._access_num % INT_MAX
        self._access_num += 1
        return True

    def _prime(self, address: int) -> bool:
        """Work towards having ``address`` present; return True while it is missing."""
        tag, index, _ = self._fields(address)
        slot = self._search_ways_for(index, tag)
        state = self._meta[slot]

        if state.tag == tag:
            return False

        if state.dirty:
            victim_address = (index << LINE_SPEC) + (
                state.tag << (self._size - self._ways + LINE_SPEC)
            )
            if self._lower.write_line(self, self._data[slot], victim_address):
                state.dirty = False
        else:
            line = self._lower.read_line(self, address)
            if line is not None:
                self._data[slot] = line
                state.tag = tag
        return True

    def _search_ways_for(self, index: int, tag: int) -> int:
        """Return the slot holding ``tag`` in set ``index``, or the slot to replace."""
        set_size = 1 << self._ways
        base = index * set_size
        ways = self._meta[base : base + set_size]

        for way, state in enumerate(ways):
            if state.tag == tag:
                return base + way

        choice = INT_MAX
        for way, state in enumerate(ways):
            if state.last_used < choice:
                choice = way
        return base + choice