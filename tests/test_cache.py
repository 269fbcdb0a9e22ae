from dataclasses import dataclass, field

import pytest

from memsim.cache import Cache
from memsim.definitions import MEM_WORDS
from memsim.dram import Dram

W = 0x11223344


@dataclass
class Rig:
    cache: Cache
    m_delay: int = 4
    c_delay: int = 2
    mem: object = field(default_factory=object)
    fetch: object = field(default_factory=object)
    expected: list = field(default_factory=lambda: [0, 0, 0, 0])

    def wait_then_do(self, steps, action):
        for _ in range(steps):
            assert action() is False
            assert self.cache.get_data()[0] == self.expected


@pytest.fixture
def c11():
    return Rig(cache=Cache(Dram(4), 5, 0, 2))


@pytest.fixture
def c21():
    c2 = Cache(Dram(4), 7, 0, 2)
    rig = Rig(cache=Cache(c2, 5, 0, 2))
    return rig, c2


def drive(action, limit=100):
    for _ in range(limit):
        result = action()
        if result is not None and result is not False:
            return result
    raise AssertionError("request never completed")


def test_store_0th_element(c11):
    assert c11.cache.get_data()[0] == c11.expected
    c11.wait_then_do(
        c11.m_delay + c11.c_delay + 1,
        lambda: c11.cache.write_word(c11.mem, W, 0b0),
    )
    assert c11.cache.write_word(c11.mem, W, 0b0) is True
    c11.expected[0] = W
    assert c11.cache.get_data()[0] == c11.expected


def test_store_0th_1st_with_conflict(c11):
    c = c11.cache
    for _ in range(c11.m_delay + c11.c_delay + 1):
        assert c.write_word(c11.mem, W, 0b0) is False
        assert c.write_word(c11.fetch, W, 0b1) is False
        assert c.get_data()[0] == c11.expected

    assert c.write_word(c11.mem, W, 0b0) is True
    c11.expected[0] = W
    assert c.get_data()[0] == c11.expected

    c11.wait_then_do(c11.c_delay, lambda: c.write_word(c11.fetch, W, 0b1))
    assert c.write_word(c11.fetch, W, 0b1) is True
    c11.expected[1] = W
    assert c.get_data()[0] == c11.expected


def test_store_different_tags_no_conflict(c11):
    c = c11.cache
    c11.wait_then_do(
        c11.m_delay + c11.c_delay + 1, lambda: c.write_word(c11.mem, W, 0b0)
    )
    assert c.write_word(c11.mem, W, 0b0) is True
    c11.expected[0] = W
    assert c.get_data()[0] == c11.expected

    # write back, then fetch the new line
    c11.wait_then_do(
        c11.m_delay + c11.m_delay + 1,
        lambda: c.write_word(c11.fetch, W, 0b10000001),
    )
    assert c.write_word(c11.fetch, W, 0b10000001) is False
    c11.expected[0] = 0
    assert c.get_data()[0] == c11.expected

    c11.wait_then_do(c11.c_delay, lambda: c.write_word(c11.fetch, W, 0b10000001))
    assert c.write_word(c11.fetch, W, 0b10000001) is True
    c11.expected[0] = 0
    c11.expected[1] = W
    assert c.get_data()[0] == c11.expected


def test_two_level_evict_to_level_2(c21):
    rig, c2 = c21
    c = rig.cache
    rig.wait_then_do(
        rig.m_delay + rig.c_delay * 2 + 2,
        lambda: c.write_word(rig.mem, W, 0b10000000),
    )
    assert c.write_word(rig.mem, W, 0b10000000) is True

    # write-back: level 2 untouched
    assert c2.get_data()[32] == rig.expected
    rig.expected[0] = W
    assert c.get_data()[0] == rig.expected

    # evict
    rig.wait_then_do(rig.c_delay + 1, lambda: c.write_word(rig.mem, W, 0b110000000))
    assert c2.get_data()[32] == rig.expected

    # read in line
    rig.wait_then_do(
        rig.m_delay + rig.c_delay + 1,
        lambda: c.write_word(rig.mem, W, 0b110000000),
    )

    rig.expected[0] = 0
    rig.wait_then_do(rig.c_delay + 1, lambda: c.write_word(rig.mem, W, 0b110000000))
    assert c.write_word(rig.mem, W, 0b110000000) is True

    assert c2.get_data()[96] == rig.expected
    rig.expected[0] = W
    assert c2.get_data()[32] == rig.expected
    assert c.get_data()[0] == rig.expected


def test_read_word_after_write():
    cache = Cache(Dram(0), 5, 0, 0)
    me = object()
    assert drive(lambda: cache.write_word(me, 42, 5)) is True
    assert drive(lambda: cache.read_word(me, 5)) == 42


def test_read_line_from_loaded_memory():
    dram = Dram(1)
    dram.load([10, 11, 12, 13, 14, 15, 16, 17])
    cache = Cache(dram, 5, 0, 1)
    me = object()
    assert drive(lambda: cache.read_line(me, 6)) == [14, 15, 16, 17]
    assert drive(lambda: cache.read_word(me, 1)) == 11


def test_dirty_line_written_back_to_memory():
    dram = Dram(0)
    cache = Cache(dram, 5, 0, 0)
    me = object()
    drive(lambda: cache.write_line(me, [1, 2, 3, 4], 0))
    assert dram.get_data()[0] == [0, 0, 0, 0]
    drive(lambda: cache.write_word(me, 9, 128))
    assert dram.get_data()[0] == [1, 2, 3, 4]
    assert cache.get_data()[0] == [9, 0, 0, 0]


def test_negative_address_wraps():
    cache = Cache(Dram(0), 5, 0, 0)
    me = object()
    drive(lambda: cache.write_word(me, 7, -1))
    assert drive(lambda: cache.read_word(me, MEM_WORDS - 1)) == 7


def test_two_way_set_keeps_both_tags():
    dram = Dram(0)
    cache = Cache(dram, 3, 1, 0)
    me = object()
    drive(lambda: cache.write_word(me, 1, 0))
    drive(lambda: cache.write_word(me, 2, 64))
    assert drive(lambda: cache.read_word(me, 0)) == 1
    assert drive(lambda: cache.read_word(me, 64)) == 2
    assert dram.get_data()[0] == [0, 0, 0, 0]


def test_cache_holds_two_to_the_size_lines():
    cache = Cache(Dram(1), 5, 0, 1)
    assert cache.size == 5
    assert len(cache.get_data()) == 32


def test_none_requester_rejected():
    cache = Cache(Dram(1), 5, 0, 1)
    with pytest.raises(ValueError):
        cache.write_word(None, 1, 0)


def test_line_of_wrong_length_rejected():
    cache = Cache(Dram(1), 5, 0, 1)
    with pytest.raises(ValueError):
        cache.write_line(object(), [1, 2, 3], 0)