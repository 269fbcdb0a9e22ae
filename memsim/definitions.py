"""Geometry of the simulated memory and bit-field helpers."""

LINE_SPEC = 2
"""Number of bits that select a word within a line."""

LINE_SIZE = 1 << LINE_SPEC
"""Number of words in a line."""

WORD_SPEC = 32
"""Number of bits in a word."""

MEM_WORD_SPEC = 14
"""Number of bits that address a word of memory."""

MEM_LINE_SPEC = MEM_WORD_SPEC - LINE_SPEC
"""Number of bits that address a line of memory."""

MEM_WORDS = 1 << MEM_WORD_SPEC
"""Total number of words in memory."""

MEM_LINES = 1 << MEM_LINE_SPEC
"""Total number of lines in memory."""


def get_ls_bits(k: int, n: int) -> int:
    """Return the ``n`` least-significant bits of ``k``."""
    return k & ((1 << n) - 1)


def get_mid_bits(k: int, m: int, n: int) -> int:
    """Return the bits of ``k`` from bit ``m`` (inclusive) up to bit ``n`` (exclusive)."""
    return get_ls_bits(k >> m, n - m)


def wrap_address(address: int) -> int:
    """Wrap ``address`` into the range ``[0, MEM_WORDS)``."""
    return address % MEM_WORDS