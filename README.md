# memsim

memsim is a small, cycle-accurate model of a memory hierarchy. It has a main
memory (`memsim.dram.Dram`). Any number of set-associative, write-back caches
(`memsim.cache.Cache`) can be stacked on top of it. Every access takes a
configurable number of cycles. Each level serves only one requester at a time.

## Address space

The constants live in `memsim.definitions`.

- Addresses are 14 bits wide (`MEM_WORD_SPEC`), which gives 16384 words
  (`MEM_WORDS`).
- Addresses outside that range wrap around, and negative addresses wrap as
  well. See `wrap_address`.
- A line holds 4 words (`LINE_SIZE`), so 2 bits (`LINE_SPEC`) select the word
  within a line.

The module also provides the bit-field helpers `get_ls_bits(k, n)` and
`get_mid_bits(k, m, n)`:

- `get_ls_bits(k, n)` returns the `n` lowest bits of `k`.
- `get_mid_bits(k, m, n)` returns bits `m` up to, but not including, `n`.

## Access model

Every level is a `memsim.storage.Storage` and offers the same four methods:

- `write_word(requester, data, address)` returns `True` once the write is done.
- `write_line(requester, line, address)` writes the 4-word line that contains
  `address`. It returns `True` once done. The line must hold exactly 4 words,
  otherwise `ValueError` is raised.
- `read_word(requester, address)` returns the word, or `None` while the
  request is pending.
- `read_line(requester, address)` returns the line as a list, or `None` while
  the request is pending.

Call the method once per simulated cycle. Repeat the same call on later cycles
until it completes.

The requester can be any object except `None`. Passing `None` raises
`ValueError`. The first requester to reach a level owns it until its request
completes. Other requesters are turned away until then.

```python
from memsim.dram import Dram
from memsim.cache import Cache

cpu = object()

# 2**5 lines in the cache, direct-mapped (0 way bits), 2-cycle latency,
# backed by a main memory with a 4-cycle latency.
cache = Cache(Dram(4), 5, 0, 2)

while not cache.write_word(cpu, 0x11223344, 0):
    pass  # one simulated cycle per call

while (value := cache.read_word(cpu, 0)) is None:
    pass

assert value == 0x11223344
```

The following are available on every level:

- `get_data()` returns a copy of the level's lines as lists of words.
- `delay` gives the number of cycles each access takes.

## Caches

The constructor is `Cache(lower, size, ways, delay)`:

- `lower` is the next level down. It can be another `Cache` or a `Dram`.
- `size` is the number of bits that select a line. The cache holds
  `2**size` lines.
- `ways` is the number of bits that select a way within a set. Each set has
  `2**ways` lines.
- `delay` is the number of cycles each access takes once the line is present.

On a miss, the cache replaces the least recently used line of the set. If that
line is dirty, it is first written back to `lower`. The missing line is then
fetched from `lower`, with the cache itself as the requester there. Writes only
mark the line dirty and do not go down to `lower` straight away.

The constructor arguments can be read back through the `lower`, `size` and
`ways` properties.

## Main memory

`Dram(delay)` holds the whole address space, zero-filled.
`Dram.load(program)` places an iterable of words in memory starting at
address 0. It does this at once, without taking any cycles.

## What it does not do

memsim is a library only. It has no command-line program. It cannot read
programs or memory images from files: `Dram.load` takes words already in
memory. Nothing drives the simulation clock for you. The caller advances
cycles by repeating its requests.

## Tests

```
pip install -e .[test]
pytest
```