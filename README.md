# vmsim

A small virtual memory simulator. It maps a 20-bit virtual address space onto
a 1024-word RAM through a hierarchical page table. Pages are 16 words long,
and each level of the table uses a 4-bit index. When RAM is full, a page is
evicted to a swap store. It is brought back when it is next touched.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Usage

```python
from vmsim.physical_memory import PhysicalMemory
from vmsim.virtual_memory import VirtualMemory, AddressOutOfRangeError

ram = PhysicalMemory()
vm = VirtualMemory(ram)
vm.initialize()

vm.write(5 * 16, 42)
assert vm.read(5 * 16) == 42

try:
    vm.read(1 << 20)
except AddressOutOfRangeError:
    print("address outside the virtual address space")
```

### `vmsim.physical_memory`

This module defines the size constants: `PAGE_SIZE`, `RAM_SIZE`,
`NUM_FRAMES`, `NUM_PAGES`, `VIRTUAL_MEMORY_SIZE`, `TABLES_DEPTH` and the
others. `PhysicalMemory` holds the frames of RAM and a swap store.

- `read(address)` returns a single word by its physical address.
- `write(address, value)` stores a single word by its physical address. Values
  are truncated to signed 32-bit words. Both methods raise `IndexError` when
  the address is outside RAM.
- `evict(frame_index, page_index)` copies a frame to the swap store under the
  given page index and increments `eviction_count`. It raises `ValueError` if
  that page is already swapped out. It raises `IndexError` if the frame or
  page index is out of range.
- `restore(frame_index, page_index)` moves a swapped page back into a frame.
  If the page is not in the swap store, the frame is left unchanged.
- `dump()` returns every word of RAM in address order.
- `print_ram(file=None)` writes one `address: value` line per word, to
  standard output by default.
- `print_eviction_counter(file=None)` writes the eviction count, to standard
  output by default.

### `vmsim.virtual_memory`

`VirtualMemory(physical=None)` creates a fresh `PhysicalMemory` if none is
given. Its methods:

- `initialize()` clears the root page table.
- `read(address)` returns the word at a virtual address.
- `write(address, value)` stores a word at a virtual address.
- `translate(address)` returns the physical address, mapping the page first
  if needed.

All three access methods raise `AddressOutOfRangeError`, a subclass of
`ValueError`, for addresses outside the virtual address space.

When a table or page is missing, a frame is chosen in this order:

1. An empty page-table frame, other than the one currently being filled. It is
   first unlinked from its parent.
2. The frame after the highest frame in use, if that is not the last frame.
3. Otherwise, a resident page is unlinked and evicted to swap. The page chosen
   is the one with the largest `cyclic_distance` from the requested address.

If no frame can be found, `RuntimeError` is raised.

`cyclic_distance(first, second)` is the distance measure used to rank
eviction candidates. It is computed in 64-bit unsigned arithmetic. When the
two arguments differ by exactly one, it raises `ZeroDivisionError`.

## Command line

```
vmsim
```

The command writes to twice as many pages as there are frames, spaced five
pages apart, and then reads them back. This forces eviction. Each step is
printed, and the run ends with `success`. If a value read back does not
match, the error is printed to standard error and the exit status is 1. The
same exercise is available as `vmsim.cli.run_simple_test(out=None)`.

## Limitations

All memory state lives in the Python process. Nothing is saved to disk, and
the sizes are fixed by the module constants.