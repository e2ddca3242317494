"""Simulated physical memory: a small RAM of fixed-size frames plus a swap store."""

from __future__ import annotations

import sys
from typing import TextIO

OFFSET_WIDTH = 4
PAGE_SIZE = 1 << OFFSET_WIDTH
PHYSICAL_ADDRESS_WIDTH = 10
RAM_SIZE = 1 << PHYSICAL_ADDRESS_WIDTH
VIRTUAL_ADDRESS_WIDTH = 20
VIRTUAL_MEMORY_SIZE = 1 << VIRTUAL_ADDRESS_WIDTH
NUM_FRAMES = RAM_SIZE // PAGE_SIZE
NUM_PAGES = VIRTUAL_MEMORY_SIZE // PAGE_SIZE
TABLES_DEPTH = -(-(VIRTUAL_ADDRESS_WIDTH - OFFSET_WIDTH) // OFFSET_WIDTH)
WEIGHT_EVEN = 4
WEIGHT_ODD = 2

_WORD_BITS = 32


def _to_word(value: int) -> int:
    """Truncate an integer to a signed 32-bit memory word."""
    half = 1 << (_WORD_BITS - 1)
    return ((value + half) % (1 << _WORD_BITS)) - half


class PhysicalMemory:
    """RAM divided into frames, with a swap store keyed by page index."""

    def __init__(self) -> None:
        self._ram: list[list[int]] = [[0] * PAGE_SIZE for _ in range(NUM_FRAMES)]
        self._swap: dict[int, list[int]] = {}
        self.eviction_count = 0

    @staticmethod
    def _check_address(physical_address: int) -> None:
        if not 0 <= physical_address < RAM_SIZE:
            raise IndexError(f"physical address {physical_address} out of range")

    @staticmethod
    def _check_frame(frame_index: int) -> None:
        if not 0 <= frame_index < NUM_FRAMES:
            raise IndexError(f"frame index {frame_index} out of range")

    def read(self, physical_address: int) -> int:
        """Return the word stored at the given physical address."""
        self._check_address(physical_address)
        frame, offset = divmod(physical_address, PAGE_SIZE)
        return self._ram[frame][offset]

    def write(self, physical_address: int, value: int) -> None:
        """Store a word at the given physical address."""
        self._check_address(physical_address)
        frame, offset = divmod(physical_address, PAGE_SIZE)
        self._ram[frame][offset] = _to_word(value)

    def evict(self, frame_index: int, evicted_page_index: int) -> None:
        """Copy a frame's contents to swap under the given page index."""
        if evicted_page_index in self._swap:
            raise ValueError(f"page {evicted_page_index} is already swapped out")
        self._check_frame(frame_index)
        if not 0 <= evicted_page_index < NUM_PAGES:
            raise IndexError(f"page index {evicted_page_index} out of range")
        self._swap[evicted_page_index] = list(self._ram[frame_index])
        self.eviction_count += 1

    def restore(self, frame_index: int, restored_page_index: int) -> None:
        """Bring a swapped page back into a frame; unknown pages leave the frame as is."""
        self._check_frame(frame_index)
        page = self._swap.pop(restored_page_index, None)
        if page is not None:
            self._ram[frame_index] = page

    def dump(self) -> list[int]:
        """Return every word of RAM in address order."""
        return [word for frame in self._ram for word in frame]

    def print_ram(self, file: TextIO | None = None) -> None:
        """Write one 'address: value' line per RAM word."""
        out = file if file is not None else sys.stdout
        for address, value in enumerate(self.dump()):
            print(f"{address}: {value}", file=out)

    def print_eviction_counter(self, file: TextIO | None = None) -> None:
        """Write the number of evictions performed so far."""
        out = file if file is not None else sys.stdout
        print(self.eviction_count, file=out)