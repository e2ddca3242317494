"""Virtual memory over a hierarchical page table stored in simulated RAM."""

from __future__ import annotations

from dataclasses import dataclass

from vmsim.physical_memory import (
    NUM_FRAMES,
    NUM_PAGES,
    OFFSET_WIDTH,
    PAGE_SIZE,
    TABLES_DEPTH,
    VIRTUAL_MEMORY_SIZE,
    PhysicalMemory,
)

_MASK64 = (1 << 64) - 1


class AddressOutOfRangeError(ValueError):
    """A virtual address lies outside the virtual address space."""


def cyclic_distance(first: int, second: int) -> int:
    """Wrapped distance used to rank leaf eviction candidates.

    Computed in 64-bit unsigned arithmetic; first and second differing by
    exactly one leaves the quantity undefined and raises ZeroDivisionError.
    """
    second_first = (second - first) & _MASK64
    first_second = (first - second) & _MASK64
    factor = second_first // ((second_first + 1) & _MASK64) + first_second // (
        (first_second + 1) & _MASK64
    )
    forward = (second_first * factor) & _MASK64
    backward = (NUM_PAGES - forward) & _MASK64
    return backward if forward >= backward else forward


@dataclass
class _Search:
    parent_empty: int = 0
    empty: int = 0
    max_frame: int = 0
    parent_leaf: int = 0
    leaf: int = 0
    leaf_page: int = 0


class VirtualMemory:
    """Maps virtual addresses to physical ones, allocating and evicting frames."""

    def __init__(self, physical: PhysicalMemory | None = None) -> None:
        self.physical = physical if physical is not None else PhysicalMemory()

    def initialize(self) -> None:
        """Clear the root page table."""
        for i in range(PAGE_SIZE):
            self.physical.write(i, 0)

    @staticmethod
    def _validate(virtual_address: int) -> None:
        if not 0 <= virtual_address < VIRTUAL_MEMORY_SIZE:
            raise AddressOutOfRangeError(
                f"virtual address {virtual_address} out of range"
            )

    def read(self, virtual_address: int) -> int:
        """Return the word at a virtual address."""
        return self.physical.read(self.translate(virtual_address))

    def write(self, virtual_address: int, value: int) -> None:
        """Store a word at a virtual address."""
        self.physical.write(self.translate(virtual_address), value)

    def translate(self, virtual_address: int) -> int:
        """Return the physical address of a virtual one, mapping its page if needed."""
        self._validate(virtual_address)
        pm = self.physical
        offset = virtual_address % PAGE_SIZE
        frame = 0
        current_frame = 0
        base = 0
        for depth in range(TABLES_DEPTH):
            shift = (TABLES_DEPTH - depth) * OFFSET_WIDTH
            entry = (virtual_address >> shift) % PAGE_SIZE
            frame = pm.read(base + entry)
            if frame == 0:
                frame = self._find_frame(virtual_address, current_frame)
                if depth != TABLES_DEPTH - 1:
                    for i in range(PAGE_SIZE):
                        pm.write(frame * PAGE_SIZE + i, 0)
                else:
                    pm.restore(frame, virtual_address >> OFFSET_WIDTH)
                pm.write(base + entry, frame)
            current_frame = frame
            base = frame * PAGE_SIZE
        return PAGE_SIZE * frame + offset

    def _unlink(self, parent: int, child: int) -> None:
        base = parent << OFFSET_WIDTH
        for i in range(PAGE_SIZE):
            if self.physical.read(base + i) == child:
                self.physical.write(base + i, 0)
                break

    def _find_frame(self, virtual_address: int, in_use: int) -> int:
        found = self._search(0, virtual_address, 0, in_use, TABLES_DEPTH)
        if found.empty:
            self._unlink(found.parent_empty, found.empty)
            return found.empty
        if found.max_frame != NUM_FRAMES - 1:
            return found.max_frame + 1
        if found.leaf:
            self._unlink(found.parent_leaf, found.leaf)
            self.physical.evict(found.leaf, found.leaf_page)
            return found.leaf
        raise RuntimeError("no frame available for mapping")

    def _search(
        self, node: int, vindex: int, path: int, in_use: int, depth: int
    ) -> _Search:
        result = _Search()
        if depth == 0:
            result.max_frame = node
            result.leaf = node
            result.leaf_page = path
            return result

        is_empty = True
        max_frame = node
        best_page = 0
        best_leaf = 0
        base = node << OFFSET_WIDTH
        for i in range(PAGE_SIZE):
            child = self.physical.read(base + i)
            if child == 0:
                continue
            is_empty = False
            sub = self._search(
                child, vindex, (path << OFFSET_WIDTH) + i, in_use, depth - 1
            )
            if sub.empty:
                result.parent_empty = sub.parent_empty or node
                result.empty = sub.empty
                return result
            if sub.max_frame:
                max_frame = max(max_frame, sub.max_frame)
            if sub.leaf:
                take = best_leaf == 0 or cyclic_distance(
                    best_page, vindex
                ) < cyclic_distance(sub.leaf_page, vindex)
                if take:
                    result.parent_leaf = sub.parent_leaf or node
                    best_page = sub.leaf_page
                    best_leaf = sub.leaf

        if is_empty and node != in_use:
            result.empty = node
            return result

        result.max_frame = max_frame
        result.leaf_page = best_page
        result.leaf = best_leaf
        return result