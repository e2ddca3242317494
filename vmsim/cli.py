"""Command-line exercise of the virtual memory simulator."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from vmsim.physical_memory import NUM_FRAMES, PAGE_SIZE
from vmsim.virtual_memory import VirtualMemory


def run_simple_test(out: TextIO | None = None) -> None:
    """Write then read back a spread of pages, raising RuntimeError on a mismatch."""
    out = out if out is not None else sys.stdout
    vm = VirtualMemory()
    vm.initialize()
    count = 2 * NUM_FRAMES
    for i in range(count):
        print(f"writing to {i}", file=out)
        vm.write(5 * i * PAGE_SIZE, i)
    for i in range(count):
        value = vm.read(5 * i * PAGE_SIZE)
        print(f"reading from {i} {value}", file=out)
        if value != i:
            raise RuntimeError(f"expected {i} at page {5 * i}, read {value}")
    print("success", file=out)


def main(argv: list[str] | None = None) -> int:
    """Run the simple write/read exercise."""
    parser = argparse.ArgumentParser(
        prog="vmsim", description="Exercise the virtual memory simulator."
    )
    parser.parse_args(argv)
    try:
        run_simple_test()
    except RuntimeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())