import random

import pytest

from vmsim.physical_memory import (
    NUM_FRAMES,
    PAGE_SIZE,
    RAM_SIZE,
    TABLES_DEPTH,
    VIRTUAL_MEMORY_SIZE,
    PhysicalMemory,
)
from vmsim.virtual_memory import AddressOutOfRangeError, VirtualMemory, cyclic_distance


@pytest.fixture
def vm():
    memory = VirtualMemory(PhysicalMemory())
    memory.initialize()
    return memory


def test_write_read_round_trip(vm):
    vm.write(13, 99)
    vm.write(13 + PAGE_SIZE, -4)
    assert vm.read(13) == 99
    assert vm.read(13 + PAGE_SIZE) == -4


def test_simple_test_pattern(vm):
    for i in range(2 * NUM_FRAMES):
        vm.write(5 * i * PAGE_SIZE, i)
    for i in range(2 * NUM_FRAMES):
        assert vm.read(5 * i * PAGE_SIZE) == i
    assert vm.physical.eviction_count > 0


def test_first_translation_uses_fresh_frames(vm):
    assert vm.translate(0) == TABLES_DEPTH * PAGE_SIZE


def test_translate_keeps_offset_and_bounds(vm):
    for address in (0, 7, 12345, VIRTUAL_MEMORY_SIZE - 1):
        physical = vm.translate(address)
        assert 0 <= physical < RAM_SIZE
        assert physical % PAGE_SIZE == address % PAGE_SIZE


def test_translate_stable_without_pressure(vm):
    first = vm.translate(500)
    assert vm.translate(500) == first
    assert vm.translate(501) == first + 1


@pytest.mark.parametrize("address", [VIRTUAL_MEMORY_SIZE, -1])
def test_out_of_range_read(vm, address):
    with pytest.raises(AddressOutOfRangeError):
        vm.read(address)


def test_out_of_range_write(vm):
    with pytest.raises(AddressOutOfRangeError):
        vm.write(VIRTUAL_MEMORY_SIZE, 1)


def test_default_physical_memory():
    memory = VirtualMemory()
    memory.write(40, 6)
    assert memory.read(40) == 6
    assert memory.physical.read(memory.translate(40)) == 6


def test_random_access_matches_model(vm):
    rng = random.Random(1234)
    offsets = [0, 2, 3, 5, 7, 8, 10, 12, 13, 15]
    pages = [5 * rng.randrange(VIRTUAL_MEMORY_SIZE // PAGE_SIZE // 5) for _ in range(40)]
    model = {}
    for step in range(400):
        address = rng.choice(pages) * PAGE_SIZE + rng.choice(offsets)
        if rng.random() < 0.6 or address not in model:
            vm.write(address, step)
            model[address] = step
        else:
            assert vm.read(address) == model[address]
    for address, value in model.items():
        assert vm.read(address) == value


def test_many_pages_survive_eviction(vm):
    pages = range(0, 3 * NUM_FRAMES * 5, 5)
    for page in pages:
        vm.write(page * PAGE_SIZE + 3, page + 1)
    for page in pages:
        assert vm.read(page * PAGE_SIZE + 3) == page + 1


def test_cyclic_distance_equal_values():
    assert cyclic_distance(7, 7) == 0


def test_cyclic_distance_symmetric():
    for a, b in [(0, 10), (3, 100), (500, 20)]:
        assert cyclic_distance(a, b) == cyclic_distance(b, a)


def test_cyclic_distance_adjacent_undefined():
    with pytest.raises(ZeroDivisionError):
        cyclic_distance(4, 5)