import struct

import pytest

from spacetools.firmware import (
    BinarySearch,
    boot_slots_to_clear,
    first_difference,
    vmem_name,
)

ADDR_MIN = 0x1000
ADDR_MAX = 0x2000


def _image(entry, offset=4, size=0x300):
    data = bytearray(size)
    struct.pack_into("<I", data, offset, entry)
    return bytes(data)


def test_valid_binary_entry_at_first_offset(tmp_path):
    path = tmp_path / "app.bin"
    path.write_bytes(_image(ADDR_MIN + 0x100))
    assert BinarySearch(ADDR_MIN, ADDR_MAX).is_valid_binary(path) is True


def test_valid_binary_entry_at_second_offset(tmp_path):
    path = tmp_path / "app.bin"
    path.write_bytes(_image(ADDR_MIN + 0x10, offset=0x2C4))
    assert BinarySearch(ADDR_MIN, ADDR_MAX).is_valid_binary(path) is True


def test_entry_outside_window_is_rejected(tmp_path):
    path = tmp_path / "app.bin"
    path.write_bytes(_image(ADDR_MAX + 1))
    assert BinarySearch(ADDR_MIN, ADDR_MAX).is_valid_binary(path) is False


def test_wrong_extension_is_rejected(tmp_path):
    path = tmp_path / "app.elf"
    path.write_bytes(_image(ADDR_MIN + 0x100))
    assert BinarySearch(ADDR_MIN, ADDR_MAX).is_valid_binary(path) is False


def test_image_larger_than_window_is_rejected(tmp_path):
    path = tmp_path / "big.bin"
    path.write_bytes(_image(ADDR_MIN + 0x100, size=ADDR_MAX - ADDR_MIN + 1))
    assert BinarySearch(ADDR_MIN, ADDR_MAX).is_valid_binary(path) is False


def test_missing_file_is_rejected(tmp_path):
    assert BinarySearch(ADDR_MIN, ADDR_MAX).is_valid_binary(tmp_path / "no.bin") is False


def test_search_returns_only_valid_images(tmp_path):
    (tmp_path / "good.bin").write_bytes(_image(ADDR_MIN + 0x100))
    (tmp_path / "bad.bin").write_bytes(_image(0))
    sub = tmp_path / "build"
    sub.mkdir()
    (sub / "nested.bin").write_bytes(_image(ADDR_MIN + 0x200))
    searcher = BinarySearch(ADDR_MIN, ADDR_MAX)
    found = searcher.search(tmp_path)
    assert sorted(p.rsplit("/", 1)[-1] for p in found) == ["good.bin", "nested.bin"]
    assert searcher.entries == found


def test_search_respects_max_entries(tmp_path):
    for index in range(5):
        (tmp_path / f"img{index}.bin").write_bytes(_image(ADDR_MIN + 0x100))
    found = BinarySearch(ADDR_MIN, ADDR_MAX, max_entries=3).search(tmp_path)
    assert len(found) == 3


def test_vmem_name_formats_slot():
    assert vmem_name(0) == "fl0"
    assert vmem_name(12) == "fl12"


def test_vmem_name_is_truncated_to_four_characters():
    assert vmem_name(123) == vmem_name(12)
    assert len(vmem_name(99999)) == 4


def test_vmem_name_rejects_negative():
    with pytest.raises(ValueError):
        vmem_name(-1)


def test_boot_slots_low_slot_clears_first_two():
    assert boot_slots_to_clear(0) == (0, 1)
    assert boot_slots_to_clear(1) == (0, 1)


def test_boot_slots_high_slot_clears_all_four():
    assert boot_slots_to_clear(2) == (0, 1, 2, 3)
    assert boot_slots_to_clear(3) == (0, 1, 2, 3)


def test_boot_slots_rejects_out_of_range():
    with pytest.raises(ValueError):
        boot_slots_to_clear(4)


def test_first_difference_equal_data():
    assert first_difference(b"abcdef", b"abcdef") is None


def test_first_difference_finds_index():
    assert first_difference(b"abcdef", b"abcxef") == 3


def test_first_difference_length_mismatch():
    assert first_difference(b"abc", b"abcd") == 3