"""Helpers for locating and checking firmware images for flash slots."""

import logging
import os
import struct
from typing import Optional, Sequence

from spacetools.walkdir import MAX_ENTRIES, walkdir

logger = logging.getLogger(__name__)

# Byte offsets in an image where the entry point address is stored.
# C21: 0x4, E70: 0x2C4
ENTRY_OFFSETS = (4, 0x2C4)

# Parameter ids of the boot_img0..boot_img3 counters.
BOOT_IMG_PARAM_IDS = (21, 20, 22, 23)

BOOT_SLOTS = 4
_VMEM_NAME_MAX = 4


class BinarySearch:
    """Finds ``.bin`` images whose entry point lies in a memory window."""

    def __init__(self, addr_min: int, addr_max: int, max_entries: int = MAX_ENTRIES):
        self.addr_min = addr_min
        self.addr_max = addr_max
        self.max_entries = max_entries
        self.entries: list[str] = []

    def is_valid_binary(self, path) -> bool:
        """Return True if ``path`` is a ``.bin`` file that fits the window and
        holds an entry point address inside it."""
        path = os.fspath(path)
        if len(path) <= 4 or not path.endswith(".bin"):
            return False
        try:
            with open(path, "rb") as handle:
                data = handle.read()
        except OSError:
            return False
        if self.addr_min + len(data) > self.addr_max:
            return False
        for offset in ENTRY_OFFSETS:
            if offset + 4 > len(data):
                continue
            (addr,) = struct.unpack_from("<I", data, offset)
            if self.addr_min <= addr <= self.addr_max:
                return True
        return False

    def _on_file(self, path: str, _name: str) -> None:
        if not self.is_valid_binary(path):
            return
        if len(self.entries) < self.max_entries:
            self.entries.append(path)
        else:
            logger.warning(
                "More than %u binaries found. Searched stopped.", self.max_entries
            )

    def search(self, root=".", depth: int = 10) -> list[str]:
        """Walk ``root`` and return the paths of valid binaries found."""
        self.entries = []
        walkdir(root, depth, lambda _path, _name: True, self._on_file)
        return list(self.entries)


def vmem_name(slot: int) -> str:
    """Return the name of the VMEM area for a flash slot, at most 4 characters."""
    if slot < 0:
        raise ValueError("slot must not be negative")
    return f"fl{slot}"[:_VMEM_NAME_MAX]


def boot_slots_to_clear(slot: int) -> tuple[int, ...]:
    """Return the boot image counters zeroed before booting into ``slot``."""
    if not 0 <= slot < BOOT_SLOTS:
        raise ValueError(f"slot must be between 0 and {BOOT_SLOTS - 1}")
    return (0, 1, 2, 3) if slot >= 2 else (0, 1)


def first_difference(expected: Sequence[int], actual: Sequence[int]) -> Optional[int]:
    """Return the index of the first byte that differs, or None if equal."""
    expected = bytes(expected)
    actual = bytes(actual)
    for index, (a, b) in enumerate(zip(expected, actual)):
        if a != b:
            return index
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None