"""Helpers for reading a remote node's stdout buffer and logging it."""

import logging
import os
import time
from typing import Callable, Optional, TextIO

logger = logging.getLogger(__name__)

# Largest number of bytes fetched from the remote ring buffer in one peek.
STDBUF_CHUNK = 200

# Parameter ids of the remote ring buffer's write and read positions.
STDBUF_IN_PARAM_ID = 28
STDBUF_OUT_PARAM_ID = 29

# Name prefix of the VMEM area holding the buffer.
STDBUF_VMEM_NAME = "stdbu"

DEFAULT_LOG_BASE = "csh"
LOG_HEADER = "\n\n --- CSH log start {date} ------------\n"

_LOG_NAME_MAX = 99
_MAX_SEQUENCE = 99
_LINE_BREAKS = (0x0D, 0x0A)


def _is_printable(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def format_log_text(data: bytes) -> str:
    """Render raw buffer output as log text.

    Printable ASCII is kept, every run of CR/LF becomes a single newline and
    any other byte is written as ``0xNN``.
    """
    data = bytes(data)
    parts: list[str] = []
    index = 0
    while index < len(data):
        byte = data[index]
        if _is_printable(byte):
            parts.append(chr(byte))
            index += 1
        elif byte in _LINE_BREAKS:
            parts.append("\n")
            while index < len(data) and data[index] in _LINE_BREAKS:
                index += 1
        else:
            parts.append(f"0x{byte:02x}")
            index += 1
    return "".join(parts)


def choose_log_name(spec: str, date: str, exists: Callable[[str], bool]) -> str:
    """Resolve a log file specification into a file name.

    A specification starting with ``?`` asks for a numbered file
    ``<base>_<date>_<NNN>.log`` where ``<base>`` is the rest of the
    specification (``csh`` if empty) and ``NNN`` is the first number from 1
    to 99 for which ``exists`` returns false; if all are taken the last one
    is used. Any other specification is used as the name itself.
    """
    if spec.startswith("?"):
        base = spec[1:] or DEFAULT_LOG_BASE
        name = ""
        for sequence in range(1, _MAX_SEQUENCE + 1):
            name = f"{base}_{date}_{sequence:03d}.log"[: _LOG_NAME_MAX - 1]
            if not exists(name):
                break
        return name
    return spec[:_LOG_NAME_MAX]


def next_read_range(in_pos: int, out_pos: int, size: int) -> Optional[tuple[int, int]]:
    """Return ``(offset, length)`` of the next chunk to read from the ring buffer.

    Reading runs from the read position up to the write position, or up to
    the end of the buffer when the write position has wrapped. The length is
    capped at :data:`STDBUF_CHUNK`. Returns None when there is nothing to read.
    """
    if out_pos < in_pos:
        end = in_pos
    elif out_pos > in_pos:
        end = size
    else:
        return None
    return out_pos, min(end - out_pos, STDBUF_CHUNK)


def advance_out(out_pos: int, got: int, size: int) -> int:
    """Return the read position after consuming ``got`` bytes, wrapped to ``size``."""
    if size <= 0:
        raise ValueError("buffer size must be positive")
    return ((out_pos + got) & 0xFFFF) % size


class StdbufLog:
    """A log file that receives the text read from a remote stdout buffer."""

    def __init__(self) -> None:
        self.name = ""
        self._file: Optional[TextIO] = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def open(self, spec: str, date: Optional[str] = None) -> str:
        """Open (or keep open) the log named by ``spec``; returns the file name.

        A log already open under a different name is closed first. A new file
        is started with a header line carrying ``date`` (today as YYYYMMDD if
        omitted); an existing file is appended to.
        """
        if spec != self.name:
            self.close()
        if self._file is None:
            if date is None:
                date = time.strftime("%Y%m%d")
            self.name = choose_log_name(spec, date, os.path.exists)
            mode = "a" if os.path.exists(self.name) else "w"
            self._file = open(self.name, mode, encoding="utf-8")
            self._file.write(LOG_HEADER.format(date=date))
            self._file.flush()
            logger.info("Logging to %s", self.name)
        return self.name

    def write(self, data: bytes) -> str:
        """Append the rendering of ``data`` to the log; returns the text written."""
        if self._file is None:
            return ""
        text = format_log_text(data)
        self._file.write(text)
        self._file.flush()
        return text

    def close(self) -> None:
        """Close the log file if one is open."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "StdbufLog":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()