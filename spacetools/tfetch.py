"""Periodic time synchronisation from a primary or secondary remote node."""

import logging
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)

PARAMID_TFETCH_PRIMARY = 41
PARAMID_TFETCH_SECONDARY = 42
PARAMID_TFETCH_TIMEOUT = 43
PARAMID_TFETCH_SYNCED = 44
PARAMID_TFETCH_ERRORS = 45
PARAMID_TFETCH_LAST = 46

DEFAULT_TIMEOUT_MS = 100

# 1 Jan 2020 00:00:00 UTC; anything earlier is treated as an unset clock.
MIN_VALID_TIMESTAMP = 1577836800

RemoteTime = Optional[Tuple[int, int]]


class TimeFetcher:
    """Fetches the time from a remote node until one sync succeeds."""

    def __init__(
        self,
        get_remote_time: Callable[[int, int], RemoteTime],
        set_clock: Callable[[int, int], bool],
        primary: int = 0,
        secondary: int = 0,
        timeout: int = 0,
    ):
        self.get_remote_time = get_remote_time
        self.set_clock = set_clock
        self.primary = primary
        self.secondary = secondary
        self.timeout = timeout
        self.synced = 0
        self.errors = 0
        self.last_s = 0

    def _count_error(self) -> None:
        self.errors = (self.errors + 1) & 0xFFFF

    def fetch(self, node: int, timeout: int = 0) -> int:
        """Try to set the clock from ``node``; returns the node on success, else 0.

        Node 0 means disabled and a timeout of 0 means the default of 100 ms.
        """
        logger.info("tfetch from %d timeout %d", node, timeout)
        if node == 0:
            return 0
        if timeout == 0:
            timeout = DEFAULT_TIMEOUT_MS

        try:
            remote = self.get_remote_time(node, timeout)
        except OSError:
            remote = None
        if remote is None:
            logger.warning("No response from %d within %d ms", node, timeout)
            self._count_error()
            return 0

        seconds, nanoseconds = remote
        if seconds < MIN_VALID_TIMESTAMP:
            logger.warning("Invalid timestamp received from %d", node)
            self._count_error()
            return 0

        try:
            applied = self.set_clock(seconds, nanoseconds)
        except OSError:
            applied = False
        if applied:
            logger.info("Got time from %d", node)
            return node

        self.last_s = seconds & 0xFFFFFFFF
        self._count_error()
        return 0

    def onehz(self) -> int:
        """Run once per second: sync from the primary, then the secondary, until synced."""
        if not self.synced:
            self.synced = self.fetch(self.primary, self.timeout)
        if not self.synced:
            self.synced = self.fetch(self.secondary, self.timeout)
        return self.synced