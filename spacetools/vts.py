"""Streaming attitude and orbit data to a VTS visualisation server."""

import ipaddress
import logging
import socket
from typing import Sequence

logger = logging.getLogger(__name__)

Q_HAT_ID = 305
ORBIT_POS = 357

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8888

INIT_COMMAND = b"INIT adcs REGULATING\n"

UNIX_EPOCH_JD = 2440587.5
CNES_EPOCH_JD = 2433282.5
SECONDS_PER_DAY = 86400.0


def to_julian_date(timestamp_s: float) -> float:
    """Convert a Unix timestamp in seconds to a Julian date."""
    return UNIX_EPOCH_JD + timestamp_s / SECONDS_PER_DAY


def format_time(jd_cnes: float) -> str:
    """Return the TIME command for a CNES Julian date."""
    return f"TIME {jd_cnes:f} 1\n"


def format_quaternion(jd_cnes: float, values: Sequence[float]) -> str:
    """Return the attitude DATA command; the scalar part (index 3) goes first."""
    return (
        f'DATA {jd_cnes:f} orbit_sim_quat '
        f'"{values[3]:f} {values[0]:f} {values[1]:f} {values[2]:f}"\n'
    )


def format_position(jd_cnes: float, values: Sequence[float]) -> str:
    """Return the position DATA command, converting metres to kilometres."""
    x, y, z = (v / 1000 for v in values[:3])
    return f'DATA {jd_cnes:f} orbit_prop_pos "{x:f} {y:f} {z:f}"\n'


class VtsClient:
    """A connection to a VTS server receiving data from one ADCS node."""

    def __init__(self, sock: socket.socket, adcs_node: int = 0):
        self.sock = sock
        self.adcs_node = adcs_node
        self.running = True

    @classmethod
    def connect(
        cls, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, adcs_node: int = 0
    ) -> "VtsClient":
        """Connect to a VTS server at an IPv4 address and send the INIT command."""
        try:
            ipaddress.IPv4Address(host)
        except ValueError as exc:
            raise ValueError(f"invalid IPv4 address: {host!r}") from exc
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        try:
            sock.connect((host, port))
            sock.sendall(INIT_COMMAND)
        except OSError:
            sock.close()
            raise
        logger.info("Streaming data to VTS at %s:%d", host, port)
        return cls(sock, adcs_node)

    def check(self, node: int, param_id: int) -> bool:
        """Return True if a parameter from ``node`` should be sent to VTS."""
        if not self.running or node != self.adcs_node:
            return False
        return param_id in (Q_HAT_ID, ORBIT_POS)

    def _send(self, text: str) -> None:
        try:
            self.sock.sendall(text.encode("ascii"))
        except OSError:
            logger.warning("VTS send failed!")

    def add(self, values: Sequence[float], param_id: int, count: int, time_ms: int) -> None:
        """Send the time and, for a known parameter of the right size, its data."""
        jd_cnes = to_julian_date(time_ms // 1000) - CNES_EPOCH_JD
        self._send(format_time(jd_cnes))
        if param_id == Q_HAT_ID and count == 4:
            self._send(format_quaternion(jd_cnes, values))
        if param_id == ORBIT_POS and count == 3:
            self._send(format_position(jd_cnes, values))

    def close(self) -> None:
        """Stop streaming and close the connection."""
        self.running = False
        self.sock.close()