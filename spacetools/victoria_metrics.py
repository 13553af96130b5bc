"""Buffering parameter values as Prometheus text and pushing them to VictoriaMetrics."""

import base64
import logging
import ssl
import threading
import urllib.error
import urllib.request
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

SERVER_PORT = 8428
SERVER_PORT_AUTH = 8427
BUFFER_SIZE = 10 * 1024 * 1024

TEST_QUERY = b"query=test42"


class MetricBuffer:
    """A thread-safe, size-limited buffer of metric lines."""

    def __init__(self, capacity: int = BUFFER_SIZE):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._chunks: list[bytes] = []
        self._size = 0

    def __len__(self) -> int:
        with self._lock:
            return self._size

    def add(self, line: Union[str, bytes]) -> bool:
        """Append a line if it fits; returns False when the buffer is too full."""
        data = line.encode("utf-8") if isinstance(line, str) else bytes(line)
        with self._lock:
            if self._size + len(data) >= self.capacity:
                return False
            self._chunks.append(data)
            self._size += len(data)
            return True

    def drain(self) -> bytes:
        """Return everything buffered and empty the buffer."""
        with self._lock:
            data = b"".join(self._chunks)
            self._chunks = []
            self._size = 0
            return data


def format_param_lines(name: str, node: int, values: Iterable, time_ms: int) -> list[str]:
    """Return one Prometheus text line per array element of a parameter."""
    return [
        f'{name}{{node="{node}", idx="{index}"}} {value} {time_ms}\n'
        for index, value in enumerate(values)
    ]


class VictoriaMetricsPusher:
    """Pushes the contents of a :class:`MetricBuffer` to a VictoriaMetrics server."""

    def __init__(
        self,
        server: str,
        hostname: str,
        port: Optional[int] = None,
        use_ssl: bool = False,
        username: Optional[str] = None,
        password: Optional[str] = None,
        skip_verify: bool = False,
        verbose: bool = False,
        buffer: Optional[MetricBuffer] = None,
    ):
        if username and not password:
            raise ValueError("a password is required together with a username")
        if not port:
            port = SERVER_PORT_AUTH if username else SERVER_PORT
        self.server = server
        self.hostname = hostname
        self.port = port
        self.use_ssl = use_ssl
        self.username = username
        self.password = password
        self.skip_verify = skip_verify
        self.verbose = verbose
        self.buffer = buffer if buffer is not None else MetricBuffer()
        self.interval = 1.0
        self.timeout = 10.0
        self.running = False
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def _scheme(self) -> str:
        return "https" if self.use_ssl else "http"

    def query_url(self) -> str:
        """URL of the query endpoint used to test the connection."""
        return f"{self._scheme}://{self.server}:{self.port}/prometheus/api/v1/query"

    def import_url(self) -> str:
        """URL of the Prometheus-format import endpoint."""
        return (
            f"{self._scheme}://{self.server}:{self.port}"
            f"/api/v1/import/prometheus?extra_label=instance={self.hostname}"
        )

    def _ssl_context(self) -> Optional[ssl.SSLContext]:
        if not self.use_ssl:
            return None
        context = ssl.create_default_context()
        if self.skip_verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _headers(self) -> dict[str, str]:
        if not (self.username and self.password):
            return {}
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        return {"Authorization": "Basic " + base64.b64encode(credentials).decode("ascii")}

    def _post(self, url: str, body: bytes, headers: Optional[dict] = None) -> int:
        request = urllib.request.Request(
            url, data=body, method="POST", headers={**self._headers(), **(headers or {})}
        )
        if self.verbose:
            logger.info("POST %s (%d bytes)", url, len(body))
        try:
            with urllib.request.urlopen(
                request, timeout=self.timeout, context=self._ssl_context()
            ) as response:
                response.read()
                return response.status
        except urllib.error.HTTPError as exc:
            return exc.code

    def test_connection(self) -> bool:
        """Send a test query; returns True if the server answered with 200."""
        try:
            status = self._post(self.query_url(), TEST_QUERY)
        except OSError as exc:
            logger.error("Failed test of connection: %s", exc)
            return False
        if status != 200:
            logger.error("Failed test with response code: %d", status)
            return False
        return True

    def push(self) -> bool:
        """Send and clear the buffered lines; returns True if data was accepted."""
        data = self.buffer.drain()
        if not data:
            return False
        try:
            status = self._post(
                self.import_url(), data, {"Content-Type": "text/plain"}
            )
        except OSError as exc:
            logger.error("Failed push: %s", exc)
            return False
        return 200 <= status < 300

    def _run(self) -> None:
        while not self._stop.is_set():
            self.push()
            self._stop.wait(self.interval)
        self.running = False
        logger.info("vm push stopped")

    def start(self) -> bool:
        """Test the connection and start pushing in a background thread."""
        if self.running:
            return True
        if not self.test_connection():
            return False
        if self.verbose:
            logger.info("Full URL: %s", self.import_url())
        logger.info(
            "Connection established to %s://%s:%d", self._scheme, self.server, self.port
        )
        self._stop.clear()
        self.running = True
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return True

    def stop(self) -> None:
        """Stop the background push thread."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self.running = False