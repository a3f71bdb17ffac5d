"""Network reachability monitoring.

This module hides the design decisions about:
- How reachability is probed (TCP connect to the provider host by default)
- How readings from other threads reach the owning event loop
- Which readings count as a transition

Subscribers receive a ConnectivityChange only when the status actually
changes; repeated readings of the same state are ignored.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from .events import Observable
from .models import ConnectivityChange, ConnectivityStatus

logger = logging.getLogger(__name__)

DEFAULT_PROBE_HOST = "generativelanguage.googleapis.com"
DEFAULT_PROBE_PORT = 443


class ReachabilityProbe(ABC):
    """Answers a single question: is the network usable right now?"""

    @abstractmethod
    async def check(self) -> bool:
        """Return True if the network is reachable."""


class TcpReachabilityProbe(ReachabilityProbe):
    """Probe that opens (and immediately closes) a TCP connection."""

    def __init__(
        self,
        host: str = DEFAULT_PROBE_HOST,
        port: int = DEFAULT_PROBE_PORT,
        timeout: float = 3.0,
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout

    async def check(self) -> bool:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port),
                timeout=self._timeout,
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug("Probe %s:%s failed: %s", self._host, self._port, e)
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True


class ConnectivityMonitor(Observable):
    """Tracks reachability and emits transition notifications.

    All state changes happen on the event loop that owns the monitor.
    Readings produced on other threads must go through ``report_threadsafe``.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        super().__init__()
        self._status = ConnectivityStatus.UNKNOWN
        self._loop = loop

    def current_status(self) -> ConnectivityStatus:
        return self._status

    @property
    def connected(self) -> bool:
        """True unless the last reading said disconnected."""
        return self._status is not ConnectivityStatus.DISCONNECTED

    def report(self, connected: bool) -> ConnectivityChange | None:
        """Record one reading.

        Returns:
            The emitted change, or None if the reading repeated the current
            status
        """
        status = ConnectivityStatus.CONNECTED if connected else ConnectivityStatus.DISCONNECTED
        if status is self._status:
            return None

        change = ConnectivityChange(previous=self._status, current=status)
        self._status = status
        logger.info("Connectivity %s -> %s", change.previous.value, change.current.value)
        self._emit(change)
        return change

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Set the event loop that owns this monitor's state."""
        self._loop = loop

    def report_threadsafe(self, connected: bool) -> None:
        """Hand a reading from a foreign thread to the owning loop."""
        if self._loop is None:
            raise RuntimeError("Monitor has no event loop; call bind_loop() first")
        self._loop.call_soon_threadsafe(self.report, connected)

    async def run(self, probe: ReachabilityProbe, interval: float = 5.0) -> None:
        """Poll the probe forever, feeding readings to ``report``.

        Cancel the task to stop monitoring.
        """
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        while True:
            self.report(await probe.check())
            await asyncio.sleep(interval)
