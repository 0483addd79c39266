"""Background eviction of participants that stopped sending heartbeats."""
import threading
from typing import List, Optional

from .logging_config import configure_logging
from .models import Participant
from .presence import PresenceTracker

logger = configure_logging()


class EvictionSweeper:
    """Periodic thread calling :meth:`PresenceTracker.evict_stale`.

    ``interval`` (how often a sweep fires) and ``stale_after`` (how long a
    participant may stay silent) are independent. ``stop()`` prevents any
    further sweep from starting; a sweep already running is allowed to
    finish before the thread exits.
    """

    def __init__(self, presence: PresenceTracker, interval: float, stale_after: float):
        self.presence = presence
        self.interval = interval
        self.stale_after = stale_after
        self._shutdown = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._shutdown.clear()
        self._thread = threading.Thread(target=self._loop, name="chat-room-sweeper", daemon=True)
        self._thread.start()
        logger.info("SWEEPER_STARTED interval=%s stale_after=%s", self.interval, self.stale_after)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._shutdown.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("SWEEPER_STOPPED")

    def sweep_once(self) -> List[Participant]:
        return self.presence.evict_stale(self.stale_after)

    def _loop(self) -> None:
        # Event.wait returns True as soon as stop() is called.
        while not self._shutdown.wait(self.interval):
            try:
                self.sweep_once()
            except Exception:
                logger.exception("SWEEP_FAILED reason=sweep_aborted")
