"""Participant liveness: registration, heartbeats and stale eviction."""
import time
from typing import Callable, List, Optional

from .config import BROADCAST, JOIN_TEXT, LEAVE_TEXT
from .errors import Conflict, NotFound, ValidationError
from .logging_config import configure_logging
from .models import STATUS, Participant
from .store import Store
from ..shared.utils import format_time, name_key, sanitize

logger = configure_logging()


def status_message(name: str, text: str) -> dict:
    return {"sender": name, "recipient": BROADCAST, "text": text, "kind": STATUS, "time": format_time()}


class PresenceTracker:
    """Owns participant liveness state in the store."""

    def __init__(self, store: Store, clock: Callable[[], float] = time.time):
        self.store = store
        self.clock = clock

    def register(self, raw_name: str) -> Participant:
        name = sanitize(raw_name)
        if not name:
            raise ValidationError([(("body", "name"), '"name" is not allowed to be empty')])

        key = name_key(name)
        if self.store.find_participant_by_key(key) is not None:
            logger.info("PARTICIPANT_CONFLICT name=%s", name)
            raise Conflict()

        # The unique key constraint still rejects a concurrent duplicate here.
        try:
            participant = self.store.add_participant(name, key, self.clock(), status_message(name, JOIN_TEXT))
        except Conflict:
            logger.info("PARTICIPANT_CONFLICT name=%s reason=concurrent", name)
            raise
        logger.info("PARTICIPANT_JOINED name=%s id=%s", participant.name, participant.id)
        return participant

    def touch(self, raw_name: Optional[str]) -> None:
        name = sanitize(raw_name)
        if not name or not self.store.touch_participant(name, self.clock()):
            logger.info("STATUS_UNKNOWN name=%s", name)
            raise NotFound("Participant not found")
        logger.debug("STATUS_TOUCHED name=%s", name)

    def list(self) -> List[Participant]:
        return self.store.list_participants()

    def is_registered(self, name: str) -> bool:
        return self.store.find_participant(name) is not None

    def evict_stale(self, stale_after: float) -> List[Participant]:
        """Evict every participant not seen for more than ``stale_after`` seconds.

        Each eviction appends a departure status message in the same
        transaction as the removal. A failure on one participant is logged and
        the rest of the snapshot is still processed.
        """
        now = self.clock()
        stale_before = now - stale_after
        evicted: List[Participant] = []
        for participant in self.list():
            if participant.last_status >= stale_before:
                continue
            try:
                removed = self.store.evict_participant(
                    participant.id, stale_before, status_message(participant.name, LEAVE_TEXT)
                )
            except Exception:
                logger.exception("SWEEP_FAILED name=%s id=%s", participant.name, participant.id)
                continue
            if removed:
                logger.info(
                    "PARTICIPANT_EVICTED name=%s idle_seconds=%.1f", participant.name, now - participant.last_status
                )
                evicted.append(participant)
        return evicted
