"""Durable store of participants and messages.

Every public method runs in its own session and transaction, so callers
never hold a session (or any lock) between store calls. Single-row
operations are atomic; the multi-row ones (``add_participant`` with its join
message, ``evict_participant`` with its departure message) are wrapped in one
transaction each.
"""
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from .database import Base, make_engine, make_session_factory
from .errors import Conflict, StoreUnavailable
from .logging_config import configure_logging
from .models import Message, Participant

logger = configure_logging()


class Store:
    def __init__(self, url: str):
        self.url = url
        self._engine = None
        self._session_factory = None

    def connect(self) -> "Store":
        self._engine = make_engine(self.url)
        try:
            Base.metadata.create_all(bind=self._engine)
        except OperationalError as exc:
            logger.error("STORE_UNAVAILABLE error=%s", exc)
            self._engine.dispose()
            self._engine = None
            raise StoreUnavailable() from exc
        self._session_factory = make_session_factory(self._engine)
        logger.info("STORE_CONNECTED url=%s", self._engine.url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("STORE_CLOSED")
        self._engine = None
        self._session_factory = None

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise StoreUnavailable("Store is not connected")
        try:
            with self._session_factory.begin() as session:
                yield session
        except OperationalError as exc:
            logger.error("STORE_UNAVAILABLE error=%s", exc)
            raise StoreUnavailable() from exc

    # Participants

    def find_participant(self, name: str) -> Optional[Participant]:
        with self.session() as session:
            return session.execute(select(Participant).where(Participant.name == name)).scalar_one_or_none()

    def find_participant_by_key(self, key: str) -> Optional[Participant]:
        """Case-insensitive lookup through the normalized name key."""
        with self.session() as session:
            return session.execute(select(Participant).where(Participant.name_key == key)).scalar_one_or_none()

    def list_participants(self) -> List[Participant]:
        with self.session() as session:
            return list(session.execute(select(Participant).order_by(Participant.id)).scalars())

    def add_participant(self, name: str, key: str, last_status: float, join_message: Dict[str, str]) -> Participant:
        """Insert a participant together with its join message, or neither."""
        try:
            with self.session() as session:
                participant = Participant(name=name, name_key=key, last_status=last_status)
                session.add(participant)
                session.add(Message(**join_message))
                session.flush()
                return participant
        except IntegrityError as exc:
            raise Conflict() from exc

    def touch_participant(self, name: str, last_status: float) -> bool:
        with self.session() as session:
            result = session.execute(
                update(Participant).where(Participant.name == name).values(last_status=last_status)
            )
            return result.rowcount > 0

    def evict_participant(self, participant_id: int, stale_before: float, departure_message: Dict[str, str]) -> bool:
        """Remove a still-stale participant and record its departure.

        Returns False when the participant is already gone or was touched
        since it was found stale; nothing is written in that case.
        """
        with self.session() as session:
            result = session.execute(
                delete(Participant).where(
                    Participant.id == participant_id,
                    Participant.last_status < stale_before,
                )
            )
            if result.rowcount == 0:
                return False
            # Commits together with the delete above.
            session.add(Message(**departure_message))
            return True

    # Messages

    def add_message(self, **fields: str) -> Message:
        with self.session() as session:
            message = Message(**fields)
            session.add(message)
            session.flush()
            return message

    def get_message(self, message_id: int) -> Optional[Message]:
        with self.session() as session:
            return session.get(Message, message_id)

    def list_messages(self) -> List[Message]:
        with self.session() as session:
            return list(session.execute(select(Message).order_by(Message.id)).scalars())

    def update_message(self, message_id: int, **fields: str) -> bool:
        with self.session() as session:
            result = session.execute(update(Message).where(Message.id == message_id).values(**fields))
            return result.rowcount > 0

    def delete_message(self, message_id: int) -> bool:
        with self.session() as session:
            result = session.execute(delete(Message).where(Message.id == message_id))
            return result.rowcount > 0
