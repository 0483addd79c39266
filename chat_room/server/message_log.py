"""Ordered message log with per-viewer visibility and author-only edits."""
from typing import List, Optional

from .errors import NotFound, Unauthorized, ValidationError
from .logging_config import configure_logging
from .models import PRIVATE, PUBLIC, Message
from .presence import PresenceTracker
from .store import Store
from ..shared.utils import format_time, sanitize

logger = configure_logging()

SENDABLE_KINDS = (PUBLIC, PRIVATE)


def is_visible_to(message: Message, viewer: str) -> bool:
    return message.sender == viewer or message.recipient == viewer or message.kind != PRIVATE


def is_owner(actor: str, message: Message) -> bool:
    return actor == message.sender


def validate_content(to: Optional[str], text: Optional[str], kind: Optional[str]) -> dict:
    """Return sanitized message fields, or raise with every violated field."""
    to = sanitize(to)
    text = sanitize(text)
    errors = []
    if not to:
        errors.append((("body", "to"), '"to" is not allowed to be empty'))
    if not text:
        errors.append((("body", "text"), '"text" is not allowed to be empty'))
    if kind not in SENDABLE_KINDS:
        errors.append((("body", "kind"), '"kind" must be one of [%s]' % ", ".join(SENDABLE_KINDS)))
    if errors:
        raise ValidationError(errors)
    return {"recipient": to, "text": text, "kind": kind}


class MessageLog:
    def __init__(self, store: Store, presence: PresenceTracker):
        self.store = store
        self.presence = presence

    def append(self, sender: Optional[str], to: str, text: str, kind: str) -> Message:
        sender = sanitize(sender)
        errors = []
        try:
            fields = validate_content(to, text, kind)
        except ValidationError as exc:
            errors.extend(exc.errors)
        if not sender or not self.presence.is_registered(sender):
            errors.append((("header", "user"), '"User" must be a registered participant'))
        if errors:
            logger.info("MESSAGE_REJECTED sender=%s errors=%s", sender, [msg for _, msg in errors])
            raise ValidationError(errors)

        # The sender may be evicted right after the check above; the late write is still accepted.
        message = self.store.add_message(sender=sender, time=format_time(), **fields)
        logger.info(
            "MESSAGE_SENT sender=%s recipient=%s kind=%s message_id=%s",
            message.sender,
            message.recipient,
            message.kind,
            message.id,
        )
        return message

    def list_visible_to(self, viewer: Optional[str], limit: Optional[int] = None) -> List[Message]:
        if limit is not None and limit <= 0:
            raise ValidationError([(("query", "limit"), '"limit" must be a positive integer')])
        viewer = sanitize(viewer)
        visible = [message for message in self.store.list_messages() if is_visible_to(message, viewer)]
        if limit is not None:
            return visible[-limit:]
        return visible

    def _owned(self, message_id: int, viewer: Optional[str]) -> Message:
        message = self.store.get_message(message_id)
        if message is None:
            raise NotFound("Message not found")
        if not is_owner(sanitize(viewer), message):
            logger.warning("UNAUTHORIZED_ACCESS message_id=%s actor=%s", message_id, viewer)
            raise Unauthorized()
        return message

    def update_own(self, message_id: int, viewer: Optional[str], to: str, text: str, kind: str) -> Message:
        message = self._owned(message_id, viewer)
        fields = validate_content(to, text, kind)
        fields["time"] = format_time()
        if not self.store.update_message(message.id, **fields):
            raise NotFound("Message not found")
        logger.info("MESSAGE_UPDATED message_id=%s sender=%s", message.id, message.sender)
        for field, value in fields.items():
            setattr(message, field, value)
        return message

    def delete_own(self, message_id: int, viewer: Optional[str]) -> None:
        message = self._owned(message_id, viewer)
        if not self.store.delete_message(message.id):
            raise NotFound("Message not found")
        logger.info("MESSAGE_DELETED message_id=%s sender=%s", message.id, message.sender)
