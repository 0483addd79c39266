"""FastAPI dependencies resolving the services built at startup."""
from fastapi import Request

from .message_log import MessageLog
from .presence import PresenceTracker


def get_presence(request: Request) -> PresenceTracker:
    return request.app.state.presence


def get_message_log(request: Request) -> MessageLog:
    return request.app.state.message_log
