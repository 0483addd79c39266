"""Domain errors raised by the presence tracker, message log and store."""
from typing import Iterable, List, Tuple


class ChatError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail=None):
        super().__init__(detail or self.detail)
        if detail is not None:
            self.detail = detail


class ValidationError(ChatError):
    """Malformed or missing fields; carries every violated-field message.

    Each error is a ``(loc, msg)`` pair. ``detail`` uses the same item shape
    as FastAPI request validation errors so every 422 body looks alike.
    """

    status_code = 422
    detail = "Invalid request"

    def __init__(self, errors: Iterable[Tuple[Tuple[str, ...], str]]):
        self.errors = list(errors)
        self.messages: List[str] = [msg for _, msg in self.errors]
        super().__init__([{"loc": list(loc), "msg": msg, "type": "value_error"} for loc, msg in self.errors])


class Unauthorized(ChatError):
    status_code = 401
    detail = "Unauthorized"


class NotFound(ChatError):
    status_code = 404
    detail = "Not found"


class Conflict(ChatError):
    status_code = 409
    detail = "Name already taken"


class StoreUnavailable(ChatError):
    status_code = 503
    detail = "Store unavailable"
