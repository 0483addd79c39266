"""Heartbeat route keeping a participant in the room."""
from typing import Optional

from fastapi import APIRouter, Depends, Header

from . import schemas
from .deps import get_presence
from .presence import PresenceTracker

router = APIRouter(tags=["status"])


@router.post("/status", response_model=schemas.Acknowledgement)
def touch_status(
    user: Optional[str] = Header(default=None),
    presence: PresenceTracker = Depends(get_presence),
):
    presence.touch(user)
    return schemas.Acknowledgement(message="Status updated")
