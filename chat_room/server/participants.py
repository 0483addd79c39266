"""Participant registration and listing routes."""
from typing import List

from fastapi import APIRouter, Depends, status

from . import schemas
from .deps import get_presence
from .presence import PresenceTracker

router = APIRouter(prefix="/participants", tags=["participants"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.ParticipantOut)
def register(payload: schemas.ParticipantCreate, presence: PresenceTracker = Depends(get_presence)):
    return presence.register(payload.name)


@router.get("", response_model=List[schemas.ParticipantOut])
def list_participants(presence: PresenceTracker = Depends(get_presence)):
    return presence.list()
