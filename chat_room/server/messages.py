"""Message-related API routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, status

from . import schemas
from .deps import get_message_log
from .message_log import MessageLog

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=schemas.MessageOut)
def send_message(
    payload: schemas.MessageCreate,
    user: Optional[str] = Header(default=None),
    log: MessageLog = Depends(get_message_log),
):
    message = log.append(user, payload.to, payload.text, payload.kind)
    return schemas.MessageOut.from_message(message)


@router.get("", response_model=List[schemas.MessageOut])
def get_messages(
    limit: Optional[int] = Query(default=None, gt=0),
    user: Optional[str] = Header(default=None),
    log: MessageLog = Depends(get_message_log),
):
    return [schemas.MessageOut.from_message(msg) for msg in log.list_visible_to(user, limit)]


@router.put("/{message_id}", status_code=status.HTTP_201_CREATED, response_model=schemas.MessageOut)
def update_message(
    message_id: int,
    payload: schemas.MessageCreate,
    user: Optional[str] = Header(default=None),
    log: MessageLog = Depends(get_message_log),
):
    message = log.update_own(message_id, user, payload.to, payload.text, payload.kind)
    return schemas.MessageOut.from_message(message)


@router.delete("/{message_id}", status_code=status.HTTP_201_CREATED, response_model=schemas.Acknowledgement)
def delete_message(
    message_id: int,
    user: Optional[str] = Header(default=None),
    log: MessageLog = Depends(get_message_log),
):
    log.delete_own(message_id, user)
    return schemas.Acknowledgement(message="Message deleted")
