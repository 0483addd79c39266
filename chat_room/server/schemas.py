"""Pydantic schemas for request and response bodies."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .models import Message


class ParticipantCreate(BaseModel):
    name: str = Field(..., min_length=1)


class ParticipantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    last_status: float


class MessageCreate(BaseModel):
    to: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    kind: Literal["message", "private_message"]


class MessageOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    from_: str = Field(..., alias="from")
    to: str
    text: str
    kind: str
    time: str = Field(..., description="HH:MM:SS local time of the last write")

    @classmethod
    def from_message(cls, message: Message) -> "MessageOut":
        return cls(
            id=message.id,
            from_=message.sender,
            to=message.recipient,
            text=message.text,
            kind=message.kind,
            time=message.time,
        )


class Acknowledgement(BaseModel):
    message: str
