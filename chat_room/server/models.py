"""Database models for the chat room server."""
from sqlalchemy import Column, Float, Integer, String, Text

from .database import Base

PUBLIC = "message"
PRIVATE = "private_message"
STATUS = "status"


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    name_key = Column(String, unique=True, index=True, nullable=False)
    last_status = Column(Float, nullable=False)


class Message(Base):
    __tablename__ = "messages"
    # Ids are never reused, so ascending id is the canonical append order.
    # This relies on writers being serialized, as SQLite does. On servers that hand
    # out sequence values before commit (PostgreSQL), a reader may see id N+1 before
    # id N commits, and id cursors such as the console client's can skip N.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    sender = Column(String, nullable=False, index=True)
    recipient = Column(String, nullable=False, index=True)
    text = Column(Text, nullable=False)
    kind = Column(String, nullable=False)
    time = Column(String(8), nullable=False)
