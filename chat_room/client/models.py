"""Client-side models for message display."""
from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ChatMessage:
    id: int
    sender: str
    to: str
    text: str
    kind: str
    time: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ChatMessage":
        return cls(
            id=data["id"],
            sender=data["from"],
            to=data["to"],
            text=data["text"],
            kind=data["kind"],
            time=data["time"],
        )

    def render(self) -> str:
        if self.kind == "status":
            return f"({self.time}) {self.sender} {self.text}"
        if self.kind == "private_message":
            return f"({self.time}) #{self.id} {self.sender} reservadamente para {self.to}: {self.text}"
        return f"({self.time}) #{self.id} {self.sender} para {self.to}: {self.text}"
