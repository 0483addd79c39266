"""Console client for the chat room."""
import sys
import threading
from typing import Optional

import requests

from .api import APIClient
from .models import ChatMessage

HEARTBEAT_SECONDS = 5
BROADCAST = "Todos"


class Heartbeat:
    """Pings ``/status`` in the background so the server keeps us in the room."""

    def __init__(self, api: APIClient, interval: float = HEARTBEAT_SECONDS):
        self.api = api
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="chat-room-heartbeat", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.api.ping()
            except requests.RequestException as exc:
                print(f"\nHeartbeat failed: {exc}")
                if isinstance(exc, requests.HTTPError) and exc.response is not None and exc.response.status_code == 404:
                    print("You were removed from the room.")
                    self._stop.set()


class ChatClient:
    """Interactive console client for the chat room."""

    def __init__(self, server_url: str, name: str):
        self.api = APIClient(server_url, name)
        self.heartbeat = Heartbeat(self.api)
        self.last_id = 0

    def join(self) -> bool:
        try:
            self.api.join()
        except requests.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 409:
                print("That name is already taken.")
            else:
                print(f"Could not join: {exc}")
            return False
        except requests.RequestException as exc:
            print(f"Could not join: {exc}")
            return False
        self.heartbeat.start()
        print(f"Welcome, {self.api.name}!")
        return True

    def refresh(self) -> None:
        try:
            raw = self.api.messages(limit=100)
        except requests.RequestException as exc:
            print(f"Could not fetch messages: {exc}")
            return
        for message in map(ChatMessage.from_json, raw):
            if message.id > self.last_id:
                print(message.render())
                self.last_id = message.id

    def who(self) -> None:
        try:
            for participant in self.api.participants():
                print(f"- {participant['name']}")
        except requests.RequestException as exc:
            print(f"Could not fetch participants: {exc}")

    def send(self, private: bool = False) -> None:
        to = input("To (blank for everyone): ").strip() or BROADCAST
        text = input("Message: ")
        try:
            self.api.send(to, text, private=private)
        except requests.RequestException as exc:
            print(f"Message not sent: {exc}")
            return
        self.refresh()

    def edit(self) -> None:
        message_id = input("Message id: ").strip()
        to = input("To (blank for everyone): ").strip() or BROADCAST
        text = input("New text: ")
        private = input("Private? [y/N]: ").strip().lower() == "y"
        try:
            self.api.edit(int(message_id), to, text, private=private)
        except (ValueError, requests.RequestException) as exc:
            print(f"Message not edited: {exc}")

    def delete(self) -> None:
        message_id = input("Message id: ").strip()
        try:
            self.api.delete(int(message_id))
        except (ValueError, requests.RequestException) as exc:
            print(f"Message not deleted: {exc}")

    def close(self) -> None:
        self.heartbeat.stop()


def main() -> None:
    server_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000"
    name = input("Your name: ").strip()
    client = ChatClient(server_url, name)
    if not client.join():
        sys.exit(1)

    commands = {
        "s": client.send,
        "p": lambda: client.send(private=True),
        "r": client.refresh,
        "w": client.who,
        "e": client.edit,
        "d": client.delete,
    }
    try:
        client.refresh()
        while True:
            print("\nCommands: [s]end, [p]rivate, [r]efresh, [w]ho, [e]dit, [d]elete, [q]uit")
            cmd = input("> ").strip().lower()
            if cmd == "q":
                break
            action = commands.get(cmd)
            if action:
                action()
    finally:
        client.close()


if __name__ == "__main__":
    main()
