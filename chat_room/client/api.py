"""HTTP API client for interacting with the chat room server."""
from typing import Any, Dict, List, Optional

import requests


class APIClient:
    def __init__(self, base_url: str, name: str):
        self.base_url = base_url.rstrip("/")
        self.name = name

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "User": self.name}

    @staticmethod
    def _payload(to: str, text: str, private: bool) -> Dict[str, str]:
        return {"to": to, "text": text, "kind": "private_message" if private else "message"}

    def join(self) -> Dict[str, Any]:
        resp = requests.post(f"{self.base_url}/participants", json={"name": self.name}, timeout=10)
        resp.raise_for_status()
        return resp.json()

    def participants(self) -> List[Dict[str, Any]]:
        resp = requests.get(f"{self.base_url}/participants", timeout=10)
        resp.raise_for_status()
        return resp.json()

    def send(self, to: str, text: str, private: bool = False) -> Dict[str, Any]:
        resp = requests.post(
            f"{self.base_url}/messages", json=self._payload(to, text, private), headers=self._headers(), timeout=10
        )
        resp.raise_for_status()
        return resp.json()

    def messages(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if limit:
            params["limit"] = limit
        resp = requests.get(f"{self.base_url}/messages", params=params, headers=self._headers(), timeout=10)
        resp.raise_for_status()
        return resp.json()

    def ping(self) -> None:
        resp = requests.post(f"{self.base_url}/status", headers=self._headers(), timeout=10)
        resp.raise_for_status()

    def edit(self, message_id: int, to: str, text: str, private: bool = False) -> Dict[str, Any]:
        resp = requests.put(
            f"{self.base_url}/messages/{message_id}",
            json=self._payload(to, text, private),
            headers=self._headers(),
            timeout=10,
        )
        resp.raise_for_status()
        return resp.json()

    def delete(self, message_id: int) -> None:
        resp = requests.delete(f"{self.base_url}/messages/{message_id}", headers=self._headers(), timeout=10)
        resp.raise_for_status()
