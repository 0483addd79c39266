import time
from unittest import mock

from chat_room.client.api import APIClient
from chat_room.client.main import Heartbeat
from chat_room.client.models import ChatMessage


def test_api_client_sends_user_header_and_kind():
    api = APIClient("http://chat.local/", "ana")
    with mock.patch("chat_room.client.api.requests") as requests_mock:
        requests_mock.post.return_value.json.return_value = {"id": 1}
        api.send("bob", "psst", private=True)

    requests_mock.post.assert_called_once_with(
        "http://chat.local/messages",
        json={"to": "bob", "text": "psst", "kind": "private_message"},
        headers={"Content-Type": "application/json", "User": "ana"},
        timeout=10,
    )
    requests_mock.post.return_value.raise_for_status.assert_called_once()


def test_api_client_messages_passes_limit():
    api = APIClient("http://chat.local", "ana")
    with mock.patch("chat_room.client.api.requests") as requests_mock:
        requests_mock.get.return_value.json.return_value = []
        assert api.messages(limit=5) == []

    _, kwargs = requests_mock.get.call_args
    assert kwargs["params"] == {"limit": 5}


def test_chat_message_rendering():
    public = ChatMessage.from_json(
        {"id": 3, "from": "ana", "to": "Todos", "text": "hi", "kind": "message", "time": "10:00:00"}
    )
    status = ChatMessage.from_json(
        {"id": 4, "from": "bob", "to": "Todos", "text": "entra na sala...", "kind": "status", "time": "10:00:01"}
    )

    assert public.render() == "(10:00:00) #3 ana para Todos: hi"
    assert status.render() == "(10:00:01) bob entra na sala..."


def test_heartbeat_pings_until_stopped():
    api = mock.Mock()
    heartbeat = Heartbeat(api, interval=0.01)

    heartbeat.start()
    deadline = time.monotonic() + 5
    while api.ping.call_count < 2 and time.monotonic() < deadline:
        time.sleep(0.01)
    heartbeat.stop()
    calls = api.ping.call_count
    time.sleep(0.05)

    assert calls >= 2
    assert api.ping.call_count == calls
