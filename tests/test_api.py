from http import HTTPStatus

from chat_room.shared.utils import name_key


def register(client, name):
    return client.post("/participants", json={"name": name})


def send(client, sender, to, text, kind="message"):
    return client.post("/messages", json={"to": to, "text": text, "kind": kind}, headers={"User": sender})


def visible(client, viewer, **params):
    resp = client.get("/messages", params=params, headers={"User": viewer})
    assert resp.status_code == HTTPStatus.OK
    return resp.json()


def test_root(client):
    assert client.get("/").json() == {"status": "ok"}


def test_end_to_end_room_flow(client):
    assert register(client, "ana").status_code == HTTPStatus.CREATED
    participants = client.get("/participants").json()
    assert len(participants) == 1
    assert name_key(participants[0]["name"]) == name_key("Ana")
    log = visible(client, "ana")
    assert [(m["kind"], m["to"]) for m in log] == [("status", "Todos")]

    assert register(client, "bob").status_code == HTTPStatus.CREATED
    assert send(client, "ana", "Todos", "hi").status_code == HTTPStatus.CREATED
    assert "hi" in [m["text"] for m in visible(client, "bob")]

    assert send(client, "bob", "ana", "secret", "private_message").status_code == HTTPStatus.CREATED
    assert "secret" not in [m["text"] for m in visible(client, "carol")]
    assert "secret" in [m["text"] for m in visible(client, "ana")]
    assert "secret" in [m["text"] for m in visible(client, "bob")]


def test_message_body_uses_from_field(client):
    register(client, "ana")
    body = send(client, "ana", "Todos", "hi").json()
    assert body["from"] == "ana"
    assert set(body) == {"id", "from", "to", "text", "kind", "time"}


def test_register_conflict_and_validation(client):
    assert register(client, "maria").status_code == HTTPStatus.CREATED
    assert register(client, "Maria").status_code == HTTPStatus.CONFLICT
    assert register(client, "").status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert register(client, "<b></b>").status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.post("/participants", json={}).status_code == HTTPStatus.UNPROCESSABLE_ENTITY


def test_send_rejects_unknown_sender_and_bad_body(client):
    register(client, "ana")

    resp = send(client, "ghost", "Todos", "hi")
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert '"User" must be a registered participant' in [err["msg"] for err in resp.json()["detail"]]

    assert send(client, "ana", "Todos", "hi", "status").status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert send(client, "ana", "Todos", "").status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert client.post("/messages", json={"to": "Todos", "text": "hi", "kind": "message"}).status_code == (
        HTTPStatus.UNPROCESSABLE_ENTITY
    )


def test_invalid_body_reports_every_field(client):
    register(client, "ana")
    resp = client.post("/messages", json={"kind": "nope"}, headers={"User": "ana"})
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    fields = {tuple(err["loc"])[-1] for err in resp.json()["detail"]}
    assert {"to", "text", "kind"} <= fields


def test_limit_returns_tail_of_visible_messages(client):
    register(client, "ana")
    register(client, "bob")
    for i in range(3):
        send(client, "ana", "Todos", f"public {i}")
    send(client, "ana", "bob", "private", "private_message")

    texts = [m["text"] for m in visible(client, "carol", limit=2)]
    assert texts == ["public 1", "public 2"]
    assert client.get("/messages", params={"limit": 0}, headers={"User": "ana"}).status_code == (
        HTTPStatus.UNPROCESSABLE_ENTITY
    )


def test_status_touches_known_user_only(client, app, clock):
    register(client, "ana")
    clock.advance(5)

    assert client.post("/status", headers={"User": "ana"}).status_code == HTTPStatus.OK
    assert client.get("/participants").json()[0]["last_status"] == clock.now
    assert client.post("/status", headers={"User": "bob"}).status_code == HTTPStatus.NOT_FOUND


def test_update_message_permissions(client):
    register(client, "ana")
    register(client, "bob")
    message_id = send(client, "ana", "Todos", "draft").json()["id"]
    payload = {"to": "Todos", "text": "final", "kind": "message"}

    assert client.put(f"/messages/{message_id}", json=payload, headers={"User": "bob"}).status_code == (
        HTTPStatus.UNAUTHORIZED
    )
    assert client.put("/messages/9999", json=payload, headers={"User": "ana"}).status_code == HTTPStatus.NOT_FOUND
    bad = {"to": "Todos", "text": "final", "kind": "status"}
    assert client.put(f"/messages/{message_id}", json=bad, headers={"User": "ana"}).status_code == (
        HTTPStatus.UNPROCESSABLE_ENTITY
    )
    assert [m["text"] for m in visible(client, "ana") if m["id"] == message_id] == ["draft"]

    resp = client.put(f"/messages/{message_id}", json=payload, headers={"User": "ana"})
    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json()["text"] == "final"
    assert [m["text"] for m in visible(client, "bob") if m["id"] == message_id] == ["final"]


def test_delete_message_permissions(client):
    register(client, "ana")
    register(client, "bob")
    message_id = send(client, "ana", "Todos", "oops").json()["id"]

    assert client.delete(f"/messages/{message_id}", headers={"User": "bob"}).status_code == HTTPStatus.UNAUTHORIZED
    assert client.delete(f"/messages/{message_id}", headers={"User": "ana"}).status_code == HTTPStatus.CREATED
    assert client.delete(f"/messages/{message_id}", headers={"User": "ana"}).status_code == HTTPStatus.NOT_FOUND
    assert message_id not in [m["id"] for m in visible(client, "ana")]


def test_sweep_evicts_idle_participant(client, app, clock):
    register(client, "ana")
    register(client, "bob")
    clock.advance(11)
    client.post("/status", headers={"User": "bob"})

    app.state.sweeper.sweep_once()

    assert [p["name"] for p in client.get("/participants").json()] == ["bob"]
    statuses = [(m["from"], m["text"]) for m in visible(client, "bob") if m["kind"] == "status"]
    assert statuses[-1] == ("ana", "sai da sala...")
    assert client.post("/status", headers={"User": "ana"}).status_code == HTTPStatus.NOT_FOUND


def test_missing_user_header_is_treated_as_unknown_user(client):
    register(client, "ana")
    message_id = send(client, "ana", "Todos", "hi").json()["id"]

    assert client.post("/status").status_code == HTTPStatus.NOT_FOUND
    resp = client.post("/messages", json={"to": "Todos", "text": "hi", "kind": "message"})
    assert resp.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
    assert [err["loc"] for err in resp.json()["detail"]] == [["header", "user"]]
    assert client.delete(f"/messages/{message_id}").status_code == HTTPStatus.UNAUTHORIZED
    assert [m["text"] for m in client.get("/messages").json()] == ["entra na sala...", "hi"]


def test_every_422_body_has_the_same_shape(client):
    register(client, "ana")
    schema_error = register(client, "").json()["detail"]
    domain_error = register(client, "   ").json()["detail"]
    sender_error = send(client, "ghost", "Todos", "<b></b>").json()["detail"]

    for detail in (schema_error, domain_error, sender_error):
        assert detail and all({"loc", "msg", "type"} <= set(err) for err in detail)
    assert domain_error[0]["loc"] == ["body", "name"]
    assert [err["loc"] for err in sender_error] == [["body", "text"], ["header", "user"]]
