from fastapi.testclient import TestClient

from persona_chat.database.core.storage import build_memory_storage
from persona_chat.main import create_app


def start_session(client, **body):
    response = client.post("/api/sessions", json=body)
    assert response.status_code == 201
    return response.json()["sessionId"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_personas(client):
    personas = client.get("/api/personas").json()
    assert len(personas) == 12
    assert set(personas[0]) == {"id", "name", "lifespan", "category", "description", "imageUrl"}


def test_categories(client):
    categories = client.get("/api/personas/categories").json()
    assert "Science" in categories and "Literature" in categories


def test_personas_by_category(client):
    personas = client.get("/api/personas/category/Philosophy").json()
    assert {p["name"] for p in personas} == {"Socrates", "Confucius"}


def test_search_personas(client):
    assert [p["name"] for p in client.get("/api/personas/search", params={"q": "mozart"}).json()] == [
        "Wolfgang Amadeus Mozart"
    ]
    assert client.get("/api/personas/search", params={"q": "nothing-matches-this"}).json() == []
    assert len(client.get("/api/personas/search").json()) == 12


def test_get_persona(client):
    assert client.get("/api/personas/7").json()["name"] == "Leonardo da Vinci"

    missing = client.get("/api/personas/999")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Persona not found"}

    invalid = client.get("/api/personas/abc")
    assert invalid.status_code == 400
    assert invalid.json()["message"] == "Invalid persona ID"


def test_create_session_then_resume(client):
    created = client.post("/api/sessions", json={"personaId": 1})
    assert created.status_code == 201
    body = created.json()
    assert body["currentPersonaId"] == 1

    resumed = client.post("/api/sessions", json={"sessionId": body["sessionId"], "personaId": 1})
    assert resumed.status_code == 200
    assert resumed.json() == body


def test_create_session_with_client_token_and_string_persona(client):
    response = client.post("/api/sessions", json={"sessionId": "client-token_1", "personaId": "2"})
    assert response.status_code == 201
    assert response.json()["sessionId"] == "client-token_1"
    assert response.json()["currentPersonaId"] == 2


def test_create_session_validation(client):
    bad_token = client.post("/api/sessions", json={"sessionId": "not valid!"})
    assert bad_token.status_code == 400
    assert bad_token.json()["message"] == "Invalid session data"
    assert bad_token.json()["errors"]

    bad_persona = client.post("/api/sessions", json={"personaId": "abc"})
    assert bad_persona.status_code == 400
    assert bad_persona.json()["errors"][0]["loc"][-1] == "personaId"

    unknown_persona = client.post("/api/sessions", json={"personaId": 999})
    assert unknown_persona.status_code == 404


def test_get_session(client):
    session_id = start_session(client)
    assert client.get(f"/api/sessions/{session_id}").json()["currentPersonaId"] is None
    assert client.get("/api/sessions/missing").status_code == 404


def test_change_persona_emits_system_message(client):
    session_id = start_session(client, personaId=1)

    response = client.patch(f"/api/sessions/{session_id}/persona", json={"personaId": 9})
    assert response.status_code == 200
    assert response.json()["currentPersonaId"] == 9

    messages = client.get(f"/api/sessions/{session_id}/messages").json()
    assert len(messages) == 1
    assert messages[0]["role"] == "system"
    assert messages[0]["content"] == "You are now chatting with William Shakespeare."


def test_change_persona_errors(client):
    session_id = start_session(client)
    assert client.patch(f"/api/sessions/{session_id}/persona", json={"personaId": 999}).status_code == 404
    assert client.patch("/api/sessions/missing/persona", json={"personaId": 1}).status_code == 404
    assert client.patch(f"/api/sessions/{session_id}/persona", json={}).status_code == 400


def test_messages_of_missing_session(client):
    response = client.get("/api/sessions/missing/messages")
    assert response.status_code == 404
    assert response.json() == {"message": "Chat session not found"}


def test_send_message(client):
    session_id = start_session(client, personaId=1)

    response = client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hello"})

    assert response.status_code == 201
    body = response.json()
    assert body["userMessage"]["role"] == "user"
    assert body["userMessage"]["content"] == "Hello"
    assert body["assistantMessage"]["role"] == "assistant"
    assert body["assistantMessage"]["content"]

    log = client.get(f"/api/sessions/{session_id}/messages").json()
    assert [(m["role"], m["content"]) for m in log] == [
        ("user", "Hello"),
        ("assistant", body["assistantMessage"]["content"]),
    ]


def test_send_empty_message(client):
    session_id = start_session(client, personaId=1)
    for body in ({"content": ""}, {"content": "   "}, {}):
        response = client.post(f"/api/sessions/{session_id}/messages", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == "Message content is required"
    assert client.get(f"/api/sessions/{session_id}/messages").json() == []


def test_send_without_persona(client):
    session_id = start_session(client)
    response = client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hello"})
    assert response.status_code == 400
    assert response.json()["message"] == "No persona selected for this chat session"


def test_send_to_missing_session(client):
    response = client.post("/api/sessions/missing/messages", json={"content": "Hello"})
    assert response.status_code == 404


def test_send_when_generator_fails(failing_client):
    session_id = start_session(failing_client, personaId=1)

    response = failing_client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hello"})

    assert response.status_code == 503
    assert "try again" in response.json()["message"]
    log = failing_client.get(f"/api/sessions/{session_id}/messages").json()
    assert [(m["role"], m["content"]) for m in log] == [("user", "Hello")]


def test_clear_messages(client):
    session_id = start_session(client, personaId=1)
    assert client.delete(f"/api/sessions/{session_id}/messages").status_code == 204

    client.post(f"/api/sessions/{session_id}/messages", json={"content": "Hello"})
    assert client.delete(f"/api/sessions/{session_id}/messages").status_code == 204
    assert client.get(f"/api/sessions/{session_id}/messages").json() == []


def test_create_session_without_body(client):
    response = client.post("/api/sessions")
    assert response.status_code == 201
    assert response.json()["sessionId"]
    assert response.json()["currentPersonaId"] is None


def test_unexpected_error_is_internal_server_error(settings, generator, monkeypatch):
    storage = build_memory_storage()

    def broken_get(session_id):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(storage.sessions, "get", broken_get)
    app = create_app(settings=settings, storage=storage, generator=generator)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/api/sessions/abc")
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_unknown_route_and_method_use_error_body(client):
    missing = client.get("/api/nope")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Not Found"}

    not_allowed = client.delete("/api/personas")
    assert not_allowed.status_code == 405
    assert not_allowed.json() == {"message": "Method Not Allowed"}


def test_error_body_documented_in_openapi(client):
    schema = client.get("/openapi.json").json()
    send = schema["paths"]["/api/sessions/{session_id}/messages"]["post"]["responses"]
    assert send["503"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorBody")
    assert "404" in send and "400" in send
