import asyncio

import pytest
from fastapi.testclient import TestClient

from backend.api.routes import chat
from backend.api.schemas import ChatRequest
from backend.services import chat_service as chat_service_module
from backend.services.chat_service import ChatService


class FakeChatService:
    def __init__(self):
        self.calls = []

    async def chat(self, message, session_key):
        self.calls.append((message, session_key))
        return {"reply": "odpoveď"}


class FakeClient:
    host = "10.0.0.7"


class FakeRequest:
    client = FakeClient()


def test_chat_route_direct_call_returns_typed_response():
    service = FakeChatService()
    req = ChatRequest(message="Ahoj", sessionId="sess-1")
    res = asyncio.run(chat(request=req, http_request=FakeRequest(), service=service))
    assert res.reply == "odpoveď"
    assert service.calls == [("Ahoj", "sess-1")]


def test_chat_route_falls_back_to_client_address():
    service = FakeChatService()
    req = ChatRequest(message="Ahoj")
    asyncio.run(chat(request=req, http_request=FakeRequest(), service=service))
    assert service.calls[0][1] == "10.0.0.7"


@pytest.fixture
def client(make_engine, monkeypatch):
    monkeypatch.setattr(chat_service_module, "_chat_service", ChatService(engine=make_engine()))
    from backend.main import app

    with TestClient(app) as test_client:
        yield test_client


def test_root_is_plain_ok(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "OK"


def test_health_endpoint(client, catalog):
    body = client.get("/health").json()
    assert body["ok"] is True
    assert body["products"] == len(catalog)
    assert body["faq"] is True
    assert "time" in body


def test_chat_endpoint_recommends(client):
    response = client.post("/chat", json={"message": "chcem kávu bez kofeínu", "sessionId": "abc"})
    assert response.status_code == 200
    assert "https://anilab.sk/p/3" in response.json()["reply"]


def test_chat_endpoint_empty_message_is_greeting(client):
    for body in [{}, {"message": ""}, {"message": None}]:
        response = client.post("/chat", json=body)
        assert response.status_code == 200
        assert response.json()["reply"].startswith("Dobrý deň")


def test_chat_endpoint_rejects_malformed_body(client):
    response = client.post("/chat", json={"message": ["not", "text"]})
    assert response.status_code == 400
    assert "error" in response.json()

    response = client.post("/chat", content="{broken", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_session_follows_client_without_session_id(client):
    first = client.post("/chat", json={"message": "Ahoj"}).json()["reply"]
    second = client.post("/chat", json={"message": "Ahoj"}).json()["reply"]
    assert "Aby som vedel" in first
    assert "Aby som vedel" not in second


def test_chat_endpoint_accepts_long_messages(client):
    response = client.post("/chat", json={"message": "kava " * 401})
    assert response.status_code == 200
    assert response.json()["reply"]
