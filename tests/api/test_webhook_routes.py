import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch
from screener.main import app
from screener.settings import settings
from screener.store.models import SessionState

client = TestClient(app)


@patch("screener.api.routes.handle_inbound")
def test_whatsapp_webhook_acks_and_dispatches(mock_handle):
    response = client.post("/whatsapp", data={"From": "whatsapp:+5711", "Body": " 1 "})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/xml")
    assert "<Response/>" in response.text
    mock_handle.assert_called_once_with("whatsapp:+5711", "1", source="body")


@patch("screener.api.routes.handle_inbound")
def test_button_payload_takes_priority(mock_handle):
    client.post("/whatsapp", data={
        "From": "whatsapp:+5711",
        "Body": "Empezar 🚀",
        "ButtonText": "Empezar 🚀",
        "ButtonPayload": "1",
    })
    mock_handle.assert_called_once_with("whatsapp:+5711", "1", source="payload")


@patch("screener.api.routes.handle_inbound")
def test_button_text_over_body(mock_handle):
    client.post("/whatsapp", data={"From": "whatsapp:+5711", "Body": "x", "ButtonText": "Salir"})
    mock_handle.assert_called_once_with("whatsapp:+5711", "Salir", source="buttonText")


@patch("screener.api.routes.handle_inbound")
def test_missing_from_is_acked_but_ignored(mock_handle):
    response = client.post("/whatsapp", data={"Body": "START"})
    assert response.status_code == 200
    assert "<Response/>" in response.text
    mock_handle.assert_not_called()


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.text == "ok"


def test_admin_disabled_without_key():
    with patch.object(settings, "ADMIN_API_KEY", ""):
        response = client.get("/admin/session/whatsapp:+5711", headers={"x-admin-key": "anything"})
    assert response.status_code == 403


@patch("screener.api.admin_routes.load_session")
def test_admin_session_snapshot(mock_load):
    mock_load.return_value = SessionState(step="Q4", answers={"team_role": "yes"}, startedAt="t0", lastActivityAt="t1")
    with patch.object(settings, "ADMIN_API_KEY", "secret"):
        bad = client.get("/admin/session/whatsapp:+5711", headers={"x-admin-key": "nope"})
        ok = client.get("/admin/session/whatsapp:+5711", headers={"x-admin-key": "secret"})
    assert bad.status_code == 403
    assert ok.status_code == 200
    assert ok.json() == {
        "identity": "whatsapp:+5711",
        "step": "Q4",
        "answers": {"team_role": "yes"},
        "startedAt": "t0",
        "lastActivityAt": "t1",
        "completed": False,
    }


@patch("screener.api.admin_routes.load_session", return_value=None)
def test_admin_session_missing(mock_load):
    with patch.object(settings, "ADMIN_API_KEY", "secret"):
        response = client.get("/admin/session/nobody", headers={"x-admin-key": "secret"})
    assert response.status_code == 404
