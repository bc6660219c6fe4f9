import pytest
from unittest.mock import MagicMock, patch
import httpx
from screener.messaging.sender import send_text
from screener.settings import settings


@pytest.fixture(autouse=True)
def twilio_creds():
    with patch.object(settings, "TWILIO_ACCOUNT_SID", "AC123"), \
         patch.object(settings, "TWILIO_AUTH_TOKEN", "tok"), \
         patch.object(settings, "TWILIO_WHATSAPP_FROM", "whatsapp:+5700"):
        yield


@patch("httpx.Client.post")
def test_send_text_success(mock_post):
    resp = MagicMock()
    resp.status_code = 201
    resp.json.return_value = {"sid": "SM1"}
    mock_post.return_value = resp

    assert send_text("whatsapp:+5711", "“Hola” — bienvenid@") is True

    url = mock_post.call_args.args[0]
    assert url == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
    kwargs = mock_post.call_args.kwargs
    assert kwargs["data"] == {"To": "whatsapp:+5711", "From": "whatsapp:+5700", "Body": '"Hola" - bienvenid@'}
    assert kwargs["auth"] == ("AC123", "tok")


@patch("screener.messaging.sender.log")
@patch("httpx.Client.post")
def test_send_text_success_with_unexpected_body(mock_post, mock_log):
    resp = MagicMock()
    resp.status_code = 201
    resp.json.return_value = ["not", "a", "dict"]
    mock_post.return_value = resp

    assert send_text("whatsapp:+5711", "hi") is True
    assert mock_log.call_args.kwargs["event"] == "twilio_send_success"
    assert mock_log.call_args.kwargs["messageSid"] == ""


@patch("screener.messaging.sender.log")
@patch("httpx.Client.post")
def test_send_text_non_2xx(mock_post, mock_log):
    resp = MagicMock()
    resp.status_code = 400
    resp.text = "Invalid To"
    mock_post.return_value = resp

    assert send_text("whatsapp:+5711", "hi") is False
    assert mock_log.call_args.kwargs["event"] == "twilio_send_failed"
    assert mock_log.call_args.kwargs["statusCode"] == 400


@patch("httpx.Client.post")
def test_send_text_timeout(mock_post):
    mock_post.side_effect = httpx.ReadTimeout("Timeout")
    assert send_text("whatsapp:+5711", "hi") is False


@patch("screener.messaging.sender.log")
@patch("httpx.Client.post")
def test_send_text_without_credentials(mock_post, mock_log):
    with patch.object(settings, "TWILIO_AUTH_TOKEN", ""):
        assert send_text("whatsapp:+5711", "hi") is False
    mock_post.assert_not_called()
    mock_log.assert_called_with(event="twilio_send_skipped_no_credentials", to="whatsapp:+5711")
