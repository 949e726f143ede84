"""Unit tests for Slack adapter (mocked API)."""

import json
from unittest.mock import Mock, patch

import pytest

from poke_reviewer.adapters.base import ChatPlatformError, ChatUserNotFoundError, MessageRejectedError
from poke_reviewer.adapters.slack import SlackAdapter
from poke_reviewer.models import Attachment, SlackMessage, SlackUser


@pytest.fixture
def adapter() -> SlackAdapter:
    return SlackAdapter(token="xoxb-test")


def _response(data: object, status_code: int = 200) -> Mock:
    mock_resp = Mock()
    mock_resp.status_code = status_code
    mock_resp.json.return_value = data
    mock_resp.text = json.dumps(data)
    mock_resp.reason = ""
    return mock_resp


def test_lookup_user_by_email_success(adapter: SlackAdapter) -> None:
    """ok=true with user returns that user."""
    data = {"ok": True, "user": {"id": "U1", "name": "jane", "real_name": "Jane Doe"}}
    with patch.object(adapter._session, "request", return_value=_response(data)) as req:
        user = adapter.lookup_user_by_email("jane@organization.com")

    assert user == SlackUser(id="U1", name="jane", real_name="Jane Doe")
    call_args = req.call_args
    assert call_args[0][0] == "GET"
    assert call_args[0][1] == "https://slack.com/api/users.lookupByEmail"
    assert call_args[1]["params"] == {"email": "jane@organization.com"}


@pytest.mark.parametrize("data", [{"ok": False}, {"ok": False, "error": "users_not_found"}, {"ok": True}])
def test_lookup_user_not_found(adapter: SlackAdapter, data: dict) -> None:
    """ok=false or missing user raises ChatUserNotFoundError."""
    with patch.object(adapter._session, "request", return_value=_response(data)):
        with pytest.raises(ChatUserNotFoundError) as exc_info:
            adapter.lookup_user_by_email("ghost@organization.com")
    assert str(exc_info.value) == "user ghost@organization.com does not exist"


def test_post_message_sends_json_with_bearer(adapter: SlackAdapter) -> None:
    """chat.postMessage gets JSON body and bearer token."""
    message = SlackMessage(channel="U1", attachments=[Attachment(text="hi", color="#2eb886")])
    with patch.object(adapter._session, "request", return_value=_response({"ok": True})) as req:
        adapter.post_message(message)

    assert adapter._session.headers["Authorization"] == "Bearer xoxb-test"
    call_args = req.call_args
    assert call_args[0][0] == "POST"
    assert call_args[0][1] == "https://slack.com/api/chat.postMessage"
    assert call_args[1]["headers"]["Content-Type"] == "application/json; charset=utf-8"
    sent = json.loads(call_args[1]["data"])
    assert sent["channel"] == "U1"
    assert sent["as_user"] is True
    assert sent["attachments"][0]["text"] == "hi"
    assert sent["attachments"][0]["color"] == "#2eb886"


def test_post_message_rejected_surfaces_error(adapter: SlackAdapter) -> None:
    """ok=false raises with the literal platform error string."""
    with patch.object(adapter._session, "request", return_value=_response({"ok": False, "error": "invalid_auth"})):
        with pytest.raises(MessageRejectedError) as exc_info:
            adapter.post_message(SlackMessage(channel="U1"))
    assert str(exc_info.value) == "invalid_auth"
    assert exc_info.value.error == "invalid_auth"


def test_http_error_raises(adapter: SlackAdapter) -> None:
    """HTTP status >= 400 raises ChatPlatformError."""
    with patch.object(adapter._session, "request", return_value=_response({}, status_code=500)):
        with pytest.raises(ChatPlatformError, match="500"):
            adapter.lookup_user_by_email("jane@organization.com")


def test_post_message_rate_limited_surfaces_error(adapter: SlackAdapter) -> None:
    """Slack error envelope on a 4xx status is reported as the literal error code."""
    resp = _response({"ok": False, "error": "ratelimited"}, status_code=429)
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(MessageRejectedError) as exc_info:
            adapter.post_message(SlackMessage(channel="U1"))
    assert str(exc_info.value) == "ratelimited"


def test_http_error_with_non_json_body_raises(adapter: SlackAdapter) -> None:
    """Non-JSON error bodies keep the generic ChatPlatformError."""
    resp = _response({}, status_code=502)
    resp.json.side_effect = ValueError("Expecting value")
    resp.text = "<html>Bad Gateway</html>"
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(ChatPlatformError, match="502") as exc_info:
            adapter.post_message(SlackMessage(channel="U1"))
    assert not isinstance(exc_info.value, MessageRejectedError)
