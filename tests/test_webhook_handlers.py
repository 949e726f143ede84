"""Tests for webhook delivery handling (payload validation, error isolation)."""

from unittest.mock import MagicMock

import pytest
import requests

from poke_reviewer.adapters.base import BranchNotFoundError, GitPlatformError
from poke_reviewer.branch import BranchExtractionError
from poke_reviewer.models import SlackUser
from poke_reviewer.webhook.handlers import handle_app_build, parse_payload

VALID = {
    "text": "Tokopedia iOS 2.3 is available",
    "app_version": {"shortversion": "2.3", "notes": "<p>release/2.3</p>"},
}


def test_parse_payload_valid() -> None:
    """Valid payload is parsed into WebhookPayload."""
    payload = parse_payload(VALID)
    assert payload is not None
    assert payload.app_version.shortversion == "2.3"
    assert payload.app_version.notes == "<p>release/2.3</p>"


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"text": "x"},
        {"text": "x", "app_version": {"shortversion": "2.3"}},
        {"text": "x", "app_version": {"notes": "<p>a</p>"}},
    ],
)
def test_parse_payload_missing_fields(data: dict) -> None:
    """Missing required fields fail fast."""
    assert parse_payload(data) is None


def test_text_is_optional() -> None:
    """text defaults to empty."""
    payload = parse_payload({"app_version": {"shortversion": "1", "notes": ""}})
    assert payload is not None
    assert payload.text == ""


def test_handle_app_build_runs_relay() -> None:
    """Valid payload is passed to relay.handle."""
    relay = MagicMock()
    relay.handle.return_value = [SlackUser(id="U1")]
    assert handle_app_build(relay, VALID) == [SlackUser(id="U1")]
    relay.handle.assert_called_once()
    assert relay.handle.call_args[0][0].text == "Tokopedia iOS 2.3 is available"


def test_handle_app_build_invalid_payload_skips_relay() -> None:
    """Relay is not called for invalid payloads."""
    relay = MagicMock()
    assert handle_app_build(relay, {"text": "x"}) == []
    relay.handle.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [
        BranchNotFoundError("release/2.3"),
        BranchExtractionError("bad"),
        GitPlatformError("401: Bad credentials"),
        requests.ConnectionError("down"),
        ValueError("Expecting value"),
    ],
)
def test_handle_app_build_logs_and_drops_failures(error: Exception, caplog: pytest.LogCaptureFixture) -> None:
    """Pipeline failures are logged, never raised."""
    relay = MagicMock()
    relay.handle.side_effect = error
    with caplog.at_level("WARNING", logger="poke_reviewer.webhook.handlers"):
        assert handle_app_build(relay, VALID) == []
    assert str(error) in caplog.text
