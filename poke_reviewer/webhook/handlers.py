"""Handle app build webhook deliveries.

Validates the payload and runs the review request relay. Every failure is
logged and the delivery is dropped; nothing is reported back to the caller.
"""

import logging
from typing import Any, Dict

import requests
from pydantic import ValidationError

from poke_reviewer.adapters.base import BranchNotFoundError, GitPlatformError
from poke_reviewer.branch import BranchExtractionError
from poke_reviewer.models import SlackUser, WebhookPayload
from poke_reviewer.relay import ReviewRequestRelay

LOG = logging.getLogger("poke_reviewer.webhook.handlers")


def parse_payload(data: Dict[str, Any]) -> WebhookPayload | None:
    """Validate raw JSON object as WebhookPayload; None if required fields are missing."""
    try:
        return WebhookPayload.model_validate(data)
    except ValidationError as e:
        LOG.warning("Invalid webhook payload: %s", e.errors(include_url=False))
        return None


def handle_app_build(relay: ReviewRequestRelay, data: Dict[str, Any]) -> list[SlackUser]:
    """Run the relay for one delivery and return notified users ([] on any failure)."""
    payload = parse_payload(data)
    if payload is None:
        return []
    LOG.info("App build %s: %s", payload.app_version.shortversion, payload.text)
    try:
        return relay.handle(payload)
    except BranchNotFoundError as e:
        LOG.warning("Skipping build %s: %s", payload.app_version.shortversion, e)
    except BranchExtractionError as e:
        LOG.warning("Skipping build %s: %s", payload.app_version.shortversion, e)
    except GitPlatformError as e:
        LOG.error("GitHub lookup failed: %s", e)
    except requests.RequestException as e:
        LOG.error("HTTP request failed: %s", e)
    except ValueError as e:
        LOG.error("Invalid API response: %s", e)
    return []
