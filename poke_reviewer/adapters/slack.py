"""Slack Web API adapter (users.lookupByEmail, chat.postMessage)."""

from typing import Any, Dict

import requests

from poke_reviewer.adapters.base import (
    ChatPlatformAdapter,
    ChatPlatformError,
    ChatUserNotFoundError,
    MessageRejectedError,
)
from poke_reviewer.models import SlackMessage, SlackResponse, SlackUser


class SlackAdapter(ChatPlatformAdapter):
    """Slack implementation authenticated with a bearer token."""

    def __init__(self, token: str, api_url: str = "https://slack.com/api", timeout: int = 30) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"Bearer {token}"

    def _request(
        self,
        method: str,
        api_method: str,
        params: Dict[str, Any] | None = None,
        data: bytes | None = None,
    ) -> SlackResponse:
        url = f"{self._api_url}/{api_method}"
        headers = {"Content-Type": "application/json; charset=utf-8"} if data is not None else None
        resp = self._session.request(
            method, url, params=params, data=data, headers=headers, timeout=self._timeout
        )
        if resp.status_code >= 400:
            # Slack still sends its {"ok": false, "error": ...} envelope on 4xx (e.g. 429 ratelimited)
            try:
                result = SlackResponse.model_validate(resp.json())
            except ValueError:
                result = None
            if result is not None and not result.ok and result.error:
                return result
            raise ChatPlatformError(f"{api_method} {resp.status_code}: {resp.text or resp.reason}")
        return SlackResponse.model_validate(resp.json())

    def lookup_user_by_email(self, email: str) -> SlackUser:
        result = self._request("GET", "users.lookupByEmail", params={"email": email})
        if not result.ok or result.user is None:
            raise ChatUserNotFoundError(email)
        return result.user

    def post_message(self, message: SlackMessage) -> None:
        body = message.model_dump_json().encode("utf-8")
        result = self._request("POST", "chat.postMessage", data=body)
        if not result.ok:
            raise MessageRejectedError(result.error or "unknown_error")
