"""GitHub API adapter."""

from typing import Any, Dict

import requests

from poke_reviewer.adapters.base import BranchNotFoundError, GitPlatformAdapter, GitPlatformError
from poke_reviewer.models import PullRequestInfo


class GitHubAdapter(GitPlatformAdapter):
    """GitHub REST implementation scoped to one repository."""

    def __init__(
        self,
        token: str,
        repository: str,
        api_url: str = "https://api.github.com",
        head_owner: str | None = None,
        state: str = "open",
        timeout: int = 30,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._repository = repository
        self._head_owner = head_owner or repository.split("/", 1)[0]
        self._state = state
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        resp = self._session.request(method, url, params=params, timeout=self._timeout)
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except (ValueError, AttributeError):
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def find_pull_request(self, branch: str) -> PullRequestInfo:
        resp = self._request(
            "GET",
            f"/repos/{self._repository}/pulls",
            params={"head": f"{self._head_owner}:{branch}", "state": self._state},
        )
        data = resp.json()
        if data is not None and not isinstance(data, list):
            raise GitPlatformError(f"unexpected pulls response for branch {branch}: {type(data).__name__}")
        if not data:
            raise BranchNotFoundError(branch)
        return PullRequestInfo.model_validate(data[0])
