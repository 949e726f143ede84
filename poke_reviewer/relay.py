"""Review request pipeline: build notes -> branch -> PR -> reviewer emails -> Slack DMs.

One call to ReviewRequestRelay.handle processes one webhook delivery.
Failures before the fan-out propagate to the caller; each reviewer
notification runs as its own task and its failure is logged and isolated.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List

import requests

from poke_reviewer.adapters.base import (
    BranchNotFoundError,
    ChatPlatformAdapter,
    ChatPlatformError,
    GitPlatformAdapter,
)
from poke_reviewer.branch import extract_branch
from poke_reviewer.config import AppConfig, MessageConfig
from poke_reviewer.message import addressed_to, build_review_message
from poke_reviewer.models import SlackMessage, SlackUser, WebhookPayload
from poke_reviewer.reviewers import extract_reviewer_emails

LOG = logging.getLogger("poke_reviewer.relay")


class ReviewRequestRelay:
    """Relays an app build notification to the reviewers of its PR."""

    def __init__(
        self,
        git: GitPlatformAdapter,
        chat: ChatPlatformAdapter,
        email_domain: str,
        branding: MessageConfig | None = None,
        max_workers: int = 8,
    ) -> None:
        self._git = git
        self._chat = chat
        self._email_domain = email_domain
        self._branding = branding or MessageConfig()
        self._max_workers = max_workers

    @classmethod
    def from_config(cls, config: AppConfig) -> "ReviewRequestRelay":
        """Build relay with GitHub and Slack adapters from resolved config tokens."""
        from poke_reviewer.adapters.github import GitHubAdapter
        from poke_reviewer.adapters.slack import SlackAdapter

        git = GitHubAdapter(
            token=config.github_token_resolved or "",
            repository=config.github.repository,
            api_url=config.github.api_url,
            head_owner=config.github.head_owner_resolved,
            state=config.github.state,
            timeout=config.github.timeout,
        )
        chat = SlackAdapter(
            token=config.slack_token_resolved or "",
            api_url=config.slack.api_url,
            timeout=config.slack.timeout,
        )
        return cls(
            git,
            chat,
            email_domain=config.reviewers.email_domain,
            branding=config.message,
            max_workers=config.webhook.max_notify_workers,
        )

    def handle(self, payload: WebhookPayload) -> List[SlackUser]:
        """Process one delivery; return the users that were notified."""
        branch = extract_branch(payload.app_version.notes)
        if not branch:
            raise BranchNotFoundError(branch)
        LOG.info("Build %s: looking up PR for branch %s", payload.app_version.shortversion, branch)

        pr = self._git.find_pull_request(branch)
        message = build_review_message(payload, pr, branch, self._branding)

        emails = extract_reviewer_emails(pr.body, self._email_domain)
        if not emails:
            LOG.info("No reviewers mentioned in PR for branch %s", branch)
            return []
        LOG.debug("Reviewers for %s: %s", branch, emails)

        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(emails)),
            thread_name_prefix="notify",
        ) as pool:
            futures = [pool.submit(self.notify_reviewer, email, message) for email in emails]
        notified = [f.result() for f in futures]
        return [user for user in notified if user is not None]

    def notify_reviewer(self, email: str, message: SlackMessage) -> SlackUser | None:
        """Resolve email and send message; log and return None on failure."""
        try:
            user = self._chat.lookup_user_by_email(email)
            self._chat.post_message(addressed_to(message, user.id))
        except (ChatPlatformError, requests.RequestException, ValueError) as e:
            LOG.warning("Notify %s failed: %s", email, e)
            return None
        LOG.info("message sent to: %s", user.real_name or user.name or user.id)
        return user
