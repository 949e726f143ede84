"""Source-control and chat platform adapters."""

from poke_reviewer.adapters.base import (
    BranchNotFoundError,
    ChatPlatformAdapter,
    ChatPlatformError,
    ChatUserNotFoundError,
    GitPlatformAdapter,
    GitPlatformError,
    MessageRejectedError,
)
from poke_reviewer.adapters.github import GitHubAdapter
from poke_reviewer.adapters.slack import SlackAdapter

__all__ = [
    "BranchNotFoundError",
    "ChatPlatformAdapter",
    "ChatPlatformError",
    "ChatUserNotFoundError",
    "GitHubAdapter",
    "GitPlatformAdapter",
    "GitPlatformError",
    "MessageRejectedError",
    "SlackAdapter",
]
