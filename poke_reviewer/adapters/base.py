"""Abstract bases and errors for the source-control and chat platform adapters."""

from abc import ABC, abstractmethod

from poke_reviewer.models import PullRequestInfo, SlackMessage, SlackUser


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class BranchNotFoundError(GitPlatformError):
    """Raised when no pull request exists for a branch."""

    def __init__(self, branch: str) -> None:
        super().__init__(f"branch {branch} does not exist")
        self.branch = branch


class ChatPlatformError(Exception):
    """Raised when a chat platform API call fails."""

    pass


class ChatUserNotFoundError(ChatPlatformError):
    """Raised when an email does not resolve to a chat user."""

    def __init__(self, email: str) -> None:
        super().__init__(f"user {email} does not exist")
        self.email = email


class MessageRejectedError(ChatPlatformError):
    """Raised when the chat platform refuses a message; str() is the platform error code."""

    def __init__(self, error: str) -> None:
        super().__init__(error)
        self.error = error


class GitPlatformAdapter(ABC):
    """Interface for looking up pull requests on a Git hosting platform."""

    @abstractmethod
    def find_pull_request(self, branch: str) -> PullRequestInfo:
        """Return the first PR whose head is branch.

        Raises BranchNotFoundError when there is none.
        """
        ...


class ChatPlatformAdapter(ABC):
    """Interface for resolving users and sending direct messages."""

    @abstractmethod
    def lookup_user_by_email(self, email: str) -> SlackUser:
        """Resolve email to a chat user or raise ChatUserNotFoundError."""
        ...

    @abstractmethod
    def post_message(self, message: SlackMessage) -> None:
        """Send message or raise MessageRejectedError."""
        ...
