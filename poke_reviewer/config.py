"""Configuration loading from YAML and environment.

Secrets (GitHub and Slack tokens) are taken from CLI flags, environment
variables or files (Docker secrets). Never put real tokens in config files
committed to the repo.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _read_secret(env_key: str, file_env_key: str, env: Mapping[str, str] | None = None) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    env = os.environ if env is None else env
    value = env.get(env_key)
    if value:
        return value.strip()
    file_path = env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


def _is_placeholder(value: str | None) -> bool:
    return not value or value.startswith("${") or value.startswith("your-")


class GitHubConfig(BaseSettings):
    """GitHub API settings and the repository whose PRs are looked up."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env, flag or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    repository: str = Field(default="owner/repo", description="Repo holding the PRs, e.g. tokopedia/ios-tokopedia")
    head_owner: str | None = Field(
        default=None, description="Owner prefix for the head filter; defaults to the repository owner"
    )
    state: str = Field(default="open", description="PR state filter: open, closed or all")
    timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")

    @property
    def head_owner_resolved(self) -> str:
        return self.head_owner or self.repository.split("/", 1)[0]


class SlackConfig(BaseSettings):
    """Slack Web API settings."""

    model_config = SettingsConfigDict(env_prefix="SLACK_", extra="ignore")

    token: str | None = Field(default=None, description="Bot or user token (xoxb-/xoxp-)")
    api_url: str = Field(default="https://slack.com/api", description="Web API base URL")
    timeout: int = Field(default=30, ge=1, description="HTTP timeout in seconds")


class ReviewersConfig(BaseSettings):
    """How reviewers are found in the PR description."""

    model_config = SettingsConfigDict(env_prefix="REVIEWERS_", extra="ignore")

    email_domain: str = Field(default="tokopedia.com", description="Organization email domain")


class MessageConfig(BaseSettings):
    """Fixed branding of the review request attachment."""

    model_config = SettingsConfigDict(env_prefix="MESSAGE_", extra="ignore")

    text: str = Field(default="Please kindly review / check my latest app.", description="Attachment text")
    color: str = Field(default="#2eb886", description="Attachment side bar color")
    image_url: str = Field(default="https://ecs7.tokopedia.net/blog-tokopedia-com/uploads/2015/08/tokopedia.png")
    thumb_url: str = Field(default="https://ecs.tokopedia.com/img/footer/toped.png")
    footer: str = Field(default="PokeTheReviewer")
    footer_icon: str = Field(default="https://ecs.tokopedia.com/img/footer/toped.png")


class WebhookConfig(BaseSettings):
    """Webhook server settings."""

    model_config = SettingsConfigDict(env_prefix="WEBHOOK_", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8888, ge=0, le=65535, description="Bind port (0 picks a free port)")
    path: str = Field(default="/webhook-handler", description="Webhook URL path")
    max_notify_workers: int = Field(default=8, ge=1, description="Parallel reviewer notifications per delivery")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s [%(threadName)s] - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)
    reviewers: ReviewersConfig = Field(default_factory=ReviewersConfig)
    message: MessageConfig = Field(default_factory=MessageConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if not _is_placeholder(t):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    @property
    def slack_token_resolved(self) -> str | None:
        """Resolve Slack token from config, env or Docker secret file."""
        t = self.slack.token
        if not _is_placeholder(t):
            return t
        return _read_secret("SLACK_TOKEN", "SLACK_TOKEN_FILE")


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE, SLACK_TOKEN or SLACK_TOKEN_FILE.
    """
    path = config_path or Path("config.yaml")
    if not path.is_file():
        return AppConfig()

    raw = yaml.safe_load(path.read_text()) or {}
    raw = _substitute_env(raw, os.environ)

    return AppConfig(
        github=GitHubConfig(**(raw.get("github") or {})),
        slack=SlackConfig(**(raw.get("slack") or {})),
        reviewers=ReviewersConfig(**(raw.get("reviewers") or {})),
        message=MessageConfig(**(raw.get("message") or {})),
        webhook=WebhookConfig(**(raw.get("webhook") or {})),
        logging=LoggingConfig(**(raw.get("logging") or {})),
    )
