"""Data models for the build webhook, GitHub and Slack payloads (Pydantic)."""

from typing import Annotated, List

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _none_to_empty(value: object) -> object:
    return "" if value is None else value


NullableStr = Annotated[str, BeforeValidator(_none_to_empty)]


class AppVersion(BaseModel):
    """Build version block of the webhook: short version and HTML release notes."""

    shortversion: str
    notes: str


class WebhookPayload(BaseModel):
    """App build notification posted to the webhook."""

    text: NullableStr = ""
    app_version: AppVersion


class GitHubUser(BaseModel):
    """PR author as returned by the pulls API."""

    login: NullableStr = ""
    avatar_url: NullableStr = ""
    html_url: NullableStr = ""


class PullRequestInfo(BaseModel):
    """Pull request description and author."""

    model_config = ConfigDict(extra="allow")

    body: NullableStr = ""
    user: GitHubUser = Field(default_factory=GitHubUser)


class SlackUser(BaseModel):
    """Slack account resolved by email."""

    id: str
    name: NullableStr = ""
    real_name: NullableStr = ""


class SlackResponse(BaseModel):
    """Envelope shared by Slack Web API responses."""

    ok: bool = False
    user: SlackUser | None = None
    error: str | None = None


class AttachmentField(BaseModel):
    """Short title/value pair shown inside an attachment."""

    title: str
    value: str
    short: bool = False


class Attachment(BaseModel):
    """Legacy Slack message attachment."""

    fallback: str = ""
    color: str = ""
    pretext: str = ""
    author_name: str = ""
    author_link: str = ""
    author_icon: str = ""
    text: str = ""
    fields: List[AttachmentField] = Field(default_factory=list)
    image_url: str = ""
    thumb_url: str = ""
    footer: str = ""
    footer_icon: str = ""


class SlackMessage(BaseModel):
    """Body of chat.postMessage."""

    channel: str = ""
    text: str = ""
    as_user: bool = True
    attachments: List[Attachment] = Field(default_factory=list)
