"""Build the review request message sent to each reviewer."""

from poke_reviewer.config import MessageConfig
from poke_reviewer.models import (
    Attachment,
    AttachmentField,
    PullRequestInfo,
    SlackMessage,
    WebhookPayload,
)


def build_review_message(
    payload: WebhookPayload,
    pr: PullRequestInfo,
    branch: str,
    branding: MessageConfig,
) -> SlackMessage:
    """Attachment with PR author, build version and branch; channel is set per reviewer."""
    attachment = Attachment(
        fallback=branding.text,
        pretext=payload.text,
        color=branding.color,
        author_name=pr.user.login,
        author_link=pr.user.html_url,
        author_icon=pr.user.avatar_url,
        text=branding.text,
        fields=[
            AttachmentField(title="Version", value=payload.app_version.shortversion, short=True),
            AttachmentField(title="Branch", value=branch, short=True),
        ],
        image_url=branding.image_url,
        thumb_url=branding.thumb_url,
        footer=branding.footer,
        footer_icon=branding.footer_icon,
    )
    return SlackMessage(as_user=True, attachments=[attachment])


def addressed_to(message: SlackMessage, channel: str) -> SlackMessage:
    """Copy of message targeted at channel (a user id opens a DM)."""
    return message.model_copy(update={"channel": channel})
