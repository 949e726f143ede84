"""Webhook server and handlers for app build notifications."""

from poke_reviewer.webhook.handlers import handle_app_build
from poke_reviewer.webhook.server import make_webhook_server, run_webhook_server

__all__ = ["handle_app_build", "make_webhook_server", "run_webhook_server"]
