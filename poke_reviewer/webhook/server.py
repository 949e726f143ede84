"""Webhook HTTP server for app build notifications.

Serves health check and the webhook path. Each request is handled on its
own thread.
"""

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from poke_reviewer.config import AppConfig
from poke_reviewer.relay import ReviewRequestRelay
from poke_reviewer.webhook.handlers import handle_app_build

LOG = logging.getLogger("poke_reviewer.webhook")


class WebhookHandler(BaseHTTPRequestHandler):
    """Handle GET /health and POST to the configured webhook path."""

    config: AppConfig
    relay: ReviewRequestRelay

    def do_GET(self) -> None:
        if self.path == "/health" or self.path == "/":
            self._send_json(200, {"status": "ok", "service": "poke-reviewer"})
            return
        self.send_response(404)
        self.end_headers()

    def do_POST(self) -> None:
        if self.path.split("?", 1)[0] == self.config.webhook.path:
            self._handle_app_build_webhook()
            return
        self.send_response(404)
        self.end_headers()

    def _send_json(self, status: int, data: dict) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def _handle_app_build_webhook(self) -> None:
        try:
            length = int(self.headers.get("Content-Length", 0))
        except ValueError:
            LOG.warning("Invalid Content-Length header: %r", self.headers.get("Content-Length"))
            length = 0
        body = self.rfile.read(length) if length > 0 else b""
        try:
            payload = json.loads(body.decode("utf-8")) if body else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            LOG.warning("Invalid webhook JSON. Full payload: %s", body.decode("utf-8", errors="replace"))
            payload = None
        if isinstance(payload, dict):
            handle_app_build(self.relay, payload)
        elif payload is not None:
            LOG.warning("Webhook body is not a JSON object: %s", type(payload).__name__)
        self._send_json(200, {"received": True})

    def log_message(self, format: str, *args: Any) -> None:
        LOG.debug(format, *args)


def make_webhook_server(config: AppConfig, relay: ReviewRequestRelay) -> ThreadingHTTPServer:
    """Create (but do not start) the HTTP server bound to config.webhook host/port."""
    handler = type("BoundWebhookHandler", (WebhookHandler,), {"config": config, "relay": relay})
    return ThreadingHTTPServer((config.webhook.host, config.webhook.port), handler)


def run_webhook_server(config: AppConfig, relay: ReviewRequestRelay | None = None) -> None:
    """Run HTTP server for webhooks and health check."""
    relay = relay or ReviewRequestRelay.from_config(config)
    server = make_webhook_server(config, relay)
    host, port = server.server_address[:2]
    LOG.info("PokeTheReviewer listening on %s:%s%s", host, port, config.webhook.path)
    try:
        server.serve_forever()
    finally:
        server.server_close()
