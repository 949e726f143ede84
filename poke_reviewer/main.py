"""PokeTheReviewer entry point.

Runs the webhook server that turns app build notifications into Slack
review requests. Usage: poke-reviewer --github-token ... --slack-token ...
"""

import argparse
import logging
import sys
from pathlib import Path

from poke_reviewer.config import AppConfig, load_config
from poke_reviewer.logging import setup_logging

LOG = logging.getLogger("poke_reviewer")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="poke-reviewer",
        description="PokeTheReviewer - ask PR reviewers on Slack to check a new app build",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument("--github-token", "--githubToken", dest="github_token", help="GitHub token")
    parser.add_argument("--slack-token", "--slackToken", dest="slack_token", help="Slack token")
    parser.add_argument("--host", help="Bind host (overrides webhook.host)")
    parser.add_argument("--port", type=int, help="Bind port (overrides webhook.port)")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config and tokens, then exit",
    )
    return parser.parse_args(argv)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return config with CLI flag values taking precedence."""
    github = config.github.model_copy(update={"token": args.github_token} if args.github_token else {})
    slack = config.slack.model_copy(update={"token": args.slack_token} if args.slack_token else {})
    webhook_update: dict = {}
    if args.host is not None:
        webhook_update["host"] = args.host
    if args.port is not None:
        webhook_update["port"] = args.port
    webhook = config.webhook.model_copy(update=webhook_update)
    return config.model_copy(update={"github": github, "slack": slack, "webhook": webhook})


def missing_credentials(config: AppConfig) -> list[str]:
    """Names of required tokens that could not be resolved."""
    missing = []
    if not config.github_token_resolved:
        missing.append("githubToken")
    if not config.slack_token_resolved:
        missing.append("slackToken")
    return missing


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, check tokens, serve webhooks."""
    args = parse_args(argv)

    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")
            logging.basicConfig(level=logging.INFO)
            LOG.warning("config.yaml not found, using config.example.yaml")

    config = apply_overrides(load_config(config_path), args)
    setup_logging(config.logging)

    missing = missing_credentials(config)
    if missing:
        for name in missing:
            LOG.error("Please provide %s", name)
        return 2

    if args.check:
        print("Config OK:", config.github.repository, config.reviewers.email_domain)
        return 0

    from poke_reviewer.webhook.server import run_webhook_server

    LOG.info(
        "PokeTheReviewer started | repo=%s | domain=%s",
        config.github.repository,
        config.reviewers.email_domain,
    )
    try:
        run_webhook_server(config)
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
