"""PokeTheReviewer: ask PR reviewers on Slack to check a new app build."""

__version__ = "0.1.0"
