"""Entry points: HTTP API and CLI."""
