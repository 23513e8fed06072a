"""CLI commands for Casper."""

from . import build, get, order, config_cmd

__all__ = ["build", "get", "order", "config_cmd"]
