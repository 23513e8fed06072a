"""Command-line interface for Casper."""

from .app import app

__all__ = ["app"]
