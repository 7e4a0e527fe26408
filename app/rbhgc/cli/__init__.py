"""CLI package for rbhgc.

This package contains the Typer application.
"""

from rbhgc.cli.main import app

__all__ = ["app"]
