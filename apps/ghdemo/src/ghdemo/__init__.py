"""Example programs for the ghrest client."""

from .cli import cli, main

__all__ = ["cli", "main"]
