"""Command line interface for cratecite."""

from cratecite.cli.main import cli, main

__all__ = ["cli", "main"]
