"""Command-line interface for codeassist."""

from codeassist.cli.app import entrypoint, main

__all__ = ["entrypoint", "main"]
