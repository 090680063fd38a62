"""
Command Line Interface for fuzzinfer.

This module provides a CLI to evaluate engine descriptions, check their
readiness, and inspect terms and registered components.
"""

from fuzzinfer.cli.commands import cli_app

# Export the app for the CLI entry point
app = cli_app

__all__ = ["cli_app", "app"]
