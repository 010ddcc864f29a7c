"""Command-line interface for rowplan.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Points along a line from a GeoJSON file
- Clipped rows for a polygon from a GeoJSON file
- GeoJSON results on stdout, status messages on stderr
"""

from rowplan.cli.app import cli, main

__all__ = ["cli", "main"]
