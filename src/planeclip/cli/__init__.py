"""Command-line interface for planeclip.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Intersection reporting for rings and line strings
- Simplicity checks for polygon rings
- Polygon clipping with either engine
- Detailed error reporting
"""

from planeclip.cli.app import cli, main

__all__ = ["cli", "main"]
