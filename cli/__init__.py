"""
CLI module for Doc-Drift.

The command-line interface providing compare, sections, merge, validate and
text-diff commands.
"""

from cli.main import app

__all__ = ["app"]
