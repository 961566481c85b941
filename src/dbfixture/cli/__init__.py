"""
CLI layer for dbfixture.

Thin Typer transport over ``dbfixture.session``: argument parsing,
coloured output and table formatting only.

Entry point::

    dbfixture --help
"""

from dbfixture.cli.app import app

__all__ = ["app"]
