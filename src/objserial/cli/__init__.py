"""Objserial CLI - Command-line interface for objserial."""

from __future__ import annotations

import click

from objserial.cli.base import cli
from objserial.cli.cmds import deserialize_cmd
from objserial.cli.cmds import list_strategies
from objserial.cli.cmds import serialize_cmd

__all__ = ["cli", "deserialize_cmd", "list_strategies", "serialize_cmd"]


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
