"""Helpers shared by the CLI commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from objserial.utils import resolve_object_from_path


def load_target(path: str) -> Any:
    """
    Import the object at a dotted path, calling it if it is a zero-argument callable.

    Classes are instantiated without arguments. The current working directory is importable.
    """
    cwd = str(Path.cwd())
    if cwd not in sys.path:  # pragma: no cover
        sys.path.insert(0, cwd)

    try:
        target = resolve_object_from_path(path)
    except ImportError as e:
        raise click.ClickException(str(e)) from e

    if callable(target):
        try:
            target = target()
        except TypeError as e:
            raise click.ClickException(
                f"'{path}' must be a value or a callable taking no arguments: {e}"
            ) from e
    return target


def dump_json(node: Any, indent: int | None) -> str:
    """Encode a generic node as JSON, failing with a CLI error on non-JSON leaves."""
    try:
        return json.dumps(node, indent=indent)
    except (TypeError, ValueError) as e:
        raise click.ClickException(
            f"Serialized output is not JSON encodable ({e}). "
            "Try --common-strategies or register a collapse strategy for the type."
        ) from e
