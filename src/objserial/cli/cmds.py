"""CLI commands for objserial."""

from __future__ import annotations

import json
from typing import IO

import click

from objserial.cli._shared import dump_json
from objserial.cli._shared import load_target
from objserial.exceptions import ObjSerialError
from objserial.registry import default_registry
from objserial.serializer import deserialize
from objserial.serializer import serialize
from objserial.strategies import register_common_strategies


@click.command("serialize")
@click.argument("target")
@click.option("--marker", "-m", default=None, help="Marker key used to tag typed instances.")
@click.option("--no-marker", is_flag=True, help="Disable type tagging entirely.")
@click.option("--indent", "-i", type=int, default=None, help="Indentation of the JSON output.")
@click.option(
    "--common-strategies",
    is_flag=True,
    help="Collapse common standard library types (datetimes, decimals, UUIDs, ...).",
)
def serialize_cmd(
    target: str,
    marker: str | None,
    no_marker: bool,
    indent: int | None,
    common_strategies: bool,
) -> None:
    r"""
    Serialize a Python object and print it as JSON.

    TARGET should be a dotted path to an object, or to a callable taking no arguments whose
    return value is serialized, e.g. 'myproject.fixtures.make_point'.

    Examples:
    \b
    # Serialize the object returned by a factory
    objserial serialize myproject.fixtures.make_point

    \b
    # Serialize without type tags
    objserial serialize myproject.fixtures.make_point --no-marker
    """
    if marker is not None and no_marker:
        raise click.UsageError("--marker and --no-marker are mutually exclusive")

    if common_strategies:
        register_common_strategies()

    value = load_target(target)
    kwargs = {"marker": None} if no_marker else {"marker": marker} if marker else {}
    try:
        node = serialize(value, **kwargs)
    except ObjSerialError as e:
        raise click.ClickException(str(e)) from e

    click.echo(dump_json(node, indent))


@click.command("deserialize")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--marker", "-m", default=None, help="Marker key used to tag typed instances.")
def deserialize_cmd(source: IO[str], marker: str | None) -> None:
    r"""
    Deserialize JSON data and print the repr of the result.

    SOURCE is a JSON file, or '-' (the default) to read standard input.

    Examples:
    \b
    objserial deserialize point.json
    """
    try:
        data = json.load(source)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON input: {e}") from e

    kwargs = {"marker": marker} if marker else {}
    try:
        result = deserialize(data, **kwargs)
    except ObjSerialError as e:
        raise click.ClickException(str(e)) from e

    click.echo(repr(result))


@click.command("strategies")
def list_strategies() -> None:
    """List registered serialization strategies."""
    strategies = default_registry.strategies()
    if not strategies:
        click.echo("No strategies registered.")
        return

    col_width = max(max(len(scope) for scope, _ in strategies), 20)
    for (scope, identity), strategy in sorted(strategies.items()):
        directions = ", ".join(
            name for name in ("collapse", "expand") if strategy.routine(name) is not None
        )
        click.echo(f"{scope:<{col_width}}  {identity}  [{directions}]")
