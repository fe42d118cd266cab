from __future__ import annotations

import logging

import click

import objserial
from objserial.cli.cmds import deserialize_cmd
from objserial.cli.cmds import list_strategies
from objserial.cli.cmds import serialize_cmd
from objserial.plugins import LoggingPlugin
from objserial.plugins import register_hooks
from objserial.plugins import register_plugins_entry_points


@click.group(context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120})
@click.version_option(version=objserial.__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log serialization lifecycle events.")
@click.option(
    "--plugins/--no-plugins",
    "load_plugins",
    default=True,
    help="Load plugins registered under the 'objserial.hooks' entry point.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, load_plugins: bool) -> None:
    """Objserial - General purpose object serializer."""
    if load_plugins:
        register_plugins_entry_points()
    if verbose:
        logging.basicConfig(format="%(name)s - %(levelname)s - %(message)s", level=logging.INFO)
        register_hooks(LoggingPlugin(level=logging.INFO))


cli.add_command(serialize_cmd)
cli.add_command(deserialize_cmd)
cli.add_command(list_strategies)
