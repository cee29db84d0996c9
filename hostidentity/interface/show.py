"""
show.py

Defines the `show` subcommand for the CLI and renders an identity snapshot
as text (Jinja2 template), JSON or YAML.
"""

import argparse
import json

import yaml

from jinja2 import Environment, StrictUndefined

from hostidentity.interface.commands import Command, OutputFormat
from hostidentity.snapshot import IdentitySnapshot

TEXT_TEMPLATE = """\
User's Name            {{ realname }}
User's Username        {{ username }}
User's Account         {{ account }}
Device's Pretty Name   {{ devicename }}
Device's Hostname      {{ hostname }}
Device's Platform      {{ platform }}
Device's OS Distro     {{ distro }}
Device's Desktop Env.  {{ desktop_env }}{% if is_gtk %} (GTK){% elif is_kde %} (KDE){% endif %}
Device's CPU Arch      {{ arch }} ({{ width }})
User's Languages       {{ langs | join(", ") }}
"""


def add_subcommands(parser: argparse._SubParsersAction):
    """
    Add the `show` subcommand to the given parser.

    Args:
        parser (argparse._SubParsersAction): The subparsers object returned by
        parser.add_subparsers().
    """
    show_parser = parser.add_parser(
        Command.SHOW.value,
        description=(
            "The `show` command reads every fact once and prints them together. "
            "Facts that cannot be determined are shown with their default values."
        ),
        help="Show every fact about the current user, device and environment.",
    )
    show_parser.add_argument(
        "-f",
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Output format (default: text).",
    )


def render_snapshot(snapshot: IdentitySnapshot, output_format: OutputFormat) -> str:
    """
    Render a snapshot in the requested format.

    Args:
        snapshot (IdentitySnapshot): Facts to render.
        output_format (OutputFormat): text, json or yaml.

    Returns:
        str: Rendered report, ending with a newline.
    """
    data = snapshot.to_dict()

    if output_format is OutputFormat.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    if output_format is OutputFormat.YAML:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
    return env.from_string(TEXT_TEMPLATE).render(**data)
