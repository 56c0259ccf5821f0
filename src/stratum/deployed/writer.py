"""
Output formats for resource listings: table, JSON and YAML.
"""

from __future__ import annotations

import datetime as _datetime
import json as _json
import typing as _typing

import rich.console as _rich_console
import rich.table as _rich_table
import yaml as _yaml

import stratum.deployed.resources as resources

OUTPUT_FORMATS = ("table", "json", "yaml")


def human_duration(delta: _datetime.timedelta) -> str:
    """
    Render an age the way kubectl does: ``38s``, ``5m30s``, ``3h``, ``2d4h``.

    Precision drops as the duration grows.
    """
    seconds = int(delta.total_seconds())
    if seconds < -1:
        return "<invalid>"
    if seconds < 0:
        return "0s"
    if seconds < 60 * 2:
        return f"{seconds}s"

    minutes = seconds // 60
    if minutes < 10:
        rest = seconds % 60
        return f"{minutes}m" if rest == 0 else f"{minutes}m{rest}s"
    if minutes < 60 * 3:
        return f"{minutes}m"

    hours = minutes // 60
    if hours < 8:
        rest = minutes % 60
        return f"{hours}h" if rest == 0 else f"{hours}h{rest}m"
    if hours < 48:
        return f"{hours}h"
    if hours < 24 * 8:
        rest = hours % 24
        return f"{hours // 24}d" if rest == 0 else f"{hours // 24}d{rest}h"
    if hours < 24 * 365 * 2:
        return f"{hours // 24}d"
    if hours < 24 * 365 * 8:
        days = (hours // 24) % 365
        years = hours // 24 // 365
        return f"{years}y" if days == 0 else f"{years}y{days}d"
    return f"{hours // 24 // 365}y"


class ResourceListWriter:
    """Writes a resource listing in one of OUTPUT_FORMATS."""

    def __init__(
        self,
        elements: list[resources.ResourceElement],
        *,
        no_headers: bool = False,
        now: _datetime.datetime | None = None,
    ) -> None:
        """
        Args:
            elements: Resources to write.
            no_headers: Omit the header row of the table format.
            now: Reference time for ages (default: current UTC time).
        """
        self._elements = elements
        self._no_headers = no_headers
        self._now = now

    def _age(self, element: resources.ResourceElement) -> str:
        if element.creation_timestamp is None:
            return "<unknown>"
        now = self._now or _datetime.datetime.now(_datetime.timezone.utc)
        return human_duration(now - element.creation_timestamp)

    def write_table(self, out: _typing.TextIO) -> None:
        """Write a borderless table: NAMESPACE, NAME, API_VERSION, AGE."""
        table = _rich_table.Table(
            box=None,
            show_header=not self._no_headers,
            header_style="",
            pad_edge=False,
        )
        for column in ("NAMESPACE", "NAME", "API_VERSION", "AGE"):
            table.add_column(column, no_wrap=True)
        for element in self._elements:
            table.add_row(
                element.namespace,
                f"{element.resource}/{element.name}",
                element.api_version,
                self._age(element),
            )
        console = _rich_console.Console(
            file=out,
            color_system=None,
            highlight=False,
            width=200,
        )
        console.print(table)

    def write_json(self, out: _typing.TextIO) -> None:
        """Write the listing as a JSON array."""
        out.write(_json.dumps([element.to_dict() for element in self._elements]))
        out.write("\n")

    def write_yaml(self, out: _typing.TextIO) -> None:
        """Write the listing as a YAML sequence."""
        out.write(
            _yaml.safe_dump(
                [element.to_dict() for element in self._elements],
                default_flow_style=False,
                sort_keys=False,
            )
        )

    def write(self, out: _typing.TextIO, output_format: str) -> None:
        """
        Write in the named format.

        Raises:
            ValueError: If the format is not one of OUTPUT_FORMATS.
        """
        if output_format == "table":
            self.write_table(out)
        elif output_format == "json":
            self.write_json(out)
        elif output_format == "yaml":
            self.write_yaml(out)
        else:
            raise ValueError(f"unknown output format: {output_format!r}")
