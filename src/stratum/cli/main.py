"""
Main CLI entry point for Stratum.

Provides the command-line interface using Click.
"""

import io as _io
import json as _json
import logging as _logging
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import yaml as _yaml

import stratum
import stratum.config as config
import stratum.deployed as deployed
import stratum.errors as errors
import stratum.getter as getter
import stratum.values as values

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _configure_logging(level: str) -> None:
    _logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=_sys.stderr,
    )
    _logging.getLogger().setLevel(level)


def _dump(data: _typing.Any, output_format: str) -> str:
    if output_format == "json":
        return _json.dumps(data, indent=2, default=str)
    return _yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip("\n")


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(stratum.__version__, "-v", "--version", prog_name="stratum")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """
    Stratum - layered configuration values.

    \b
    Examples:
        stratum merge -d values.d -f prod.yaml --set image.tag=1.2.3
        stratum merge -f - --set-json '{"replicas": 3}' -o json
        stratum resources manifest.yaml
        stratum config
    """
    try:
        settings = config.Settings()
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"invalid settings: {e}") from e

    _configure_logging("DEBUG" if verbose else settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command()
@_click.option(
    "-d",
    "--values-directory",
    "values_directories",
    multiple=True,
    metavar="DIR",
    help="Merge every values file found below DIR (repeatable)",
)
@_click.option(
    "-f",
    "--values",
    "value_files",
    multiple=True,
    metavar="FILE|URL",
    help="Merge a values file, URL, or '-' for stdin (repeatable)",
)
@_click.option(
    "--set-json",
    "json_values",
    multiple=True,
    help="JSON object, or key=<json> assignment (repeatable)",
)
@_click.option("--set", "set_values", multiple=True, help="key=value assignments (repeatable)")
@_click.option(
    "--set-string",
    "string_values",
    multiple=True,
    help="key=value assignments kept as strings (repeatable)",
)
@_click.option(
    "--set-file",
    "file_values",
    multiple=True,
    help="key=path assignments; the value is the file content (repeatable)",
)
@_click.option(
    "--set-literal",
    "literal_values",
    multiple=True,
    help="A single key=value assignment kept verbatim (repeatable)",
)
@_click.option(
    "-o",
    "--output",
    "output_format",
    type=_click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format",
)
@_click.pass_context
def merge(
    ctx: _click.Context,
    values_directories: tuple[str, ...],
    value_files: tuple[str, ...],
    json_values: tuple[str, ...],
    set_values: tuple[str, ...],
    string_values: tuple[str, ...],
    file_values: tuple[str, ...],
    literal_values: tuple[str, ...],
    output_format: str,
) -> None:
    """Merge values from all sources and print the result.

    Sources are applied in this order, later ones winning:
    -d, -f, --set-json, --set, --set-string, --set-file, --set-literal.
    Entries of the same flag are applied in the order given.
    """
    settings: config.Settings = ctx.obj["settings"]
    options = values.ValueOptions(
        values_directories=list(values_directories),
        value_files=list(value_files),
        json_values=list(json_values),
        values=list(set_values),
        string_values=list(string_values),
        file_values=list(file_values),
        literal_values=list(literal_values),
    )

    try:
        merged = options.merge_values(
            getter.default_providers(settings),
            extension=settings.document_extension,
        )
    except errors.StratumError as e:
        _logger.debug("Merge failed", exc_info=True)
        raise _click.ClickException(str(e)) from e

    _click.echo(_dump(merged, output_format))


@cli.command()
@_click.argument("manifest")
@_click.option(
    "-o",
    "--output",
    "output_format",
    type=_click.Choice(list(deployed.OUTPUT_FORMATS)),
    default="table",
    show_default=True,
    help="Output format",
)
@_click.option("--no-headers", is_flag=True, help="Omit the table header row")
@_click.option(
    "-n",
    "--namespace",
    default="",
    help="Namespace reported for resources that do not set one",
)
@_click.pass_context
def resources(
    ctx: _click.Context,
    manifest: str,
    output_format: str,
    no_headers: bool,
    namespace: str,
) -> None:
    """List the resources declared in a rendered MANIFEST.

    MANIFEST is a path, URL, or '-' for stdin.
    """
    settings: config.Settings = ctx.obj["settings"]
    try:
        raw = getter.read_source(manifest, getter.default_providers(settings))
        elements = deployed.GetDeployed(deployed.ManifestClient(namespace)).run(
            raw.decode("utf-8")
        )
    except errors.StratumError as e:
        raise _click.ClickException(str(e)) from e
    except UnicodeDecodeError as e:
        raise _click.ClickException(f"manifest {manifest!r} is not UTF-8: {e}") from e

    buffer = _io.StringIO()
    deployed.ResourceListWriter(elements, no_headers=no_headers).write(buffer, output_format)
    _click.echo(buffer.getvalue(), nl=False)


@cli.command(name="config")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Show the effective settings (from STRATUM_* environment variables)."""
    settings: config.Settings = ctx.obj["settings"]
    _click.echo(_dump(settings.to_display_dict(), "json" if as_json else "yaml"))


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="stratum")


if __name__ == "__main__":
    main()
