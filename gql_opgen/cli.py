"""Command-line interface for gql-opgen."""

import asyncio
from pathlib import Path

import click

from .core.config import (
    DEFAULT_CONFIG_FILE,
    CircularRefMode,
    load_config,
    parse_headers,
    split_names,
    write_default_config,
)
from .core.errors import OpgenError
from .core.generator import OperationGenerator
from .core.ir import OPERATION_TYPES
from .core.logger import set_level

CIRCULAR_REF_MODES = [mode.value for mode in CircularRefMode]


@click.group()
@click.version_option()
def main():
    """Generate GraphQL operation files from a schema.

    Writes one .graphql document per query, mutation and subscription
    root field, with a generated selection set.
    """
    pass


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help=f"Path to a JSON config file (default: {DEFAULT_CONFIG_FILE}).",
)
@click.option("--endpoint", "-e", help="GraphQL endpoint URL.")
@click.option(
    "--schema",
    "-s",
    type=click.Path(exists=True),
    help="Local schema: introspection .json, SDL file, or directory of SDL files.",
)
@click.option("--output", "-o", type=click.Path(file_okay=False), help="Output directory.")
@click.option("--headers", "-H", help="HTTP headers as a JSON object string.")
@click.option("--watch", is_flag=True, default=None, help="Watch for schema changes and regenerate.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--max-depth", type=int, help="Maximum depth for field expansion.")
@click.option("--max-fields", type=int, help="Maximum fields per type.")
@click.option("--shallow", is_flag=True, default=None, help="Shallow mode (max depth 1).")
@click.option("--include-fields", help="Comma-separated root fields to generate.")
@click.option("--exclude-fields", help="Comma-separated root fields to skip.")
@click.option(
    "--circular-refs",
    type=click.Choice(CIRCULAR_REF_MODES),
    help="Circular reference handling: skip, silent, or allow.",
)
@click.option("--circular-ref-depth", type=int, help="Re-entry depth for circular references.")
def generate(
    config_path: str | None,
    endpoint: str | None,
    schema: str | None,
    output: str | None,
    headers: str | None,
    watch: bool | None,
    verbose: bool,
    max_depth: int | None,
    max_fields: int | None,
    shallow: bool | None,
    include_fields: str | None,
    exclude_fields: str | None,
    circular_refs: str | None,
    circular_ref_depth: int | None,
):
    """Generate operation files from a GraphQL endpoint or local schema.

    Examples:

        gql-opgen generate --endpoint http://localhost:4000/graphql

        gql-opgen generate -s ./schema.graphqls -o ./operations --max-depth 3

        gql-opgen generate -c gqlopera.config.json --circular-refs allow
    """
    if verbose:
        set_level("DEBUG")

    try:
        config = load_config(config_path, {
            "endpoint": endpoint,
            "schema_path": str(Path(schema).resolve()) if schema else None,
            "output": output,
            "headers": parse_headers(headers) if headers else None,
            "watch": watch,
            "max_depth": max_depth,
            "max_fields": max_fields,
            "shallow_mode": shallow,
            "include_fields": split_names(include_fields),
            "exclude_fields": split_names(exclude_fields),
            "circular_refs": circular_refs,
            "circular_ref_depth": circular_ref_depth,
        })

        output_path = Path(config.output).resolve()
        if verbose:
            click.echo(f"Source: {config.schema_path or config.endpoint}")
            click.echo(f"Output: {output_path}")
            click.echo(f"  Max depth: {config.effective_max_depth}")
            click.echo(f"  Max fields: {config.max_fields}")
            click.echo(f"  Circular refs: {config.circular_refs.value}")

        click.echo("Generating operations...")
        generator = OperationGenerator(config)
        paths = asyncio.run(generator.generate())
        click.echo(f"Done! Generated {len(paths)} operation files in {output_path}")

        if config.watch:
            click.echo(f"Watching for changes every {config.watch_interval:g}s (Ctrl+C to stop)...")
            asyncio.run(generator.watch())
    except OpgenError as e:
        raise click.ClickException(str(e)) from e
    except KeyboardInterrupt:
        click.echo("Stopped watching.")


@main.command()
@click.option(
    "--path",
    "-p",
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Where to write the config file.",
)
def init(path: str):
    """Create a starter JSON configuration file."""
    created = write_default_config(path)
    if created is None:
        click.echo(f"Configuration file already exists: {path}")
    else:
        click.echo(f"Configuration file created: {created}")


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False),
    help=f"Path to a JSON config file (default: {DEFAULT_CONFIG_FILE}).",
)
@click.option("--endpoint", "-e", help="GraphQL endpoint URL.")
@click.option("--schema", "-s", type=click.Path(exists=True), help="Local schema path.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
def validate(config_path: str | None, endpoint: str | None, schema: str | None, verbose: bool):
    """Validate the configuration and the schema source."""
    if verbose:
        set_level("DEBUG")

    try:
        config = load_config(config_path, {
            "endpoint": endpoint,
            "schema_path": str(Path(schema).resolve()) if schema else None,
        })
        click.echo("Validating configuration and schema source...")
        ir = asyncio.run(OperationGenerator(config).validate())
    except OpgenError as e:
        raise click.ClickException(f"Validation failed: {e}") from e

    counts = ", ".join(
        f"{len(ir.root_fields(operation_type))} {operation_type}"
        for operation_type in OPERATION_TYPES
    )
    click.echo(f"Validation successful! {len(ir.named_types)} types ({counts} root fields).")


if __name__ == "__main__":
    main()
