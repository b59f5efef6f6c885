"""Command-line interface for cpptable schema generation."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cpptable.generator import lua
from cpptable.generator.assembler import build_schema
from cpptable.generator.errors import OutputWriteError, SchemaGenError
from cpptable.generator.resolver import DEFAULT_NAMESPACE, DescriptorRegistry, resolve

if TYPE_CHECKING:
    from cpptable.generator.types import Schema

console = Console(stderr=True)


@click.command()
@click.option("--dir", "-d", "input_dir", default="./", show_default=True, help="Input directory")
@click.option("--input", "-i", "input_file", default="input.proto", show_default=True, help="Input file")
@click.option("--output", "-o", "output_file", default="output.lua", show_default=True, help="Output file")
@click.option(
    "--namespace",
    "-n",
    default=DEFAULT_NAMESPACE,
    show_default=True,
    help="Protobuf package whose messages are exported",
)
@click.option("--table", default=None, help="Lua global name (default: <NAMESPACE>_PROTO)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["lua", "json"]),
    default="lua",
    show_default=True,
    help="Output format",
)
@click.option("--protoc", default="protoc", show_default=True, help="protoc executable")
@click.option("--summary", is_flag=True, default=False, help="Print a message summary to stderr")
def cli(
    input_dir: str,
    input_file: str,
    output_file: str,
    namespace: str,
    table: str | None,
    output_format: str,
    protoc: str,
    summary: bool,
) -> None:
    """Generate a cpp_table schema from a protobuf definition file."""
    try:
        files = resolve(input_dir, input_file, DescriptorRegistry(), protoc=protoc)
        schema = build_schema(files, namespace)
    except SchemaGenError as err:
        _fail(input_file, err)

    if output_format == "json":
        generated = schema.to_json(indent=2) + "\n"
    else:
        generated = lua.render(schema, table)

    click.echo(generated)

    if summary:
        _output_summary(schema)

    try:
        _write(output_file, generated)
    except OutputWriteError as err:
        _fail(input_file, err)


def _write(output_file: str, text: str) -> None:
    try:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as err:
        raise OutputWriteError(f"cannot create {output_file}: {err}") from err


def _fail(input_file: str, err: SchemaGenError) -> NoReturn:
    message = escape(f"{err.stage}: {input_file}: {err}")
    console.print(f"[bold red]error[/bold red]: {message}", highlight=False, soft_wrap=True)
    sys.exit(1)


def _output_summary(schema: Schema) -> None:
    """Print the exported messages as a table."""
    console.print(f"[bold cyan]Namespace[/bold cyan] {schema.namespace}")

    message_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    message_table.add_column("Message", style="white")
    message_table.add_column("Fields", style="yellow", justify="right")
    message_table.add_column("Arrays", style="dim", justify="right")
    message_table.add_column("Maps", style="dim", justify="right")

    for message in schema.messages:
        arrays = sum(1 for field in message.fields if field.type == "array")
        maps = sum(1 for field in message.fields if field.type == "map")
        message_table.add_row(message.name, str(len(message.fields)), str(arrays), str(maps))

    console.print(message_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
