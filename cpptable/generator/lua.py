"""Lua table generator for cpptable schemas."""

from jinja2 import Environment, PackageLoader

from .types import Schema

env = Environment(
    loader=PackageLoader("cpptable.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("lua.j2")


def table_name(namespace: str) -> str:
    """Return the Lua global holding the tables of a namespace."""
    return f"{namespace.upper()}_PROTO"


def render(schema: Schema, table: str | None = None) -> str:
    """Render a schema as a Lua source file.

    Args:
        schema: Schema built from the resolved descriptors
        table: Name of the Lua global to fill in. Defaults to the upper-cased
               namespace followed by ``_PROTO``.
    """
    return template.render(schema=schema, table=table or table_name(schema.namespace))
