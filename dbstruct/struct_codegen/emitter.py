"""
Struct Emitter - Renders Go struct declarations from the table model.

Each table becomes a doc comment, a struct with one aligned field per
column and, for tables whose name lost a filter prefix, a ``TableName``
accessor returning the raw table name.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Callable, Final, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from ..model import Field, GoType, Options, Table
from ..shared import CodegenError, camel_case, one_line, title_case

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"

GORM_CONVENTIONS_URL: Final[str] = "https://gorm.io/docs/conventions.html"
GORM_V1_CONVENTIONS_URL: Final[str] = "https://v1.gorm.io/docs/conventions.html"

# Method emitted for prefixed tables; no field may share its name
ACCESSOR_NAME: Final[str] = "TableName"


@dataclass(frozen=True, slots=True)
class TagRule:
    """One struct tag key, emitted when its option is enabled."""

    key: str
    enabled: Callable[[Options], bool]
    render: Callable[[Field], str]


def gorm_tag(f: Field) -> str:
    """Build the GORM tag value for a field.

    >>> gorm_tag(Field("id", "int", GoType.INT32, default="0", key="PRI"))
    'column:id;type:int;default:0;not null;primary_key'
    """
    tag = f"column:{f.field};type:{f.type}"
    if f.default != "":
        tag += f";default:{f.default}"
    if not f.nullable:
        tag += ";not null"
    if f.key == "PRI":
        tag += ";primary_key"
    return tag


def json_tag(f: Field) -> str:
    return camel_case(f.field)


# Evaluated in order; the order fixes the key order inside every tag
TAG_RULES: Final[tuple[TagRule, ...]] = (
    TagRule("gorm", lambda options: options.gen_gorm_tag, gorm_tag),
    TagRule("json", lambda options: options.gen_json_tag, json_tag),
)


@lru_cache(maxsize=256)
def _quote(value: str) -> str:
    """Quote a string as a Go interpreted string literal."""
    return json.dumps(value, ensure_ascii=False)


@dataclass
class GeneratorContext:
    """Context for code generation with pre-compiled templates."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self._struct_template = self.template_env.get_template("struct.go.j2")
        self._file_template = self.template_env.get_template("file.go.j2")

    @property
    def struct_template(self) -> Template:
        return self._struct_template

    @property
    def file_template(self) -> Template:
        return self._file_template


_default_context: GeneratorContext | None = None


def get_context() -> GeneratorContext:
    """Get the shared generator context, compiling templates on first use."""
    global _default_context
    if _default_context is None:
        _default_context = GeneratorContext()
    return _default_context


def struct_tag(options: Options, f: Field) -> str:
    """Render the struct tag literal for a field, or ``""`` when no tag is enabled."""
    parts = [
        f"{rule.key}:{_quote(rule.render(f))}"
        for rule in TAG_RULES
        if rule.enabled(options)
    ]
    if not parts:
        return ""
    tag = " ".join(parts)
    if "`" in tag:
        return _quote(tag)
    return f"`{tag}`"


def go_type(f: Field, table: Table) -> str:
    """Go spelling of a field's type, pointer-wrapped when nullable."""
    try:
        spelled = GoType(f.go_type).value
    except ValueError:
        raise CodegenError(f"unknown go type '{f.go_type}'", table.name, f.field) from None
    return f"*{spelled}" if f.nullable else spelled


def align_columns(rows: Sequence[Sequence[str]]) -> list[str]:
    """Align cells the way gofmt's tabwriter aligns struct fields.

    A cell is padded only when another cell follows it on the same line.
    The width of a column is computed over each run of consecutive lines
    that have a padded cell in that column.
    """
    widths = [[0] * len(row) for row in rows]
    max_cols = max((len(row) for row in rows), default=0)

    for col in range(max_cols):
        start = 0
        while start < len(rows):
            if len(rows[start]) - 1 <= col:
                start += 1
                continue
            end = start
            while end < len(rows) and len(rows[end]) - 1 > col:
                end += 1
            width = max(len(rows[i][col]) for i in range(start, end))
            for i in range(start, end):
                widths[i][col] = width
            start = end

    lines: list[str] = []
    for row, row_widths in zip(rows, widths):
        cells = [
            cell.ljust(row_widths[i] + 1) if i < len(row) - 1 else cell
            for i, cell in enumerate(row)
        ]
        lines.append("".join(cells))
    return lines


def field_cells(options: Options, table: Table) -> list[list[str]]:
    """Build the name, type, tag and comment cells of every field."""
    rows: list[list[str]] = []
    seen: dict[str, str] = {}

    for f in table.fields:
        name = title_case(f.field)
        if not name:
            raise CodegenError("column name yields an empty identifier", table.name, f.field)
        if name in seen:
            raise CodegenError(
                f"field identifier '{name}' clashes with column '{seen[name]}'",
                table.name,
                f.field,
            )
        if table.prefix and name == ACCESSOR_NAME:
            raise CodegenError(
                f"field identifier '{name}' clashes with the {ACCESSOR_NAME}() accessor",
                table.name,
                f.field,
            )
        seen[name] = f.field

        row = [name, go_type(f, table)]
        tag = struct_tag(options, f)
        if tag:
            row.append(tag)
        comment = one_line(f.comment)
        if comment:
            row.append(f"// {comment}")
        rows.append(row)

    return rows


def check_struct_names(tables: Sequence[Table]) -> None:
    """Reject tables whose struct names collide within one Go package."""
    owners: dict[str, str] = {}
    for table in tables:
        struct_name = table.struct_name
        if struct_name and struct_name in owners:
            raise CodegenError(
                f"struct name '{struct_name}' clashes with table '{owners[struct_name]}'",
                table.name,
            )
        owners[struct_name] = table.name


def render_struct(
    options: Options,
    table: Table,
    ctx: GeneratorContext | None = None,
) -> str:
    """Render one table's declaration and store it on ``table.go_struct``.

    Raises:
        CodegenError: If the table or a field cannot be turned into valid Go.
    """
    ctx = ctx or get_context()
    struct_name = table.struct_name
    if not struct_name:
        raise CodegenError("table name yields an empty struct name", table.name)

    rendered = ctx.struct_template.render(
        struct_name=struct_name,
        table_name=table.name,
        comment=one_line(table.comment),
        field_lines=align_columns(field_cells(options, table)),
        accessor=bool(table.prefix),
        table_name_literal=_quote(table.name),
        conventions_url=GORM_V1_CONVENTIONS_URL if options.gorm_v1 else GORM_CONVENTIONS_URL,
    )

    table.go_struct = rendered.rstrip("\n")
    return table.go_struct


def render_tables(
    options: Options,
    tables: Sequence[Table],
    parallel: bool = False,
    max_workers: int | None = None,
) -> list[str]:
    """Render every table, returning declarations in input order.

    Raises:
        CodegenError: If two tables share a struct name, before anything is rendered.
    """
    check_struct_names(tables)
    ctx = get_context()
    if parallel and len(tables) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(lambda t: render_struct(options, t, ctx), tables))
    return [render_struct(options, table, ctx) for table in tables]
