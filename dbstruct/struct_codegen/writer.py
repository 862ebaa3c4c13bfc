"""Writes rendered declarations into Go source files."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Final, Sequence

from ..model import Options, Table
from ..shared import OutputError
from .emitter import GeneratorContext, check_struct_names, get_context

GENERATOR_NAME: Final[str] = "database-struct"
SINGLE_FILE_NAME: Final[str] = "model.go"
TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("dbstruct")


def header_comment(generated_at: datetime) -> str:
    return f"code generated by {GENERATOR_NAME} @{generated_at.strftime(TIMESTAMP_FORMAT)}"


def render_file(
    options: Options,
    tables: Sequence[Table],
    generated_at: datetime,
    ctx: GeneratorContext | None = None,
) -> str:
    """Render one Go file holding the declarations of ``tables``.

    Tables must already be rendered.
    """
    ctx = ctx or get_context()
    imports = ["time"] if any(table.uses_time for table in tables) else []
    return ctx.file_template.render(
        header_comment=header_comment(generated_at),
        package_name=options.model_package_name,
        imports=imports,
        declarations=[table.go_struct for table in tables],
    )


def plan_model_files(
    options: Options,
    tables: Sequence[Table],
    generated_at: datetime,
) -> dict[str, str]:
    """Map each output file name to its content without touching the disk.

    Raises:
        OutputError: If two tables would be written to the same file.
        CodegenError: If two tables share a struct name.
    """
    if not options.model_single_file:
        owners: dict[str, str] = {}
        for table in tables:
            file_name = f"{table.short_name}.go"
            if file_name in owners:
                raise OutputError(
                    f"tables '{owners[file_name]}' and '{table.name}' both map to {file_name}"
                )
            owners[file_name] = table.name
    # Every file lands in the same Go package
    check_struct_names(tables)

    ctx = get_context()
    if options.model_single_file:
        return {SINGLE_FILE_NAME: render_file(options, tables, generated_at, ctx)}
    return {
        f"{table.short_name}.go": render_file(options, [table], generated_at, ctx)
        for table in tables
    }


def write_models(
    options: Options,
    tables: Sequence[Table],
    generated_at: datetime | None = None,
    log: logging.Logger | None = None,
) -> list[Path]:
    """Write the Go files for already rendered tables into ``options.model_dir``.

    All contents are computed before the directory is touched, so a planning
    failure leaves no partial output behind.

    Returns:
        The written paths, in table order.

    Raises:
        OutputError: If the directory cannot be created or a file cannot be written.
    """
    log = log or logger
    if not options.model_dir:
        raise OutputError("no model directory configured")

    files = plan_model_files(options, tables, generated_at or datetime.now())
    model_dir = Path(options.model_dir)

    try:
        model_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"Failed to create model directory ({e})", str(model_dir)) from e

    written: list[Path] = []
    for file_name, content in files.items():
        path = model_dir / file_name
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"Failed to write model file ({e})", str(path)) from e
        log.debug("wrote %s", path)
        written.append(path)

    log.info("wrote %d file(s) into %s", len(written), model_dir)
    return written
