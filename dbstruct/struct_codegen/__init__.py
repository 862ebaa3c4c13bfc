"""Struct Code Generator - Generates Go structs from database schemas."""

from .emitter import (
    GeneratorContext,
    TagRule,
    TAG_RULES,
    gorm_tag,
    json_tag,
    struct_tag,
    render_struct,
    render_tables,
)
from .writer import (
    plan_model_files,
    render_file,
    write_models,
)
from .report import (
    render_report,
    write_report,
)
from .main import (
    generate,
    run,
    main,
)

__all__ = [
    "GeneratorContext",
    "TagRule",
    "TAG_RULES",
    "gorm_tag",
    "json_tag",
    "struct_tag",
    "render_struct",
    "render_tables",
    "plan_model_files",
    "render_file",
    "write_models",
    "render_report",
    "write_report",
    "generate",
    "run",
    "main",
]
