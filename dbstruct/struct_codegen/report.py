"""Static HTML report listing every generated struct."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Final, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..model import Table
from ..shared import OutputError
from .emitter import TEMPLATE_DIR
from .writer import GENERATOR_NAME, TIMESTAMP_FORMAT

REPORT_TEMPLATE: Final[str] = "report.html.j2"
STYLESHEETS: Final[tuple[str, ...]] = ("style.css",)


def read_asset(name: str) -> str:
    """Read a static asset shipped next to the templates."""
    try:
        return (TEMPLATE_DIR / name).read_text(encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to read report asset ({e})", name) from e


def render_report(
    tables: Sequence[Table],
    generated_at: datetime,
    assets: Sequence[str] | None = None,
) -> str:
    """Render the report for already rendered tables.

    Args:
        tables: Tables whose ``go_struct`` has been filled by the emitter.
        generated_at: Timestamp printed in the report.
        assets: Stylesheet contents; defaults to the packaged stylesheets.
    """
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )
    styles = list(assets) if assets is not None else [read_asset(name) for name in STYLESHEETS]
    return env.get_template(REPORT_TEMPLATE).render(
        generator=GENERATOR_NAME,
        tables=tables,
        table_count=len(tables),
        date=generated_at.strftime(TIMESTAMP_FORMAT),
        styles=styles,
    )


def write_report(
    html_file: Path,
    tables: Sequence[Table],
    generated_at: datetime,
) -> Path:
    """Render the report and write it to ``html_file``, overwriting it."""
    content = render_report(tables, generated_at)
    try:
        html_file.parent.mkdir(parents=True, exist_ok=True)
        html_file.write_text(content, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"Failed to write report ({e})", str(html_file)) from e
    return html_file
