"""
Struct Code Generator - Generates Go structs from a database schema.

Reads table metadata from a live MySQL or PostgreSQL catalog (or from a
YAML schema snapshot), maps every column to a Go type and writes one
struct per selected table, optionally with GORM and JSON tags, plus an
optional HTML report.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Final, Sequence

from ..catalog import get_driver
from ..model import (
    Filter,
    Options,
    RawTable,
    Table,
    build,
    dump_snapshot,
    load_snapshot,
    new_filter,
)
from ..shared import ConfigError, GenerationError, load_schema
from .emitter import render_tables
from .report import write_report
from .writer import SINGLE_FILE_NAME, render_file, write_models

LOG_FORMAT: Final[str] = "[database-struct] %(asctime)s %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y/%m/%d %H:%M:%S"

# Config file key -> Options field
CONFIG_KEYS: Final[dict[str, str]] = {
    "db_type": "dialect",
    "dsn": "dsn",
    "gorm_tag": "gen_gorm_tag",
    "gorm_v1": "gorm_v1",
    "json_tag": "gen_json_tag",
    "html_file": "html_file",
    "model_dir": "model_dir",
    "package": "model_package_name",
    "single_file": "model_single_file",
    "verbose": "verbose",
    "filters": "filters",
    "exclude": "exclude",
}

BOOL_OPTIONS: Final[frozenset[str]] = frozenset({
    "gen_gorm_tag",
    "gorm_v1",
    "gen_json_tag",
    "model_single_file",
    "verbose",
})

logger = logging.getLogger("dbstruct")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def parse_filter(value: str) -> Filter | None:
    """Parse a ``PREFIX:PATTERN`` filter; a value without ``:`` is a bare pattern."""
    prefix, sep, pattern = value.partition(":")
    if not sep:
        prefix, pattern = "", value
    return new_filter(prefix, pattern)


def _config_filters(raw: Any, config_path: str | None) -> list[Filter]:
    if not isinstance(raw, list):
        raise ConfigError("'filters' must be a list", config_path)

    filters: list[Filter] = []
    for entry in raw:
        if isinstance(entry, dict):
            built = new_filter(entry.get("prefix"), entry.get("pattern"))
        elif isinstance(entry, str):
            built = parse_filter(entry)
        else:
            raise ConfigError(
                "filter entries must be mappings or 'prefix:pattern' strings",
                config_path,
            )
        if built is not None:
            filters.append(built)
    return filters


def options_from_config(
    config: dict[str, Any],
    config_path: str | None = None,
) -> dict[str, Any]:
    """Translate a config mapping into ``Options`` keyword arguments.

    Raises:
        ConfigError: On unknown keys or malformed filter and exclude lists.
    """
    unknown = sorted(set(config) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigError(f"unknown config key(s): {', '.join(unknown)}", config_path)

    values: dict[str, Any] = {}
    for key, value in config.items():
        if value is None:
            continue
        target = CONFIG_KEYS[key]
        if target == "filters":
            values[target] = _config_filters(value, config_path)
        elif target == "exclude":
            if not isinstance(value, list):
                raise ConfigError("'exclude' must be a list", config_path)
            values[target] = [str(name) for name in value]
        elif target in BOOL_OPTIONS:
            if not isinstance(value, bool):
                raise ConfigError(f"'{key}' must be true or false", config_path)
            values[target] = value
        else:
            values[target] = str(value)
    return values


def options_from_args(args: argparse.Namespace) -> Options:
    """Build options from an optional config file overridden by command line flags."""
    values: dict[str, Any] = {}
    if args.config is not None:
        values.update(options_from_config(load_schema(args.config), str(args.config)))

    overrides = {
        "dialect": args.db_type,
        "dsn": args.dsn,
        "gen_gorm_tag": args.gorm_tag,
        "gorm_v1": args.gorm_v1,
        "gen_json_tag": args.json_tag,
        "html_file": args.html,
        "model_dir": args.model_dir,
        "model_package_name": args.package,
        "model_single_file": args.single_file,
        "verbose": args.verbose,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    # Command line lists replace the configured ones
    if args.filter:
        values["filters"] = [f for f in map(parse_filter, args.filter) if f is not None]
    if args.exclude:
        values["exclude"] = list(args.exclude)

    return Options(**values)


def generate(
    options: Options,
    tables: Sequence[Table],
    generated_at: datetime | None = None,
    log: logging.Logger | None = None,
    parallel: bool = False,
    max_workers: int | None = None,
) -> list[Path]:
    """Render every table and write the configured outputs.

    Returns:
        Paths written: the Go files, then the HTML report if configured.
    """
    log = log or logger
    generated_at = generated_at or datetime.now()

    log.info("generate table go struct code")
    render_tables(options, tables, parallel=parallel, max_workers=max_workers)

    written: list[Path] = []
    if options.model_dir:
        written.extend(write_models(options, tables, generated_at, log))
    if options.html_file:
        written.append(write_report(Path(options.html_file), tables, generated_at))
        log.info("wrote report %s", options.html_file)

    log.info("Done")
    return written


def fetch_raw_tables(
    options: Options,
    snapshot: Path | None = None,
) -> list[RawTable]:
    """Read raw tables from a snapshot file, or from the catalog when none is given."""
    if snapshot is not None:
        return load_snapshot(snapshot)
    if not options.dsn:
        raise ConfigError("a DSN or a schema snapshot is required")
    return get_driver(options.dialect).fetch_tables(options.dsn)


def run(
    options: Options,
    snapshot: Path | None = None,
    dump_path: Path | None = None,
    log: logging.Logger | None = None,
    max_workers: int | None = None,
) -> tuple[list[Table], list[Path]]:
    """Fetch, build and generate in one go.

    The full model is built before any file is written.
    """
    log = log or logger
    raw_tables = fetch_raw_tables(options, snapshot)
    if dump_path is not None:
        dump_snapshot(dump_path, raw_tables)
        log.info("wrote schema snapshot %s", dump_path)

    tables = build(options, raw_tables, log)
    written = generate(
        options,
        tables,
        log=log,
        parallel=max_workers is not None and max_workers > 1,
        max_workers=max_workers,
    )
    return tables, written


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="database-struct",
        description="Generate Go structs from a MySQL or PostgreSQL schema",
    )
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument("--db-type", help="Database dialect: mysql or postgresql")
    parser.add_argument("--dsn", help="SQLAlchemy database URL")
    parser.add_argument(
        "--snapshot",
        type=Path,
        help="Read the schema from a YAML snapshot instead of the database",
    )
    parser.add_argument(
        "--dump-snapshot",
        type=Path,
        help="Also write the schema that was read as a YAML snapshot",
    )
    parser.add_argument("--gorm-tag", action="store_true", default=None, help="Emit gorm tags")
    parser.add_argument(
        "--gorm-v1",
        action="store_true",
        default=None,
        help="Reference the GORM v1 documentation",
    )
    parser.add_argument("--json-tag", action="store_true", default=None, help="Emit json tags")
    parser.add_argument("--html", help="Write an HTML report to this file")
    parser.add_argument("--model-dir", help="Directory for the generated Go files")
    parser.add_argument("--package", help="Go package name (default: model)")
    parser.add_argument(
        "--single-file",
        action="store_true",
        default=None,
        help=f"Write every struct into {SINGLE_FILE_NAME}",
    )
    parser.add_argument(
        "--filter",
        action="append",
        metavar="PREFIX:PATTERN",
        help="Select tables matching PATTERN and strip PREFIX from struct names (repeatable)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        metavar="TABLE",
        help="Skip this table (repeatable)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render tables on this many threads",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=None)

    args = parser.parse_args(argv)

    try:
        options = options_from_args(args)
        configure_logging(options.verbose)

        tables, written = run(
            options,
            snapshot=args.snapshot,
            dump_path=args.dump_snapshot,
            max_workers=args.workers,
        )

        if not options.model_dir and not options.html_file:
            print(render_file(options, tables, datetime.now()), end="")
            return

        print(f"Generated {len(tables)} struct(s), wrote {len(written)} file(s)")
    except GenerationError as e:
        raise SystemExit(f"Error: {e}") from e


if __name__ == "__main__":
    main()
