"""Generation options and table selection filters."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..shared import FilterConstructionError
from .types import Dialect

DEFAULT_PACKAGE_NAME = "model"


@dataclass(frozen=True, slots=True)
class Filter:
    """Selects tables by name and names the prefix stripped from struct names."""

    table_prefix: str
    table_name_pattern: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.table_name_pattern:
            raise FilterConstructionError("table name pattern must not be empty")
        try:
            compiled = re.compile(self.table_name_pattern)
        except re.error as e:
            raise FilterConstructionError(
                f"invalid table name pattern '{self.table_name_pattern}': {e}",
                self.table_name_pattern,
            ) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, table_name: str) -> bool:
        """Whether the pattern matches the whole table name."""
        return self._compiled.fullmatch(table_name) is not None


def new_filter(prefix: str | None, pattern: str | None) -> Filter | None:
    """Build a filter from raw configuration values.

    Returns ``None`` when the pattern is blank; callers skip such entries.
    An invalid regular expression still raises ``FilterConstructionError``.
    """
    prefix = (prefix or "").strip()
    pattern = (pattern or "").strip()
    if not pattern:
        return None
    return Filter(table_prefix=prefix, table_name_pattern=pattern)


@dataclass(frozen=True, slots=True)
class Options:
    """Options for one generation run. Read-only once constructed."""

    dialect: Dialect = Dialect.MYSQL
    dsn: str = ""
    gen_gorm_tag: bool = False
    gorm_v1: bool = False
    gen_json_tag: bool = False
    html_file: str = ""
    model_dir: str = ""
    model_package_name: str = DEFAULT_PACKAGE_NAME
    model_single_file: bool = False
    verbose: bool = False
    filters: tuple[Filter, ...] = ()
    exclude: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dialect", Dialect.parse(self.dialect))
        object.__setattr__(self, "filters", tuple(self.filters))
        object.__setattr__(self, "exclude", tuple(self.exclude))
        if not self.model_package_name:
            object.__setattr__(self, "model_package_name", DEFAULT_PACKAGE_NAME)


def select_table(
    table_name: str,
    filters: Sequence[Filter],
    excluded: Iterable[str],
) -> tuple[bool, str]:
    """Decide whether a table takes part in generation.

    Exclusion always wins. With no filters configured every table is
    selected; otherwise the first matching filter selects the table and
    contributes its prefix, and an unmatched table is dropped.

    Returns:
        ``(selected, prefix)``; the prefix is ``""`` when no filter matched.
    """
    if table_name in excluded:
        return False, ""
    if not filters:
        return True, ""
    for table_filter in filters:
        if table_filter.matches(table_name):
            return True, table_filter.table_prefix
    return False, ""
