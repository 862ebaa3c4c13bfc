"""Naming utilities for Go code generation."""

from __future__ import annotations

import re
from functools import lru_cache

_SEPARATOR = re.compile(r"[^0-9A-Za-z]+")
_WHITESPACE = re.compile(r"\s+")
_LEADING_CAPS = re.compile(r"^[A-Z]+")

# Prepended when an identifier would otherwise start with a digit
DIGIT_PREFIX = "X"


@lru_cache(maxsize=1024)
def title_case(value: str) -> str:
    """Convert an identifier to an exported Go identifier.

    Every run of non-alphanumeric characters is a word boundary. The first
    letter of each word is upper-cased and the rest is kept as written, so
    the function is idempotent and already cased input passes through.

    Examples:
        >>> title_case("user_id")
        'UserId'
        >>> title_case("_user__id2")
        'UserId2'
        >>> title_case("2fa_secret")
        'X2faSecret'
        >>> title_case("UserId")
        'UserId'
    """
    parts = [part for part in _SEPARATOR.split(value) if part]
    result = "".join(part[0].upper() + part[1:] for part in parts)
    if result[:1].isdigit():
        return DIGIT_PREFIX + result
    return result


@lru_cache(maxsize=1024)
def camel_case(value: str) -> str:
    """Convert an identifier to a camelCase serialization key.

    The leading run of capitals is lower-cased, keeping the last one when it
    starts the next word.

    Examples:
        >>> camel_case("user_id")
        'userId'
        >>> camel_case("ID")
        'id'
        >>> camel_case("HTTPServer")
        'httpServer'
    """
    titled = title_case(value)
    match = _LEADING_CAPS.match(titled)
    if match is None:
        return titled

    run = match.group()
    rest = titled[len(run):]
    if len(run) > 1 and rest[:1].islower():
        return run[:-1].lower() + run[-1] + rest
    return run.lower() + rest


def one_line(text: str) -> str:
    """Collapse a possibly multi-line comment onto a single line."""
    return _WHITESPACE.sub(" ", text).strip()
