"""Titled, underlined output sections."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import Any, Iterator, Optional, TextIO

from .fmt_system import describe


def format_pair(key: Any, value: Any) -> str:
    """Render a key/value pair as 'key = value'."""
    return f"{describe(key)} = {describe(value)}"


def _entries(value: Any) -> Optional[Iterator[str]]:
    """Lines for a collection, or None when the value is a single item."""
    if isinstance(value, (str, bytes, bytearray)):
        return None
    if isinstance(value, tuple) and len(value) == 2:
        return None
    if isinstance(value, Mapping):
        return (format_pair(k, v) for k, v in value.items())
    if isinstance(value, (set, frozenset)):
        try:
            items = sorted(value)
        except TypeError:
            items = list(value)
        return (describe(item) for item in items)
    if isinstance(value, Iterable):
        return (describe(item) for item in value)
    return None


def render_section(title: str, value: Any) -> str:
    """Render a title, its underline, the value (one line per item) and a blank line."""
    lines = [title, "-" * len(title)]
    entries = _entries(value)
    if entries is None:
        lines.append(describe(value))
    else:
        lines.extend(entries)
    lines.append("")
    return "".join(f"{line}\n" for line in lines)


def print_section(title: str, value: Any, stream: Optional[TextIO] = None) -> None:
    """Write a rendered section to ``stream`` (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(render_section(title, value))