"""Line-oriented and key/value procfs file parsing."""

from __future__ import annotations

import os
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, TypeVar, Union

from .types import FilterAction, ParserError

T = TypeVar("T")

PathLike = Union[str, "os.PathLike[str]"]
ValueParser = Callable[[str, Any], None]


def _read_lines(path: PathLike) -> Iterable[str]:
    """Yield the lines of a file without their '\\n' terminators."""
    with open(path, encoding="utf-8", errors="surrogateescape", newline="\n") as stream:
        for line in stream:
            yield line[:-1] if line.endswith("\n") else line


def parse_file_lines(
    path: PathLike,
    parser: Callable[[str], T],
    filter: Optional[Callable[[T], FilterAction]] = None,
    lines_to_skip: int = 0,
) -> List[T]:
    """Parse every non-empty line of a file, after the first ``lines_to_skip``.

    Items for which ``filter`` does not answer KEEP are left out.
    """
    output: List[T] = []
    for index, line in enumerate(_read_lines(path)):
        if index < lines_to_skip or not line:
            continue
        item = parser(line)
        if filter is not None and filter(item) is not FilterAction.KEEP:
            continue
        output.append(item)
    return output


class FileParser:
    """Parser of 'key<delim>value' files into an output object.

    ``parsers`` maps a key to a callable taking the value text and the output
    object, which it updates. ``key_remap`` may rewrite a key before lookup.
    The output object is created by calling ``output_type``; subclasses set
    it to their record type.
    """

    output_type: Callable[[], Any] = dict

    def __init__(
        self,
        delim: str,
        parsers: Mapping[str, ValueParser],
        key_remap: Optional[Callable[[str], str]] = None,
    ) -> None:
        if len(delim) != 1:
            raise ValueError("The delimiter must be a single character")
        self.delim = delim
        self.parsers: Dict[str, ValueParser] = dict(parsers)
        self.key_remap = key_remap

    def parse(self, path: PathLike, keys: Optional[Iterable[str]] = None) -> Any:
        """Parse the file at ``path``; when ``keys`` is given, only those keys."""
        wanted = set(keys) if keys else set()
        output = self.output_type()

        try:
            lines = list(_read_lines(path))
        except OSError as exc:
            raise ParserError("Couldn't open file", os.fspath(path)) from exc

        for line in lines:
            key, _, value = line.partition(self.delim)
            if not key:
                raise ParserError("Corrupted line - Missing key", line)

            key = key.rstrip()
            if self.key_remap is not None:
                key = self.key_remap(key)

            if wanted and key not in wanted:
                continue

            value_parser = self.parsers.get(key)
            if value_parser is not None:
                value_parser(value.lstrip(), output)

        return output