"""A minimal sub-command dispatcher for command-line tools."""

from __future__ import annotations

import errno
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

Handler = Callable[[List[str]], int]


@dataclass(frozen=True)
class Command:
    """A named sub-command with its usage text and handler."""

    name: str
    args: str
    description: str
    handler: Handler

    def __call__(self, args: Sequence[str]) -> int:
        return self.handler(list(args))

    def matches(self, name: str) -> bool:
        """Whether this command is called ``name``."""
        return self.name == name


class Menu:
    """Dispatch ``argv[1]`` to the matching command with the remaining arguments."""

    def __init__(
        self,
        app: str,
        version: str,
        commands: Sequence[Command],
        argv: Optional[Sequence[str]] = None,
    ) -> None:
        self.app = app
        self.version = version
        self.commands = list(commands)
        self.argv = list(sys.argv if argv is None else argv)

    def run(self, bad_usage_retval: int = -errno.EINVAL) -> int:
        """Run the selected command; return ``bad_usage_retval`` on bad usage."""
        args = self.argv[1:]
        if not args:
            return bad_usage_retval

        name, rest = args[0], args[1:]
        command = next((c for c in self.commands if c.matches(name)), None)
        if command is None:
            return bad_usage_retval
        return command(rest)

    def usage(self) -> str:
        """Return the help text listing every command."""
        program = self.argv[0] if self.argv else self.app
        width = max(
            (len(c.name) + 1 + len(c.args) for c in self.commands), default=0
        )
        lines = [
            f"{self.app}, version {self.version}\n",
            "\n",
            f"  Usage: {program} <command> [args]...\n",
            "\n",
        ]
        lines += [
            f"  {c.name + ' ' + c.args:<{width}}  {c.description}\n"
            for c in self.commands
        ]
        return "".join(lines)