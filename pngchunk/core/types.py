"""Shared types for pngchunk: Command and Report."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


class Command:
    """A self-registering CLI subcommand.

    Usage in a command module:

        command = Command(name='inspect', help='Parse a chunk frame')

        @command.arguments
        def arguments(parser):
            parser.add_argument('file')

        @command.run
        def run(args, report):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self._arguments_fn: Callable | None = None
        self.module: str | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        self.module = fn.__module__
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the function that adds argparse arguments."""
        self._arguments_fn = fn
        return fn

    def configure(self, parser: argparse.ArgumentParser) -> None:
        if self._arguments_fn is not None:
            self._arguments_fn(parser)

    def execute(self, args: Any, report: Report) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(args, report)


@dataclass
class Report:
    """Accumulates per-item results for text/JSON output."""

    command: str = ''
    source: str | None = None
    items: dict[str, dict[str, Any]] = field(default_factory=dict)
    pass_count: int = 0
    fail_count: int = 0

    def add(self, name: str, data: dict[str, Any]) -> None:
        """Add or merge results for an item."""
        self.items.setdefault(name, {}).update(data)

    def record_pass(self, name: str) -> None:
        self.items.setdefault(name, {})['ok'] = True
        self.pass_count += 1

    def record_fail(self, name: str, kind: str, message: str) -> None:
        entry = self.items.setdefault(name, {})
        entry['ok'] = False
        entry['error'] = {'kind': kind, 'message': message}
        self.fail_count += 1

    @property
    def failed(self) -> bool:
        return self.fail_count > 0
