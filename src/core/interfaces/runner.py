"""Command runner contract.

Search backends never spawn processes themselves; they hand an argv to a
`CommandRunner`. Tests substitute a runner returning canned output.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class CommandRunner(Protocol):
    def run(self, argv: Sequence[str], *, ok_returncodes: Sequence[int] = (0,)) -> str:
        """Run `argv` and return its stdout.

        Raises `core.errors.ExecutionFailure` when the exit status is not in
        `ok_returncodes`.
        """

        ...
