"""Errors raised by the record layer and its search backends."""

from __future__ import annotations

from collections.abc import Sequence


class PortsError(Exception):
    """Base class for ports/packages search errors."""


class ExecutionFailure(PortsError):
    """A backend command (make, pkg) exited with an unexpected status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        message = f"command {' '.join(self.argv)!r} failed with exit status {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
