"""Wrapper de subprocess.

Por qué un wrapper:
- Estandariza cómo se ejecutan los comandos (modo texto, locale C, sin shell).
- Los backends de búsqueda reciben un `CommandRunner`; los tests pasan uno falso.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence

from core.errors import ExecutionFailure

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Runs a command to completion and returns its stdout."""

    def __init__(self, *, extra_env: Mapping[str, str] | None = None) -> None:
        env = dict(os.environ)
        # make search / pkg output must not be localized.
        env["LC_ALL"] = "C"
        if extra_env:
            env.update(extra_env)
        self._env = env

    def run(self, argv: Sequence[str], *, ok_returncodes: Sequence[int] = (0,)) -> str:
        logger.debug("running %s", " ".join(argv))
        try:
            proc = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                env=self._env,
                check=False,
            )
        except OSError as exc:
            raise ExecutionFailure(argv, 127, str(exc)) from exc

        if proc.returncode not in ok_returncodes:
            raise ExecutionFailure(argv, proc.returncode, proc.stderr)
        return proc.stdout
