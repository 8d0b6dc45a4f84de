"""Installed package backend: `pkg query`.

    pkg query -a '%n-%v\t%o'          # every installed package
    pkg query '%n-%v\t%o' foo lang/bar

`pkg query` exits with status 1 when none of the given names is installed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from adapters.command_runner import SubprocessRunner
from core.config import PortsSettings
from core.domain.pkg_record import PkgRecord
from core.domain.record import Fields, freeze_fields
from core.interfaces.runner import CommandRunner


class PkgSearch:
    """Queries the installed package database."""

    def __init__(
        self,
        settings: PortsSettings | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self._settings = settings or PortsSettings()
        self._runner = runner or SubprocessRunner()

    def execute_pkg_query(self, fields: list[str], names: Iterable[str] | None = None) -> Iterator[str]:
        """Run `pkg query` for `fields` and yield its output lines."""

        argv = [self._settings.pkg_command, "query"]
        names = list(names) if names is not None else []
        if not names:
            argv.append("-a")
        argv.append(PkgRecord.query_format(fields))
        argv.extend(names)

        output = self._runner.run(argv, ok_returncodes=(0, 1))
        for line in output.splitlines():
            if line.strip():
                yield line

    def search_packages(
        self,
        names: Iterable[str] | None = None,
        fields: Fields | None = None,
    ) -> Iterator[PkgRecord]:
        """Installed packages matching `names` (package names or origins).

        With no names, every installed package is returned.
        """

        if names is not None:
            names = list(names)
            if not names:
                return
        fields = freeze_fields(PkgRecord.default_fields() if fields is None else fields)
        search_fields = PkgRecord.determine_search_fields(
            fields,
            warn_unattainable=self._settings.warn_unattainable_fields,
        )
        if not search_fields:
            return
        for line in self.execute_pkg_query(search_fields, names):
            record = PkgRecord.parse(line, search_fields)
            if record is None:
                continue
            yield record.amend(fields, settings=self._settings)
