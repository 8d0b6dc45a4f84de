"""Port search backend: `make search` over the ports INDEX.

    make -C /usr/ports search name='^(foo|bar)-[^-]+$' display=name,path

The output is a list of blank-line separated paragraphs, one per port.
Names can be looked up as port names (`foo`), package names (`foo-1.2.3`)
or port origins (`lang/foo`); each lookup yields `(name, record)` pairs.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from adapters.command_runner import SubprocessRunner
from core.config import PortsSettings
from core.domain.names import (
    is_pkgname,
    is_portorigin,
    path_to_portorigin,
    pkgname_to_pattern,
    portname_to_pattern,
    portorigin_to_pattern,
    split_pkgname,
)
from core.domain.record import ALL, Fields, freeze_fields
from core.domain.port_record import PortRecord
from core.interfaces.runner import CommandRunner

PARAGRAPH_SEP_RE = re.compile(r"\n[ \t]*\n")

LOOKUP_KEYS = ("portname", "pkgname", "portorigin")


class PortSearch:
    """Searches the ports tree with `make search`."""

    def __init__(
        self,
        settings: PortsSettings | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self._settings = settings or PortsSettings()
        self._runner = runner or SubprocessRunner()

    def execute_make_search(self, key: str, pattern: str, fields: Iterable[str]) -> Iterator[str]:
        """Run `make search <key>=<pattern>` and yield raw paragraphs."""

        if key not in PortRecord.search_keys():
            raise ValueError(f"invalid search key {key!r}")
        argv = [
            self._settings.make_command,
            "-C",
            str(self._settings.portsdir),
            "search",
            f"{key}={pattern}",
            f"display={','.join(fields)}",
        ]
        output = self._runner.run(argv)
        for paragraph in PARAGRAPH_SEP_RE.split(output):
            if paragraph.strip():
                yield paragraph

    def search_ports_by(
        self,
        key: str,
        values: Iterable[str],
        fields: Fields | None = None,
        *,
        include_moved: bool | None = None,
    ) -> Iterator[tuple[str, PortRecord]]:
        """Search ports whose `key` is one of `values`.

        `key` is `portname`, `pkgname`, `portorigin` or any raw `make search`
        key (see `PortRecord.search_keys`), in which case `values` are
        regular expressions passed through as they are.
        """

        values = list(values)
        if not values:
            return
        fields = freeze_fields(PortRecord.default_fields() if fields is None else fields)
        if include_moved is None:
            include_moved = self._settings.include_moved

        key = key.lower()
        if key == "portorigin":
            search_key = "path"
            pattern = portorigin_to_pattern(values, self._settings.portsdir)
        elif key == "pkgname":
            search_key = "name"
            pattern = pkgname_to_pattern(values)
        elif key == "portname":
            search_key = "name"
            pattern = portname_to_pattern(values)
        elif key in PortRecord.search_keys():
            search_key = key
            pattern = "|".join(values)
        else:
            raise ValueError(f"invalid search key {key!r}")

        search_fields = PortRecord.determine_search_fields(
            fields,
            _display_field(search_key),
            warn_unattainable=self._settings.warn_unattainable_fields,
        )
        wanted = set(values)
        for paragraph in self.execute_make_search(search_key, pattern, search_fields):
            record = PortRecord.parse(paragraph, include_moved=include_moved)
            if record is None:
                continue
            name = _lookup_value(key, record)
            if key in LOOKUP_KEYS and name not in wanted:
                continue
            yield name, record.amend(fields, settings=self._settings)

    def search_ports(
        self,
        names: Iterable[str],
        fields: Fields | None = None,
        *,
        include_moved: bool | None = None,
    ) -> Iterator[tuple[str, PortRecord]]:
        """Search ports by a mixed list of port names, package names and origins."""

        names = list(dict.fromkeys(names))
        if fields is not None:
            fields = freeze_fields(fields)
        origins = [n for n in names if is_portorigin(n)]
        pkgnames = [n for n in names if not is_portorigin(n) and is_pkgname(n)]
        portnames = [n for n in names if n not in origins and n not in pkgnames]

        for key, group in (("portorigin", origins), ("pkgname", pkgnames), ("portname", portnames)):
            yield from self.search_ports_by(key, group, fields, include_moved=include_moved)

    def search_all(
        self,
        fields: Fields | None = ALL,
        *,
        include_moved: bool | None = None,
    ) -> Iterator[PortRecord]:
        """Every port of the ports tree (matches any non-empty path)."""

        for _, record in self.search_ports_by("path", ["."], fields, include_moved=include_moved):
            yield record


def _display_field(search_key: str) -> str:
    """`xname` filters on `name`; only the latter can be displayed."""

    if search_key in PortRecord.std_fields():
        return search_key
    return search_key[1:]


def _lookup_value(key: str, record: PortRecord) -> str:
    name = record.get("name", "")
    if key == "portorigin":
        return path_to_portorigin(record.get("path", ""))
    if key == "pkgname":
        return name
    if key == "portname":
        return split_pkgname(name)[0]
    return record.get(_display_field(key), "")
