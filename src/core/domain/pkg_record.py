"""Records of installed packages (`pkg query`).

Each std field maps to a `pkg query` format code; the query prints one
tab-separated line per package, columns in the order the fields were
requested:

    pkg query -a '%n-%v\t%o'
    foo-1.2.3	lang/foo
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from core.domain.names import split_pkgname
from core.domain.record import Record

QUERY_FORMATS: dict[str, str] = {
    "pkgname": "%n-%v",
    "portorigin": "%o",
    "prefix": "%p",
    "comment": "%c",
    "maint": "%m",
    "www": "%w",
    "arch": "%q",
}

SEPARATOR = "\t"


class PkgRecord(Record):
    """One installed package."""

    kind: ClassVar[str] = "pkg"

    @classmethod
    def std_fields(cls) -> Sequence[str]:
        return tuple(QUERY_FORMATS)

    @classmethod
    def default_fields(cls) -> Sequence[str]:
        return ("pkgname", "portname", "portorigin", "portversion", "options_file")

    @classmethod
    def deps_for_amend(cls) -> Mapping[str, Sequence[str]]:
        return {
            "options": ("pkgname", "portorigin"),
            "options_file": ("pkgname", "portorigin"),
            "options_files": ("pkgname", "portorigin"),
            "portname": ("pkgname",),
            "portversion": ("pkgname",),
        }

    @classmethod
    def query_format(cls, fields: Sequence[str]) -> str:
        """`pkg query` format string for std `fields` (others are ignored)."""

        return SEPARATOR.join(QUERY_FORMATS[f] for f in fields if f in QUERY_FORMATS)

    @classmethod
    def parse(cls, line: str, fields: Sequence[str]) -> PkgRecord | None:
        """Parse one `pkg query` output line produced by `query_format(fields)`.

        Returns None when the number of columns does not match.
        """

        columns = [f for f in fields if f in QUERY_FORMATS]
        if not columns:
            return None
        values = line.rstrip("\n").split(SEPARATOR, len(columns) - 1)
        if len(values) != len(columns):
            return None
        return cls(zip(columns, values))

    def _derive(self, data: dict[str, Any]) -> None:
        if data.get("pkgname"):
            data["portname"], version = split_pkgname(data["pkgname"])
            if version is not None:
                data["portversion"] = version
