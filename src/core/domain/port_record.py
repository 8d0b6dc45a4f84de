"""Records parsed from `make search` output (ports INDEX).

`make -C /usr/ports search name=^foo- display=name,path` prints one
paragraph per port:

    Port:   foo-1.2.3
    Path:   /usr/ports/lang/foo

Field names are normalized (`B-deps` -> `bdeps`, `Port` -> `name`).
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from core.domain.names import path_to_portorigin, split_pkgname
from core.domain.record import Record

# FN: field name, FV: field value, FX: whole "Field: value" line.
FN_RE = r"[a-zA-Z0-9_-]+"
FV_RE = r"(?:(?:\S?.*\S)|)"
FX_RE = re.compile(rf"^\s*({FN_RE})\s*:[ \t]*({FV_RE})\s*$", re.MULTILINE)

MOVED_RE = re.compile(r"^Moved:", re.MULTILINE)

_KEYMAP = {"port": "name"}


class PortRecord(Record):
    """One port found by `make search`."""

    kind: ClassVar[str] = "port"

    @classmethod
    def std_fields(cls) -> Sequence[str]:
        return ("name", "path", "info", "maint", "cat", "bdeps", "rdeps", "www")

    @classmethod
    def default_fields(cls) -> Sequence[str]:
        return ("pkgname", "portname", "portorigin", "path", "options_file")

    @classmethod
    def deps_for_amend(cls) -> Mapping[str, Sequence[str]]:
        return {
            "options": ("name", "path"),
            "options_file": ("name", "path"),
            "options_files": ("name", "path"),
            "pkgname": ("name",),
            "portname": ("name",),
            "portorigin": ("path",),
            "portversion": ("name",),
        }

    @classmethod
    def search_keys(cls) -> list[str]:
        """Keys accepted by `make search` (`name=...`, `xname=...`, ...)."""

        std = list(cls.std_fields())
        return std + [f"x{f}" for f in std]

    @classmethod
    def parse(cls, paragraph: str, *, include_moved: bool = False) -> PortRecord | None:
        """Parse one `make search` paragraph.

        Returns None for ports that were moved or removed, unless
        `include_moved` is set. Lines not in `Field: value` form are ignored;
        a repeated field keeps its last value.
        """

        if not include_moved and MOVED_RE.search(paragraph):
            return None
        data: dict[str, Any] = {}
        for name, value in FX_RE.findall(paragraph):
            key = name.replace("-", "", 1).lower()
            data[_KEYMAP.get(key, key)] = value
        return cls(data)

    def _derive(self, data: dict[str, Any]) -> None:
        if data.get("name"):
            data["pkgname"] = data["name"]
            data["portname"], version = split_pkgname(data["name"])
            if version is not None:
                data["portversion"] = version
        if data.get("path"):
            data["portorigin"] = path_to_portorigin(data["path"])
