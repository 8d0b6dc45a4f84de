"""Search orchestration.

`search` is the single entry point the rest of the platform uses: it picks
the backend for the record kind, resolves which fields to ask for, and
returns amended records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from adapters.make_search import PortSearch
from adapters.pkg_query import PkgSearch
from core.config import PortsSettings
from core.domain.record import Fields, Record, freeze_fields
from core.interfaces.runner import CommandRunner

RecordKind = Literal["port", "pkg"]


@dataclass
class SearchRequest:
    """Parameters of one search."""

    names: Iterable[str] | None = None
    fields: Fields | None = None
    kind: RecordKind = "port"
    include_moved: bool | None = None


def run_search(
    request: SearchRequest,
    *,
    settings: PortsSettings | None = None,
    runner: CommandRunner | None = None,
) -> list[Record]:
    settings = settings or PortsSettings()

    if request.kind == "pkg":
        backend = PkgSearch(settings, runner)
        return list(backend.search_packages(request.names, request.fields))

    if request.kind == "port":
        ports = PortSearch(settings, runner)
        if request.names is None:
            return list(ports.search_all(request.fields, include_moved=request.include_moved))
        return [
            record
            for _, record in ports.search_ports(
                request.names, request.fields, include_moved=request.include_moved
            )
        ]

    raise ValueError(f"unknown record kind {request.kind!r}")


def search(
    filter: str | Iterable[str] | None = None,
    fields: Fields | None = None,
    *,
    kind: RecordKind = "port",
    settings: PortsSettings | None = None,
    runner: CommandRunner | None = None,
) -> list[Record]:
    """Search ports (`kind="port"`) or installed packages (`kind="pkg"`).

    `filter` is a name or a list of names (port names, package names or
    port origins); None means everything. `fields` defaults to the record
    kind's `default_fields`; pass `ALL` to keep every computed field.
    """

    names = [filter] if isinstance(filter, str) else filter
    if fields is not None:
        fields = freeze_fields(fields)
    request = SearchRequest(names=names, fields=fields, kind=kind)
    return run_search(request, settings=settings, runner=runner)
