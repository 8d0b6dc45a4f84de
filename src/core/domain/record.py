"""Search result records.

A `Record` is one result of a ports INDEX search (`PortRecord`) or of an
installed-package query (`PkgRecord`): a read-only `{field: value}` mapping.

Some fields come "for free" from the search backend (`std_fields`), others
are derived afterwards by `amend` (e.g. `portversion` from a package name).
To derive a field, its prerequisites must be requested from the backend in
the first place; `determine_search_fields` computes that backend field list
from `deps_for_amend`.

Typical flow:

    search_fields = PortRecord.determine_search_fields(fields, key="name")
    # ... run `make search ... display=<search_fields>` ...
    record = PortRecord.parse(paragraph)
    record = record.amend(fields)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, ClassVar, Literal, TypeVar, Union

from core.config import PortsSettings
from core.domain.names import options_files
from core.domain.options import Options

logger = logging.getLogger(__name__)

ALL: Literal["all"] = "all"
"""Sentinel for `amend`: keep every computed field."""

Fields = Union[Iterable[str], Literal["all"]]

OPTIONS_FIELDS = ("options_files", "options_file", "options")

R = TypeVar("R", bound="Record")


def _dedup(fields: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for field in fields:
        if field not in seen:
            seen.add(field)
            out.append(field)
    return out


def freeze_fields(fields: Fields) -> Fields:
    """`ALL`, or `fields` as a list that can be read more than once."""

    if fields == ALL:
        return ALL
    return list(fields)


class Record(Mapping[str, Any]):
    """Base class of `PortRecord` and `PkgRecord`.

    Subclasses must implement the field catalog (`std_fields`,
    `default_fields`, `deps_for_amend`) and may extend `_derive` to compute
    kind-specific fields.
    """

    kind: ClassVar[str] = "record"

    def __init__(self, data: Mapping[str, Any] | Iterable[tuple[str, Any]] = ()) -> None:
        self._data: dict[str, Any] = dict(data)

    def __getitem__(self, field: str) -> Any:
        return self._data[field]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy (`options` rendered as a dict, paths as strings)."""

        out: dict[str, Any] = {}
        for field, value in self._data.items():
            if isinstance(value, Options):
                value = dict(value.root)
            elif field == "options_files":
                value = [str(v) for v in value]
            elif field == "options_file":
                value = str(value)
            out[field] = value
        return out

    # -- field catalog ---------------------------------------------------

    @classmethod
    def std_fields(cls) -> Sequence[str]:
        """Fields obtained from the search backend without `amend`."""

        raise NotImplementedError("this method must be implemented in a subclass")

    @classmethod
    def default_fields(cls) -> Sequence[str]:
        """Fields returned when the caller does not request any."""

        raise NotImplementedError("this method must be implemented in a subclass")

    @classmethod
    def deps_for_amend(cls) -> Mapping[str, Sequence[str]]:
        """Derived field -> backend fields it is computed from."""

        raise NotImplementedError("this method must be implemented in a subclass")

    @classmethod
    def known_fields(cls) -> list[str]:
        return _dedup([*cls.std_fields(), *cls.deps_for_amend()])

    # -- field resolver --------------------------------------------------

    @classmethod
    def determine_search_fields(
        cls,
        fields: Fields,
        key: str | None = None,
        *,
        warn_unattainable: bool = False,
    ) -> list[str]:
        """Backend fields needed to produce every field in `fields`.

        Requested std fields keep their order, then prerequisites of requested
        derived fields, then `key` (the field `make search` filters on).
        Fields neither standard nor derivable are dropped.
        """

        requested = cls.known_fields() if fields == ALL else _dedup(fields)
        std = set(cls.std_fields())
        deps = cls.deps_for_amend()

        search_fields = [f for f in requested if f in std]
        for field, prerequisites in deps.items():
            if field in requested:
                search_fields.extend(prerequisites)
        if key is not None:
            search_fields.append(key)

        unattainable = [f for f in requested if f not in std and f not in deps]
        if unattainable:
            log = logger.warning if warn_unattainable else logger.debug
            log("%s: dropping fields no backend can produce: %s", cls.kind, ", ".join(unattainable))

        return _dedup(search_fields)

    # -- augmenter -------------------------------------------------------

    def _derive(self, data: dict[str, Any]) -> None:
        """Kind-specific derivations, applied in place to the builder dict."""

    def amend(self: R, fields: Fields, *, settings: PortsSettings | None = None) -> R:
        """Derive extra fields, then keep only `fields` (or everything for `ALL`).

        Derivations whose prerequisites are missing are skipped silently.
        The record itself is left untouched; a new one is returned.
        """

        wanted = None if fields == ALL else set(fields)
        data = dict(self._data)
        self._derive(data)

        if data.get("portname") and data.get("portorigin"):
            if wanted is None or wanted.intersection(OPTIONS_FIELDS):
                dbdir = (settings or PortsSettings()).port_dbdir
                files = options_files(data["portname"], data["portorigin"], dbdir)
                data["options_files"] = files
                if wanted is None or "options_file" in wanted:
                    data["options_file"] = files[-1]
                if wanted is None or "options" in wanted:
                    data["options"] = Options.load(files)

        record = type(self)(data)
        if wanted is None:
            return record
        return record.filter(wanted)

    def filter(self: R, fields: Fields) -> R:
        if fields == ALL:
            return type(self)(self._data)
        wanted = set(fields)
        return type(self)({f: v for f, v in self._data.items() if f in wanted})
