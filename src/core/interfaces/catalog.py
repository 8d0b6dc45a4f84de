"""Field catalog contract.

A record kind declares three things:
- `std_fields`: fields the search backend returns directly,
- `default_fields`: fields returned when the caller does not pick any,
- `deps_for_amend`: derived field -> fields it is computed from.

`Record` implements it; the resolver (`determine_search_fields`) and the
augmenter (`amend`) read a record kind only through these three methods.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class FieldCatalog(Protocol):
    """Static field declaration of one record kind."""

    @classmethod
    def std_fields(cls) -> Sequence[str]:
        ...

    @classmethod
    def default_fields(cls) -> Sequence[str]:
        ...

    @classmethod
    def deps_for_amend(cls) -> Mapping[str, Sequence[str]]:
        ...
