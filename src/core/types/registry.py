"""Registry of data types and their constructors."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from core.types.timestamp import DEFAULT as TIMESTAMP_DEFAULT
from core.types.timestamp import TimestampType


@dataclass(frozen=True)
class RegisteredType:
    name: str
    ptype: Any
    parent: str | None = None
    new_function: Callable[..., Any] | None = None


class TypeRegistry:
    def __init__(self) -> None:
        self._types: dict[str, RegisteredType] = {}

    def register(
        self,
        name: str,
        ptype: Any,
        *,
        parent: str | None = None,
        new_function: Callable[..., Any] | None = None,
    ) -> RegisteredType:
        if name in self._types:
            raise ValueError(f"type {name!r} is already registered")
        entry = RegisteredType(name=name, ptype=ptype, parent=parent, new_function=new_function)
        self._types[name] = entry
        return entry

    def get(self, name: str) -> RegisteredType:
        return self._types[name]

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def names(self) -> list[str]:
        return sorted(self._types)

    def new(self, name: str, *args: Any) -> Any:
        """Call the constructor of type `name`."""

        entry = self.get(name)
        if entry.new_function is None:
            raise TypeError(f"type {name!r} has no constructor")
        return entry.new_function(*args)


def register_timestamp_type(registry: TypeRegistry) -> RegisteredType:
    return registry.register(
        TimestampType.name,
        TIMESTAMP_DEFAULT,
        parent=TimestampType.parent,
        new_function=TimestampType.new_function(),
    )


def default_registry() -> TypeRegistry:
    registry = TypeRegistry()
    register_timestamp_type(registry)
    return registry
