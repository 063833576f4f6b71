"""Uniform response contract of every endpoint call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeAlias, TypeVar

from ..core.exceptions import PolymerError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Zero or more successfully mapped objects."""

    items: list[T] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True

    def first(self) -> T | None:
        """First mapped object, or None when the result is empty."""
        return self.items[0] if self.items else None


@dataclass(frozen=True)
class Error:
    """A single structured failure."""

    error: PolymerError

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.error.message


Response: TypeAlias = Result[T] | Error
