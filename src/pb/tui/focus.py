"""Cyclic focus position over a fixed, ordered set of widget identities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, TypeVar

T = TypeVar("T", bound=Enum)


@dataclass
class FocusRing(Generic[T]):
    items: List[T] = field(default_factory=list)
    index: int = 0

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("FocusRing needs at least one item")

    @property
    def current(self) -> T:
        return self.items[self.index]

    def next(self) -> T:
        self.index = (self.index + 1) % len(self.items)
        return self.current

    def prev(self) -> T:
        self.index = (self.index - 1) % len(self.items)
        return self.current

    def set(self, item: T) -> None:
        self.index = self.items.index(item)
