# beam_core/frontier.py
from __future__ import annotations
from typing import Iterable, Iterator, List

from .models import Path


class Frontier:
    """Ordered, append-only collection of the paths alive in one generation.

    The engine builds a fresh instance every generation; nothing is ever
    removed from an existing one.
    """

    __slots__ = ("_paths",)

    def __init__(self) -> None:
        self._paths: List[Path] = []

    @classmethod
    def seed(cls, paths: Iterable[Path]) -> "Frontier":
        frontier = cls()
        for p in paths:
            frontier.append(p)
        return frontier

    def append(self, path: Path) -> None:
        self._paths.append(path)

    def extend(self, paths: Iterable[Path]) -> None:
        self._paths.extend(paths)

    @property
    def size(self) -> int:
        return len(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __bool__(self) -> bool:
        return bool(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __repr__(self) -> str:
        return f"Frontier(size={len(self._paths)})"
