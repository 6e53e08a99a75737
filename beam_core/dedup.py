# beam_core/dedup.py
"""Exact dedup set for exit signatures.

Keys are ``bytes`` compared on full content and length by the built-in
``set``; a signature is never truncated or padded before lookup.
"""
from __future__ import annotations
from typing import Iterator, Set


class SignatureSet:
    """Insert-only hash set of signatures that reached the bottom boundary."""

    __slots__ = ("_seen",)

    def __init__(self) -> None:
        self._seen: Set[bytes] = set()

    @staticmethod
    def _check(signature: bytes) -> None:
        if not isinstance(signature, bytes):
            raise TypeError(f"Signature must be bytes, got {type(signature).__name__}")

    def contains(self, signature: bytes) -> bool:
        self._check(signature)
        return signature in self._seen

    def add(self, signature: bytes) -> bool:
        """Record ``signature``.

        Returns True if it was new, False (and leaves the set untouched) if
        it was already present.
        """
        self._check(signature)
        if signature in self._seen:
            return False
        self._seen.add(signature)
        return True

    @property
    def size(self) -> int:
        return len(self._seen)

    def __contains__(self, signature: object) -> bool:
        return isinstance(signature, bytes) and signature in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._seen)
