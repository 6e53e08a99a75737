# beam_core/signature.py
"""Turn-history signatures.

A signature is an immutable ``bytes`` value, one ``Move`` symbol per row
advanced. Extending always builds a new value, so two branches taken from
the same parent never share a mutable buffer.
"""
from __future__ import annotations
from typing import Iterable

from .models import Move

EMPTY = b""
_VALID = frozenset(m.symbol for m in Move)


def extend(signature: bytes, move: Move) -> bytes:
    """Return ``signature`` with ``move`` appended (one byte longer)."""
    return signature + move.symbol


def from_moves(moves: Iterable[Move]) -> bytes:
    return b"".join(m.symbol for m in moves)


def decode(signature: bytes) -> str:
    return signature.decode("ascii")


def is_valid(signature: bytes) -> bool:
    """True when every byte is one of ``D``, ``L`` or ``R``."""
    return all(signature[i:i + 1] in _VALID for i in range(len(signature)))
