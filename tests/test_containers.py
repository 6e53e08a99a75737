# tests/test_containers.py
import pytest

from beam_core.dedup import SignatureSet
from beam_core.frontier import Frontier
from beam_core.models import Move, Path
from beam_core import signature


def test_add_returns_true_exactly_once():
    s = SignatureSet()
    assert s.add(b"LR") is True
    assert s.add(b"LR") is False
    assert s.add(b"LR") is False
    assert len(s) == 1


def test_signatures_compare_on_length_and_order():
    s = SignatureSet()
    assert s.add(b"LR")
    assert s.add(b"LR\0")
    assert s.add(b"RL")
    assert s.add(b"L")
    assert s.add(b"")
    assert s.size == 5
    assert s.contains(b"LR")
    assert not s.contains(b"LRD")


def test_contains_does_not_insert():
    s = SignatureSet()
    assert not s.contains(b"D")
    assert len(s) == 0
    assert b"D" not in s


def test_text_keys_are_rejected():
    s = SignatureSet()
    with pytest.raises(TypeError):
        s.add("LR")
    assert "LR" not in s


def test_extend_builds_new_value():
    parent = b"DL"
    left = signature.extend(parent, Move.LEFT)
    right = signature.extend(parent, Move.RIGHT)
    assert parent == b"DL"
    assert (left, right) == (b"DLL", b"DLR")
    assert signature.decode(right) == "DLR"
    assert signature.from_moves([Move.DOWN, Move.LEFT]) == parent
    assert signature.is_valid(left)
    assert not signature.is_valid(b"DX")


def test_path_advance_moves_one_row():
    p = Path(row=3, col=4, signature=b"DD")
    assert p.advance(Move.LEFT) == Path(4, 3, b"DDL")
    assert p.advance(Move.RIGHT) == Path(4, 5, b"DDR")
    assert p.advance(Move.DOWN) == Path(4, 4, b"DDD")
    assert p == Path(3, 4, b"DD")


def test_frontier_keeps_insertion_order():
    paths = [Path(1, c, b"D") for c in (3, 1, 2)]
    f = Frontier.seed(paths)
    f.append(Path(1, 0, b"L"))
    assert len(f) == f.size == 4
    assert [p.col for p in f] == [3, 1, 2, 0]
    assert not Frontier()
