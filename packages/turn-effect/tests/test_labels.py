"""Tests for LabelBoard."""
from __future__ import annotations

from turn_effect import LabelBoard


def test_add_and_query():
    board = LabelBoard()
    board.add("shade", [(0, 0), (1, 0)])
    assert board.labels_at((0, 0)) == frozenset({"shade"})
    assert board.locations_of("shade") == frozenset({(0, 0), (1, 0)})


def test_counts_stack():
    board = LabelBoard()
    board.add("shade", [(0, 0)])
    board.add("shade", [(0, 0)])
    board.remove("shade", [(0, 0)])
    assert board.count("shade", (0, 0)) == 1
    board.remove("shade", [(0, 0)])
    assert board.labels_at((0, 0)) == frozenset()


def test_remove_absent_is_noop():
    board = LabelBoard()
    board.add("wet", [(2, 2)])
    board.remove("shade", [(2, 2), (3, 3)])
    assert board.labels_at((2, 2)) == frozenset({"wet"})
    assert board.count("shade", (3, 3)) == 0


def test_clear():
    board = LabelBoard()
    board.add("shade", [(0, 0)])
    board.clear()
    assert board.locations_of("shade") == frozenset()
