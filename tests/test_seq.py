# tests/test_seq.py
from __future__ import annotations

import pytest

from ringalg.seq import Seq


def test_construction_and_access():
    s = Seq.of(1, 2, 3)
    assert len(s) == s.length == 3
    assert list(s) == [1, 2, 3]
    assert s.at(0) == 1 and s[2] == 3
    assert list(reversed(s)) == [3, 2, 1]
    assert Seq.from_iterable(x for x in "ab") == Seq.of("a", "b")


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_at_out_of_range(index):
    with pytest.raises(IndexError):
        Seq.of(1, 2, 3).at(index)


def test_push_and_pop_do_not_mutate():
    s = Seq.of(2)
    assert s.push_front(1) == Seq.of(1, 2)
    assert s.push_back(3) == Seq.of(2, 3)
    head, tail = Seq.of(1, 2, 3).pop_front()
    assert head == 1 and tail == Seq.of(2, 3)
    assert s == Seq.of(2)
    with pytest.raises(IndexError):
        Seq().pop_front()


@pytest.mark.parametrize("i", range(0, 5))
def test_split_concat_gives_back_original(i):
    s = Seq.of("a", "b", "c", "d")
    head, tail = s.split(i)
    assert len(head) == i
    assert head.concat(tail) == s


def test_split_rejects_bad_index():
    with pytest.raises(IndexError):
        Seq.of(1).split(2)


def test_insert_and_remove():
    s = Seq.of(1, 2, 4)
    assert s.insert(2, 3) == Seq.of(1, 2, 3, 4)
    assert s.insert(0, 0) == Seq.of(0, 1, 2, 4)
    assert s.insert(3, 5) == Seq.of(1, 2, 4, 5)
    assert s.remove(1) == Seq.of(1, 4)
    with pytest.raises(IndexError):
        s.remove(3)
