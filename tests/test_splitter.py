from __future__ import annotations

import gc

import pytest

from rc_substring import DelimitedViews, Rc, TextBuffer, line_views, split_views

WORDS = ["zero", "one", "two", "three", "four", "five"]


def generate_text(values: list[int]) -> str:
    return "".join(f"{WORDS[i]} " for i in values)


def give_me_an_iterator() -> DelimitedViews:
    return DelimitedViews(generate_text([2, 3, 1, 0, 5]))


def test_intended_usage() -> None:
    it = give_me_an_iterator()

    assert next(it) == "two"
    assert next(it) == "three"
    assert next(it) == "one"
    assert next(it) == "zero"
    value = next(it)
    del it
    gc.collect()

    assert value == "five"
    assert value.handle.strong_count == 1


def test_views_survive_close() -> None:
    with DelimitedViews("a bb ccc ") as views:
        collected = list(views)

    assert collected == ["a", "bb", "ccc"]
    assert [view.range for view in collected] == [range(0, 1), range(2, 4), range(5, 8)]
    assert collected[0].handle.strong_count == 3


def test_unterminated_tail_is_dropped_by_default() -> None:
    assert list(DelimitedViews("a b c")) == ["a", "b"]
    assert list(DelimitedViews("a b c", keep_trailing=True)) == ["a", "b", "c"]


def test_iterator_stays_exhausted() -> None:
    views = DelimitedViews("a ")

    assert next(views) == "a"
    with pytest.raises(StopIteration):
        next(views)
    with pytest.raises(StopIteration):
        next(views)


def test_shares_an_existing_handle() -> None:
    handle = Rc(TextBuffer.from_text("x,y,"))

    views = list(DelimitedViews(handle, ","))

    assert views == ["x", "y"]
    assert all(view.handle.ptr_eq(handle) for view in views)


def test_multibyte_delimiter_advances_by_bytes() -> None:
    assert split_views("α→β→γ", "→") == ["α", "β", "γ"]


def test_empty_delimiter_rejected() -> None:
    with pytest.raises(ValueError):
        DelimitedViews("abc", "")


def test_line_views() -> None:
    lines = line_views("Line 1\nLine 2\nLine 3")

    assert lines == ["Line 1", "Line 2", "Line 3"]
    assert lines[2].range == range(14, 20)
    assert lines[0].handle.strong_count == 3
