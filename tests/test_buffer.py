import pytest

from binbreak.buffer import Buffer, Rect, center_rect


def test_rect_contains_is_half_open() -> None:
    r = Rect(2, 1, 3, 2)
    assert r.contains(2, 1) and r.contains(4, 2)
    assert not r.contains(5, 1) and not r.contains(2, 3) and not r.contains(1, 1)


def test_intersection_clamps_to_overlap() -> None:
    assert Rect(0, 0, 10, 5).intersection(Rect(8, 3, 10, 10)) == Rect(8, 3, 2, 2)
    assert Rect(0, 0, 2, 2).intersection(Rect(5, 5, 1, 1)).is_empty()


def test_center_rect_shrinks_to_fit() -> None:
    assert center_rect(Rect(0, 0, 10, 10), 4, 2) == Rect(3, 4, 4, 2)
    assert center_rect(Rect(1, 1, 3, 3), 10, 10) == Rect(1, 1, 3, 3)


def test_out_of_range_cell_is_an_error() -> None:
    buf = Buffer(3, 2)
    with pytest.raises(IndexError):
        buf.cell(3, 0)
    with pytest.raises(IndexError):
        buf.cell(0, -1)


def test_set_string_clips_silently() -> None:
    buf = Buffer(5, 2)
    buf.set_string(3, 0, "hello", "bold")
    buf.set_string(0, 1, "world", clip=Rect(1, 1, 2, 1))
    buf.set_string(0, 7, "nowhere")
    assert buf.rows() == ["   he", " or  "]
    assert buf.cell(4, 0).style == "bold"


def test_fill_clips_to_the_buffer() -> None:
    buf = Buffer(3, 2)
    buf.fill(Rect(1, 0, 9, 9), "#", "red")
    assert buf.rows() == [" ##", " ##"]
    assert buf.cell(1, 1).style == "red"
    assert buf.cell(0, 1).style == ""
