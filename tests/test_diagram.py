import math
from fractions import Fraction
from types import MappingProxyType

import pytest

from edolines.config import Frame
from edolines.diagram import (Group, Line, Rect, Text, draw_edo_row, draw_frame,
                              draw_ji_row, iter_shapes, render, shapes_to_json,
                              validate)
from edolines.errors import (InvalidEdoValue, InvalidFrame, InvalidInterval,
                             InvalidRowHeight)
from edolines.intervals import Interval, IntervalGroup, default_table


def kinds(shapes, kind):
    return [s for s in iter_shapes(shapes) if isinstance(s, kind)]


def test_frame(frame):
    rect = draw_frame(frame)
    assert rect == Rect(10, 10, 1500, frame.doc_height - 20, "none", "#000")


def test_single_fifth_end_to_end(frame, fifth_group):
    shapes = render({3: fifth_group}, edos=(), frame=frame)
    lines = kinds(shapes, Line)
    texts = kinds(shapes, Text)
    assert len(lines) == 1
    assert len(texts) == 1
    assert lines[0].x1 == lines[0].x2 == 10 + 1500 * math.log2(1.5)
    assert texts[0].content == "3/2 perfect fifth"
    assert texts[0].fill == lines[0].stroke == "red"


def test_ji_row_geometry(frame, fifth_group):
    shapes, place = draw_ji_row(fifth_group, 10, frame)
    line, text = shapes
    assert place == 60
    assert line.y1 == 10 + 12
    assert line.y2 == frame.frame_bottom
    assert text.x == line.x1 + 5
    assert text.y == line.y1


def test_ji_row_label_jitter(frame):
    group = IntervalGroup(5, "blue", 60,
                          tuple(Interval(n, 4) for n in (5, 6, 7)))
    shapes, _ = draw_ji_row(group, 100, frame)
    assert [t.y for t in kinds(shapes, Text)] == [112, 136, 112]


def test_ji_row_skip_keeps_slots(frame):
    group = IntervalGroup(5, "blue", 60, (Interval(6, 4), Interval(5, 4)))
    shapes, place = draw_ji_row(group, 0, frame, skip={Fraction(3, 2)})
    texts = kinds(shapes, Text)
    assert [t.content for t in texts] == ["5/4"]
    assert texts[0].y == 36
    assert place == 60


def test_edo_row(frame):
    group, place = draw_edo_row(12, 200, frame)
    assert isinstance(group, Group)
    assert place == 290
    lines = kinds([group], Line)
    texts = kinds([group], Text)
    assert len(lines) == len(texts) == 11
    for line in lines:
        assert (line.y1, line.y2) == (200, 290)
        assert line.stroke == "black"
        assert line.stroke_width == 3
    assert texts[0].content == "1\\12"
    assert texts[-1].content == "11\\12"
    assert texts[0].fill is None
    assert texts[0].y == pytest.approx(200 + 12 + 19.2)


def test_1edo_row_is_empty_but_advances(frame):
    group, place = draw_edo_row(1, 0, frame)
    assert group.children == ()
    assert place == 90


def test_render_default_counts(frame):
    shapes = render(frame=frame)
    assert isinstance(shapes[0], Rect)
    # 4 + 10 + 14 + 10 intervals, then 11 + 15 + 18 + 21 + 30 steps
    assert len(kinds(shapes, Line)) == 38 + 95
    assert len([s for s in shapes if isinstance(s, Group)]) == 5


def test_render_row_order_and_cursor(frame):
    shapes = render(frame=frame)
    groups = [s for s in shapes if isinstance(s, Group)]
    first_edo_tick = groups[0].children[0]
    # JI blocks 50 + 60 + 150 + 90 below the top margin
    assert first_edo_tick.y1 == 10 + 350
    last_edo_tick = groups[-1].children[0]
    assert last_edo_tick.y1 == 10 + 350 + 4 * 90


def test_render_keeps_duplicates_by_default(frame):
    table = MappingProxyType({
        3: IntervalGroup(3, "red", 50, (Interval(3, 2),)),
        5: IntervalGroup(5, "blue", 60, (Interval(3, 2), Interval(5, 4))),
    })
    assert len(kinds(render(table, (), frame), Line)) == 3
    deduped = render(table, (), frame, dedupe=True)
    assert [t.content for t in kinds(deduped, Text)] == ["3/2", "5/4"]


def test_validate_accepts_default():
    validate(default_table(), (12, 1))


def test_validate_bad_interval(frame):
    table = {3: IntervalGroup(3, "red", 50, (Interval(3, 0),))}
    with pytest.raises(InvalidInterval):
        render(table, (), frame)


def test_validate_short_group(frame):
    table = {3: IntervalGroup(3, "red", 12, (Interval(3, 2),))}
    with pytest.raises(InvalidRowHeight):
        render(table, (), frame)


def test_validate_short_edo_row(fifth_group):
    with pytest.raises(InvalidRowHeight):
        render({3: fifth_group}, (12,), Frame(edo_block_height=10))


def test_validate_bad_edo_fails_before_drawing(fifth_group, frame):
    with pytest.raises(InvalidEdoValue):
        render({3: fifth_group}, (12, 0), frame)


def test_shapes_to_json(frame, fifth_group):
    data = shapes_to_json(render({3: fifth_group}, (2,), frame))
    assert [d["type"] for d in data] == ["rect", "line", "text", "group"]
    assert data[2]["content"] == "3/2 perfect fifth"
    text = data[3]["children"][1]
    assert text["type"] == "text"
    assert text["x"] == 765.0
    assert text["y"] == pytest.approx(60 + 12 + 19.2)
    assert text["content"] == "1\\2"
    assert text["fill"] is None


def test_ji_rows_fold_cursor(frame):
    place = frame.top_margin
    for prime, height in zip((3, 5, 7, 11), (50, 60, 150, 90)):
        group = IntervalGroup(prime, "red", height, (Interval(3, 2),))
        _, place = draw_ji_row(group, place, frame)
    assert place == frame.top_margin + 350


def test_validate_nan_block_height(frame, fifth_group):
    table = {3: fifth_group._replace(block_height=float("nan"))}
    with pytest.raises(InvalidRowHeight):
        render(table, (), frame)


def test_validate_nan_edo_height(fifth_group):
    with pytest.raises(InvalidRowHeight):
        render({3: fifth_group}, (12,), Frame(edo_block_height=float("nan")))


@pytest.mark.parametrize("bad", [
    Frame.for_width(150),
    Frame.for_width(float("nan")),
    Frame(doc_height=15),
    Frame(font_size=float("nan")),
    Frame(font_size=0),
    Frame(margin=-1),
    Frame(edo_stroke_width=0),
])
def test_validate_bad_frame(bad, fifth_group):
    with pytest.raises(InvalidFrame):
        render({3: fifth_group}, (12,), bad)


def test_narrow_but_valid_frame(fifth_group):
    shapes = render({3: fifth_group}, (), Frame.for_width(201))
    assert shapes[0].width == 1
