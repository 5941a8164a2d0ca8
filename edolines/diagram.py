"""Row drawers and the render pass.

The render pass is a fold over rows: every drawer takes the current
vertical cursor and returns its shapes together with the next cursor.
Shapes are plain records; the SVG, JSON and PNG backends only read them.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable, Mapping, NamedTuple, Sequence, Union

from edolines.config import (DEFAULT_FRAME, EDO_COLOR, FRAME_COLOR, Frame,
                             check_frame)
from edolines.intervals import EDO_VALUES, IntervalGroup, check_ratio, default_table
from edolines.layout import (advance, check_row_height, edo_label_offset,
                             ji_label_offset)
from edolines.mapping import check_edo, edo_step_positions, x_position


# ── Primitives ────────────────────────────────────────────────────────

class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float
    fill: str = "none"
    stroke: str = FRAME_COLOR


class Line(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: float | None = None


class Text(NamedTuple):
    x: float
    y: float
    content: str
    fill: str | None = None


class Group(NamedTuple):
    children: tuple


Shape = Union[Rect, Line, Text, Group]


def iter_shapes(shapes: Iterable[Shape]) -> Iterable[Shape]:
    """Flatten groups, depth first."""
    for shape in shapes:
        if isinstance(shape, Group):
            yield from iter_shapes(shape.children)
        else:
            yield shape


# ── Drawers ───────────────────────────────────────────────────────────

def draw_frame(frame: Frame = DEFAULT_FRAME) -> Rect:
    return Rect(frame.margin, frame.margin, frame.frame_width, frame.frame_height)


def draw_ji_row(group: IntervalGroup, place: float,
                frame: Frame = DEFAULT_FRAME,
                skip: Iterable[Fraction] = ()) -> tuple[list[Shape], float]:
    """Lines and labels of one prime-limit group.

    Each line runs from its label down to the bottom of the frame. Ratios
    in `skip` are left out but still use up their label slot.
    """
    skip = set(skip)
    shapes: list[Shape] = []
    for i, interval in enumerate(group.intervals):
        if interval.ratio in skip:
            continue
        x = x_position(interval.numerator, interval.denominator, frame)
        y = place + ji_label_offset(i, group.block_height, frame.font_size)
        shapes.append(Line(x, y, x, frame.frame_bottom, group.color))
        shapes.append(Text(x + frame.label_offset, y, interval.label, group.color))
    return shapes, advance(place, group.block_height)


def draw_edo_row(edo: int, place: float,
                 frame: Frame = DEFAULT_FRAME) -> tuple[Group, float]:
    """Full-height ticks for steps 1..edo-1, labelled `step\\edo`."""
    height = frame.edo_block_height
    children: list[Shape] = []
    for step, x in edo_step_positions(edo, frame):
        children.append(Line(x, place, x, place + height,
                             EDO_COLOR, frame.edo_stroke_width))
        y = place + edo_label_offset(step, height, frame.font_size)
        children.append(Text(x + frame.label_offset, y, f"{step}\\{edo}"))
    return Group(tuple(children)), advance(place, height)


# ── Render pass ───────────────────────────────────────────────────────

def validate(table: Mapping[int, IntervalGroup], edos: Sequence[int],
             frame: Frame = DEFAULT_FRAME) -> None:
    """Raise a DiagramError for the first bad setting, before drawing."""
    check_frame(frame)
    for group in table.values():
        check_row_height(group.block_height, frame.font_size)
        for interval in group.intervals:
            check_ratio(interval.numerator, interval.denominator)
    if edos:
        check_row_height(frame.edo_block_height, frame.font_size)
    for edo in edos:
        check_edo(edo)


def render(table: Mapping[int, IntervalGroup] | None = None,
           edos: Sequence[int] = EDO_VALUES,
           frame: Frame = DEFAULT_FRAME,
           dedupe: bool = False) -> list[Shape]:
    """Frame, then JI groups in table order, then one row per EDO."""
    if table is None:
        table = default_table()
    validate(table, edos, frame)

    shapes: list[Shape] = [draw_frame(frame)]
    place = frame.top_margin
    drawn: set[Fraction] = set()
    for group in table.values():
        row, place = draw_ji_row(group, place, frame, drawn if dedupe else ())
        shapes.extend(row)
        drawn.update(interval.ratio for interval in group.intervals)
    for edo in edos:
        row, place = draw_edo_row(edo, place, frame)
        shapes.append(row)
    return shapes


def shapes_to_json(shapes: Iterable[Shape]) -> list[dict]:
    """Shapes as JSON-ready dicts tagged with their kind."""
    out = []
    for shape in shapes:
        if isinstance(shape, Group):
            out.append({"type": "group", "children": shapes_to_json(shape.children)})
        else:
            out.append({"type": type(shape).__name__.lower(), **shape._asdict()})
    return out
