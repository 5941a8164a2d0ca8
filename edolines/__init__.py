"""JI vs EDO comparison diagrams."""

from edolines.config import DEFAULT_FRAME, Frame
from edolines.diagram import draw_edo_row, draw_frame, draw_ji_row, render, validate
from edolines.errors import DiagramError, InvalidEdoValue, InvalidInterval, InvalidRowHeight
from edolines.intervals import EDO_VALUES, Interval, IntervalGroup, default_table
from edolines.mapping import edo_step_positions, x_position

__all__ = [
    "DEFAULT_FRAME",
    "EDO_VALUES",
    "DiagramError",
    "Frame",
    "Interval",
    "IntervalGroup",
    "InvalidEdoValue",
    "InvalidInterval",
    "InvalidRowHeight",
    "default_table",
    "draw_edo_row",
    "draw_frame",
    "draw_ji_row",
    "edo_step_positions",
    "render",
    "validate",
    "x_position",
]
