"""PNG preview of the diagram drawn with matplotlib.

The figure is sized so one data unit is one SVG pixel, with the y axis
pointing down like SVG.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt

from edolines.config import DEFAULT_FRAME, Frame
from edolines.diagram import Line, Rect, Shape, Text, iter_shapes

DPI = 100
BG_COLOR = "white"
TEXT_COLOR = "black"
FONT = "sans-serif"

SHORT_HEX = re.compile(r"^#([0-9a-fA-F])([0-9a-fA-F])([0-9a-fA-F])$")


def mpl_color(color: str | None) -> str:
    """SVG colour -> matplotlib colour ('#8c8' -> '#88cc88')."""
    if color is None:
        return TEXT_COLOR
    m = SHORT_HEX.match(color)
    if m:
        return "#" + "".join(c * 2 for c in m.groups())
    return color


def px_to_pt(px: float) -> float:
    return px * 72.0 / DPI


def draw_preview(shapes: Iterable[Shape], frame: Frame = DEFAULT_FRAME):
    """Return a matplotlib Figure with every shape drawn on it."""
    fig = plt.figure(figsize=(frame.doc_width / DPI, frame.doc_height / DPI), dpi=DPI)
    fig.patch.set_facecolor(BG_COLOR)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, frame.doc_width)
    ax.set_ylim(frame.doc_height, 0)
    ax.axis('off')

    for shape in iter_shapes(shapes):
        if isinstance(shape, Rect):
            fill = shape.fill != "none"
            ax.add_patch(mpatches.Rectangle(
                (shape.x, shape.y), shape.width, shape.height,
                fill=fill, facecolor=mpl_color(shape.fill) if fill else "none",
                edgecolor=mpl_color(shape.stroke), linewidth=px_to_pt(1)))
        elif isinstance(shape, Line):
            width = shape.stroke_width if shape.stroke_width is not None else 1
            ax.plot([shape.x1, shape.x2], [shape.y1, shape.y2],
                    color=mpl_color(shape.stroke), linewidth=px_to_pt(width),
                    solid_capstyle='butt')
        elif isinstance(shape, Text):
            ax.text(shape.x, shape.y, shape.content, ha='left', va='baseline',
                    fontsize=px_to_pt(frame.font_size), fontfamily=FONT,
                    color=mpl_color(shape.fill))
    return fig


def save_preview(shapes: Iterable[Shape], path: str | Path,
                 frame: Frame = DEFAULT_FRAME) -> None:
    fig = draw_preview(shapes, frame)
    fig.savefig(str(path), dpi=DPI, facecolor=BG_COLOR)
    plt.close(fig)
