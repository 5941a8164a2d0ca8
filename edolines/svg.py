"""SVG and HTML output via svgwrite."""

from __future__ import annotations

import html as html_mod
from typing import Iterable

import svgwrite

from edolines.config import DEFAULT_FRAME, Frame
from edolines.diagram import Group, Line, Rect, Shape, Text

CONTAINER_ID = "svgContainer"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<div id="{container}">
{svg}
</div>
</body>
</html>
"""


def _add(dwg: svgwrite.Drawing, parent, shape: Shape) -> None:
    if isinstance(shape, Group):
        g = dwg.g()
        for child in shape.children:
            _add(dwg, g, child)
        parent.add(g)
    elif isinstance(shape, Rect):
        parent.add(dwg.rect(insert=(shape.x, shape.y),
                            size=(shape.width, shape.height),
                            fill=shape.fill, stroke=shape.stroke))
    elif isinstance(shape, Line):
        extra = {}
        if shape.stroke_width is not None:
            extra["stroke_width"] = shape.stroke_width
        parent.add(dwg.line(start=(shape.x1, shape.y1), end=(shape.x2, shape.y2),
                            stroke=shape.stroke, **extra))
    elif isinstance(shape, Text):
        extra = {}
        if shape.fill is not None:
            extra["fill"] = shape.fill
        parent.add(dwg.text(shape.content, insert=(shape.x, shape.y), **extra))
    else:
        raise TypeError(f"cannot draw {shape!r}")


def build_drawing(shapes: Iterable[Shape], frame: Frame = DEFAULT_FRAME,
                  filename: str = "edolines.svg") -> svgwrite.Drawing:
    dwg = svgwrite.Drawing(filename, size=(frame.doc_width, frame.doc_height),
                           debug=False)
    for shape in shapes:
        _add(dwg, dwg, shape)
    return dwg


def to_svg(shapes: Iterable[Shape], frame: Frame = DEFAULT_FRAME) -> str:
    return build_drawing(shapes, frame).tostring()


def to_html(shapes: Iterable[Shape], frame: Frame = DEFAULT_FRAME,
            title: str = "Just intonation vs. EDO") -> str:
    """Standalone page with the diagram inside the #svgContainer div."""
    return PAGE_TEMPLATE.format(title=html_mod.escape(title),
                                container=CONTAINER_ID,
                                svg=to_svg(shapes, frame))
