"""Canvas geometry and style constants."""

from __future__ import annotations

import math
from typing import NamedTuple

from edolines.errors import InvalidFrame

# ── Constants ──────────────────────────────────────────────────────────

DOC_WIDTH = 1700
DOC_MARGIN = 10
FONT_SIZE = 12
EDO_BLOCK_HEIGHT = 90
LINE_TEXT_DISTANCE = 5
EDO_STROKE_WIDTH = 3
EDO_COLOR = "black"
FRAME_COLOR = "#000"

# Label jitter step, in multiples of the font size
JI_LABEL_STEP = 2
EDO_LABEL_STEP = 1.6


class Frame(NamedTuple):
    """Document and frame dimensions for one render pass."""

    doc_width: float = DOC_WIDTH
    doc_height: float = DOC_WIDTH * 8 / 13
    margin: float = DOC_MARGIN
    font_size: float = FONT_SIZE
    edo_block_height: float = EDO_BLOCK_HEIGHT
    label_offset: float = LINE_TEXT_DISTANCE
    edo_stroke_width: float = EDO_STROKE_WIDTH

    @classmethod
    def for_width(cls, doc_width: float, **kwargs) -> Frame:
        """Frame with the 13:8 page proportions at the given width."""
        return cls(doc_width=doc_width, doc_height=doc_width * 8 / 13, **kwargs)

    @property
    def margin_left(self) -> float:
        return self.margin

    @property
    def top_margin(self) -> float:
        return self.margin

    @property
    def frame_width(self) -> float:
        return self.doc_width - 20 * self.margin

    @property
    def frame_height(self) -> float:
        return self.doc_height - 2 * self.margin

    @property
    def frame_bottom(self) -> float:
        return self.doc_height - self.margin


DEFAULT_FRAME = Frame()


def check_frame(frame: Frame) -> None:
    """Every dimension finite and the frame rectangle non-empty."""
    for name, value in frame._asdict().items():
        if not math.isfinite(value):
            raise InvalidFrame(f"frame {name} must be a finite number, got {value}")
    if frame.frame_width <= 0 or frame.frame_height <= 0:
        raise InvalidFrame(
            f"document {frame.doc_width:g}x{frame.doc_height:g} with margin "
            f"{frame.margin:g} leaves a {frame.frame_width:g}x"
            f"{frame.frame_height:g} frame")
    if frame.margin < 0:
        raise InvalidFrame(f"margin must not be negative, got {frame.margin:g}")
    if frame.font_size <= 0:
        raise InvalidFrame(f"font size must be positive, got {frame.font_size:g}")
    if frame.edo_stroke_width <= 0:
        raise InvalidFrame(
            f"EDO stroke width must be positive, got {frame.edo_stroke_width:g}")
