"""Row stacking and label placement.

Rows are laid out top to bottom. Each row owns a fixed block height and
the cursor moves down by exactly that much once the row is drawn, however
much of the block the row actually uses.

Labels inside a row are spread vertically with a modular jitter:

  offset(i) = font_size + (step * font_size * i) mod (row_height - font_size)

This does not prevent collisions; rows with many entries will reuse
offsets.
"""

from __future__ import annotations

import math

from edolines.config import EDO_LABEL_STEP, JI_LABEL_STEP
from edolines.errors import InvalidRowHeight


def check_row_height(row_height: float, font_size: float) -> None:
    if not (math.isfinite(row_height) and math.isfinite(font_size)
            and row_height > font_size):
        raise InvalidRowHeight(
            f"row height {row_height} must exceed the font size {font_size}")


def label_offset(i: int, row_height: float, font_size: float,
                 step: float = JI_LABEL_STEP) -> float:
    """Vertical offset of the i-th label below the top of its row."""
    check_row_height(row_height, font_size)
    return font_size + step * font_size * i % (row_height - font_size)


def ji_label_offset(i: int, row_height: float, font_size: float) -> float:
    return label_offset(i, row_height, font_size, JI_LABEL_STEP)


def edo_label_offset(i: int, row_height: float, font_size: float) -> float:
    return label_offset(i, row_height, font_size, EDO_LABEL_STEP)


def advance(place: float, row_height: float) -> float:
    return place + row_height

