"""Pitch ratio -> horizontal pixel position.

The frame spans exactly one octave: unison sits on the left edge of the
frame, the octave (2/1) on the right edge, and everything in between is
placed by log2 of the ratio.
"""

from __future__ import annotations

import math

import numpy as np

from edolines.config import DEFAULT_FRAME, Frame
from edolines.errors import InvalidEdoValue
from edolines.intervals import check_ratio


def x_position(numerator: int, denominator: int,
               frame: Frame = DEFAULT_FRAME) -> float:
    """x = margin + frame_width * log2(n/d). Not clipped to the frame."""
    check_ratio(numerator, denominator)
    return frame.margin_left + frame.frame_width * math.log2(numerator / denominator)


def check_edo(edo: int) -> None:
    if edo <= 0:
        raise InvalidEdoValue(f"EDO must divide the octave at least once, got {edo}")


def edo_step_positions(edo: int,
                       frame: Frame = DEFAULT_FRAME) -> list[tuple[int, float]]:
    """(step, x) for the interior steps 1..edo-1.

    Steps 0 and edo fall on the frame edges and are not returned, so
    1-EDO yields nothing.
    """
    check_edo(edo)
    steps = np.arange(1, edo)
    xs = frame.margin_left + frame.frame_width * steps / edo
    return list(zip(steps.tolist(), xs.tolist()))


def edo_cents(edo: int) -> np.ndarray:
    """Cents of every step 0..edo of an EDO."""
    check_edo(edo)
    return np.arange(edo + 1) * 1200.0 / edo


def nearest_edo_step(numerator: int, denominator: int, edo: int) -> tuple[int, float]:
    """Closest EDO step to a ratio and its error in cents (step minus ratio)."""
    check_ratio(numerator, denominator)
    check_edo(edo)
    target = 1200.0 * np.log2(numerator / denominator)
    steps = edo_cents(edo)
    best = int(np.argmin(np.abs(steps - target)))
    return best, float(steps[best] - target)
