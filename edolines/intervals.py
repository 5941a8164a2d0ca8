"""Interval data for the JI / EDO comparison diagram.

An interval is a frequency ratio numerator/denominator with an optional
name. Intervals are grouped by prime limit; each group carries the colour
and the block height of its row in the diagram.

Ratios may also be written as exponent vectors over the odd primes
(3, 5, 7, 11, ...). The power of two is implied by octave reduction:

  5/4   = 2^-2 * 3^0 * 5^1          -> [0, 1]
  21/16 = 2^-4 * 3^1 * 5^0 * 7^1    -> [1, 0, 1]
  21/20 = 2^-2 * 3^1 * 5^-1 * 7^1   -> [1, -1, 1]
"""

from __future__ import annotations

import json
import math
from collections import Counter
from fractions import Fraction
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence

from edolines.errors import InvalidInterval

ODD_PRIMES = (3, 5, 7, 11, 13, 17, 19, 23)


# ── Data model ────────────────────────────────────────────────────────

class Interval(NamedTuple):
    """A frequency ratio, not necessarily in lowest terms."""

    numerator: int
    denominator: int
    name: str | None = None

    @property
    def ratio(self) -> Fraction:
        check_ratio(self.numerator, self.denominator)
        return Fraction(self.numerator, self.denominator)

    @property
    def octaves(self) -> float:
        """Position on the pitch axis: 0.0 = unison, 1.0 = octave."""
        check_ratio(self.numerator, self.denominator)
        return math.log2(self.numerator / self.denominator)

    @property
    def cents(self) -> float:
        return 1200.0 * self.octaves

    @property
    def label(self) -> str:
        text = f"{self.numerator}/{self.denominator}"
        if self.name is not None:
            text += " " + self.name
        return text

    @classmethod
    def from_factors(cls, factors: Sequence[int],
                     name: str | None = None) -> Interval:
        """Build an octave-reduced interval from odd-prime exponents."""
        if len(factors) > len(ODD_PRIMES):
            raise InvalidInterval(
                f"at most {len(ODD_PRIMES)} exponents supported, got {len(factors)}")
        value = Fraction(1)
        for prime, exponent in zip(ODD_PRIMES, factors):
            value *= Fraction(prime) ** exponent
        reduced = octave_reduce(value.numerator, value.denominator)
        return cls(reduced.numerator, reduced.denominator, name)


class IntervalGroup(NamedTuple):
    """One JI row: all intervals of a prime limit."""

    prime: int
    color: str
    block_height: float
    intervals: tuple[Interval, ...]


# ── Ratio arithmetic ──────────────────────────────────────────────────

def check_ratio(numerator: int, denominator: int) -> None:
    if numerator <= 0 or denominator <= 0:
        raise InvalidInterval(
            f"ratio {numerator}/{denominator} must have a positive "
            f"numerator and denominator")


def octave_reduce(numerator: int, denominator: int) -> Fraction:
    """Normalize a ratio by powers of 2 into [1, 2)."""
    check_ratio(numerator, denominator)
    value = Fraction(numerator, denominator)
    while value < 1:
        value *= 2
    while value >= 2:
        value /= 2
    return value


def _factorize(n: int) -> dict[int, int]:
    factors: dict[int, int] = {}
    p = 2
    while p * p <= n:
        while n % p == 0:
            factors[p] = factors.get(p, 0) + 1
            n //= p
        p += 1
    if n > 1:
        factors[n] = factors.get(n, 0) + 1
    return factors


def prime_limit(numerator: int, denominator: int) -> int:
    """Largest prime factor of the ratio; 2 for octaves and unison."""
    check_ratio(numerator, denominator)
    primes = set(_factorize(numerator)) | set(_factorize(denominator))
    return max(primes - {2}, default=2)


def factors_of(numerator: int, denominator: int) -> list[int]:
    """Odd-prime exponent vector of a ratio (trailing zeros dropped)."""
    check_ratio(numerator, denominator)
    num = _factorize(numerator)
    den = _factorize(denominator)
    limit = prime_limit(numerator, denominator)
    if limit > ODD_PRIMES[-1]:
        raise InvalidInterval(
            f"ratio {numerator}/{denominator} exceeds the {ODD_PRIMES[-1]}-limit")
    exponents = [num.get(p, 0) - den.get(p, 0) for p in ODD_PRIMES if p <= limit]
    while exponents and exponents[-1] == 0:
        exponents.pop()
    return exponents


def complexity_key(interval: Interval) -> tuple[int, int, int]:
    """Ranking key: total odd-prime exponent, then reduced num, then den.

    Used to order intervals by harmonic complexity, not for display.
    """
    reduced = octave_reduce(interval.numerator, interval.denominator)
    weight = sum(abs(e) for e in factors_of(reduced.numerator, reduced.denominator))
    return weight, reduced.numerator, reduced.denominator


# ── Tables ────────────────────────────────────────────────────────────

JI_PRIMES = (3, 5, 7, 11)
JI_BLOCK_HEIGHTS = {3: 50, 5: 60, 7: 150, 11: 90}
JI_COLORS = {3: "red", 5: "blue", 7: "#8c8", 11: "#fc8"}

JI_INTERVALS = {
    3: [
        (9, 8, "whole tone"),
        (4, 3, "perfect fourth"),
        (3, 2, "perfect fifth"),
        (16, 9, "minor seventh"),
    ],
    5: [
        (16, 15, "diatonic semitone"),
        (10, 9, "pental whole tone"),
        (6, 5, "minor third"),
        (5, 4, "major third"),
        (45, 32, "small pental tritone"),
        (64, 45, "large pental tritone"),
        (8, 5, "minor sixth"),
        (5, 3, "major sixth"),
        (9, 5, "pental minor seventh"),
        (15, 8, "major seventh"),
    ],
    # sorted by log2 of the ratio
    7: [
        (21, 20, "septimal minor semitone"),
        (15, 14, "septimal diatonic semitone"),
        (8, 7, "supermajor second"),
        (7, 6, "subminor third"),
        (9, 7, "supermajor third"),
        (21, 16, "septimal subfourth"),
        (7, 5, "small septimal tritone"),
        (10, 7, "large septimal tritone"),
        (32, 21, "septimal superfifth"),
        (14, 9, "subminor sixth"),
        (12, 7, "supermajor sixth"),
        (7, 4, "harmonic seventh"),
        (28, 15, "septimal grave major seventh"),
        (40, 21, "septimal acute major seventh"),
    ],
    11: [
        (12, 11, "small undecimal neutral second"),
        (11, 10, "large undecimal neutral second"),
        (11, 9, "neutral third"),
        (14, 11, "undecimal major third"),
        (11, 8, "undecimal superfourth"),
        (16, 11, "undecimal subfifth"),
        (11, 7, "undecimal minor sixth"),
        (18, 11, "neutral sixth"),
        (20, 11, "small undecimal neutral seventh"),
        (11, 6, "large undecimal neutral seventh"),
    ],
}

# 3- and 5-limit intervals as exponent vectors over (3, 5)
JI_FACTOR_MAP = (
    ([1], "perfect fifth"),
    ([-1], "perfect fourth"),
    ([2], "pythagorean whole tone"),
    ([-2], "pythagorean minor seventh"),
    ([0, 1], "major third"),
    ([1, 1], "major seventh"),
    ([-1, 1], "major sixth"),
    ([0, -1], "minor sixth"),
    ([1, -1], "minor third"),
    ([-1, -1], "diatonic semitone"),
    ([2, 1], "small pental tritone"),
    ([2, -1], "pental minor seventh"),
    ([-2, 1], "pental whole tone"),
)

EDO_VALUES = (12, 16, 19, 22, 31)


def _check_whole(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    return value


def _check_number(value, what: str) -> float:
    if (isinstance(value, bool) or not isinstance(value, (int, float))
            or not math.isfinite(value)):
        raise ValueError(f"{what} must be a finite number, got {value!r}")
    return value


def _check_name(value, what: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{what} must be a string, got {value!r}")
    return value


def build_table(primes: Sequence[int],
                intervals: Mapping[int, Sequence[Sequence]],
                colors: Mapping[int, str],
                block_heights: Mapping[int, float]) -> Mapping[int, IntervalGroup]:
    """Freeze raw table data into an ordered, read-only prime -> group map.

    Ratio terms must already be integers and heights numbers; nothing is
    coerced, so 3.9 or "50" raise ValueError instead of being truncated.
    """
    groups = {}
    for prime in primes:
        _check_whole(prime, "prime limit")
        if prime in groups:
            raise ValueError(f"prime limit {prime} listed twice")
        rows = []
        for row in intervals[prime]:
            if isinstance(row, str) or len(row) not in (2, 3):
                raise ValueError(
                    f"{prime}-limit interval must be [n, d] or [n, d, name], "
                    f"got {row!r}")
            rows.append(Interval(_check_whole(row[0], "numerator"),
                                 _check_whole(row[1], "denominator"),
                                 _check_name(row[2] if len(row) > 2 else None,
                                             "interval name")))
        groups[prime] = IntervalGroup(
            prime,
            _check_name(colors[prime], f"{prime}-limit colour"),
            _check_number(block_heights[prime], f"{prime}-limit block height"),
            tuple(rows))
    return MappingProxyType(groups)


def default_table() -> Mapping[int, IntervalGroup]:
    return build_table(JI_PRIMES, JI_INTERVALS, JI_COLORS, JI_BLOCK_HEIGHTS)


def load_table(path: str | Path) -> Mapping[int, IntervalGroup]:
    """Read an interval table from JSON.

    Expected shape (keys of the per-prime maps may be strings)::

      {"primes": [3, 5],
       "blockHeights": {"3": 50, "5": 60},
       "colors": {"3": "red", "5": "blue"},
       "3": [[3, 2, "perfect fifth"], ...],
       "5": [[5, 4], ...]}
    """
    with Path(path).open(encoding="utf-8") as f:
        data = json.load(f)
    try:
        primes = [_check_whole(p, "prime limit") for p in data["primes"]]
        heights = {int(k): v for k, v in data["blockHeights"].items()}
        colors = {int(k): v for k, v in data["colors"].items()}
        intervals = {p: data[str(p)] for p in primes}
        return build_table(primes, intervals, colors, heights)
    except (KeyError, TypeError, IndexError, ValueError) as e:
        raise ValueError(f"malformed interval table {path}: {e!r}") from e


def select_primes(table: Mapping[int, IntervalGroup],
                  primes: Sequence[int]) -> Mapping[int, IntervalGroup]:
    """Subset of a table, in the order given."""
    repeated = sorted(p for p, n in Counter(primes).items() if n > 1)
    if repeated:
        raise ValueError(f"prime limit(s) {repeated} selected more than once")
    missing = [p for p in primes if p not in table]
    if missing:
        raise KeyError(f"no interval group for prime limit(s) {missing}")
    return MappingProxyType({p: table[p] for p in primes})
