"""Quantity derivation — converts form geometry into physical quantities.

Units follow the form: slab and footing lengths are entered in feet,
everything else (thickness, widths, depths, diameters, rebar spacing) in
inches. All results are in feet, square feet or cubic feet except where a
function says otherwise.

Absent (``None``) fields count as zero here. Sums go through
:func:`math.fsum` so row order never changes a total.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from conexpro.models.quote import Footing, RoundPierHole, Slab, SquarePierHole

INCHES_PER_FOOT = 12.0
CUBIC_FEET_PER_CUBIC_YARD = 27.0
REBAR_WASTE_FACTOR = 1.10
REBAR_STICK_LENGTH_FT = 20.0


def value_or_zero(value: float | None) -> float:
    """Read an optional form value as a number."""
    return 0.0 if value is None else float(value)


def _inches_to_feet(value: float | None) -> float:
    return value_or_zero(value) / INCHES_PER_FOOT


# ---------------------------------------------------------------------------
# Slabs
# ---------------------------------------------------------------------------


def slab_square_feet(slabs: Iterable[Slab]) -> float:
    """Total slab footprint in square feet."""
    return math.fsum(
        value_or_zero(s.length) * value_or_zero(s.width) for s in slabs
    )


def slab_cubic_feet(slabs: Iterable[Slab]) -> float:
    return math.fsum(
        value_or_zero(s.length) * value_or_zero(s.width) * _inches_to_feet(s.thickness)
        for s in slabs
    )


def single_slab_rebar_feet(slab: Slab) -> float:
    """Linear feet of rebar in one slab's two-way grid.

    Bars run both directions at the slab's spacing. The number of bars in
    one direction is ``ceil(span / spacing)`` and each bar spans the full
    perpendicular dimension. Zero or absent spacing, length or width gives 0.
    """
    length = value_or_zero(slab.length)
    width = value_or_zero(slab.width)
    spacing_ft = _inches_to_feet(slab.rebar_spacing)
    if spacing_ft <= 0 or length <= 0 or width <= 0:
        return 0.0

    lengthwise = length * math.ceil(width / spacing_ft)
    widthwise = width * math.ceil(length / spacing_ft)
    return lengthwise + widthwise


def slab_rebar_feet(slabs: Iterable[Slab]) -> float:
    return math.fsum(single_slab_rebar_feet(s) for s in slabs)


# ---------------------------------------------------------------------------
# Footings
# ---------------------------------------------------------------------------


def footing_cubic_feet(footings: Iterable[Footing]) -> float:
    return math.fsum(
        value_or_zero(f.length) * _inches_to_feet(f.width) * _inches_to_feet(f.depth)
        for f in footings
    )


def footing_rebar_feet(footings: Iterable[Footing]) -> float:
    """Rebar rows run the full length of each footing."""
    return math.fsum(
        value_or_zero(f.length) * value_or_zero(f.rebar_rows) for f in footings
    )


# ---------------------------------------------------------------------------
# Pier holes
# ---------------------------------------------------------------------------


def round_pier_cubic_feet(holes: Iterable[RoundPierHole]) -> float:
    return math.fsum(
        value_or_zero(h.count)
        * math.pi
        * (_inches_to_feet(h.diameter) / 2) ** 2
        * _inches_to_feet(h.depth)
        for h in holes
    )


def square_pier_cubic_feet(holes: Iterable[SquarePierHole]) -> float:
    return math.fsum(
        value_or_zero(h.count)
        * _inches_to_feet(h.length)
        * _inches_to_feet(h.width)
        * _inches_to_feet(h.depth)
        for h in holes
    )


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def cubic_feet_to_yards(cubic_feet: float) -> float:
    return cubic_feet / CUBIC_FEET_PER_CUBIC_YARD


def rebar_stick_count(linear_feet: float) -> int:
    """Whole 20 ft sticks needed for ``linear_feet`` plus 10% waste."""
    if linear_feet <= 0:
        return 0
    return math.ceil(linear_feet * REBAR_WASTE_FACTOR / REBAR_STICK_LENGTH_FT)
