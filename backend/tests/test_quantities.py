"""Tests for quantity derivation: areas, volumes and rebar footage."""

from __future__ import annotations

import math

import pytest

from conexpro.models.quote import Footing, RoundPierHole, Slab, SquarePierHole
from conexpro.quantities import (
    cubic_feet_to_yards,
    footing_cubic_feet,
    footing_rebar_feet,
    rebar_stick_count,
    round_pier_cubic_feet,
    single_slab_rebar_feet,
    slab_cubic_feet,
    slab_rebar_feet,
    slab_square_feet,
    square_pier_cubic_feet,
    value_or_zero,
)


class TestValueOrZero:
    def test_none_reads_as_zero(self) -> None:
        assert value_or_zero(None) == 0.0

    def test_number_passes_through(self) -> None:
        assert value_or_zero(4) == 4.0


class TestSlabs:
    def test_square_feet_sums_all_slabs(self) -> None:
        slabs = [Slab(length=20, width=10), Slab(length=5, width=4)]
        assert slab_square_feet(slabs) == 220.0

    def test_square_feet_with_missing_dimension(self) -> None:
        assert slab_square_feet([Slab(length=20)]) == 0.0

    def test_cubic_feet_converts_thickness_from_inches(self) -> None:
        slabs = [Slab(length=20, width=10, thickness=4)]
        assert slab_cubic_feet(slabs) == pytest.approx(200 * 4 / 12)

    def test_two_way_rebar_grid(self) -> None:
        # spacing 1.5 ft: ceil(10/1.5)=7 bars x 20 ft, ceil(20/1.5)=14 bars x 10 ft
        slab = Slab(length=20, width=10, thickness=4, rebar_spacing=18)
        assert single_slab_rebar_feet(slab) == 280.0

    def test_rebar_grid_exact_spacing(self) -> None:
        slab = Slab(length=12, width=12, rebar_spacing=12)
        assert single_slab_rebar_feet(slab) == 12 * 12 + 12 * 12

    @pytest.mark.parametrize(
        "slab",
        [
            Slab(length=20, width=10, rebar_spacing=0),
            Slab(length=20, width=10, rebar_spacing=None),
            Slab(length=0, width=10, rebar_spacing=18),
            Slab(length=20, width=None, rebar_spacing=18),
        ],
    )
    def test_rebar_zero_when_spacing_or_dimension_missing(self, slab: Slab) -> None:
        result = single_slab_rebar_feet(slab)
        assert result == 0.0
        assert math.isfinite(result)

    def test_rebar_sums_over_slabs(self) -> None:
        slabs = [
            Slab(length=20, width=10, rebar_spacing=18),
            Slab(length=12, width=12, rebar_spacing=12),
        ]
        assert slab_rebar_feet(slabs) == 280.0 + 288.0


class TestFootings:
    def test_cubic_feet(self) -> None:
        footings = [Footing(length=10, width=12, depth=12)]
        assert footing_cubic_feet(footings) == pytest.approx(10.0)

    def test_cubic_feet_partial_row_is_zero(self) -> None:
        assert footing_cubic_feet([Footing(length=10, width=12)]) == 0.0

    def test_rebar_rows_run_full_length(self) -> None:
        footings = [Footing(length=10, rebar_rows=2), Footing(length=5, rebar_rows=3)]
        assert footing_rebar_feet(footings) == 35.0


class TestPierHoles:
    def test_round_pier_volume(self) -> None:
        # 2 holes, 1 ft diameter, 2 ft deep: 2 * pi * 0.5^2 * 2 = pi
        holes = [RoundPierHole(count=2, diameter=12, depth=24)]
        assert round_pier_cubic_feet(holes) == pytest.approx(math.pi)

    def test_round_pier_without_count_is_zero(self) -> None:
        assert round_pier_cubic_feet([RoundPierHole(diameter=12, depth=24)]) == 0.0

    def test_square_pier_volume(self) -> None:
        holes = [SquarePierHole(count=3, length=12, width=12, depth=12)]
        assert square_pier_cubic_feet(holes) == pytest.approx(3.0)

    def test_square_pier_sums_rows(self) -> None:
        holes = [
            SquarePierHole(count=1, length=24, width=12, depth=12),
            SquarePierHole(count=2, length=12, width=12, depth=6),
        ]
        assert square_pier_cubic_feet(holes) == pytest.approx(2.0 + 1.0)


class TestConversions:
    def test_cubic_yards_is_exact_division(self) -> None:
        assert cubic_feet_to_yards(54.0) == 2.0
        assert cubic_feet_to_yards(200 * (4 / 12)) == (200 * (4 / 12)) / 27

    def test_stick_count_with_waste(self) -> None:
        # 37 LF * 1.10 = 40.7 LF -> 3 sticks of 20 ft
        assert rebar_stick_count(37) == 3

    def test_stick_count_scenario(self) -> None:
        assert rebar_stick_count(280) == 16

    def test_stick_count_zero(self) -> None:
        assert rebar_stick_count(0) == 0

    def test_stick_count_small_amount_needs_one_stick(self) -> None:
        assert rebar_stick_count(1) == 1
