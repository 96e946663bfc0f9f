from concurrent.futures import ThreadPoolExecutor
import itertools

import numpy as np
import pytest

from config import PackConfig
from core.boxes import Box, PlacedBox, PackedBoxes
from core.bounding_box import packing_efficiency
from core.collision import box_intersections
from packing.guillotine import (
    GuillotinePacker,
    UnplaceableBoxError,
    compare_boxes,
    pack,
    sort_boxes,
)
from packing.regions import FreeRegionTracker


# =============================================================================
# ORDERING
# =============================================================================

def test_compare_dominating_box_first():
    assert compare_boxes(Box(10, 10), Box(5, 10)) < 0
    assert compare_boxes(Box(5, 10), Box(10, 10)) > 0
    assert compare_boxes(Box(-10, 10), Box(10, -10)) == 0


def test_compare_falls_back_to_area():
    # Neither dominates: 30x2 (60) vs 7x7 (49)
    assert compare_boxes(Box(30, 2), Box(7, 7)) < 0
    assert compare_boxes(Box(7, 7), Box(30, 2)) > 0
    # Equal areas: the wider box goes first
    assert compare_boxes(Box(4, 1), Box(2, 2)) < 0
    assert compare_boxes(Box(2, 2), Box(4, 1)) > 0


def test_sort_is_stable_for_equal_boxes():
    boxes = [Box(4, 4, 'a'), Box(8, 8, 'b'), Box(4, 4, 'c'), Box(2, 8, 'd')]
    assert [b.data for b in sort_boxes(boxes)] == ['b', 'a', 'c', 'd']


def test_sort_order_is_independent_of_input_order():
    boxes = [Box(5, 0, "wide"), Box(0, 5, "tall"), Box(3, 0, "short")]
    expected = ["wide", "short", "tall"]

    for order in itertools.permutations(boxes):
        assert [b.data for b in sort_boxes(order)] == expected


# =============================================================================
# LITERAL LAYOUTS
# =============================================================================

def test_empty_input():
    packed = pack(PackConfig(), [])
    assert packed == PackedBoxes(0, 0, ())


def test_single_box():
    packed = pack(PackConfig(), [Box(32, 16, 'only')])
    assert packed == PackedBoxes(32, 16, (PlacedBox(0, 0, 32, 16, 'only'),))


def test_small_layout_fills_gap():
    packed = pack(PackConfig(), [Box(10, 10, 'b'), Box(20, 10, 'a'), Box(10, 10, 'c')])

    assert (packed.width, packed.height) == (20, 20)
    assert packed.boxes == (
        PlacedBox(0, 0, 20, 10, 'a'),
        PlacedBox(0, 10, 10, 10, 'b'),
        PlacedBox(10, 10, 10, 10, 'c'),
    )
    assert packing_efficiency(packed) == pytest.approx(1.0)


def test_spacing_between_boxes_not_around_container():
    packed = pack(PackConfig(spacing=2), [Box(10, 10, 0), Box(10, 10, 1)])

    assert packed.boxes == (
        PlacedBox(0, 0, 10, 10, 0),
        PlacedBox(0, 12, 10, 10, 1),
    )
    assert (packed.width, packed.height) == (10, 22)


def test_negative_dimensions_use_absolute_value():
    packed = pack(PackConfig(), [Box(-9, 27, 'neg')])

    assert packed.boxes[0] == PlacedBox(0, 0, 9, 27, 'neg')
    assert (packed.width, packed.height) == (9, 27)


def test_zero_height_box():
    packed = pack(PackConfig(), [Box(128, 0)])

    placed = packed.boxes[0]
    assert (placed.x, placed.y) == (0, 0)
    assert (packed.width, packed.height) == (128, 0)


def test_many_degenerate_boxes_terminate():
    boxes = [Box(0, 0)] * 20 + [Box(5, 0)] * 20 + [Box(0, 7)] * 20
    packed = pack(PackConfig(spacing=1), boxes)
    assert len(packed.boxes) == 60


def test_power_of_two_with_minimum_width():
    config = PackConfig(power_of_two_size=True, minimum_width=128)
    packed = pack(config, [Box(129, 0)])

    assert (packed.width, packed.height) == (256, 0)
    assert (packed.boxes[0].x, packed.boxes[0].y) == (0, 0)
    assert (packed.boxes[0].width, packed.boxes[0].height) == (129, 0)


def test_power_of_two_rounds_each_dimension():
    packed = pack(PackConfig(power_of_two_size=True), [Box(33, 5)])
    assert (packed.width, packed.height) == (64, 8)


def test_minimum_width_floor():
    packed = pack(PackConfig(minimum_width=100), [Box(10, 10)])
    assert (packed.width, packed.height) == (100, 10)


def test_invalid_config_is_clamped():
    boxes = [Box(12, 7, i) for i in range(5)] + [Box(3, 30, 'tall')]
    reference = pack(PackConfig(), boxes)

    assert pack(PackConfig(spacing=-4), boxes) == reference
    assert pack(PackConfig(minimum_width=-50), boxes) == reference


def test_payload_is_not_inspected():
    class Opaque:
        __hash__ = None

        def __eq__(self, other):
            raise AssertionError("payload compared")

    payload = Opaque()
    packed = pack(PackConfig(), [Box(4, 4, payload), Box(4, 4, payload)])
    assert all(p.data is payload for p in packed.boxes)


def test_unplaceable_box_raises(monkeypatch):
    monkeypatch.setattr(FreeRegionTracker, "find_best_region", lambda self, spacing, box: None)

    box = Box(5, 5, 'stuck')
    with pytest.raises(UnplaceableBoxError) as excinfo:
        pack(PackConfig(), [box])
    assert excinfo.value.box is box


def test_verbose_reports(capsys):
    GuillotinePacker(PackConfig(verbose=True)).pack([Box(4, 4), Box(2, 2)])
    out = capsys.readouterr().out
    assert "Packed 2 boxes into" in out
    assert "Efficiency" in out


# =============================================================================
# PROPERTIES
# =============================================================================

@pytest.mark.parametrize("spacing", [0, 1, 3])
@pytest.mark.parametrize("seed", range(5))
def test_no_overlap_containment_and_count(random_boxes, spacing, seed):
    boxes = random_boxes(60, low=1, high=50, seed=seed)
    packed = pack(PackConfig(spacing=spacing), boxes)

    assert len(packed.boxes) == len(boxes)
    assert box_intersections(packed.boxes) == set()
    for b in packed.boxes:
        assert b.x >= 0 and b.y >= 0
        assert b.width >= 0 and b.height >= 0
        assert b.x + b.width <= packed.width
        assert b.y + b.height <= packed.height


def test_payloads_are_preserved(random_boxes):
    boxes = random_boxes(40, seed=7)
    packed = pack(PackConfig(spacing=2), boxes)
    assert sorted(p.data for p in packed.boxes) == list(range(40))


@pytest.mark.parametrize("seed", range(5))
def test_spacing_is_reserved_between_boxes(random_boxes, seed):
    spacing = 4
    packed = pack(PackConfig(spacing=spacing), random_boxes(50, low=1, high=40, seed=seed))

    grown = [(b.x, b.y, b.width + spacing, b.height + spacing) for b in packed.boxes]
    assert box_intersections(grown) == set()


def test_spacing_is_tight():
    spacing = 3
    packed = pack(PackConfig(spacing=spacing), [Box(10, 10), Box(10, 10)])

    exact = [(b.x, b.y, b.width + spacing, b.height + spacing) for b in packed.boxes]
    wider = [(b.x, b.y, b.width + spacing + 1, b.height + spacing + 1) for b in packed.boxes]

    assert box_intersections(exact) == set()
    assert box_intersections(wider) == {(0, 1)}


def test_deterministic(random_boxes):
    boxes = random_boxes(80, seed=3)
    config = PackConfig(spacing=1, power_of_two_size=True)
    assert pack(config, boxes) == pack(config, boxes)


def test_efficiency_on_square_sprites(random_squares):
    efficiencies = [
        packing_efficiency(pack(PackConfig(), random_squares(64, seed=seed)))
        for seed in range(20)
    ]
    assert np.mean(efficiencies) > 0.6


def _rectangle_efficiencies(random_boxes):
    return [
        packing_efficiency(pack(PackConfig(), random_boxes(64, low=1, high=100, seed=seed)))
        for seed in range(20)
    ]


@pytest.mark.xfail(
    strict=True,
    reason="mixed rectangles grow an unbounded column at x=0 and row at y=0, "
           "leaving the interior of the L empty",
)
def test_efficiency_on_random_rectangles(random_boxes):
    assert np.mean(_rectangle_efficiencies(random_boxes)) > 0.6


def test_efficiency_on_random_rectangles_does_not_regress(random_boxes):
    efficiencies = _rectangle_efficiencies(random_boxes)
    assert np.mean(efficiencies) > 0.1
    assert min(efficiencies) > 0.05


def test_concurrent_packing_matches_serial(random_boxes):
    packer = GuillotinePacker(PackConfig(spacing=2))
    inputs = [random_boxes(30, seed=seed) for seed in range(8)]

    serial = [packer.pack(boxes) for boxes in inputs]
    with ThreadPoolExecutor(max_workers=4) as executor:
        parallel = list(executor.map(packer.pack, inputs))

    assert parallel == serial
