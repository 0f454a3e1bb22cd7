import pathlib
import random
import sys
from collections import Counter

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from aztec_diamond import AztecDiamond, CapacityExceededError, Color, Orientation
from tile_grid import InvalidCoordinatesError, TilingInvariantError
from tiling_check import find_tiling_errors, verify_tiling


class ScriptedRandom:
    """Stand-in random source returning preset values."""

    def __init__(self, values):
        self.values = list(values)

    def random(self):
        return self.values.pop(0)


def empty_diamond(order: int, max_extent: int = 12) -> AztecDiamond:
    diamond = AztecDiamond(max_extent=max_extent, seed=0)
    diamond.grow_to(order)
    for grid in diamond.colors.values():
        grid.reset()
    return diamond


def test_starts_at_order_one_with_a_unit_diamond():
    diamond = AztecDiamond(max_extent=8, seed=3)
    assert diamond.order == 1
    anchors = diamond.signature()
    assert anchors in (
        frozenset({(Color.ORANGE, 0, 0), (Color.RED, 1, 0)}),
        frozenset({(Color.GREEN, 0, 0), (Color.BLUE, 0, 1)}),
    )
    assert find_tiling_errors(diamond) == []


def test_place_random_unit_diamond_orientations():
    diamond = AztecDiamond(max_extent=8, rng=ScriptedRandom([0.2, 0.7, 0.9]))
    assert diamond.tile_present(Color.ORANGE, 0, 0)
    assert diamond.tile_present("red", 1, 0)

    diamond = AztecDiamond(max_extent=8, rng=ScriptedRandom([0.7, 0.1]))
    assert diamond.tile_present(Color.GREEN, 0, 0)
    assert diamond.tile_present("blue", 0, 1)
    assert diamond.place_random_unit_diamond(4, 4) == Orientation.HORIZONTAL
    assert diamond.grid(Color.ORANGE).present(4, 4)
    assert diamond.grid(Color.RED).present(5, 4)


def test_tile_present_is_limited_to_bounding_box():
    diamond = AztecDiamond(max_extent=8, seed=1)
    for color in Color:
        assert not diamond.tile_present(color, 2, 0)
        assert not diamond.tile_present(color, -1, 0)


def test_footprints():
    assert AztecDiamond.footprint(Color.ORANGE, 2, 3) == ((2, 3), (2, 4))
    assert AztecDiamond.footprint(Color.RED, 2, 3) == ((2, 3), (2, 4))
    assert AztecDiamond.footprint(Color.GREEN, 2, 3) == ((2, 3), (3, 3))
    assert AztecDiamond.footprint(Color.BLUE, 2, 3) == ((2, 3), (3, 3))


@pytest.mark.parametrize("seed", range(8))
def test_tiling_invariant_holds_for_every_order(seed):
    diamond = AztecDiamond(max_extent=28, seed=seed)
    while True:
        valid, count = verify_tiling(diamond)
        assert valid, find_tiling_errors(diamond)
        assert count == diamond.order * (diamond.order + 1)
        if not diamond.increment():
            break
    assert diamond.order == diamond.max_order == 14


def test_increment_is_reproducible_with_same_seed():
    first = AztecDiamond(max_extent=20, seed=42)
    second = AztecDiamond(max_extent=20, rng=random.Random(42))
    first.grow_to(7)
    second.grow_to(7)
    assert first.signature() == second.signature()


def test_capacity_guard_is_idempotent():
    diamond = AztecDiamond(max_extent=10, seed=9)
    assert diamond.grow_to(50) == 5
    assert diamond.at_capacity
    snapshot = diamond.signature()
    grids = {color: grid.copy() for color, grid in diamond.colors.items()}

    for _ in range(5):
        assert diamond.increment() is False

    assert diamond.order == 5
    assert diamond.signature() == snapshot
    for color, grid in diamond.colors.items():
        assert grid == grids[color]


def test_expand_past_capacity_raises():
    diamond = AztecDiamond(max_extent=4, seed=2)
    diamond.grow_to(2)
    with pytest.raises(CapacityExceededError):
        diamond.expand()


def test_odd_capacity_rounds_max_order_down():
    diamond = AztecDiamond(max_extent=7, seed=2)
    assert diamond.max_order == 3
    assert diamond.grow_to(10) == 3
    assert verify_tiling(diamond)[0]


def test_capacity_below_unit_diamond_is_rejected():
    with pytest.raises(ValueError):
        AztecDiamond(max_extent=1)


def test_expand_shifts_tiling_and_grows_order():
    diamond = AztecDiamond(max_extent=8, rng=ScriptedRandom([0.9]))
    diamond.expand()
    assert diamond.order == 2
    assert diamond.signature() == frozenset({(Color.GREEN, 1, 1), (Color.BLUE, 1, 2)})


def test_delete_clashing_tiles_removes_facing_pairs():
    diamond = empty_diamond(3)
    colors = diamond.colors
    # red left of orange, blue below green: both clash
    colors[Color.RED].set(0, 2)
    colors[Color.ORANGE].set(1, 2)
    colors[Color.BLUE].set(3, 0)
    colors[Color.GREEN].set(3, 1)
    # orange left of red, green below blue: both safe
    colors[Color.ORANGE].set(3, 4)
    colors[Color.RED].set(4, 4)
    colors[Color.GREEN].set(1, 4)
    colors[Color.BLUE].set(1, 5)

    assert diamond.delete_clashing_tiles() == 2
    assert diamond.signature() == frozenset({
        (Color.ORANGE, 3, 4), (Color.RED, 4, 4),
        (Color.GREEN, 1, 4), (Color.BLUE, 1, 5),
    })


def test_move_all_colors_moves_each_color_its_own_way():
    diamond = empty_diamond(3)
    for color in Color:
        diamond.colors[color].set(2, 2)
    diamond.move_all_colors()
    assert diamond.signature() == frozenset({
        (Color.RED, 3, 2), (Color.ORANGE, 1, 2),
        (Color.BLUE, 2, 3), (Color.GREEN, 2, 1),
    })


def test_build_occupancy_marks_both_halves():
    diamond = empty_diamond(2)
    diamond.colors[Color.ORANGE].set(0, 1)
    diamond.colors[Color.BLUE].set(1, 3)
    occupied = diamond.build_occupancy()
    assert sorted(occupied.cells()) == [(0, 1), (0, 2), (1, 3), (2, 3)]


def test_build_occupancy_rejects_overlap():
    diamond = empty_diamond(2)
    diamond.colors[Color.RED].set(1, 1)
    diamond.colors[Color.GREEN].set(1, 2)
    with pytest.raises(TilingInvariantError):
        diamond.build_occupancy()


def test_fill_refills_holes_left_by_first_increment():
    # Vertical A(1); after moving, the holes at (0,1) and (2,1) are filled
    diamond = AztecDiamond(max_extent=8, rng=ScriptedRandom([0.9, 0.1, 0.9]))
    diamond.expand()
    assert diamond.delete_clashing_tiles() == 0
    diamond.move_all_colors()
    assert diamond.fill_with_unit_diamonds() == 2
    assert diamond.signature() == frozenset({
        (Color.GREEN, 1, 0), (Color.BLUE, 1, 3),
        (Color.ORANGE, 0, 1), (Color.RED, 1, 1),
        (Color.GREEN, 2, 1), (Color.BLUE, 2, 2),
    })
    assert find_tiling_errors(diamond) == []


def find_vertical_seed() -> int:
    for seed in range(100):
        diamond = AztecDiamond(max_extent=12, seed=seed)
        if diamond.tile_present(Color.GREEN, 0, 0):
            return seed
    raise AssertionError("no seed gives a vertical A(1)")


def test_scenario_from_vertical_unit_diamond():
    diamond = AztecDiamond(max_extent=12, seed=find_vertical_seed())
    assert diamond.tile_present(Color.GREEN, 0, 0)
    assert diamond.tile_present(Color.BLUE, 0, 1)

    assert diamond.increment() is True
    assert diamond.order == 2
    picture = diamond.to_ascii()
    assert len(picture) == 4
    for row in (0, 3):
        assert picture[row][0] == '.' and picture[row][3] == '.'
    assert verify_tiling(diamond) == (True, 6)

    for _ in range(3):
        diamond.increment()
    assert diamond.order == 5
    assert find_tiling_errors(diamond) == []


def run_steps(diamond: AztecDiamond, steps) -> bool:
    """Run one shuffle round with the given step order. Returns validity."""
    diamond.expand()
    try:
        for step in steps:
            getattr(diamond, step)()
    except (TilingInvariantError, InvalidCoordinatesError):
        return False
    return not find_tiling_errors(diamond)


CANONICAL = ("delete_clashing_tiles", "move_all_colors", "fill_with_unit_diamonds")


@pytest.mark.parametrize("steps", [
    ("delete_clashing_tiles", "fill_with_unit_diamonds", "move_all_colors"),
    ("fill_with_unit_diamonds", "delete_clashing_tiles", "move_all_colors"),
    ("fill_with_unit_diamonds", "move_all_colors", "delete_clashing_tiles"),
])
def test_shuffled_step_order_breaks_tiling(steps):
    outcomes = []
    for seed in range(20):
        diamond = AztecDiamond(max_extent=16, seed=seed)
        for _ in range(3):
            if not run_steps(diamond, steps):
                outcomes.append(False)
                break
        else:
            outcomes.append(True)
    assert not all(outcomes)


def test_canonical_step_order_keeps_tiling():
    for seed in range(20):
        diamond = AztecDiamond(max_extent=16, seed=seed)
        for _ in range(6):
            assert run_steps(diamond, CANONICAL)


def test_unit_diamond_orientation_is_balanced():
    rng = random.Random(2024)
    trials = 4000
    vertical = sum(
        AztecDiamond(max_extent=2, rng=rng).tile_present(Color.GREEN, 0, 0)
        for _ in range(trials)
    )
    assert abs(vertical - trials / 2) < 200


def test_order_two_tilings_are_roughly_uniform():
    rng = random.Random(7)
    trials = 4000
    counts = Counter()
    for _ in range(trials):
        diamond = AztecDiamond(max_extent=4, rng=rng)
        diamond.increment()
        counts[diamond.signature()] += 1

    # A(2) has exactly 8 tilings
    assert len(counts) == 8
    expected = trials / 8
    for count in counts.values():
        assert abs(count - expected) < 120
    chi_square = sum((count - expected) ** 2 / expected for count in counts.values())
    assert chi_square < 30  # 7 degrees of freedom


def test_copy_is_independent():
    diamond = AztecDiamond(max_extent=12, seed=5)
    diamond.grow_to(3)
    clone = diamond.copy()
    assert clone.signature() == diamond.signature()
    diamond.increment()
    assert clone.order == 3
    clone.increment()
    assert clone.signature() == diamond.signature()


def test_to_ascii_letters():
    diamond = AztecDiamond(max_extent=8, rng=ScriptedRandom([0.1]))
    assert diamond.to_ascii() == ["OR", "OR"]
    diamond = AztecDiamond(max_extent=8, rng=ScriptedRandom([0.9]))
    assert diamond.to_ascii() == ["BB", "GG"]
