"""
Random domino tilings of Aztec diamonds grown by domino shuffling.

Each increment turns a uniformly random tiling of the order-n diamond into a
uniformly random tiling of the order-(n+1) diamond:

    expand -> delete clashing tiles -> move all colors -> fill with A(1)s

The steps must run in exactly this order, once per increment.
"""
from typing import Dict, Iterator, List, Optional, Tuple
from enum import Enum
from copy import deepcopy
import random

from tile_grid import TileGrid, TilingInvariantError, DEFAULT_MAX_EXTENT


class Color(Enum):
    """
    Domino color. The color fixes both the orientation of a domino and the
    direction it travels during the move step.
    """
    ORANGE = 'orange'  # Upright, spans (x,y) and (x,y+1), moves left
    RED = 'red'        # Upright, spans (x,y) and (x,y+1), moves right
    GREEN = 'green'    # Flat, spans (x,y) and (x+1,y), moves down
    BLUE = 'blue'      # Flat, spans (x,y) and (x+1,y), moves up

    @property
    def is_upright(self) -> bool:
        return self in (Color.ORANGE, Color.RED)

    @property
    def second_half(self) -> Tuple[int, int]:
        """Offset from the anchor to the other cell of the domino."""
        return (0, 1) if self.is_upright else (1, 0)

    @property
    def letter(self) -> str:
        return self.value[0].upper()


class Orientation(Enum):
    HORIZONTAL = 'H'  # ORANGE at (x,y), RED at (x+1,y)
    VERTICAL = 'V'    # GREEN at (x,y), BLUE at (x,y+1)


class CapacityExceededError(RuntimeError):
    """Raised when the diamond is asked to expand past its grid capacity."""


class AztecDiamond:
    """
    A domino tiling of the Aztec diamond of order n, stored as one TileGrid
    per color inside the 2n x 2n box whose lower-left corner is (0, 0).
    """

    def __init__(self, max_extent: int = DEFAULT_MAX_EXTENT,
                 rng: Optional[random.Random] = None, seed: Optional[int] = None):
        if max_extent < 2:
            raise ValueError(f"Grid capacity must be at least 2 to hold A(1), got {max_extent}")
        self.max_extent = max_extent
        self.rng = rng if rng is not None else random.Random(seed)

        self.colors: Dict[Color, TileGrid] = {color: TileGrid(max_extent) for color in Color}

        # Scratch buffer derived from the color grids, rebuilt before each refill
        self.occupied = TileGrid(max_extent)

        self._order = 1
        self.place_random_unit_diamond(0, 0)

    @property
    def order(self) -> int:
        return self._order

    @property
    def max_order(self) -> int:
        return self.max_extent // 2

    @property
    def at_capacity(self) -> bool:
        return self._order >= self.max_order

    @property
    def extent(self) -> int:
        """Side of the bounding box of the current diamond."""
        return 2 * self._order

    def grid(self, color) -> TileGrid:
        return self.colors[Color(color)]

    def tile_present(self, color, x: int, y: int) -> bool:
        """Check for a domino of the given color anchored at (x, y)."""
        if not (0 <= x < self.extent and 0 <= y < self.extent):
            return False
        return self.colors[Color(color)].present(x, y)

    @staticmethod
    def footprint(color, x: int, y: int) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Return the two cells covered by a domino anchored at (x, y)."""
        dx, dy = Color(color).second_half
        return ((x, y), (x + dx, y + dy))

    def dominoes(self) -> Iterator[Tuple[Color, int, int]]:
        """Yield (color, x, y) for every domino anchor inside the bounding box."""
        for color, grid in self.colors.items():
            for x, y in grid.cells(self.extent):
                yield (color, x, y)

    def signature(self) -> frozenset:
        """Hashable description of the tiling."""
        return frozenset(self.dominoes())

    def place_random_unit_diamond(self, x: int, y: int) -> Orientation:
        """
        Tile the 2x2 block with lower-left corner (x, y) with one of the two
        A(1) tilings, each with probability 1/2.
        """
        if self.rng.random() < 0.5:
            self.colors[Color.ORANGE].set(x, y)
            self.colors[Color.RED].set(x + 1, y)
            return Orientation.HORIZONTAL
        else:
            self.colors[Color.GREEN].set(x, y)
            self.colors[Color.BLUE].set(x, y + 1)
            return Orientation.VERTICAL

    def expand(self) -> None:
        """
        Grow the box by one order without adding dominoes. The old tiling is
        moved one cell up and one cell right so it sits in the middle of the
        new, larger diamond.

        .oo.        ......
        oooo        ..oo..
        oooo   ->   .oooo.
        .oo.        .oooo.
                    ..oo..
                    ......
        """
        if self.at_capacity:
            raise CapacityExceededError(
                f"Order {self._order} already fills a {self.max_extent}x{self.max_extent} grid")
        for grid in self.colors.values():
            grid.shift_up()
            grid.shift_right()
        self._order += 1

    def delete_clashing_tiles(self) -> int:
        """
        Remove pairs of dominoes that would run into each other: a red tile
        directly left of an orange one, or a blue tile directly below a green
        one. Returns the number of pairs removed.
        """
        red = self.colors[Color.RED]
        orange = self.colors[Color.ORANGE]
        blue = self.colors[Color.BLUE]
        green = self.colors[Color.GREEN]

        removed = 0
        for x in range(self.extent):
            for y in range(self.extent):
                if red.present(x, y) and orange.present(x + 1, y):
                    red.clear(x, y)
                    orange.clear(x + 1, y)
                    removed += 1
                if blue.present(x, y) and green.present(x, y + 1):
                    blue.clear(x, y)
                    green.clear(x, y + 1)
                    removed += 1
        return removed

    def move_all_colors(self) -> None:
        """Slide every domino one cell in the direction of its color."""
        self.colors[Color.RED].shift_right()
        self.colors[Color.ORANGE].shift_left()
        self.colors[Color.BLUE].shift_up()
        self.colors[Color.GREEN].shift_down()

    def build_occupancy(self) -> TileGrid:
        """
        Recompute the occupancy grid from the color grids. Both halves of
        every domino are marked. Overlapping dominoes raise
        TilingInvariantError.
        """
        occupied = self.occupied
        occupied.reset()
        for color, grid in self.colors.items():
            dx, dy = color.second_half
            for x, y in grid.cells(self.extent):
                occupied.set(x, y)
                occupied.set(x + dx, y + dy)
        return occupied

    def _column_range(self, x: int) -> range:
        """Rows of column x that can hold the lower-left corner of a hole."""
        n = self._order
        if x < n:
            d = n - x - 1
        else:
            d = x - n
        return range(d, 2 * n - d)

    def fill_with_unit_diamonds(self) -> int:
        """
        Find every empty 2x2 block and tile it with a random A(1).
        Returns the number of blocks filled.
        """
        occupied = self.build_occupancy()
        filled = 0
        for x in range(self.extent):
            for y in self._column_range(x):
                block = ((x, y), (x + 1, y), (x, y + 1), (x + 1, y + 1))
                if any(occupied.present(bx, by) for bx, by in block):
                    continue
                self.place_random_unit_diamond(x, y)
                for bx, by in block:
                    occupied.set(bx, by)
                filled += 1
        return filled

    def increment(self) -> bool:
        """
        Advance from order n to order n+1 by one round of domino shuffling.
        Returns False without changing anything once max_order is reached.
        """
        if self.at_capacity:
            return False
        self.expand()
        self.delete_clashing_tiles()
        self.move_all_colors()
        self.fill_with_unit_diamonds()
        return True

    def grow_to(self, target_order: int) -> int:
        """Increment until target_order or capacity is reached. Returns the final order."""
        while self._order < target_order:
            if not self.increment():
                break
        return self._order

    def copy(self) -> 'AztecDiamond':
        clone = AztecDiamond.__new__(AztecDiamond)
        clone.max_extent = self.max_extent
        clone.rng = deepcopy(self.rng)
        clone.colors = {color: grid.copy() for color, grid in self.colors.items()}
        clone.occupied = TileGrid(self.max_extent)
        clone._order = self._order
        return clone

    def to_ascii(self) -> List[str]:
        """
        Text picture of the tiling, top row first. Each cell shows the first
        letter of the covering domino's color, '.' if uncovered.
        """
        extent = self.extent
        picture = [['.'] * extent for _ in range(extent)]
        for color, x, y in self.dominoes():
            for cx, cy in self.footprint(color, x, y):
                if 0 <= cx < extent and 0 <= cy < extent:
                    picture[cy][cx] = color.letter
        return [''.join(row) for row in reversed(picture)]

    def display(self):
        """Pretty print the tiling."""
        for line in self.to_ascii():
            print(line)

    def __repr__(self):
        return f"AztecDiamond(order={self._order}, max_order={self.max_order})"


if __name__ == "__main__":
    diamond = AztecDiamond(max_extent=40, seed=1)
    for _ in range(5):
        diamond.increment()
    print(f"A({diamond.order}):")
    diamond.display()
