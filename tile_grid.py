"""
Fixed-capacity presence grid for one domino color.
"""
from typing import Iterator, List, Optional, Sequence, Tuple


# Width of every grid; 1000 cells supports diamonds up to order 500.
DEFAULT_MAX_EXTENT = 1000


class InvalidCoordinatesError(ValueError):
    """Raised when a mutation targets a cell outside the grid."""


class TilingInvariantError(RuntimeError):
    """Raised when a placement or removal contradicts the current tiling."""


class TileGrid:
    """
    A square boolean map of domino anchors for a single color.

    Cell (x, y) is set when a domino of this color is anchored there.
    The grid is always allocated at full capacity so that the whole-grid
    shifts never need to reallocate. "Up" is increasing y and "right"
    is increasing x.
    """

    def __init__(self, size: int = DEFAULT_MAX_EXTENT):
        if size < 1:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.rows: List[List[bool]] = [[False] * size for _ in range(size)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]], size: Optional[int] = None) -> 'TileGrid':
        """Build a grid from a 0/1 matrix where rows[y][x] is cell (x, y)."""
        grid = cls(size if size is not None else len(rows))
        for y, row in enumerate(rows):
            for x, value in enumerate(row):
                if value:
                    grid.set(x, y)
        return grid

    def valid_coordinates(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def present(self, x: int, y: int) -> bool:
        """Check for a domino at (x, y). Out-of-range cells are empty."""
        if not self.valid_coordinates(x, y):
            return False
        return self.rows[y][x]

    def set(self, x: int, y: int) -> None:
        """Place a domino at (x, y)."""
        if not self.valid_coordinates(x, y):
            raise InvalidCoordinatesError(
                f"Cannot add a domino at ({x}, {y}): outside a {self.size}x{self.size} grid")
        if self.rows[y][x]:
            raise TilingInvariantError(f"Cannot add a domino at ({x}, {y}): already present")
        self.rows[y][x] = True

    def clear(self, x: int, y: int) -> None:
        """Remove the domino at (x, y)."""
        if not self.valid_coordinates(x, y):
            raise InvalidCoordinatesError(
                f"Cannot delete a domino at ({x}, {y}): outside a {self.size}x{self.size} grid")
        if not self.rows[y][x]:
            raise TilingInvariantError(f"Cannot delete a domino at ({x}, {y}): none there")
        self.rows[y][x] = False

    def reset(self) -> None:
        """Clear every cell."""
        for row in self.rows:
            row[:] = [False] * self.size

    # Whole-grid translations. Content pushed past the far edge is lost and
    # the vacated row or column is left empty.

    def shift_up(self) -> None:
        self.rows.pop()
        self.rows.insert(0, [False] * self.size)

    def shift_down(self) -> None:
        self.rows.pop(0)
        self.rows.append([False] * self.size)

    def shift_left(self) -> None:
        for row in self.rows:
            row.pop(0)
            row.append(False)

    def shift_right(self) -> None:
        for row in self.rows:
            row.pop()
            row.insert(0, False)

    def cells(self, limit: Optional[int] = None) -> Iterator[Tuple[int, int]]:
        """
        Yield the (x, y) of every set cell, column by column.
        If limit is given only the limit x limit corner is scanned.
        """
        extent = self.size if limit is None else min(limit, self.size)
        for x in range(extent):
            for y in range(extent):
                if self.rows[y][x]:
                    yield (x, y)

    def count(self) -> int:
        """Number of dominoes in the grid."""
        return sum(sum(row) for row in self.rows)

    def to_rows(self, extent: Optional[int] = None) -> List[List[int]]:
        """Return the lower-left extent x extent corner as a 0/1 matrix."""
        extent = self.size if extent is None else min(extent, self.size)
        return [[int(v) for v in self.rows[y][:extent]] for y in range(extent)]

    def copy(self) -> 'TileGrid':
        clone = TileGrid.__new__(TileGrid)
        clone.size = self.size
        clone.rows = [list(row) for row in self.rows]
        return clone

    def __eq__(self, other):
        if not isinstance(other, TileGrid):
            return False
        return self.size == other.size and self.rows == other.rows

    def __repr__(self):
        return f"TileGrid({self.size}x{self.size}, {self.count()} dominoes)"


if __name__ == "__main__":
    grid = TileGrid.from_rows([
        [0, 0, 0, 0],
        [0, 1, 1, 0],
        [0, 1, 1, 0],
        [0, 0, 0, 0],
    ])
    for name in ("shift_up", "shift_down", "shift_left", "shift_right"):
        shifted = grid.copy()
        getattr(shifted, name)()
        print(f"{name}:")
        for row in shifted.to_rows():
            print(f"  {row}")
