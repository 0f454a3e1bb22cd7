"""
Checks that a diamond's dominoes form a perfect tiling of its Aztec diamond.
"""
from typing import Dict, List, Set, Tuple

from aztec_diamond import AztecDiamond, Color


def is_in_diamond(order: int, x: int, y: int) -> bool:
    """
    Check whether cell (x, y) belongs to the Aztec diamond of the given order
    drawn in the 2n x 2n box at the origin. Distances are doubled so that
    the diamond's center and the cell centers are integral.
    """
    return abs(2 * x - 2 * order + 1) + abs(2 * y - 2 * order + 1) <= 2 * order


def diamond_cells(order: int) -> Set[Tuple[int, int]]:
    """All cells of the Aztec diamond of the given order."""
    extent = 2 * order
    return {(x, y) for x in range(extent) for y in range(extent) if is_in_diamond(order, x, y)}


def find_tiling_errors(diamond: AztecDiamond) -> List[str]:
    """
    List everything that keeps the dominoes from exactly tiling the diamond:
    overlaps, cells covered outside the region, uncovered region cells and
    anchors left outside the bounding box.
    """
    errors = []
    region = diamond_cells(diamond.order)
    covered: Dict[Tuple[int, int], Color] = {}

    seen = 0
    for color, x, y in diamond.dominoes():
        seen += 1
        for cell in diamond.footprint(color, x, y):
            if cell in covered:
                errors.append(
                    f"Cell {cell} covered by both {covered[cell].value} and {color.value}")
                continue
            if cell not in region:
                errors.append(f"Cell {cell} of {color.value} domino at ({x}, {y}) is outside A({diamond.order})")
            covered[cell] = color

    total = sum(grid.count() for grid in diamond.colors.values())
    if total != seen:
        errors.append(f"{total - seen} dominoes lie outside the {diamond.extent}x{diamond.extent} box")

    for cell in sorted(region - covered.keys()):
        errors.append(f"Cell {cell} is not covered")

    return errors


def verify_tiling(diamond: AztecDiamond) -> Tuple[bool, int]:
    """
    Verify the diamond is perfectly tiled.
    Returns (is_valid, domino_count).
    """
    errors = find_tiling_errors(diamond)
    count = sum(1 for _ in diamond.dominoes())
    return not errors, count


if __name__ == "__main__":
    diamond = AztecDiamond(max_extent=40, seed=3)
    for _ in range(10):
        diamond.increment()
        valid, count = verify_tiling(diamond)
        status = "✓" if valid else "✗"
        print(f"A({diamond.order}): {count} dominoes {status}")
