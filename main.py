#!/usr/bin/env python3
"""
Aztec Diamond Tiler

Grows a uniformly random domino tiling of the Aztec diamond one order at a
time using domino shuffling, then renders it.
- Every increment: expand, delete clashing tiles, move, fill with A(1)s
- Orders are capped by the grid capacity (1000 cells -> order 500)

Usage:
    python main.py                     # Grow A(10) and render it to PDF
    python main.py --order 60 --seed 3 # Reproducible A(60)
    python main.py --ascii --order 6   # Print the tiling as text
    python main.py --check             # Verify the tiling after every step
"""

import argparse
import os
import sys

from aztec_diamond import AztecDiamond, Color
from renderer import DiamondRenderer
from tile_grid import DEFAULT_MAX_EXTENT, TilingInvariantError
from tiling_check import find_tiling_errors


def grow_diamond(order: int, seed=None, max_extent: int = DEFAULT_MAX_EXTENT,
                 check: bool = False) -> AztecDiamond:
    """Grow a diamond to the requested order, optionally verifying each step."""
    diamond = AztecDiamond(max_extent=max_extent, seed=seed)
    if order > diamond.max_order:
        print(f"Order {order} exceeds capacity; stopping at A({diamond.max_order})")

    while diamond.order < order:
        if not diamond.increment():
            break
        if check:
            errors = find_tiling_errors(diamond)
            if errors:
                raise TilingInvariantError(
                    f"A({diamond.order}) is not a valid tiling: {errors[0]}"
                    f" ({len(errors)} problems)")
            print(f"  A({diamond.order}) ✓")

    return diamond


def display_diamond_info(diamond: AztecDiamond):
    """Display a summary of the tiling."""
    print("=" * 60)
    print(f"AZTEC DIAMOND A({diamond.order})")
    print("=" * 60)

    print(f"\n  Capacity:  {diamond.max_extent}x{diamond.max_extent} cells "
          f"(up to A({diamond.max_order}))")
    print(f"  Dominoes:  {diamond.order * (diamond.order + 1)}")

    print("\n🎨 COLORS:")
    print("-" * 40)
    counts = {color: 0 for color in Color}
    for color, _, _ in diamond.dominoes():
        counts[color] += 1
    for color in Color:
        print(f"  {color.value:<8} {counts[color]}")


def main():
    parser = argparse.ArgumentParser(
        description="Random Aztec diamond tilings by domino shuffling",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                       # Render a random A(10)
  python main.py --order 100 -o big.pdf
  python main.py --ascii --order 5     # Print the tiling
  python main.py --info --order 20     # Color statistics
        """
    )

    parser.add_argument(
        '--order', '-n',
        type=int,
        default=10,
        help='Order of the diamond to grow (default: 10)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for a reproducible tiling'
    )
    parser.add_argument(
        '--max-extent',
        type=int,
        default=DEFAULT_MAX_EXTENT,
        help=f'Grid capacity in cells (default: {DEFAULT_MAX_EXTENT})'
    )
    parser.add_argument(
        '--check',
        action='store_true',
        help='Verify the tiling after every increment'
    )
    parser.add_argument(
        '--ascii',
        action='store_true',
        help='Print the tiling as text instead of rendering a PDF'
    )
    parser.add_argument(
        '--info',
        action='store_true',
        help='Display information about the tiling'
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Output PDF path (default: output/aztec_<order>.pdf)'
    )

    args = parser.parse_args()

    if args.order < 1:
        parser.error("--order must be at least 1")

    try:
        print(f"Growing A({args.order})...")
        diamond = grow_diamond(args.order, seed=args.seed,
                               max_extent=args.max_extent, check=args.check)
    except (ValueError, TilingInvariantError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.info:
        display_diamond_info(diamond)
    elif args.ascii:
        diamond.display()
    else:
        output = args.output
        if output is None:
            os.makedirs("output", exist_ok=True)
            output = os.path.join("output", f"aztec_{diamond.order}.pdf")
        DiamondRenderer(diamond).render(output)


if __name__ == "__main__":
    main()
