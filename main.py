#!/usr/bin/env python3
"""
BOX PACKER - Pack rectangles into a compact container.

This is the MAIN ENTRY POINT for packing from the command line.

Usage:
    python main.py --demo                         # Pack the default 64 random boxes
    python main.py --demo 100                     # Pack 100 random boxes
    python main.py --demo 100 --spacing 2 --pow2  # With spacing and pow2 size
    python main.py --input boxes.json             # Pack boxes from a file
    python main.py --input boxes.json --output layout.json --verify
    python main.py --demo 50 --save layout.png    # Save a plot of the layout

Input file format: a JSON list of {"width": w, "height": h, "data": ...}
objects or plain [w, h] pairs.
"""

import argparse
import json
import sys
from typing import List, Optional

import numpy as np

from config import CONFIG, PackConfig


# =============================================================================
# WARMUP
# =============================================================================

def warmup_jit(verbose: bool = True):
    """Warm up JIT compilation for all modules."""
    if verbose:
        print("\nWarming up JIT compilation...")

    from core.collision import warmup as warmup_collision
    from core.bounding_box import warmup as warmup_bbox

    warmup_collision()
    warmup_bbox()


# =============================================================================
# INPUT
# =============================================================================

def random_boxes(n: int, min_size: int, max_size: int, seed: int) -> list:
    """Generate n random boxes labelled by index."""
    from core.boxes import Box

    rng = np.random.default_rng(seed)
    sizes = rng.integers(min_size, max_size + 1, size=(n, 2))
    return [Box(int(w), int(h), i) for i, (w, h) in enumerate(sizes)]


def load_boxes(path: str) -> list:
    """
    Load boxes from a JSON file.

    Raises:
        ValueError: if an entry is neither an object nor a [w, h] pair
    """
    from core.boxes import Box

    with open(path, 'r') as f:
        entries = json.load(f)

    if not isinstance(entries, list):
        raise ValueError(f"{path}: expected a JSON list of boxes")

    boxes = []
    for i, entry in enumerate(entries):
        if isinstance(entry, dict):
            boxes.append(Box(entry['width'], entry['height'], entry.get('data', i)))
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            boxes.append(Box(entry[0], entry[1], i))
        else:
            raise ValueError(f"{path}: entry {i} is not a box: {entry!r}")
    return boxes


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_pack(args):
    """Pack boxes and report the result."""
    from packing.guillotine import GuillotinePacker
    from core.bounding_box import packing_efficiency
    from core.collision import box_intersections, validate_layout

    verbose = not args.quiet

    if args.input:
        boxes = load_boxes(args.input)
        source = args.input
    else:
        boxes = random_boxes(args.demo, args.min_size, args.max_size, args.seed)
        source = f"{args.demo} random boxes (seed={args.seed})"

    config = PackConfig(
        spacing=args.spacing,
        power_of_two_size=args.pow2,
        minimum_width=args.min_width,
        verbose=verbose,
    )

    if verbose:
        print(f"\nPacking {source}")
        print(f"   spacing={config.spacing}, pow2={config.power_of_two_size}, "
              f"min_width={config.minimum_width}")

    packed = GuillotinePacker(config).pack(boxes)

    if args.verify:
        warmup_jit(verbose)
        is_valid, issues = validate_layout(packed, expected_count=len(boxes))
        if is_valid:
            print("Layout valid: no overlaps, all boxes inside the container")
        else:
            print("\nLayout INVALID:")
            for issue in issues:
                print(f"   - {issue}")

    if args.output:
        from utils.serialization import save_layout
        save_layout(packed, args.output, verbose=verbose)

    if args.save:
        from utils.visualization import plot_packing
        plot_packing(packed, save_path=args.save, show=False)

    print(f"\n{len(packed.boxes)} boxes -> {packed.width}x{packed.height} "
          f"(efficiency {packing_efficiency(packed):.3f}, "
          f"{len(box_intersections(packed.boxes))} overlaps)")

    if args.verify and not is_valid:
        return 1
    return 0


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Box packer - pack rectangles into a compact container",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py --demo 100                # Random boxes
    python main.py --input boxes.json        # Boxes from file
    python main.py --demo 50 --verify        # Check the layout
        """
    )

    # Input
    src_group = parser.add_mutually_exclusive_group(required=True)
    src_group.add_argument('--demo', type=int, nargs='?', const=CONFIG.demo.n_boxes, metavar='N',
                           help=f'Pack N random boxes (default: {CONFIG.demo.n_boxes})')
    src_group.add_argument('--input', type=str, metavar='PATH', help='JSON file of boxes')

    # Packing options
    parser.add_argument('--spacing', type=float, default=CONFIG.pack.spacing,
                        help='Gap between boxes')
    parser.add_argument('--pow2', action='store_true',
                        help='Round container size up to powers of two')
    parser.add_argument('--min-width', type=float, default=CONFIG.pack.minimum_width,
                        help='Minimum container width')

    # Demo options
    parser.add_argument('--seed', type=int, default=CONFIG.demo.seed, help='Random seed')
    parser.add_argument('--min-size', type=int, default=CONFIG.demo.min_size,
                        help='Smallest random box side')
    parser.add_argument('--max-size', type=int, default=CONFIG.demo.max_size,
                        help='Largest random box side')

    # Output
    parser.add_argument('--output', type=str, metavar='PATH', help='Write layout JSON')
    parser.add_argument('--save', type=str, metavar='PATH', help='Save layout plot')
    parser.add_argument('--verify', action='store_true', help='Validate the layout')
    parser.add_argument('--quiet', action='store_true', help='Only print the summary')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        return cmd_pack(args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 1

    except (OSError, ValueError, KeyError) as e:
        print(f"\nError: {e}")
        return 1

    except Exception as e:
        print(f"\nError: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
