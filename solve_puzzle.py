#!/usr/bin/env python
"""
Tile Image Solver

Usage:
    python solve_puzzle.py <input_path> [--pattern <file>] [--output <png>]

Examples:
    python solve_puzzle.py tests/data/example_tiles.txt
    python solve_puzzle.py input.txt --output ./debug/assembled.png --show-ids

Answers:
    Part 1: product of the tile ids at the four corners of the assembled image
    Part 2: active pixels not covered by any marker occurrence
"""

import argparse
import os
import sys

from pipeline import SolverConfig, solve_file, format_part


def main():
    parser = argparse.ArgumentParser(
        description="Assemble square tiles by matching borders, then scan for a marker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input format:
  Tile <id>:
  #.#.##....   (N rows of N '#'/'.' pixels)
  ...
  (blank line between tiles)
        """
    )
    parser.add_argument("input_path", help="Path to the tile file")
    parser.add_argument("--pattern", "-p", help="Marker pattern (text rows or bitmap image)")
    parser.add_argument("--output", "-o", help="Output path for the assembled image")
    parser.add_argument("--traversal", "-t", choices=["depth", "breadth"], default="depth",
                        help="Assembly worklist order")
    parser.add_argument("--scale", type=int, default=4, help="Output pixels per canvas cell")
    parser.add_argument("--show-ids", action="store_true", help="Overlay tile ids on the output image")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the answers")
    parser.add_argument("--display", action="store_true", help="Show the result with matplotlib")

    args = parser.parse_args()

    if not os.path.exists(args.input_path):
        print(f"Error: Input not found: {args.input_path}")
        sys.exit(1)

    try:
        config = SolverConfig(
            traversal=args.traversal,
            pattern_path=args.pattern,
            output_path=args.output,
            pixel_scale=args.scale,
            show_ids=args.show_ids,
            verbose=not args.quiet,
        )
        result = solve_file(args.input_path, config)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print()
    print(format_part(1, result['part_1'], result['elapsed_1']))
    print(format_part(2, result['part_2'], result['elapsed_2']))

    if args.display:
        from pipeline import load_pattern
        from visualization import display_assembly

        pattern = load_pattern(config.pattern_path, config.pattern_lines)
        display_assembly(result['assembly'], result['scan'], pattern)


if __name__ == "__main__":
    main()
