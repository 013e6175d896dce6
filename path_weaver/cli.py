#!/usr/bin/env python3
"""
Command-line demo for weaving, following and plotting path chains.

Weaves a zig-zag of knots with PathWeaver.repeat(), logs a summary of the
woven chains, and optionally exports them to CSV, simulates a follower driving
them, and plots the result.
"""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from .config import DEFAULT_TANGENT_LENGTH, TERM_BLUE, TERM_ORANGE, TERM_RESET
from .export import ChainExporter
from .follower import Follower
from .geometry import Pose
from .knot import Knot
from .visualization import plot_chains
from .weaver import HeadingMode, PathWeaver


class CustomFormatter(logging.Formatter):
    """Custom logging formatter that removes timestamps from INFO messages.

    INFO messages are shown bare for clean console output, while WARNING,
    ERROR and DEBUG messages keep their timestamp and level.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return f"{self.formatTime(record, self.datefmt)} - {record.levelname} - {record.getMessage()}"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: If True, show all levels with timestamps. If False, show INFO
                 without timestamps and WARNING/ERROR with timestamps.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(CustomFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        logger = logging.getLogger()
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)


def zigzag_knots(zigzags: int, spacing: float = 24.0, tangent_length: float = DEFAULT_TANGENT_LENGTH) -> List[Knot]:
    """Create knots alternating between y = 0 and y = spacing, all facing +x.

    Args:
        zigzags: Number of legs; zigzags + 1 knots are returned.
        spacing: Distance between knots along x and the zig-zag amplitude (in).
        tangent_length: Tangent length of every knot (in).
    """
    return [
        Knot(Pose(i * spacing, spacing * (i % 2), 0.0), tangent_length)
        for i in range(zigzags + 1)
    ]


def weave_zigzag(
    weaver: PathWeaver, knots: Sequence[Knot], heading_mode: HeadingMode, use_lines: bool
) -> PathWeaver:
    """Weave one chain per zig-zag leg, followed by one chain through every knot."""
    weaver.repeat(
        len(knots) - 1,
        lambda i, w: w.weave(heading_mode, use_lines, knots[i], knots[i + 1]),
    )
    return weaver.weave(heading_mode, use_lines, *knots)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Weave a zig-zag of knots into path chains",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Weave four cubic legs with tangent heading and plot them
  python -m path_weaver --zigzags 4

  # Straight legs, linear heading, export CSV and save the plot without showing it
  python -m path_weaver --lines --mode linear --save --no-show
        """,
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging with timestamps"
    )
    parser.add_argument("--zigzags", type=int, default=4, help="Number of zig-zag legs (default: 4)")
    parser.add_argument("--lines", action="store_true", help="Weave straight lines instead of cubics")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in HeadingMode],
        default=HeadingMode.TANGENT.value,
        help="Heading interpolation mode (default: tangent)",
    )
    parser.add_argument(
        "--tangent-length",
        type=float,
        default=DEFAULT_TANGENT_LENGTH,
        help=f"Knot tangent length in inches (default: {DEFAULT_TANGENT_LENGTH})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=".", help="Base directory for exported files (default: .)"
    )
    parser.add_argument("--export", action="store_true", help="Export woven chains to CSV")
    parser.add_argument("--simulate", action="store_true", help="Simulate a follower driving the full chain")
    parser.add_argument("--save", action="store_true", help="Save the plot as a PNG file")
    parser.add_argument("--no-show", action="store_true", help="Do not display the plot interactively")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> Tuple[PathWeaver, List[Knot]]:
    """Weave, export, simulate and plot according to parsed arguments."""
    if args.zigzags < 1:
        raise ValueError(f"--zigzags must be at least 1, got {args.zigzags}")

    heading_mode = HeadingMode(args.mode)
    follower = Follower(start_pose=Pose(0.0, 0.0, 0.0))
    weaver = PathWeaver.from_follower(follower)
    knots = zigzag_knots(args.zigzags, tangent_length=args.tangent_length)

    weave_zigzag(weaver, knots, heading_mode, args.lines)

    logging.info(f"{TERM_BLUE}Wove {len(weaver.history)} chain(s) ({heading_mode.value} heading){TERM_RESET}")
    for i, chain in enumerate(weaver.history):
        logging.info(f"  {i}. {len(chain)} segment(s), length {chain.length:.2f} in")

    run_dir = None
    if args.export:
        exporter = ChainExporter(output_dir=args.output_dir)
        exporter.export(weaver.history)
        run_dir = exporter.run_dir

    trajectory = None
    if args.simulate:
        follower.follow_path(weaver.last_chain)
        trajectory = follower.simulate()
        final_heading = math.degrees(follower.pose.heading)
        logging.info(f"{TERM_ORANGE}Final heading: {final_heading:.1f} deg{TERM_RESET}")

    if args.save or not args.no_show:
        save_path = None
        if args.save:
            save_path = (run_dir or Path(args.output_dir)) / "woven_chains.png"
        fig = plot_chains(weaver.history, knots=knots, trajectory=trajectory, save_path=save_path)
        if not args.no_show:
            plt.show()
        plt.close(fig)

    return weaver, knots


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the weaving demo."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        run(args)
    except ValueError as e:
        logging.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
