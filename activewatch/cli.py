import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_MIN_MOVEMENT_GAP_MS, Config
from .core import run_core
from .errors import ActiveWatchError

logger = logging.getLogger("activewatch")


def positive_int(value):
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive number, got {value}")
    return n


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Report when the mouse starts and stops being actively moved."
    )
    parser.add_argument("--on-active", type=Path, metavar="PATH",
                        help="Executable to run when the mouse starts being moved")
    parser.add_argument("--on-inactive", type=Path, metavar="PATH",
                        help="Executable to run when the mouse stops being moved")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Do not print the current state")
    parser.add_argument("--min-movement-gap", type=positive_int, metavar="MS",
                        default=DEFAULT_MIN_MOVEMENT_GAP_MS,
                        help="Milliseconds without movement before the mouse counts as inactive "
                             "(default: %(default)s)")
    parser.add_argument("--grab", metavar="NAME",
                        help="Exclusively grab the input device with this exact name (Linux only)")
    parser.add_argument("--chart", action="store_true",
                        help="Draw a live activity chart instead of printing states")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def config_from_args(args) -> Config:
    return Config(
        on_active_path=args.on_active,
        on_inactive_path=args.on_inactive,
        quiet=args.quiet,
        chart_enabled=args.chart,
        min_movement_gap_ms=args.min_movement_gap,
        grab_device_name=args.grab,
    )


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        run_core(config_from_args(args))
    except ActiveWatchError as e:
        logger.error("🛑 %s", e)
        return 1
    except KeyboardInterrupt:
        print("\n🛑 Stopping...", file=sys.stderr)
    return 0
