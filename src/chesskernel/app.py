"""Application entry point."""

from __future__ import annotations

import argparse
import sys

from chesskernel.ui.settings import BoardSettings


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chesskernel")
    parser.add_argument("--theme", default="Classic", help="board colour preset")
    parser.add_argument(
        "--flipped", action="store_true", help="show the board from Black's side"
    )
    parser.add_argument(
        "--no-coordinates", action="store_true", help="hide rank/file labels"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main() -> None:
    """Launch the board window."""
    from chesskernel.ui.bootstrap import configure_logging, run_application

    args = _parse_args(sys.argv[1:])
    configure_logging(args.log_level)
    settings = BoardSettings(
        board_theme=args.theme,
        show_coordinates=not args.no_coordinates,
        flipped=args.flipped,
    )
    sys.exit(run_application(sys.argv[:1], settings))


if __name__ == "__main__":
    main()
