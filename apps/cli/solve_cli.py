"""Command-line front end: read a puzzle file, solve it by logic alone and write the solution as CSV."""

# solve_cli.py
# - Reads a .sdk or .csv puzzle
# - Prints the candidate grid before and after solving
# - Writes <puzzle>.solution.csv (or --out) when the grid is solved
#
# Usage:
#   python -m apps.cli.solve_cli puzzles/hard.sdk --log-level DEBUG
#   python -m apps.cli.solve_cli puzzles/hard.csv --json
#
# Exit codes: 0 solved, 1 stopped with undetermined cells, 2 bad input or contradiction.

import argparse
import json
import sys

from logic_solver.config import load_config
from logic_solver.errors import Contradiction, PuzzleFormatError
from logic_solver.logging_utils import get_logger, set_level
from logic_solver.puzzle_io import default_output_path, load_puzzle, write_csv
from logic_solver.sudoku_tools import solve

logger = get_logger()

EXIT_SOLVED = 0
EXIT_INCOMPLETE = 1
EXIT_ERROR = 2


def build_parser():
    ap = argparse.ArgumentParser(description="Solve a Sudoku puzzle by logical deduction.")
    ap.add_argument("puzzle", help="puzzle file (.sdk or .csv)")
    ap.add_argument("--out", type=str, default=None, help="solution CSV (default: <puzzle>.solution.csv)")
    ap.add_argument("--config", type=str, default=None, help="YAML solver configuration")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    ap.add_argument("--json", action="store_true", help="print the solve result as JSON")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config, log_level=args.log_level)
        set_level(cfg.log_level)
        grid = load_puzzle(args.puzzle)
    except (PuzzleFormatError, ValueError, OSError) as e:
        logger.error("%s", e)
        return EXIT_ERROR

    if not args.json:
        print(grid)
        print()
    try:
        result = solve(grid, cfg)
    except Contradiction as e:
        logger.error("Puzzle has no solution: %s", e)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(grid)

    if not result.solved:
        logger.warning("Grid is incomplete; undetermined cells: %s", " ".join(result.unresolved))
        return EXIT_INCOMPLETE

    out = write_csv(grid, args.out or default_output_path(args.puzzle))
    logger.info("Solution written to %s", out)
    return EXIT_SOLVED


if __name__ == "__main__":
    sys.exit(main())
