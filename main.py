"""CLI entrypoint for the polyomino covering solver."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from polycover.core.constants import MAX_DIM
from polycover.core.exceptions import PolycoverError
from polycover.data.puzzles import default_puzzle, load_puzzle
from polycover.engine.board import Board
from polycover.engine.cpsat import CrossCheckConfig, solve_min_penalty
from polycover.engine.search import SearchConfig, SearchResult, solve
from polycover.engine.validator import SolutionValidator
from polycover.utils.logger import configure_logging, get_logger
from polycover.utils.pretty import (
    format_coverage,
    format_overlay,
    print_report,
    result_to_jsonable,
)


LOGGER = get_logger("polycover.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cover a board with polyomino pieces using the fewest overlaps",
    )
    parser.add_argument(
        "--puzzle",
        type=Path,
        metavar="FILE",
        help="Puzzle file: board block, then one block per piece, separated by blank lines "
        "(defaults to the built-in puzzle)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=MAX_DIM,
        help=f"Grid dimension shared by board and pieces (default {MAX_DIM})",
    )
    parser.add_argument(
        "--flush-edges",
        action="store_true",
        help="Also try positions flush with the bottom and right grid edges",
    )
    parser.add_argument(
        "--exhaustive",
        action="store_true",
        help="Disable the uncoverable-subtree cutoff and walk every branch",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Confirm the optimum with an OR-Tools CP-SAT model",
    )
    parser.add_argument(
        "--cross-check-timeout",
        type=float,
        default=30.0,
        help="CP-SAT time limit in seconds",
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def log_solution_details(board: Board, result: SearchResult) -> None:
    if not LOGGER.isEnabledFor(logging.DEBUG):
        return
    covered = board.copy()
    for placement in result.used_placements():
        covered.place(placement.variant, placement.position)
    LOGGER.debug("Solution overlay:\n%s", format_overlay(board, result.best_solution))
    LOGGER.debug("Cell coverage:\n%s", format_coverage(covered))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.size < 1:
        parser.error("--size must be positive")

    try:
        puzzle = load_puzzle(args.puzzle) if args.puzzle else default_puzzle()
        board, pieces = puzzle.build(args.size)
        config = SearchConfig(
            flush_edge_positions=args.flush_edges,
            prune_uncoverable=not args.exhaustive,
        )
        result = solve(board, pieces, config)
        result.require_solution()

        SolutionValidator(strict=True).validate(board, result)
        log_solution_details(board, result)

        if args.cross_check:
            check = solve_min_penalty(
                board,
                result.rotation_sets,
                CrossCheckConfig(
                    time_limit_seconds=args.cross_check_timeout,
                    flush_edge_positions=args.flush_edges,
                ),
            )
            if check is None or check.penalty != result.min_penalty:
                LOGGER.error(
                    "Cross-check disagrees: search %s, CP-SAT %s",
                    result.min_penalty,
                    None if check is None else check.penalty,
                )
                return 2
            LOGGER.info("Cross-check agrees on penalty %d", check.penalty)
    except PolycoverError as exc:
        LOGGER.error("%s: %s", type(exc).__name__, exc)
        return 1

    if args.json:
        print(json.dumps(result_to_jsonable(result, board), indent=2))
    else:
        print_report(result, board)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
