#!/bin/python
"""
Command line entry point: solve a TSP instance with one of the registered methods.

Reads the problem document from `--in` (stdin by default), writes the
solution document to `--out` (stdout by default) and optionally an HTML
report. Extra `key=value` arguments are passed to the method as options.
"""
import argparse
import logging
import sys
import time
from contextlib import ExitStack
from typing import List, Optional

import numpy as np

from Core.utils import parse_key_value_options, setup_logging
from TSP.io import DEFAULT_GOAL_SCALE, dump_solution, load_problem
from TSP.registry import list_methods, run_method
from TSP.report import write_html_report

DEFAULT_METHOD = "brute_force_find_solution"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find short TSP tours with metaheuristics.",
        epilog=f"Available methods: {', '.join(list_methods())}",
    )
    g_method = parser.add_argument_group("Method")
    g_io = parser.add_argument_group("Input/Output")
    g_log = parser.add_argument_group("Logging")

    g_method.add_argument(
        "--method",
        "-m",
        default=DEFAULT_METHOD,
        help=f"Solution method (default: {DEFAULT_METHOD})",
    )
    g_method.add_argument("--seed", type=int, default=None, help="Random seed (default: OS entropy)")
    g_method.add_argument(
        "options",
        nargs="*",
        metavar="key=value",
        help="Method options, e.g. iterations=5000 population_size=40",
    )

    g_io.add_argument("--in", dest="input", default=None, help="Problem JSON file (default: stdin)")
    g_io.add_argument("--out", dest="output", default=None, help="Solution JSON file (default: stdout)")
    g_io.add_argument("--html", default=None, help="Also write an HTML report to this file")
    g_io.add_argument(
        "--goal-scale",
        type=float,
        default=DEFAULT_GOAL_SCALE,
        help=f"Divisor applied to the tour length when reporting (default: {DEFAULT_GOAL_SCALE:g})",
    )

    g_log.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    g_log.add_argument("--log-dir", default=None, help="Directory for log files (default: no file logging)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.method not in list_methods():
        parser.error(f"unknown method {args.method!r}; choose from {', '.join(list_methods())}")
    if args.goal_scale <= 0:
        parser.error("--goal-scale must be positive")
    try:
        options = parse_key_value_options(args.options)
    except ValueError as exc:
        parser.error(str(exc))
    options.setdefault("goal_scale", str(args.goal_scale))

    level = getattr(logging, args.log_level)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    logger = setup_logging("tsp", args.method, args.log_dir, level)

    seed = args.seed if args.seed is not None else int(np.random.SeedSequence().entropy % (2 ** 63))
    rng = np.random.default_rng(seed)
    logger.info("Method: %s, seed: %d, options: %s", args.method, seed, options)

    try:
        with ExitStack() as stack:
            source = stack.enter_context(open(args.input)) if args.input else sys.stdin
            problem = load_problem(source)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    start_time = time.perf_counter()
    try:
        solution = run_method(args.method, problem, options, rng)
    except ValueError as exc:
        parser.error(str(exc))
    calculation_time = time.perf_counter() - start_time

    logger.info("# method_name: %s", args.method)
    logger.info("# calculation_time: %.6f s", calculation_time)
    logger.info("# goal: %s", solution.goal() / args.goal_scale)

    with ExitStack() as stack:
        target = stack.enter_context(open(args.output, "w")) if args.output else sys.stdout
        dump_solution(solution, target, args.goal_scale)

    if args.html:
        write_html_report(solution, args.html, args.goal_scale, title=f"TSP tour ({args.method})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
