#!/usr/bin/env python3
"""
Classic Sort Benchmark - Main Runner
====================================

Times bubble, selection and insertion sort on random integer datasets
and ranks them by mean execution time.

Usage:
    python benchmark_sorts.py
    python benchmark_sorts.py --n 2000 --runs 10
    python benchmark_sorts.py --algorithms insertion selection --seed 7
    python benchmark_sorts.py --quiet --log-level DEBUG
"""

import argparse
import logging
import sys

from benchmark_core import (
    BenchmarkConfig, BenchmarkEngine, InvalidConfiguration,
    SORT_STRATEGIES, get_strategies, get_system_info, rank,
    print_header, print_subheader, print_progress, print_metrics,
    print_ranking_table, print_relative_performance, print_summary,
    Colors,
)

logger = logging.getLogger(__name__)


def run_benchmark(engine: BenchmarkEngine, strategies: list, quiet: bool = False):
    """Measure every strategy and return the metrics in evaluation order."""
    width = engine.config.progress_width

    def on_start(strategy):
        if not quiet:
            print_subheader(f"Analyzing {strategy.name}")
            print(f"  {strategy.description}")
            print(f"  best {strategy.best_case}, worst {strategy.worst_case}\n")

    def on_trial(done, total):
        if not quiet:
            print_progress(done, total, width)

    results = engine.run_all(strategies, on_start=on_start, on_trial=on_trial)

    if not quiet:
        for m in results:
            print_subheader(f"Algorithm: {m.algorithm}")
            print_metrics(m)
    return results


def build_parser():
    defaults = BenchmarkConfig()
    parser = argparse.ArgumentParser(
        description="Classic Sort Benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                   Default run (1000 elements, 5 runs)
  %(prog)s --n 2000 --runs 10                Bigger datasets, more trials
  %(prog)s --algorithms insertion bubble     Compare a subset
  %(prog)s --seed 7                          Reproducible datasets
        """
    )
    parser.add_argument("--n", type=int, default=defaults.dataset_size,
                        help=f"Elements per dataset (default: {defaults.dataset_size})")
    parser.add_argument("--runs", type=int, default=defaults.iterations,
                        help=f"Trials per algorithm (default: {defaults.iterations})")
    parser.add_argument("--low", type=int, default=defaults.value_low,
                        help=f"Smallest random value (default: {defaults.value_low})")
    parser.add_argument("--high", type=int, default=defaults.value_high,
                        help=f"Largest random value (default: {defaults.value_high})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: fresh entropy each run)")
    parser.add_argument("--algorithms", nargs="+", choices=list(SORT_STRATEGIES.keys()),
                        default=None, help="Algorithms to run (default: all)")
    parser.add_argument("--no-gc-pause", action="store_true",
                        help="Leave the garbage collector running while timing")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level (default: WARNING)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BenchmarkConfig(
            dataset_size=args.n,
            iterations=args.runs,
            value_low=args.low,
            value_high=args.high,
            seed=args.seed,
            gc_between_runs=not args.no_gc_pause,
        )
        strategies = get_strategies(args.algorithms)
        engine = BenchmarkEngine(config)
    except InvalidConfiguration as e:
        parser.error(str(e))

    if not args.quiet:
        info = get_system_info()
        print_header("Classic Sort Benchmark")
        print(f"  Python {info['python_version'].split()[0]} | NumPy {info['numpy_version']}")
        print(f"  Dataset: {config.dataset_size} elements in [{config.value_low}, {config.value_high}]")
        print(f"  Iterations: {config.iterations} per algorithm")

    try:
        results = run_benchmark(engine, strategies, args.quiet)
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Interrupted.{Colors.END}")
        return 130

    report = rank(results)

    if not args.quiet:
        print_header("Performance Summary")
        print_ranking_table(report)
        print_relative_performance(report)
        print()
    print_summary(report)

    if not report.all_correct:
        failed = [e.metrics.algorithm for e in report.entries if not e.metrics.correct]
        logger.warning("output validation failed for: %s", ", ".join(failed))

    if not args.quiet:
        print(f"\n{Colors.CYAN}Benchmark complete.{Colors.END}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
