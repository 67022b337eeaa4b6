"""
Classic Sort Benchmark - Core Module
====================================

Contains: configuration, errors, dataset generator, sorting strategies,
statistics, benchmark engine, ranking, and console report output.
"""

from __future__ import annotations
import gc, logging, platform, statistics, sys, time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from functools import reduce
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from contextlib import contextmanager

import numpy as np

from classic_sorts import bubble_sort, first_inversion, insertion_sort, selection_sort

logger = logging.getLogger(__name__)

# =============================================================================
# Errors
# =============================================================================

class BenchmarkError(Exception):
    """Base class for benchmark errors."""


class InvalidConfiguration(BenchmarkError, ValueError):
    """Raised before any timing starts when an input parameter is unusable."""


# =============================================================================
# Configuration
# =============================================================================

_INT64 = np.iinfo(np.int64)


def _check_value_range(low, high):
    if low > high:
        raise InvalidConfiguration(f"empty value range [{low}, {high}]")
    if low < _INT64.min or high > _INT64.max:
        raise InvalidConfiguration(
            f"value range [{low}, {high}] does not fit in int64 [{_INT64.min}, {_INT64.max}]")


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    Fixed parameters of a benchmark run.

    dataset_size:    elements per trial
    iterations:      trials per algorithm
    value_low/high:  inclusive bounds of the random values
    seed:            None draws fresh OS entropy for every run
    gc_between_runs: pause the garbage collector while a trial is timed
    progress_width:  progress bar cells
    """
    dataset_size: int = 1000
    iterations: int = 5
    value_low: int = 1
    value_high: int = 10000
    seed: Optional[int] = None
    gc_between_runs: bool = True
    progress_width: int = 50

    def __post_init__(self):
        if self.iterations < 1:
            raise InvalidConfiguration(f"iterations must be >= 1, got {self.iterations}")
        if self.dataset_size < 0:
            raise InvalidConfiguration(f"dataset_size must be >= 0, got {self.dataset_size}")
        _check_value_range(self.value_low, self.value_high)
        if self.seed is not None and self.seed < 0:
            raise InvalidConfiguration(f"seed must be >= 0, got {self.seed}")
        if self.progress_width < 1:
            raise InvalidConfiguration(f"progress_width must be >= 1, got {self.progress_width}")


class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        for a in ['HEADER', 'BLUE', 'CYAN', 'GREEN', 'YELLOW', 'RED', 'BOLD', 'END']:
            setattr(cls, a, '')

if not sys.stdout.isatty():
    Colors.disable()

# =============================================================================
# Dataset Generator
# =============================================================================

class DatasetGenerator:
    """Uniform random integers over an inclusive range."""

    def __init__(self, low: int = 1, high: int = 10000, seed: Optional[int] = None):
        _check_value_range(low, high)
        self.low = low
        self.high = high
        # default_rng(None) pulls fresh entropy from the OS
        try:
            self._rng = np.random.default_rng(seed)
        except (TypeError, ValueError) as e:
            raise InvalidConfiguration(f"unusable seed {seed!r}: {e}") from e

    def generate(self, size: int) -> List[int]:
        if size < 0:
            raise InvalidConfiguration(f"dataset size must be >= 0, got {size}")
        return self._rng.integers(self.low, self.high, size=size, endpoint=True).tolist()


# =============================================================================
# Sorting Strategies
# =============================================================================

class SortStrategy(ABC):
    @property
    @abstractmethod
    def key(self) -> str: pass

    @property
    @abstractmethod
    def name(self) -> str: pass

    @property
    @abstractmethod
    def description(self) -> str: pass

    best_case = "O(n^2)"
    worst_case = "O(n^2)"

    @abstractmethod
    def sort(self, data: List[int]) -> None:
        """Sort data in place into non-decreasing order."""

    def __call__(self, data):
        return self.sort(data)

    def __repr__(self):
        return f"{type(self).__name__}()"


class BubbleSort(SortStrategy):
    key = "bubble"
    name = "Bubble Sort"
    description = "Adjacent swaps, stops on the first pass without a swap"
    best_case = "O(n)"
    def sort(self, data):
        bubble_sort(data)

class SelectionSort(SortStrategy):
    key = "selection"
    name = "Selection Sort"
    description = "Moves the suffix minimum into a growing sorted prefix"
    def sort(self, data):
        selection_sort(data)

class InsertionSort(SortStrategy):
    key = "insertion"
    name = "Insertion Sort"
    description = "Shifts larger predecessors right and inserts the key"
    best_case = "O(n)"
    def sort(self, data):
        insertion_sort(data)


SORT_STRATEGIES: Dict[str, SortStrategy] = {s.key: s for s in [
    BubbleSort(), SelectionSort(), InsertionSort()
]}


def get_strategies(keys: Optional[Iterable[str]] = None) -> List[SortStrategy]:
    """Return the selected strategies in evaluation (registry) order."""
    if keys is None:
        return list(SORT_STRATEGIES.values())
    if isinstance(keys, str):
        keys = [keys]
    wanted = set(keys)
    unknown = wanted - set(SORT_STRATEGIES)
    if unknown:
        raise InvalidConfiguration(
            f"unknown algorithm(s): {', '.join(sorted(unknown))}; "
            f"choose from {', '.join(SORT_STRATEGIES)}")
    if not wanted:
        raise InvalidConfiguration("no algorithms selected")
    return [s for k, s in SORT_STRATEGIES.items() if k in wanted]


# =============================================================================
# Statistics
# =============================================================================

def _accumulate(acc: Tuple[float, float, float], x: float) -> Tuple[float, float, float]:
    total, lo, hi = acc
    return (total + x, min(lo, x), max(hi, x))


@dataclass(frozen=True)
class Statistics:
    n: int
    mean: float
    min_val: float
    max_val: float
    median: float
    std_dev: float
    raw_values: Tuple[float, ...] = field(default=(), repr=False)

    @classmethod
    def from_samples(cls, samples: Sequence[float]) -> "Statistics":
        """
        Aggregate non-negative durations.

        Sum, min and max come from a single reduce; min starts at the
        largest float and max at zero so one sample is enough.
        """
        if not samples:
            raise InvalidConfiguration("cannot aggregate zero samples")
        n = len(samples)
        total, lo, hi = reduce(_accumulate, samples, (0.0, sys.float_info.max, 0.0))
        # rounding in the sum can push the mean a hair outside [lo, hi]
        mean = min(max(total / n, lo), hi)
        return cls(n=n, mean=mean, min_val=lo, max_val=hi,
                   median=statistics.median(samples),
                   std_dev=statistics.stdev(samples) if n > 1 else 0.0,
                   raw_values=tuple(samples))


# =============================================================================
# Result Types
# =============================================================================

@dataclass(frozen=True)
class PerformanceMetrics:
    algorithm: str
    stats: Statistics
    correct: bool
    failed_trials: int
    iterations: int
    dataset_size: int

    @property
    def mean_ms(self) -> float:
        return self.stats.mean

    @property
    def min_ms(self) -> float:
        return self.stats.min_val

    @property
    def max_ms(self) -> float:
        return self.stats.max_val

    @property
    def samples_ms(self) -> Tuple[float, ...]:
        return self.stats.raw_values

    def to_dict(self):
        return {
            "algorithm": self.algorithm,
            "correct": self.correct,
            "failed_trials": self.failed_trials,
            "iterations": self.iterations,
            "dataset_size": self.dataset_size,
            "stats": {
                "mean_ms": self.stats.mean,
                "min_ms": self.stats.min_val,
                "max_ms": self.stats.max_val,
                "median_ms": self.stats.median,
                "std_dev_ms": self.stats.std_dev,
            }
        }


@dataclass(frozen=True)
class RankedResult:
    metrics: PerformanceMetrics
    ratio: float
    is_optimal: bool

    def to_dict(self):
        d = self.metrics.to_dict()
        d.update({"ratio": self.ratio, "optimal": self.is_optimal})
        return d


@dataclass(frozen=True)
class RankingReport:
    entries: Tuple[RankedResult, ...]
    optimal: PerformanceMetrics

    @property
    def all_correct(self) -> bool:
        return all(e.metrics.correct for e in self.entries)

    def to_dict(self):
        return {
            "optimal": self.optimal.algorithm,
            "optimal_mean_ms": self.optimal.mean_ms,
            "results": [e.to_dict() for e in self.entries],
        }


# =============================================================================
# Benchmark Engine
# =============================================================================

TrialCallback = Callable[[int, int], None]


class BenchmarkEngine:
    def __init__(self, config: BenchmarkConfig = BenchmarkConfig(),
                 generator: Optional[DatasetGenerator] = None):
        self.config = config
        self.generator = generator or DatasetGenerator(
            config.value_low, config.value_high, seed=config.seed)

    @contextmanager
    def _gc_pause(self):
        if self.config.gc_between_runs:
            gc.collect()
            gc.disable()
        try:
            yield
        finally:
            if self.config.gc_between_runs:
                gc.enable()

    def time_once(self, strategy: SortStrategy, data: List[int]) -> float:
        """Sort data in place and return the elapsed wall time in ms."""
        with self._gc_pause():
            t0 = time.perf_counter()
            strategy.sort(data)
            t1 = time.perf_counter()
        return (t1 - t0) * 1000.0

    def measure(self, strategy: SortStrategy, iterations: Optional[int] = None,
                dataset_size: Optional[int] = None,
                on_trial: Optional[TrialCallback] = None) -> PerformanceMetrics:
        iterations = self.config.iterations if iterations is None else iterations
        dataset_size = self.config.dataset_size if dataset_size is None else dataset_size
        if iterations < 1:
            raise InvalidConfiguration(f"iterations must be >= 1, got {iterations}")
        if dataset_size < 0:
            raise InvalidConfiguration(f"dataset_size must be >= 0, got {dataset_size}")

        logger.info("measuring %s: %d iterations x %d elements",
                    strategy.name, iterations, dataset_size)
        times = []
        failed = 0
        for i in range(iterations):
            data = self.generator.generate(dataset_size)
            elapsed = self.time_once(strategy, data)
            times.append(elapsed)
            bad = first_inversion(data)
            if bad is not None:
                failed += 1
                logger.warning("%s trial %d/%d not sorted: a[%d]=%d > a[%d]=%d",
                               strategy.name, i + 1, iterations,
                               bad, data[bad], bad + 1, data[bad + 1])
            logger.debug("%s trial %d/%d: %.3f ms", strategy.name, i + 1, iterations, elapsed)
            if on_trial is not None:
                on_trial(i + 1, iterations)

        metrics = PerformanceMetrics(
            algorithm=strategy.name,
            stats=Statistics.from_samples(times),
            correct=failed == 0,
            failed_trials=failed,
            iterations=iterations,
            dataset_size=dataset_size,
        )
        logger.info("%s done: mean %.3f ms, min %.3f ms, max %.3f ms, correct=%s",
                    metrics.algorithm, metrics.mean_ms, metrics.min_ms,
                    metrics.max_ms, metrics.correct)
        return metrics

    def run_all(self, strategies: Sequence[SortStrategy],
                on_start: Optional[Callable[[SortStrategy], None]] = None,
                on_trial: Optional[TrialCallback] = None) -> List[PerformanceMetrics]:
        """Measure each strategy in turn, preserving order."""
        results = []
        for strategy in strategies:
            if on_start is not None:
                on_start(strategy)
            results.append(self.measure(strategy, on_trial=on_trial))
        return results


# =============================================================================
# Ranking
# =============================================================================

def rank(metrics: Sequence[PerformanceMetrics]) -> RankingReport:
    """
    Rank records against the one with the lowest mean time.

    Ties go to the earliest record. Each ratio is mean / optimal mean, so
    the optimal record gets exactly 1.0. With an optimal mean of zero, other
    zero-mean records get 1.0 and the rest get inf.
    """
    if not metrics:
        raise InvalidConfiguration("cannot rank an empty metrics collection")
    best = min(range(len(metrics)), key=lambda i: metrics[i].mean_ms)
    optimal = metrics[best]

    entries = []
    for i, m in enumerate(metrics):
        if i == best:
            ratio = 1.0
        elif optimal.mean_ms > 0:
            ratio = m.mean_ms / optimal.mean_ms
        else:
            ratio = 1.0 if m.mean_ms == 0 else float('inf')
        entries.append(RankedResult(m, ratio, i == best))

    logger.info("optimal algorithm: %s (%.3f ms)", optimal.algorithm, optimal.mean_ms)
    return RankingReport(entries=tuple(entries), optimal=optimal)


# =============================================================================
# Formatting & Output
# =============================================================================

def fmt_ms(t):
    """Format a millisecond duration with appropriate units."""
    if t == float('inf'):
        return "inf"
    if t < 1e-3:
        return f"{t*1e6:.1f}ns"
    if t < 1:
        return f"{t*1e3:.1f}us"
    if t < 1000:
        return f"{t:.3f}ms"
    return f"{t/1000:.3f}s"


def fmt_ratio(r):
    return "-" if r == float('inf') else f"{r:.2f}x"


def get_system_info():
    """Gather system information for the run banner."""
    return {
        "timestamp": datetime.now().isoformat(),
        "python_version": sys.version,
        "platform": platform.platform(),
        "machine": platform.machine(),
        "numpy_version": np.__version__,
    }


def print_header(text):
    print(f"\n{Colors.BOLD}{Colors.HEADER}{'='*70}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{text.center(70)}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{'='*70}{Colors.END}\n")


def print_subheader(text):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{text}{Colors.END}")
    print(f"{Colors.CYAN}{'-'*len(text)}{Colors.END}")


def print_progress(current, total, width=50):
    """Redraw a single-line progress bar in place."""
    frac = current / total if total else 1.0
    filled = int(frac * width)
    bar = "█" * filled + "░" * (width - filled)
    end = "\n" if current >= total else ""
    print(f"\r  [{bar}] {frac*100:5.1f}%", end=end, flush=True)


def print_metrics(m: PerformanceMetrics):
    """Print the detail block for one algorithm."""
    status = f"{Colors.GREEN}PASSED{Colors.END}" if m.correct else \
        f"{Colors.RED}FAILED ({m.failed_trials}/{m.iterations} trials){Colors.END}"
    print(f"  Average: {fmt_ms(m.mean_ms):>12}")
    print(f"  Minimum: {fmt_ms(m.min_ms):>12}")
    print(f"  Maximum: {fmt_ms(m.max_ms):>12}")
    print(f"  Std dev: {fmt_ms(m.stats.std_dev):>12}")
    print(f"  Correctness: {status}")


def print_ranking_table(report: RankingReport):
    """Print the comparison table in evaluation order."""
    hdr = f"{'Algorithm':<18} {'Mean':>12} {'Min':>12} {'Max':>12} {'vs Best':>10} {'Status':>8}"
    print(f"{Colors.BOLD}{hdr}{Colors.END}")
    print("-" * len(hdr))

    for e in report.entries:
        m = e.metrics
        if e.ratio <= 1.1:
            clr = Colors.GREEN
        elif e.ratio <= 2:
            clr = Colors.YELLOW
        else:
            clr = Colors.RED
        status = f"{Colors.GREEN}OK{Colors.END}" if m.correct else f"{Colors.RED}FAIL{Colors.END}"
        print(f"{m.algorithm:<18} {fmt_ms(m.mean_ms):>12} {fmt_ms(m.min_ms):>12} "
              f"{fmt_ms(m.max_ms):>12} {clr}{fmt_ratio(e.ratio):>10}{Colors.END} {status:>8}")


def print_summary(report: RankingReport):
    best = report.optimal
    print(f"{Colors.BOLD}Optimal algorithm:{Colors.END} {Colors.GREEN}{best.algorithm}{Colors.END} "
          f"({fmt_ms(best.mean_ms)} average)")


def print_relative_performance(report: RankingReport):
    print_subheader("Relative Performance")
    for e in report.entries:
        tag = " (optimal)" if e.is_optimal else ""
        print(f"  - {e.metrics.algorithm}: {fmt_ratio(e.ratio)} slower than optimal{tag}")
