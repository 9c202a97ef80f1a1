"""Throughput benchmarks for the XML translation presets.

Each preset is run over a handful of generated inputs and timed; resident
memory growth is sampled with psutil. The standard library's
``xml.sax.saxutils`` helpers are measured alongside as a baseline.
"""

import gc
import statistics
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict, Dict, List, Optional
from xml.sax.saxutils import escape as sax_escape
from xml.sax.saxutils import unescape as sax_unescape

import psutil

from ..shared import get_logger
from .presets import ESCAPE_XML10, ESCAPE_XML11, UNESCAPE_XML

# saxutils only handles &, < and > unless given extra entities
_SAX_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_SAX_UNENTITIES = {"&quot;": '"', "&apos;": "'"}

_MB = 1024 * 1024


@dataclass(frozen=True)
class BenchmarkResult:
    """One timed translation of one input."""

    translator_name: str
    test_case: str
    elapsed_ms: float
    rss_delta_mb: float
    input_length: int
    output_length: int
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def characters_per_second(self) -> float:
        """Input characters translated per second, 0.0 if nothing was timed."""
        if self.elapsed_ms <= 0:
            return 0.0
        return self.input_length * 1000.0 / self.elapsed_ms

    @property
    def expansion_ratio(self) -> float:
        """Output length relative to input length."""
        if self.input_length <= 0:
            return 0.0
        return self.output_length / self.input_length


def summarize(values: List[float]) -> Dict[str, float]:
    """Descriptive statistics for a list of measurements; empty if no values."""
    if not values:
        return {}
    return {
        "count": len(values),
        "min": min(values),
        "max": max(values),
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "stdev": statistics.stdev(values) if len(values) > 1 else 0.0,
    }


@dataclass
class BenchmarkSuite:
    """Results of a benchmark run, grouped for reporting."""

    name: str = "Translation Benchmark"
    results: List[BenchmarkResult] = field(default_factory=list)
    started_at: float = field(default_factory=time.time)

    def record(self, result: BenchmarkResult) -> None:
        self.results.append(result)

    def by_translator(self) -> Dict[str, List[BenchmarkResult]]:
        grouped: DefaultDict[str, List[BenchmarkResult]] = defaultdict(list)
        for result in self.results:
            grouped[result.translator_name].append(result)
        return dict(sorted(grouped.items()))

    def by_test_case(self) -> Dict[str, List[BenchmarkResult]]:
        grouped: DefaultDict[str, List[BenchmarkResult]] = defaultdict(list)
        for result in self.results:
            grouped[result.test_case].append(result)
        return dict(sorted(grouped.items()))

    def generate_report(self) -> Dict[str, Any]:
        """Build a JSON-serializable report.

        ``summary`` holds per-translator throughput and memory statistics over
        successful runs. ``cases`` holds the median time and the expansion
        ratio of every translator on every input.
        """
        summary: Dict[str, Any] = {}
        for name, runs in self.by_translator().items():
            passed = [r for r in runs if r.success]
            summary[name] = {
                "runs": len(runs),
                "failures": len(runs) - len(passed),
                "success_rate": len(passed) / len(runs),
                "characters_per_second": summarize(
                    [r.characters_per_second for r in passed]
                ),
                "rss_delta_mb": summarize([r.rss_delta_mb for r in passed]),
            }

        cases: Dict[str, Dict[str, Any]] = {}
        for test_case, runs in self.by_test_case().items():
            per_translator: DefaultDict[str, List[BenchmarkResult]] = defaultdict(list)
            for result in runs:
                per_translator[result.translator_name].append(result)
            cases[test_case] = {
                name: {
                    "median_ms": statistics.median(r.elapsed_ms for r in group),
                    "expansion_ratio": group[0].expansion_ratio,
                    "errors": sorted({r.error for r in group if r.error}),
                }
                for name, group in sorted(per_translator.items())
            }

        return {
            "suite_name": self.name,
            "started_at": self.started_at,
            "total_results": len(self.results),
            "translators": list(summary),
            "test_cases": list(cases),
            "summary": summary,
            "cases": cases,
        }


class TranslationBenchmark:
    """Times the XML presets, optionally against saxutils baselines."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        warmup_runs: int = 1,
        benchmark_runs: int = 5
    ) -> None:
        """Initialize benchmark.

        Args:
            correlation_id: Optional correlation ID for the benchmark logs
            warmup_runs: Untimed runs per translator and input
            benchmark_runs: Timed runs per translator and input
        """
        if warmup_runs < 0:
            raise ValueError("warmup_runs must be >= 0")
        if benchmark_runs <= 0:
            raise ValueError("benchmark_runs must be > 0")
        self.warmup_runs = warmup_runs
        self.benchmark_runs = benchmark_runs
        self.logger = get_logger(__name__, correlation_id, "benchmark")
        self.inputs = self._generate_inputs()
        self._process = psutil.Process()

    @staticmethod
    def _generate_inputs() -> Dict[str, str]:
        prose = "The quick brown fox jumps over the lazy dog. " * 20
        markup = '<item id="42" note=\'a & b\'>x &lt; y</item>\n' * 50
        return {
            "plain_ascii": prose,
            "markup_heavy": markup,
            "escaped_entities": ESCAPE_XML10.translate(markup) or "",
            "supplementary": "Emoji \U0001F600 and \U0001D11E clefs. " * 40,
            "control_characters": "bell\x07 tab\t del\x7f nel\x85 c1\x90 " * 40,
        }

    @staticmethod
    def candidates(include_baselines: bool = True) -> Dict[str, Callable[[str], str]]:
        """Functions to time, keyed by report name."""
        functions: Dict[str, Callable[[str], str]] = {
            "escape_xml10": lambda text: ESCAPE_XML10.translate(text) or "",
            "escape_xml11": lambda text: ESCAPE_XML11.translate(text) or "",
            "unescape_xml": lambda text: UNESCAPE_XML.translate(text) or "",
        }
        if include_baselines:
            functions["saxutils_escape"] = lambda text: sax_escape(text, _SAX_ENTITIES)
            functions["saxutils_unescape"] = (
                lambda text: sax_unescape(text, _SAX_UNENTITIES)
            )
        return functions

    def _rss_mb(self) -> float:
        return self._process.memory_info().rss / _MB

    def measure(
        self, name: str, test_case: str, func: Callable[[str], str], text: str
    ) -> BenchmarkResult:
        """Time one call of ``func``; an exception is recorded, not raised."""
        gc.collect()
        rss_before = self._rss_mb()
        error = None
        output = ""
        start = time.perf_counter()
        try:
            output = func(text)
        except Exception as e:  # a broken candidate must not end the run
            error = str(e) or type(e).__name__
            self.logger.warning(
                f"Benchmark run failed for {name}",
                extra={"test_case": test_case, "error": error},
            )
        elapsed_ms = (time.perf_counter() - start) * 1000

        return BenchmarkResult(
            translator_name=name,
            test_case=test_case,
            elapsed_ms=elapsed_ms,
            rss_delta_mb=max(0.0, self._rss_mb() - rss_before),
            input_length=len(text),
            output_length=len(output),
            error=error,
        )

    def _warm_up(
        self, name: str, test_case: str, func: Callable[[str], str], text: str
    ) -> None:
        for _ in range(self.warmup_runs):
            try:
                func(text)
            except Exception as e:  # the timed runs record the failure
                self.logger.warning(
                    f"Warmup failed for {name}",
                    extra={"test_case": test_case, "error": str(e)},
                )
                return

    def run(self, include_baselines: bool = True) -> BenchmarkSuite:
        """Time every candidate on every input."""
        suite = BenchmarkSuite()
        functions = self.candidates(include_baselines)
        self.logger.info(
            "Starting translation benchmark",
            extra={
                "translators": sorted(functions),
                "test_cases": sorted(self.inputs),
                "runs": self.benchmark_runs,
            },
        )

        for test_case, text in self.inputs.items():
            for name, func in functions.items():
                self._warm_up(name, test_case, func, text)
                for _ in range(self.benchmark_runs):
                    suite.record(self.measure(name, test_case, func, text))

        self.logger.info(
            "Translation benchmark complete",
            extra={"total_results": len(suite.results)},
        )
        return suite
