"""Tests for translation benchmarking."""

import json
import logging
from unittest.mock import patch

import pytest

from xml_text_translator.translation.benchmarks import (
    BenchmarkResult,
    BenchmarkSuite,
    TranslationBenchmark,
    summarize,
)


def make_result(name="escape_xml10", test_case="plain", elapsed_ms=10.0, error=None):
    return BenchmarkResult(
        translator_name=name,
        test_case=test_case,
        elapsed_ms=elapsed_ms,
        rss_delta_mb=1.0,
        input_length=1000,
        output_length=1500,
        error=error,
    )


class TestBenchmarkResult:
    """Tests for BenchmarkResult metrics."""

    def test_derived_metrics(self):
        """Test throughput, expansion and success."""
        result = make_result(elapsed_ms=10.0)

        assert result.success is True
        assert result.characters_per_second == 100000.0
        assert result.expansion_ratio == 1.5

    def test_error_means_failure(self):
        """Test that a recorded error marks the run as failed."""
        assert make_result(error="boom").success is False

    def test_zero_division_guards(self):
        """Test metrics with zero time and no input."""
        result = BenchmarkResult(
            translator_name="x",
            test_case="empty",
            elapsed_ms=0.0,
            rss_delta_mb=0.0,
            input_length=0,
            output_length=0,
        )

        assert result.characters_per_second == 0.0
        assert result.expansion_ratio == 0.0


class TestSummarize:
    """Tests for descriptive statistics."""

    def test_statistics(self):
        stats = summarize([10.0, 20.0, 30.0])

        assert stats["count"] == 3
        assert stats["min"] == 10.0
        assert stats["max"] == 30.0
        assert stats["mean"] == 20.0
        assert stats["median"] == 20.0
        assert stats["stdev"] == 10.0

    def test_single_value_and_empty(self):
        assert summarize([5.0])["stdev"] == 0.0
        assert summarize([]) == {}


class TestBenchmarkSuite:
    """Tests for BenchmarkSuite grouping and reporting."""

    def test_grouping(self):
        """Test grouping by translator and test case."""
        suite = BenchmarkSuite()
        suite.record(make_result("b", "one"))
        suite.record(make_result("a", "one"))
        suite.record(make_result("a", "two"))

        assert list(suite.by_translator()) == ["a", "b"]
        assert len(suite.by_translator()["a"]) == 2
        assert len(suite.by_test_case()["one"]) == 2

    def test_generate_report(self):
        """Test the report layout."""
        suite = BenchmarkSuite(name="Test Suite")
        suite.record(make_result("a", "one", elapsed_ms=10.0))
        suite.record(make_result("a", "one", elapsed_ms=30.0, error="boom"))
        suite.record(make_result("b", "two"))

        report = suite.generate_report()

        assert report["suite_name"] == "Test Suite"
        assert report["total_results"] == 3
        assert report["translators"] == ["a", "b"]
        assert report["test_cases"] == ["one", "two"]
        assert report["summary"]["a"]["runs"] == 2
        assert report["summary"]["a"]["failures"] == 1
        assert report["summary"]["a"]["success_rate"] == 0.5
        assert report["summary"]["a"]["characters_per_second"]["count"] == 1
        assert report["cases"]["one"]["a"]["median_ms"] == 20.0
        assert report["cases"]["one"]["a"]["errors"] == ["boom"]
        assert report["cases"]["two"]["b"]["expansion_ratio"] == 1.5

    def test_report_is_json_serializable(self):
        """Test that the report can be dumped as JSON."""
        suite = BenchmarkSuite()
        suite.record(make_result())
        assert json.loads(json.dumps(suite.generate_report()))["total_results"] == 1


class TestTranslationBenchmark:
    """Tests for TranslationBenchmark."""

    def test_invalid_run_counts(self):
        """Test validation of run counts."""
        with pytest.raises(ValueError, match="benchmark_runs"):
            TranslationBenchmark(benchmark_runs=0)
        with pytest.raises(ValueError, match="warmup_runs"):
            TranslationBenchmark(warmup_runs=-1)

    def test_inputs(self):
        """Test that the generated inputs are present and non-empty."""
        benchmark = TranslationBenchmark()
        assert set(benchmark.inputs) == {
            "plain_ascii",
            "markup_heavy",
            "escaped_entities",
            "supplementary",
            "control_characters",
        }
        assert all(benchmark.inputs.values())
        assert "&amp;" in benchmark.inputs["escaped_entities"]

    def test_candidates(self):
        """Test the baseline switch."""
        assert set(TranslationBenchmark.candidates(False)) == {
            "escape_xml10",
            "escape_xml11",
            "unescape_xml",
        }
        baselines = TranslationBenchmark.candidates(True)
        assert baselines["saxutils_escape"]("<'>") == "&lt;&apos;&gt;"
        assert baselines["saxutils_unescape"]("&quot;&lt;") == '"<'

    @patch.object(TranslationBenchmark, "_rss_mb", return_value=10.0)
    def test_run_without_baselines(self, mock_rss):
        """Test one timed run per translator and input."""
        benchmark = TranslationBenchmark(warmup_runs=0, benchmark_runs=1)

        suite = benchmark.run(include_baselines=False)

        assert len(suite.results) == 15
        assert all(r.success for r in suite.results)
        assert all(r.rss_delta_mb == 0.0 for r in suite.results)
        assert list(suite.by_translator()) == [
            "escape_xml10",
            "escape_xml11",
            "unescape_xml",
        ]

    @patch.object(TranslationBenchmark, "_rss_mb", return_value=10.0)
    def test_run_with_baselines(self, mock_rss):
        """Test that the saxutils baselines are timed too."""
        benchmark = TranslationBenchmark(warmup_runs=1, benchmark_runs=2)

        suite = benchmark.run()

        assert len(suite.results) == 50
        assert len(suite.by_translator()["saxutils_escape"]) == 10

    def test_failing_function_recorded(self):
        """Test that an exception becomes a failed result."""
        benchmark = TranslationBenchmark(warmup_runs=0, benchmark_runs=1)

        def broken(text):
            raise RuntimeError("boom")

        result = benchmark.measure("broken", "case", broken, "abc")

        assert result.success is False
        assert result.error == "boom"
        assert result.input_length == 3
        assert result.output_length == 0

    def test_measure_output_length(self):
        """Test that output length reflects the escaped text."""
        benchmark = TranslationBenchmark(warmup_runs=0, benchmark_runs=1)
        result = benchmark.measure("upper", "case", str.upper, "<a>")
        assert result.success is True
        assert result.output_length == 3

    @patch.object(TranslationBenchmark, "_rss_mb", return_value=10.0)
    def test_failing_warmup_does_not_end_run(self, mock_rss, caplog):
        """Test that a candidate failing during warmup is still measured."""
        caplog.set_level(logging.WARNING)

        def broken(text):
            raise RuntimeError("boom")

        benchmark = TranslationBenchmark(warmup_runs=2, benchmark_runs=1)
        with patch.object(
            TranslationBenchmark, "candidates", return_value={"broken": broken}
        ):
            suite = benchmark.run()

        assert len(suite.results) == 5
        assert not any(r.success for r in suite.results)
        assert "Warmup failed for broken" in caplog.text
