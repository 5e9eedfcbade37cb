"""Tests for the per-run aggregation context."""

import pytest

from wasi_bench.aggregation_context import AggregationContext
from wasi_bench.exceptions import BenchmarkConfigError
from wasi_bench.metric_sample import MetricSample
from wasi_bench.phases import PHASES

HEADER = "user_time,system_time,cpu_percent,wallclock_time,max_rss"


def _sample(wall_clock: float) -> MetricSample:
    return MetricSample(user_time=1.0, system_time=1.0, cpu_usage=50.0, wall_clock=wall_clock, max_rss=100)


class TestAggregationContext:
    """Test sink and accumulator wiring."""

    def test_open_writes_every_header(self, tmp_path):
        """Test one CSV per phase is created with exactly one header line."""
        with AggregationContext.open(tmp_path):
            pass

        for phase in PHASES:
            assert (tmp_path / phase.csv_name).read_text() == HEADER + "\n"

    def test_record_updates_csv_and_average(self, tmp_path, phase_by_name):
        inference = phase_by_name["Inference"]

        with AggregationContext.open(tmp_path) as context:
            context.record(inference, _sample(10.0))
            average = context.record(inference, _sample(20.0))

        assert average.wall_clock == pytest.approx(15.0)
        assert context.averages["Inference"].count == 2
        lines = (tmp_path / "inference.csv").read_text().splitlines()
        assert lines[1:] == ["1.000,1.000,50.00%,10.000,100", "1.000,1.000,50.00%,20.000,100"]

    def test_record_all_counts_samples(self, tmp_path, phase_by_name):
        with AggregationContext.open(tmp_path) as context:
            recorded = context.record_all(
                [(phase_by_name["Load Model"], _sample(1.0)), (phase_by_name["Total"], _sample(2.0))]
            )

        assert recorded == 2
        assert context.rows_written()["Load Model"] == 1
        assert context.rows_written()["Inference"] == 0

    def test_close_closes_sinks(self, tmp_path):
        context = AggregationContext.open(tmp_path)

        context.close()

        assert all(sink.closed for sink in context.sinks.values())

    def test_header_write_failure(self, tmp_path, monkeypatch):
        """Test a header that cannot be written closes the sinks and is a configuration error."""
        opened = []

        def failing_writer(handle, **kwargs):
            opened.append(handle)
            return FailingWriter()

        monkeypatch.setattr("wasi_bench.csv_sink.csv.writer", failing_writer)

        with pytest.raises(BenchmarkConfigError):
            AggregationContext.open(tmp_path)

        assert len(opened) == len(PHASES)
        assert all(handle.closed for handle in opened)

    def test_open_failure(self, tmp_path):
        """Test a missing run directory is a configuration error."""
        with pytest.raises(BenchmarkConfigError):
            AggregationContext.open(tmp_path / "does-not-exist")


class FailingWriter:
    """csv writer stand-in whose writes fail with an I/O error."""

    def writerow(self, row):
        raise OSError(5, "Input/output error")
