"""
Unit tests for pipeline monitoring.
"""

from unittest.mock import patch

from pipeline_monitoring import PipelineMonitor, StageMetrics


class TestStageMetrics:
    """Test StageMetrics"""

    def test_record_and_finish(self):
        """Test counters and timing of a finished stage"""
        metrics = StageMetrics.start("compute_thread_0")
        metrics.record(bases_in=10, bases_out=4)
        metrics.record(bases_in=5, bases_out=5)
        metrics.finish()

        assert metrics.items_processed == 2
        assert metrics.bases_in == 15
        assert metrics.bases_out == 9
        assert metrics.end_time is not None
        assert metrics.duration >= 0
        assert metrics.memory_peak >= metrics.memory_start > 0

    def test_throughput_without_duration(self):
        """Test throughput is zero when no time has passed"""
        metrics = StageMetrics(stage_name="input_thread", start_time=100.0, end_time=100.0)
        assert metrics.throughput_items_per_sec == 0.0

    @patch('pipeline_monitoring.current_rss', return_value=2048)
    def test_memory_sampling(self, mock_rss):
        """Test memory is sampled when the stage starts and finishes"""
        metrics = StageMetrics.start("output_thread")
        metrics.finish()

        assert metrics.memory_start == 2048
        assert metrics.memory_peak == 2048
        assert mock_rss.call_count == 2


class TestPipelineMonitor:
    """Test PipelineMonitor"""

    def test_summary(self):
        """Test stage metrics are aggregated by stage kind"""
        reader = StageMetrics(stage_name="input_thread", start_time=0.0, end_time=2.0,
                              items_processed=3, bases_in=40)
        worker_0 = StageMetrics(stage_name="compute_thread_0", start_time=0.0, end_time=1.0,
                                items_processed=2, bases_in=30, bases_out=12)
        worker_1 = StageMetrics(stage_name="compute_thread_1", start_time=0.0, end_time=1.5,
                                items_processed=1, bases_in=10, bases_out=8)
        writer = StageMetrics(stage_name="output_thread", start_time=0.0, end_time=2.5,
                              items_processed=3, bases_out=20)

        monitor = PipelineMonitor()
        monitor.collect([reader, worker_0, worker_1, writer])
        summary = monitor.log_summary()

        assert summary['records_read'] == 3
        assert summary['records_compressed'] == 3
        assert summary['records_written'] == 3
        assert summary['records_per_worker'] == {'compute_thread_0': 2, 'compute_thread_1': 1}
        assert summary['bases_in'] == 40
        assert summary['bases_out'] == 20
        assert summary['reduction_percent'] == 50.0
        assert summary['duration'] == 2.5

    def test_empty_summary(self):
        """Test a run without records reports no reduction"""
        summary = PipelineMonitor().summary()

        assert summary['records_written'] == 0
        assert summary['reduction_percent'] == 0.0
