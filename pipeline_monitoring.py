"""
Pipeline Monitoring
===================

Per-stage metrics for the homopolymer compression pipeline. Each stage owns
its StageMetrics while it runs and hands it back through the supervisor once
it has finished, so no metric is ever shared between running threads.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

import psutil

logger = logging.getLogger(__name__)


def current_rss() -> int:
    """Resident set size of this process in bytes"""
    return psutil.Process().memory_info().rss


@dataclass
class StageMetrics:
    """Metrics for a pipeline stage"""
    stage_name: str
    start_time: float
    end_time: Optional[float] = None
    items_processed: int = 0
    bases_in: int = 0
    bases_out: int = 0
    memory_start: int = 0
    memory_peak: int = 0

    @classmethod
    def start(cls, stage_name: str) -> 'StageMetrics':
        rss = current_rss()
        return cls(stage_name=stage_name, start_time=time.time(),
                   memory_start=rss, memory_peak=rss)

    def finish(self) -> 'StageMetrics':
        self.end_time = time.time()
        self.memory_peak = max(self.memory_peak, current_rss())
        return self

    def record(self, bases_in: int = 0, bases_out: int = 0) -> None:
        self.items_processed += 1
        self.bases_in += bases_in
        self.bases_out += bases_out

    @property
    def duration(self) -> float:
        if self.end_time:
            return self.end_time - self.start_time
        return time.time() - self.start_time

    @property
    def throughput_items_per_sec(self) -> float:
        if self.duration > 0:
            return self.items_processed / self.duration
        return 0.0


class PipelineMonitor:
    """Aggregates the metrics of finished stages into a run summary"""

    def __init__(self):
        self.stage_metrics: Dict[str, StageMetrics] = {}

    def collect(self, metrics: Iterable[StageMetrics]) -> None:
        for stage in metrics:
            self.stage_metrics[stage.stage_name] = stage

    def _stages(self, prefix: str) -> List[StageMetrics]:
        return [m for name, m in self.stage_metrics.items() if name.startswith(prefix)]

    def summary(self) -> Dict[str, Any]:
        """
        Summarize the run.

        Returns:
            Dictionary with record counts per stage kind, base counts and
            the compression ratio
        """
        readers = self._stages('input')
        workers = self._stages('compute')
        writers = self._stages('output')

        bases_in = sum(m.bases_in for m in workers)
        bases_out = sum(m.bases_out for m in workers)
        reduction = (1 - bases_out / bases_in) * 100 if bases_in else 0.0

        return {
            'records_read': sum(m.items_processed for m in readers),
            'records_compressed': sum(m.items_processed for m in workers),
            'records_written': sum(m.items_processed for m in writers),
            'records_per_worker': {m.stage_name: m.items_processed for m in workers},
            'bases_in': bases_in,
            'bases_out': bases_out,
            'reduction_percent': reduction,
            'duration': max((m.duration for m in self.stage_metrics.values()), default=0.0),
            'memory_peak': max((m.memory_peak for m in self.stage_metrics.values()), default=0),
        }

    def log_summary(self) -> Dict[str, Any]:
        summary = self.summary()
        logger.info(f"Compression complete: {summary['bases_in']} -> {summary['bases_out']} bases "
                    f"({summary['reduction_percent']:.1f}% reduction), "
                    f"{summary['records_written']} records written in {summary['duration']:.2f}s")
        logger.debug(f"Records per worker: {summary['records_per_worker']}")
        return summary
