"""
Worker pool compressing records between the input and output channels.
"""

import logging
from typing import List, Optional

from pipeline_configs import DEFAULT_NUM_WORKERS
from pipeline_monitoring import StageMetrics
from pipeline.stages.compression import compress_record
from pipeline.workers.channel import BoundedChannel, ChannelSender
from pipeline.workers.supervisor import StageSupervisor

logger = logging.getLogger(__name__)


class CompressionWorker:
    """Receives one record at a time, compresses it and sends the result on"""

    def __init__(self,
                 input_channel: BoundedChannel,
                 sender: ChannelSender,
                 with_map: bool = False,
                 name: str = "compute_thread_0"):
        self.input_channel = input_channel
        self.sender = sender
        self.with_map = with_map
        self.name = name

    def run(self) -> StageMetrics:
        metrics = StageMetrics.start(self.name)
        for record in self.input_channel:
            compressed = compress_record(record, with_map=self.with_map)
            self.sender.send(compressed)
            metrics.record(bases_in=len(record.sequence), bases_out=len(compressed.sequence))
        return metrics.finish()


class ParallelProcessor:
    """
    Pool of N interchangeable compression workers.

    Workers pull from the shared input channel, so whichever worker is idle
    takes the next record; there is no ordering between their outputs.
    Each worker owns its own sender of the output channel, which the
    supervisor closes when the worker exits; the writer therefore sees
    end-of-stream only after the last worker is done.
    """

    def __init__(self, num_workers: Optional[int] = None, with_map: bool = False):
        self.num_workers = DEFAULT_NUM_WORKERS if num_workers is None else num_workers
        if self.num_workers <= 0:
            raise ValueError("num_workers must be positive")
        self.with_map = with_map
        self.workers: List[CompressionWorker] = []

    def spawn(self,
              supervisor: StageSupervisor,
              input_channel: BoundedChannel,
              output_channel: BoundedChannel) -> List[CompressionWorker]:
        """Register one thread per worker with the supervisor."""
        for worker_id in range(self.num_workers):
            sender = output_channel.open_sender()
            worker = CompressionWorker(
                input_channel=input_channel,
                sender=sender,
                with_map=self.with_map,
                name=f"compute_thread_{worker_id}"
            )
            supervisor.spawn(worker.name, worker.run, senders=[sender])
            self.workers.append(worker)

        logger.debug(f"Spawned {self.num_workers} compression workers (map={self.with_map})")
        return self.workers
