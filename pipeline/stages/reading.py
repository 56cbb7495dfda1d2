"""
Reader stage: parses the input and feeds records to the workers in source order.
"""

import logging

from base_classes import RecordReader
from pipeline_errors import InputOutputError
from pipeline_monitoring import StageMetrics
from pipeline.workers.channel import ChannelSender

logger = logging.getLogger(__name__)


class ReaderStage:
    """Sends every parsed record on the input channel as soon as it is read"""

    def __init__(self, reader: RecordReader, sender: ChannelSender, name: str = "input_thread"):
        self.reader = reader
        self.sender = sender
        self.name = name

    def run(self) -> StageMetrics:
        metrics = StageMetrics.start(self.name)
        try:
            for record in self.reader:
                self.sender.send(record)
                metrics.record(bases_in=len(record.sequence))
        except OSError as e:
            raise InputOutputError("Cannot read input file", cause=e) from e

        logger.debug(f"Read {metrics.items_processed} records")
        return metrics.finish()
