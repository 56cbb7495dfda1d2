"""
Writer stage: serializes compressed records in the order they arrive.
"""

import logging
from typing import Optional

from tqdm import tqdm

from base_classes import CompressedRecord, RecordWriter
from pipeline_errors import FormatError, InputOutputError
from pipeline_monitoring import StageMetrics
from pipeline.stages.mapping import InversionMapWriter
from pipeline.workers.channel import BoundedChannel

logger = logging.getLogger(__name__)


class WriterStage:
    """
    Drains the output channel into the output sink.

    Records are written in arrival order, which with more than one worker
    is not necessarily the input order. When a map writer is given, each
    record's (id, inversion map) pair is written right after the record.
    """

    def __init__(self,
                 channel: BoundedChannel,
                 writer: RecordWriter,
                 map_writer: Optional[InversionMapWriter] = None,
                 show_progress: bool = False,
                 name: str = "output_thread"):
        self.channel = channel
        self.writer = writer
        self.map_writer = map_writer
        self.show_progress = show_progress
        self.name = name

    def run(self) -> StageMetrics:
        metrics = StageMetrics.start(self.name)
        with tqdm(unit=' records', desc='Compressing', disable=not self.show_progress) as progress:
            for record in self.channel:
                self._write(record)
                metrics.record(bases_out=len(record.sequence))
                progress.update(1)

        try:
            self.writer.flush()
            if self.map_writer is not None:
                self.map_writer.flush()
        except OSError as e:
            raise InputOutputError("Cannot flush output", cause=e) from e

        logger.debug(f"Wrote {metrics.items_processed} records")
        return metrics.finish()

    def _write(self, record: CompressedRecord) -> None:
        try:
            self.writer.write(record.id, record.description, record.sequence)
        except OSError as e:
            raise InputOutputError(f"Cannot write fasta record {record.id}", cause=e) from e

        if self.map_writer is not None:
            if record.inversion_map is None:
                raise FormatError(f"Record {record.id} has no inversion map "
                                  f"although a map output was configured")
            self.map_writer.write(record.id, record.inversion_map)
