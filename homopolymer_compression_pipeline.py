"""
Homopolymer Compression Pipeline
================================

Streams sequence records from an input file through a pool of compression
workers to an output sink:

    reader -> input channel -> N workers -> output channel -> writer

Both channels are bounded, so a slow writer blocks the workers, which in
turn block the reader. Any failure in any stage aborts the whole pipeline.
"""

import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pipeline_configs import DEFAULT_BUFFER_SIZE, DEFAULT_NUM_WORKERS, PipelineConfig
from pipeline_monitoring import PipelineMonitor
from parsers.registry import open_binary, open_text
from pipeline.stages.mapping import InversionMapWriter
from pipeline.stages.reading import ReaderStage
from pipeline.stages.writing import WriterStage
from pipeline.workers.channel import BoundedChannel
from pipeline.workers.parallel_processor import ParallelProcessor
from pipeline.workers.supervisor import StageSupervisor

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Log to stderr; stdout may be the data sink."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logger.debug("Logging initialised successfully")


class HomopolymerCompressionPipeline:
    """Reader, worker pool and writer wired together by two bounded channels"""

    def __init__(self, config: PipelineConfig):
        self.config = config
        self.monitor = PipelineMonitor()
        self.supervisor: Optional[StageSupervisor] = None

    def run(self) -> Dict[str, Any]:
        """
        Compress the configured input into the configured output.

        Returns:
            Run summary from the PipelineMonitor

        Raises:
            PipelineError: The first fatal error of any stage
        """
        config = self.config
        config.check_input_exists()
        input_format = config.input_format

        logger.info(f"Compressing {config.input_path} -> {config.output_path or '<stdout>'} "
                    f"with {config.num_workers} workers, buffer size {config.buffer_size}")
        if config.with_map:
            logger.info(f"Writing inversion map to {config.map_output_path}")

        with ExitStack() as stack:
            input_handle = stack.enter_context(open_text(config.input_path, 'r'))
            if config.output_path is not None:
                output_handle = stack.enter_context(open_text(config.output_path, 'w'))
            else:
                output_handle = sys.stdout

            map_writer = None
            if config.map_output_path is not None:
                map_handle = stack.enter_context(open_binary(config.map_output_path, 'wb'))
                map_writer = InversionMapWriter(map_handle)

            input_channel = BoundedChannel(config.buffer_size, name="input")
            output_channel = BoundedChannel(config.buffer_size, name="output")
            self.supervisor = stack.enter_context(StageSupervisor([input_channel, output_channel]))

            input_sender = input_channel.open_sender()
            reader = ReaderStage(input_format.reader_class(input_handle), input_sender)
            self.supervisor.spawn(reader.name, reader.run, senders=[input_sender])

            ParallelProcessor(config.num_workers, with_map=config.with_map).spawn(
                self.supervisor, input_channel, output_channel)

            writer = WriterStage(
                output_channel,
                input_format.writer_class(output_handle),
                map_writer=map_writer,
                show_progress=config.show_progress
            )
            self.supervisor.spawn(writer.name, writer.run)

            results = self.supervisor.run()

        self.monitor.collect(results.values())
        return self.monitor.log_summary()


def compress_file(input_path: Union[str, Path],
                  output_path: Optional[Union[str, Path]] = None,
                  map_output_path: Optional[Union[str, Path]] = None,
                  num_workers: int = DEFAULT_NUM_WORKERS,
                  buffer_size: int = DEFAULT_BUFFER_SIZE,
                  show_progress: bool = False) -> Dict[str, Any]:
    """Convenience wrapper building a PipelineConfig and running the pipeline once."""
    config = PipelineConfig(
        input_path=Path(input_path),
        output_path=Path(output_path) if output_path else None,
        map_output_path=Path(map_output_path) if map_output_path else None,
        num_workers=num_workers,
        buffer_size=buffer_size,
        show_progress=show_progress
    )
    return HomopolymerCompressionPipeline(config).run()
