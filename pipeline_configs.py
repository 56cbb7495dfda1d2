"""
Pipeline Configurations
=======================

Configuration settings for the homopolymer compression pipeline and
pre-configured presets for common use cases.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import logging

from parsers.registry import get_format_registry
from pipeline_errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_NUM_WORKERS = 1
DEFAULT_BUFFER_SIZE = 32768


@dataclass
class PipelineConfig:
    """Configuration settings for the compression pipeline"""

    # Input/output settings
    input_path: Path
    output_path: Optional[Path] = None      # None writes to stdout
    map_output_path: Optional[Path] = None  # Requires output_path

    # Processing settings
    num_workers: int = DEFAULT_NUM_WORKERS
    buffer_size: int = DEFAULT_BUFFER_SIZE  # Capacity of each channel, in records

    # Display settings
    show_progress: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters"""
        self.input_path = Path(self.input_path)
        if self.output_path is not None:
            self.output_path = Path(self.output_path)
        if self.map_output_path is not None:
            self.map_output_path = Path(self.map_output_path)

        if self.num_workers <= 0:
            raise ConfigurationError("num_workers must be positive",
                                     details={'num_workers': self.num_workers})
        if self.buffer_size <= 0:
            raise ConfigurationError("buffer_size must be positive",
                                     details={'buffer_size': self.buffer_size})
        if self.map_output_path is not None and self.output_path is None:
            raise ConfigurationError(
                "An inversion map output requires an output file; "
                "cannot write the map when compressing to stdout")

        self.input_format = get_format_registry().detect_format(self.input_path)

    @property
    def with_map(self) -> bool:
        return self.map_output_path is not None

    def check_input_exists(self) -> None:
        if not self.input_path.is_file():
            raise ConfigurationError(f"Input file does not exist: {self.input_path}",
                                     details={'path': str(self.input_path)})


PathLike = Union[str, Path]


class ConfigPresets:
    """Pre-configured settings for common use cases"""

    @staticmethod
    def single_threaded(input_path: PathLike,
                        output_path: Optional[PathLike] = None,
                        map_output_path: Optional[PathLike] = None) -> PipelineConfig:
        """
        One compute thread; the output keeps the input order.
        """
        return PipelineConfig(
            input_path=Path(input_path),
            output_path=Path(output_path) if output_path else None,
            map_output_path=Path(map_output_path) if map_output_path else None,
            num_workers=1
        )

    @staticmethod
    def high_throughput(input_path: PathLike,
                        output_path: Optional[PathLike] = None,
                        map_output_path: Optional[PathLike] = None,
                        num_workers: int = 4) -> PipelineConfig:
        """
        Several compute threads and larger buffers.
        - Output order is not guaranteed
        """
        return PipelineConfig(
            input_path=Path(input_path),
            output_path=Path(output_path) if output_path else None,
            map_output_path=Path(map_output_path) if map_output_path else None,
            num_workers=num_workers,
            buffer_size=DEFAULT_BUFFER_SIZE * 2
        )
