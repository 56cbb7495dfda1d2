"""
Homopolymer compression pipeline modules.
"""

from .workers.channel import BoundedChannel, END_OF_STREAM
from .workers.supervisor import StageSupervisor
from .workers.parallel_processor import ParallelProcessor
from .stages.compression import compress, compress_with_map, decompress

__all__ = [
    'BoundedChannel',
    'END_OF_STREAM',
    'StageSupervisor',
    'ParallelProcessor',
    'compress',
    'compress_with_map',
    'decompress',
]
