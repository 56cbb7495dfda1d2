"""
Pipeline worker components: channels, supervision and the compression pool.
"""

from .channel import BoundedChannel, ChannelSender, END_OF_STREAM
from .supervisor import StageSupervisor
from .parallel_processor import ParallelProcessor, CompressionWorker

__all__ = [
    'BoundedChannel',
    'ChannelSender',
    'END_OF_STREAM',
    'StageSupervisor',
    'ParallelProcessor',
    'CompressionWorker',
]
