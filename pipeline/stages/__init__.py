"""
Pipeline stages for the homopolymer compression system.
"""

from .compression import (
    compress,
    compress_with_map,
    build_inversion_map,
    compress_record,
    decompress,
)
from .mapping import InversionMapWriter, read_inversion_maps
from .reading import ReaderStage
from .writing import WriterStage

__all__ = [
    'compress',
    'compress_with_map',
    'build_inversion_map',
    'compress_record',
    'decompress',
    'InversionMapWriter',
    'read_inversion_maps',
    'ReaderStage',
    'WriterStage',
]
