"""
Sequence format readers and writers for the homopolymer compression pipeline.
"""

from .fasta_parser import FastaReader, FastaWriter
from .registry import (
    FormatRegistry,
    FormatInfo,
    get_format_registry,
    open_text,
    open_binary,
)

__all__ = [
    'FastaReader',
    'FastaWriter',
    'FormatRegistry',
    'FormatInfo',
    'get_format_registry',
    'open_text',
    'open_binary',
]
