"""
Base Classes for Homopolymer Compression Pipeline
=================================================

Contains core data structures and abstract base classes used throughout the pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO


@dataclass(frozen=True)
class SequenceRecord:
    """A named sequence as read from the input"""
    id: str
    description: Optional[str]
    sequence: str


@dataclass(frozen=True)
class CompressedRecord:
    """A homopolymer compressed sequence with its optional inversion map"""
    id: str
    description: Optional[str]
    sequence: str
    inversion_map: Optional[List[int]] = None

    @property
    def original_length(self) -> Optional[int]:
        if self.inversion_map is None:
            return None
        return self.inversion_map[-1]


class RecordReader(ABC):
    """Abstract base class for sequence format readers"""

    def __init__(self, handle: TextIO):
        self.handle = handle

    @abstractmethod
    def __iter__(self) -> Iterator[SequenceRecord]:
        pass


class RecordWriter(ABC):
    """Abstract base class for sequence format writers"""

    def __init__(self, handle: TextIO):
        self.handle = handle

    @abstractmethod
    def write(self, record_id: str, description: Optional[str], sequence: str) -> None:
        pass

    def flush(self) -> None:
        self.handle.flush()
