"""
Sequence Format Registry
========================

Maps whitelisted file extensions to reader and writer classes. A trailing
``.lz4`` suffix marks an LZ4 frame compressed file of the underlying format.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, IO, List, Optional, Type

import lz4.frame

from base_classes import RecordReader, RecordWriter
from pipeline_errors import ConfigurationError, InputOutputError

logger = logging.getLogger(__name__)

LZ4_SUFFIX = '.lz4'


@dataclass
class FormatInfo:
    """Information about a sequence format"""
    name: str
    reader_class: Type[RecordReader]
    writer_class: Type[RecordWriter]
    extensions: List[str] = field(default_factory=list)
    description: str = ""


def is_lz4_path(path: Path) -> bool:
    return path.suffix.lower() == LZ4_SUFFIX


def format_suffix(path: Path) -> str:
    """Extension naming the sequence format, ignoring an LZ4 wrapper suffix."""
    if is_lz4_path(path):
        path = path.with_suffix('')
    return path.suffix.lower()


def open_text(path: Path, mode: str = 'r') -> IO[str]:
    """Open a text file, transparently through LZ4 when the path ends in .lz4."""
    try:
        if is_lz4_path(path):
            return lz4.frame.open(path, mode + 't', encoding='utf-8')
        return open(path, mode, encoding='utf-8')
    except OSError as e:
        action = 'open input' if mode == 'r' else 'create output'
        raise InputOutputError(f"Cannot {action} file: {path}", cause=e,
                               details={'path': str(path)}) from e


def open_binary(path: Path, mode: str = 'rb') -> IO[bytes]:
    try:
        return open(path, mode)
    except OSError as e:
        raise InputOutputError(f"Cannot open file: {path}", cause=e,
                               details={'path': str(path)}) from e


class FormatRegistry:
    """Central registry of the sequence formats the pipeline accepts"""

    def __init__(self):
        self._formats: Dict[str, FormatInfo] = {}
        self._extension_map: Dict[str, str] = {}

    def register_format(self,
                        name: str,
                        reader_class: Type[RecordReader],
                        writer_class: Type[RecordWriter],
                        extensions: List[str],
                        description: str = "") -> FormatInfo:
        info = FormatInfo(
            name=name,
            reader_class=reader_class,
            writer_class=writer_class,
            extensions=[ext.lower() for ext in extensions],
            description=description
        )
        self._formats[name] = info
        for ext in info.extensions:
            if ext in self._extension_map and self._extension_map[ext] != name:
                logger.warning(f"Extension {ext} moved from format "
                               f"{self._extension_map[ext]} to {name}")
            self._extension_map[ext] = name
        logger.debug(f"Registered format {name} for {info.extensions}")
        return info

    def get_format(self, name: str) -> Optional[FormatInfo]:
        return self._formats.get(name)

    def list_formats(self) -> List[str]:
        return sorted(self._formats)

    def supported_extensions(self) -> List[str]:
        return sorted(self._extension_map)

    def detect_format(self, path: Path) -> FormatInfo:
        """
        Find the format of an input file from its extension.

        Raises:
            ConfigurationError: If the extension is not whitelisted
        """
        suffix = format_suffix(Path(path))
        allowed = ' or '.join(self.supported_extensions())
        if not suffix:
            raise ConfigurationError(
                f"Only {'/'.join(self.list_formats())} files supported at the moment, must end in "
                f"{allowed}, but no extension found: {path}",
                details={'path': str(path)})
        if suffix not in self._extension_map:
            raise ConfigurationError(
                f"Only {'/'.join(self.list_formats())} files supported at the moment, must end in "
                f"{allowed}, but ends in: {suffix}",
                details={'path': str(path), 'extension': suffix})
        return self.get_format(self._extension_map[suffix])


_registry: Optional[FormatRegistry] = None


def get_format_registry() -> FormatRegistry:
    """Return the process wide registry with the built-in formats loaded."""
    global _registry
    if _registry is None:
        from .fasta_parser import FastaReader, FastaWriter

        _registry = FormatRegistry()
        _registry.register_format(
            name="fasta",
            reader_class=FastaReader,
            writer_class=FastaWriter,
            extensions=[".fa", ".fasta"],
            description="FASTA via Biopython"
        )
    return _registry
