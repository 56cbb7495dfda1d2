"""
Inversion Map Encoding
======================

Inversion maps are written as a CBOR stream with one ``[id, map]`` array per
record, in the order the writer stage receives them.
"""

import io
import logging
from typing import BinaryIO, Iterator, List, Tuple

import cbor2

from pipeline_errors import FormatError, InputOutputError

logger = logging.getLogger(__name__)


class InversionMapWriter:
    """Serializes (id, inversion map) pairs to a binary sink"""

    def __init__(self, handle: BinaryIO):
        self.handle = handle
        self.entries_written = 0

    def write(self, record_id: str, inversion_map: List[int]) -> None:
        try:
            cbor2.dump([record_id, list(inversion_map)], self.handle)
        except (OSError, cbor2.CBOREncodeError) as e:
            raise InputOutputError(f"Error writing inversion map for record {record_id}",
                                   cause=e) from e
        self.entries_written += 1

    def flush(self) -> None:
        self.handle.flush()


def _is_offset(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def read_inversion_maps(handle: BinaryIO) -> Iterator[Tuple[str, List[int]]]:
    """
    Iterate the (id, inversion map) pairs of a CBOR map stream.

    Raises:
        FormatError: If an entry is not an [id, [int, ...]] array
    """
    data = handle.read()
    stream = io.BytesIO(data)
    position = 0
    while stream.tell() < len(data):
        position += 1
        try:
            entry = cbor2.load(stream)
        except cbor2.CBORDecodeError as e:
            raise FormatError(f"Cannot decode inversion map entry #{position}", cause=e) from e

        if (not isinstance(entry, list) or len(entry) != 2
                or not isinstance(entry[0], str) or not isinstance(entry[1], list)
                or not all(_is_offset(value) for value in entry[1])):
            raise FormatError(f"Malformed inversion map entry #{position}",
                              details={'entry': repr(entry)[:200]})
        yield entry[0], entry[1]
