"""
Homopolymer compression of symbol sequences.

All transforms are single-pass generators that retain only the most recently
emitted symbol, so a sequence is never buffered as a whole.
"""

import logging
from typing import Hashable, Iterable, Iterator, List, Sequence, Tuple, TypeVar

from base_classes import CompressedRecord, SequenceRecord

logger = logging.getLogger(__name__)

Symbol = TypeVar('Symbol', bound=Hashable)

_UNSET = object()


def compress(sequence: Iterable[Symbol]) -> Iterator[Symbol]:
    """
    Homopolymer compress the given sequence.

    Emits a symbol only when it differs from the most recently emitted one,
    so every maximal run of equal symbols collapses to its first element.

    Args:
        sequence: Any finite iterable of symbols, possibly lazy

    Yields:
        The first symbol of each run, in order
    """
    last_emitted = _UNSET
    for symbol in sequence:
        if last_emitted is _UNSET or last_emitted != symbol:
            last_emitted = symbol
            yield symbol


def compress_with_map(sequence: Iterable[Symbol]) -> Iterator[Tuple[Symbol, int]]:
    """
    Homopolymer compress the given sequence and report where each run starts.

    The trailing total length of the inversion map is not yielded here; the
    end of the input is only known once the iterator is exhausted. Use
    build_inversion_map() to get the complete map.

    Yields:
        (symbol, start_index) for each run
    """
    last_emitted = _UNSET
    for index, symbol in enumerate(sequence):
        if last_emitted is _UNSET or last_emitted != symbol:
            last_emitted = symbol
            yield symbol, index


def build_inversion_map(sequence: Iterable[Symbol]) -> Tuple[List[Symbol], List[int]]:
    """Compress a sequence and return (compressed symbols, complete inversion map)."""
    symbols: List[Symbol] = []
    inversion_map: List[int] = []
    length = 0

    def counted(items):
        nonlocal length
        for item in items:
            length += 1
            yield item

    for symbol, start in compress_with_map(counted(sequence)):
        symbols.append(symbol)
        inversion_map.append(start)

    inversion_map.append(length)
    return symbols, inversion_map


def decompress(compressed: Sequence[Symbol], inversion_map: Sequence[int]) -> Iterator[Symbol]:
    """
    Re-expand a homopolymer compressed sequence using its inversion map.

    Args:
        compressed: The compressed symbols
        inversion_map: Run start offsets followed by the original length

    Yields:
        The original symbols

    Raises:
        ValueError: If the map does not describe the compressed sequence
    """
    if len(inversion_map) != len(compressed) + 1:
        raise ValueError(f"Inversion map has {len(inversion_map)} entries, "
                         f"expected {len(compressed) + 1}")
    if inversion_map[0] != 0:
        raise ValueError(f"Inversion map must start at 0, starts at {inversion_map[0]}")

    for index, symbol in enumerate(compressed):
        run_length = inversion_map[index + 1] - inversion_map[index]
        if run_length <= 0:
            raise ValueError(f"Inversion map is not strictly increasing at entry {index + 1}")
        for _ in range(run_length):
            yield symbol


def compress_record(record: SequenceRecord, with_map: bool = False) -> CompressedRecord:
    """Compress one record, producing its inversion map if requested."""
    if with_map:
        symbols, inversion_map = build_inversion_map(record.sequence)
        return CompressedRecord(
            id=record.id,
            description=record.description,
            sequence=''.join(symbols),
            inversion_map=inversion_map
        )

    return CompressedRecord(
        id=record.id,
        description=record.description,
        sequence=''.join(compress(record.sequence))
    )
