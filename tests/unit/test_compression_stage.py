"""
Unit tests for the homopolymer compression transform
====================================================

Tests for pipeline/stages/compression.py including:
- compress() and compress_with_map()
- Inversion map construction and decompression
- Record level compression
- Properties over random sequences
"""

import random

import pytest

from base_classes import SequenceRecord
from pipeline.stages.compression import (
    build_inversion_map,
    compress,
    compress_record,
    compress_with_map,
    decompress,
)

EXAMPLE = "ACAARRRTGGGTGTJASAAAI"
EXAMPLE_COMPRESSED = "ACARTGTGTJASAI"
EXAMPLE_MAP = [0, 1, 2, 4, 7, 8, 11, 12, 13, 14, 15, 16, 17, 20, 21]


def random_sequences(count=200, alphabet="ACGT", max_length=60, seed=1234):
    rng = random.Random(seed)
    for _ in range(count):
        length = rng.randint(0, max_length)
        yield "".join(rng.choice(alphabet) for _ in range(length))


class TestCompress:
    """Test compress() on concrete inputs"""

    def test_example_sequence(self):
        """Test the reference example collapses every run"""
        assert "".join(compress(EXAMPLE)) == EXAMPLE_COMPRESSED

    def test_example_as_bytes(self):
        """Test symbols can be ints, as when iterating bytes"""
        assert bytes(compress(EXAMPLE.encode())) == EXAMPLE_COMPRESSED.encode()

    def test_empty_input(self):
        """Test empty input yields empty output"""
        assert list(compress([])) == []
        assert "".join(compress("")) == ""

    def test_single_symbol(self):
        """Test input of length one yields that symbol"""
        assert list(compress("G")) == ["G"]

    def test_single_run(self):
        """Test k equal symbols collapse to one"""
        assert list(compress("T" * 1000)) == ["T"]

    def test_no_runs_is_unchanged(self):
        """Test a sequence without adjacent duplicates passes through"""
        assert "".join(compress("ACGTACGT")) == "ACGTACGT"

    def test_is_lazy(self):
        """Test compress() pulls input only as far as needed"""
        consumed = []

        def source():
            for symbol in "AACCGGTT":
                consumed.append(symbol)
                yield symbol

        output = compress(source())
        assert consumed == []
        assert next(output) == "A"
        assert consumed == ["A"]
        assert next(output) == "C"
        assert consumed == ["A", "A", "C"]

    def test_works_on_generic_symbols(self):
        """Test any equality comparable symbols are supported"""
        assert list(compress([None, None, 1, 1, (2, 3), (2, 3), 1])) == [None, 1, (2, 3), 1]

    def test_compares_against_last_emitted(self):
        """Test a symbol equal to the first of a sequence is kept after a change"""
        assert list(compress("ABA")) == ["A", "B", "A"]


class TestCompressWithMap:
    """Test compress_with_map() and build_inversion_map()"""

    def test_example_start_offsets(self):
        """Test run start offsets of the reference example"""
        pairs = list(compress_with_map(EXAMPLE))

        assert "".join(symbol for symbol, _ in pairs) == EXAMPLE_COMPRESSED
        assert [start for _, start in pairs] == EXAMPLE_MAP[:-1]

    def test_trailing_length_not_yielded(self):
        """Test the generator does not append the total length itself"""
        assert list(compress_with_map("AAA")) == [("A", 0)]

    def test_build_inversion_map_example(self):
        """Test the complete map ends with the original length"""
        symbols, inversion_map = build_inversion_map(EXAMPLE)

        assert "".join(symbols) == EXAMPLE_COMPRESSED
        assert inversion_map == EXAMPLE_MAP
        assert len(inversion_map) == len(symbols) + 1

    def test_build_inversion_map_empty(self):
        """Test empty input gives the map [0]"""
        symbols, inversion_map = build_inversion_map("")

        assert symbols == []
        assert inversion_map == [0]

    def test_build_inversion_map_from_generator(self):
        """Test the length is counted while the input is consumed"""
        symbols, inversion_map = build_inversion_map(iter("GGGGAT"))

        assert symbols == ["G", "A", "T"]
        assert inversion_map == [0, 4, 5, 6]


class TestDecompress:
    """Test decompress()"""

    def test_example_round_trip(self):
        """Test the reference example is restored exactly"""
        assert "".join(decompress(EXAMPLE_COMPRESSED, EXAMPLE_MAP)) == EXAMPLE

    def test_empty(self):
        """Test the empty map restores the empty sequence"""
        assert list(decompress("", [0])) == []

    def test_wrong_map_length(self):
        """Test a map of the wrong length is rejected"""
        with pytest.raises(ValueError, match="entries"):
            list(decompress("AC", [0, 2]))

    def test_map_not_starting_at_zero(self):
        """Test a map must start at offset 0"""
        with pytest.raises(ValueError, match="start at 0"):
            list(decompress("AC", [1, 2, 3]))

    def test_map_not_increasing(self):
        """Test a map with an empty run is rejected"""
        with pytest.raises(ValueError, match="strictly increasing"):
            list(decompress("ACG", [0, 2, 2, 4]))


class TestCompressionProperties:
    """Properties checked over random sequences"""

    def test_idempotence(self):
        """Test compressing compressed output changes nothing"""
        for sequence in random_sequences():
            once = "".join(compress(sequence))
            assert "".join(compress(once)) == once

    def test_no_adjacent_duplicates(self):
        """Test no two adjacent output symbols are equal"""
        for sequence in random_sequences(alphabet="AC"):
            output = list(compress(sequence))
            assert all(a != b for a, b in zip(output, output[1:]))

    def test_length_bound(self):
        """Test output is never longer, and equal only without runs"""
        for sequence in random_sequences(alphabet="ACG"):
            output = list(compress(sequence))
            has_runs = any(a == b for a, b in zip(sequence, sequence[1:]))
            assert len(output) <= len(sequence)
            assert (len(output) == len(sequence)) == (not has_runs)

    def test_round_trip(self):
        """Test decompressing with the map reproduces the input"""
        for sequence in random_sequences(alphabet="ACGTN", max_length=200):
            symbols, inversion_map = build_inversion_map(sequence)
            assert "".join(decompress(symbols, inversion_map)) == sequence

    def test_map_invariants(self):
        """Test the map is strictly increasing and measures each run"""
        for sequence in random_sequences():
            symbols, inversion_map = build_inversion_map(sequence)

            assert len(inversion_map) == len(symbols) + 1
            assert inversion_map[0] == 0
            assert inversion_map[-1] == len(sequence)
            assert all(a < b for a, b in zip(inversion_map, inversion_map[1:]))
            for index, symbol in enumerate(symbols):
                run = sequence[inversion_map[index]:inversion_map[index + 1]]
                assert run == symbol * len(run)


class TestCompressRecord:
    """Test compress_record()"""

    def test_without_map(self):
        """Test the map is omitted unless requested"""
        record = SequenceRecord(id="read1", description="sample=1", sequence="AAACCG")
        compressed = compress_record(record)

        assert compressed.id == "read1"
        assert compressed.description == "sample=1"
        assert compressed.sequence == "ACG"
        assert compressed.inversion_map is None
        assert compressed.original_length is None

    def test_with_map(self):
        """Test the map and original length are attached when requested"""
        record = SequenceRecord(id="read2", description=None, sequence="AAACCG")
        compressed = compress_record(record, with_map=True)

        assert compressed.sequence == "ACG"
        assert compressed.inversion_map == [0, 3, 5, 6]
        assert compressed.original_length == 6

    def test_empty_record_with_map(self):
        """Test an empty sequence still gets a one entry map"""
        record = SequenceRecord(id="empty", description=None, sequence="")
        compressed = compress_record(record, with_map=True)

        assert compressed.sequence == ""
        assert compressed.inversion_map == [0]
