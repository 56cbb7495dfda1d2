"""
FASTA reader and writer built on Biopython.
"""

import logging
from typing import Iterator, Optional

from Bio.Seq import Seq
from Bio.SeqIO.FastaIO import SimpleFastaParser
from Bio.SeqRecord import SeqRecord

from base_classes import RecordReader, RecordWriter, SequenceRecord
from pipeline_errors import FormatError

logger = logging.getLogger(__name__)


def split_title(title: str):
    """Split a FASTA title line into (id, description)."""
    parts = title.split(None, 1)
    if not parts:
        return "", None
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


class FastaReader(RecordReader):
    """Streams SequenceRecords out of a FASTA file, one per header"""

    def _lines(self) -> Iterator[str]:
        """Yield the lines of the handle, failing if data precedes the first header."""
        seen_header = False
        for line in self.handle:
            if not seen_header and line.strip():
                if not line.startswith(">"):
                    raise FormatError("Cannot read fasta record #1: expected '>' at file start",
                                      details={'line': line.rstrip()[:80]})
                seen_header = True
            yield line

    def __iter__(self) -> Iterator[SequenceRecord]:
        position = 0
        try:
            for title, sequence in SimpleFastaParser(self._lines()):
                position += 1
                record_id, description = split_title(title)
                if not record_id:
                    raise FormatError(f"Cannot read fasta record #{position}: missing identifier",
                                      details={'record': position, 'title': title})
                yield SequenceRecord(id=record_id, description=description, sequence=sequence)
        except ValueError as e:
            raise FormatError(f"Cannot read fasta record #{position + 1}", cause=e) from e


class FastaWriter(RecordWriter):
    """Writes one unwrapped FASTA record per call"""

    FORMAT = "fasta-2line"

    def write(self, record_id: str, description: Optional[str], sequence: str) -> None:
        record = SeqRecord(
            Seq(sequence),
            id=record_id,
            description=f"{record_id} {description}" if description else ""
        )
        self.handle.write(record.format(self.FORMAT))
