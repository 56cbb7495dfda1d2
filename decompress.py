#!/usr/bin/env python3
"""
Restore the original sequences of a homopolymer compressed FASTA file from
its inversion map.

The map file may list records in a different order than the FASTA file
(the compressor does not keep input order with several threads), so the
maps are loaded by id before the records are streamed.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

from homopolymer_compression_pipeline import configure_logging
from parsers.registry import get_format_registry, open_binary, open_text
from pipeline.stages.compression import decompress
from pipeline.stages.mapping import read_inversion_maps
from pipeline_errors import ConfigurationError, FormatError, PipelineError

logger = logging.getLogger(__name__)


def load_inversion_maps(map_path: Path) -> Dict[str, List[int]]:
    maps: Dict[str, List[int]] = {}
    with open_binary(map_path, 'rb') as handle:
        for record_id, inversion_map in read_inversion_maps(handle):
            if record_id in maps:
                raise FormatError(f"Duplicate inversion map for record {record_id}")
            maps[record_id] = inversion_map
    logger.debug(f"Loaded {len(maps)} inversion maps from {map_path}")
    return maps


def decompress_file(input_path: Path, map_path: Path, output_path: Optional[Path] = None) -> int:
    """
    Write the decompressed records of input_path to output_path (stdout if None).

    Returns:
        Number of records restored
    """
    input_format = get_format_registry().detect_format(input_path)
    maps = load_inversion_maps(map_path)

    restored = 0
    seen_ids = set()
    with open_text(input_path, 'r') as input_handle:
        output_handle = open_text(output_path, 'w') if output_path else sys.stdout
        try:
            writer = input_format.writer_class(output_handle)
            for record in input_format.reader_class(input_handle):
                inversion_map = maps.get(record.id)
                if inversion_map is None:
                    raise FormatError(f"No inversion map for record {record.id}")
                try:
                    sequence = ''.join(decompress(record.sequence, inversion_map))
                except ValueError as e:
                    raise FormatError(f"Inversion map does not match record {record.id}",
                                      cause=e) from e
                writer.write(record.id, record.description, sequence)
                seen_ids.add(record.id)
                restored += 1
            writer.flush()
        finally:
            if output_path:
                output_handle.close()

    unused = [record_id for record_id in maps if record_id not in seen_ids]
    for record_id in unused:
        logger.warning(f"Inversion map for record {record_id} has no matching record in {input_path}")
    if unused:
        logger.warning(f"{len(unused)} of {len(maps)} inversion maps were not used")

    logger.info(f"Restored {restored} records from {input_path}")
    return restored


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Homopolymer decompress a FASTA file using its inversion map")
    parser.add_argument('input', type=Path, help='The homopolymer compressed file')
    parser.add_argument('hodeco_map', type=Path, help='The inversion map written by the compressor')
    parser.add_argument('output', type=Path, nargs='?',
                        help='The output file. If not given, outputting to stdout')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: %(default)s)')
    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    configure_logging(args.log_level)

    try:
        if not args.input.is_file():
            raise ConfigurationError(f"Input file does not exist: {args.input}")
        decompress_file(args.input, args.hodeco_map, args.output)
    except PipelineError as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
