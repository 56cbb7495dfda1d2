#!/usr/bin/env python3
"""
Command line entry point for homopolymer compressing a FASTA file.
"""

import sys
import argparse
import logging
from pathlib import Path

from homopolymer_compression_pipeline import HomopolymerCompressionPipeline, configure_logging
from pipeline_configs import DEFAULT_BUFFER_SIZE, DEFAULT_NUM_WORKERS, PipelineConfig
from pipeline_errors import PipelineError

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Homopolymer compress the sequences of a FASTA file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  compress.py reads.fa                         # Compress to stdout
  compress.py reads.fa hoco.fa                 # Compress to a file
  compress.py reads.fa hoco.fa hoco.map.cbor   # Also write the inversion map
  compress.py --threads 4 reads.fa.lz4 hoco.fa.lz4
        """
    )

    parser.add_argument('input', type=Path,
                        help='The input file (.fa or .fasta, optionally .lz4 compressed)')
    parser.add_argument('output', type=Path, nargs='?',
                        help='The output file. If not given, outputting to stdout')
    parser.add_argument('hodeco_map_output', type=Path, nargs='?',
                        help='The file to output the map used to homopolymer decompress the output')

    parser.add_argument('--threads', type=int, default=DEFAULT_NUM_WORKERS,
                        help='The number of compute threads to use for compressing. Reading and '
                             'writing use two extra threads that are not part of this number '
                             '(default: %(default)s)')
    parser.add_argument('--buffer-size', type=int, default=DEFAULT_BUFFER_SIZE,
                        help='The size of the buffers between input and compute threads, and '
                             'compute threads and output thread (default: %(default)s)')
    parser.add_argument('--progress', action='store_true',
                        help='Show a progress bar on stderr')
    parser.add_argument('--log-level', default='DEBUG',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: %(default)s)')

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    configure_logging(args.log_level)

    try:
        config = PipelineConfig(
            input_path=args.input,
            output_path=args.output,
            map_output_path=args.hodeco_map_output,
            num_workers=args.threads,
            buffer_size=args.buffer_size,
            show_progress=args.progress
        )
        HomopolymerCompressionPipeline(config).run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user", file=sys.stderr)
        sys.exit(1)
    except PipelineError as e:
        logger.debug(f"Pipeline failed: {e.log_context()}")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected pipeline failure")
        print(f"\n❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
