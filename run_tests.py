#!/usr/bin/env python3
"""
Test Runner for Homopolymer Compression Pipeline
================================================

Runs the unit and integration tests with various options.
"""

import sys
import subprocess
import argparse
from pathlib import Path


def run_tests(args):
    """Run pytest with specified options"""
    target = {"unit": "tests/unit", "integration": "tests/integration"}.get(args.suite, "tests/")
    cmd = ["pytest", target]

    if args.verbose:
        cmd.append("-v")

    if args.coverage:
        cmd.extend(["--cov=.", "--cov-report=html", "--cov-report=term"])

    if args.test:
        cmd.extend(["-k", args.test])

    # Skip the larger end-to-end runs
    if args.fast:
        cmd.extend(["-m", "not slow"])

    if args.show_output:
        cmd.append("-s")

    print(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, cwd=Path(__file__).parent)

    return result.returncode


def main():
    parser = argparse.ArgumentParser(description="Run tests for the homopolymer compression pipeline")

    parser.add_argument("suite", nargs="?", choices=["all", "unit", "integration"], default="all",
                        help="Which test suite to run")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose test output")
    parser.add_argument("-c", "--coverage", action="store_true",
                        help="Generate coverage report")
    parser.add_argument("-t", "--test", type=str,
                        help="Run specific test by name pattern")
    parser.add_argument("-f", "--fast", action="store_true",
                        help="Skip slow end-to-end tests")
    parser.add_argument("-s", "--show-output", action="store_true",
                        help="Show print statements during tests")

    args = parser.parse_args()
    exit_code = run_tests(args)

    if args.coverage and exit_code == 0:
        print("\nCoverage report generated in htmlcov/index.html")

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
