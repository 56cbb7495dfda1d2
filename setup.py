#!/usr/bin/env python3
"""
Setup configuration for Homopolymer Compression Pipeline.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

# Read requirements from requirements.txt
requirements = []
if (this_directory / "requirements.txt").exists():
    requirements = (this_directory / "requirements.txt").read_text().strip().split('\n')
    requirements = [req.strip() for req in requirements if req.strip() and not req.startswith('#')]

setup(
    name="homopolymer-compression-pipeline",
    version="1.0.0",
    author="",
    author_email="",
    description="Multi-threaded homopolymer compression of FASTA files with exact inversion maps",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=['parsers*', 'pipeline*']),
    py_modules=[
        'homopolymer_compression_pipeline',
        'base_classes',
        'pipeline_configs',
        'pipeline_errors',
        'pipeline_monitoring',
        'compress',
        'decompress',
        'run_tests'
    ],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov",
            "pytest-mock",
            "black",
            "flake8",
            "mypy",
        ],
        "test": [
            "pytest>=7.0",
            "pytest-cov",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "hoco-compress=compress:main",
            "hoco-decompress=decompress:main",
            "run-pipeline-tests=run_tests:main",
        ],
    },
    keywords=[
        "homopolymer-compression",
        "fasta",
        "bioinformatics",
        "run-length-encoding",
        "long-reads",
    ],
)
