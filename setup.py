"""
Setup file for phosphoraman package.

This allows the package to be installed with:
    pip install .
    pip install -e .  (for development mode)
    pip install .[dev]  (with test and lint tools)
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="phosphoraman",
    version="0.1.0",

    # Package info
    description="arPLS baseline removal and Lorentzian peak fitting for phosphorene Raman spectra",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # License
    license="MIT",

    # Find all packages automatically
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),

    # Python version requirement
    python_requires=">=3.8",

    # Core dependencies (required for the library to work)
    install_requires=[
        "numpy>=1.18.0",
        "scipy>=1.4.0",
        "pandas>=1.0.0",
        "matplotlib>=3.1.0",
    ],

    # Optional dependencies
    # Install with: pip install .[dev]
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=2.0.0",
            "black>=20.0.0",
            "flake8>=3.8.0",
        ],
    },

    # Command line entry point
    entry_points={
        "console_scripts": [
            "phosphoraman=phosphoraman.cli:main",
        ],
    },

    # Classifiers help users find your project
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Physics",
        "Topic :: Scientific/Engineering :: Chemistry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],

    # Keywords for searching
    keywords="raman spectroscopy baseline arpls phosphorene lorentzian peak-fitting",
)
