"""I/O module for phosphoraman."""

from phosphoraman.io.readers import load_spectrum

from phosphoraman.io.writers import (
    peak_table,
    write_peak_table,
    write_baselined_spectrum
)

__all__ = [
    'load_spectrum',
    'peak_table',
    'write_peak_table',
    'write_baselined_spectrum'
]
