"""
pseis: tools for seismic data in CWP/SU format.

The main entry is :func:`pseis.compare.compare`, the seismic equivalent of
``cmp(1)`` used for regression testing of processing programs.
"""

__version__ = "0.1.0"
