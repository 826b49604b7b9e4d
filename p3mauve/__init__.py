"""
p3mauve: genome alignment workflow around Mauve.

This package fetches genome sequences from the PATRIC data API, runs
progressiveMauve or mauveAligner on them and converts the resulting XMFA
alignment into JSON for downstream viewers.
"""

__version__ = "0.1.0"
