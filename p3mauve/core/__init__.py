"""
Core alignment parsing modules for p3mauve.

This subpackage contains the XMFA handling:
- gap_scanner: gap runs within one aligned sequence
- xmfa_parser: XMFA text to Locally Collinear Blocks
- alignment_processor: name shortening, gap annotation and sequence stripping
"""

__all__ = [
    'GapScanner',
    'scan_gaps',
    'AlignedRegion',
    'XmfaParser',
    'parse_xmfa',
    'parse_xmfa_file',
    'AlignmentPostProcessor',
    'shorten_name',
]

from .gap_scanner import GapScanner, scan_gaps
from .xmfa_parser import AlignedRegion, XmfaParser, parse_xmfa, parse_xmfa_file
from .alignment_processor import AlignmentPostProcessor, shorten_name
