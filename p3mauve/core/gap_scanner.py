#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Gap scanning for aligned sequences.

Reports runs of the gap character '-' in one aligned sequence as 1-based
intervals whose end is the position of the first base after the run.
"""

import logging
from typing import Dict, List, Tuple

from ..config import Config

# Set up module logger
logger = logging.getLogger(__name__)

GAP = "-"


class GapScanner:
    """
    Scanner for gap runs in a gapped nucleotide sequence.

    By default a run that reaches the end of the sequence is not reported,
    which matches the gap annotations produced by earlier releases. With
    ``strict=True`` that trailing run is reported too, ending one past the
    last position.

    Characters other than A, T, G, C, N and '-' (any case) are logged as
    warnings and recorded in ``invalid_characters``; they never stop the scan.

    Example:
        >>> GapScanner().scan("AC--GT")
        [{'start': 3, 'end': 5}]
        >>> GapScanner(strict=True).scan("AC--")
        [{'start': 3, 'end': 5}]
    """

    def __init__(self, strict=False, valid_bases=None):
        """
        Initialize the scanner.

        Args:
            strict: Also report a gap run that reaches the end of the sequence
            valid_bases: Accepted characters (defaults to Config.VALID_BASES)
        """
        self.strict = strict
        self.valid_bases = frozenset((valid_bases or Config.VALID_BASES).upper())
        self.invalid_characters: List[Tuple[int, str]] = []

    def scan(self, sequence: str) -> List[Dict[str, int]]:
        """
        Find gap runs in an aligned sequence.

        Args:
            sequence: Aligned sequence with '-' as gap character

        Returns:
            List of {'start', 'end'} dicts in sequence order
        """
        self.invalid_characters = []
        gaps = []
        start = None

        for position, base in enumerate(sequence, 1):
            if base.upper() not in self.valid_bases:
                self._report_invalid(position, base)

            if base == GAP:
                if start is None:
                    start = position
            elif start is not None:
                gaps.append({'start': start, 'end': position})
                start = None

        if start is not None and self.strict:
            gaps.append({'start': start, 'end': len(sequence) + 1})

        return gaps

    def _report_invalid(self, position, base):
        self.invalid_characters.append((position, base))
        logger.warning(f"Invalid character '{base}' at position {position}")


def scan_gaps(sequence: str, strict: bool = False) -> List[Dict[str, int]]:
    """Convenience wrapper around GapScanner.scan."""
    return GapScanner(strict=strict).scan(sequence)
