#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Post-processing of parsed XMFA alignments.

Contains functionality for:
1. Gap annotation of each aligned region
2. Shortening path-like sequence names to their file name
3. Stripping aligned sequences to keep JSON output small
4. Per-region summary tables

This module turns parsed LCBs into the records written to alignment JSON.
"""

import re
import logging
from dataclasses import replace
from typing import Any, Dict, List

import pandas as pd

from .gap_scanner import GapScanner
from .xmfa_parser import AlignedRegion

# Set up module logger
logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ['lcb', 'name', 'lcbIndex', 'start', 'end', 'strand',
                   'length', 'gap_runs', 'gap_bases']


class AlignmentPostProcessor:
    """
    Configurable transform over parsed LCBs.

    Gap annotation always runs first so it can still see the sequences;
    name shortening and sequence stripping follow. Input regions are not
    modified, ``process`` returns new LCB lists.

    Example:
        >>> processor = AlignmentPostProcessor(compute_gaps=True)
        >>> lcbs = processor.process(parse_xmfa(text))
        >>> records = processor.to_records(lcbs)
    """

    def __init__(self, shorten_names=True, compute_gaps=False, strip_sequences=True, strict_gaps=False):
        """
        Initialize with the transforms to apply.

        Args:
            shorten_names: Replace names with the part after the last '/'
            compute_gaps: Annotate each region with its gap runs
            strip_sequences: Drop the aligned sequence of each region
            strict_gaps: Also report gap runs reaching the end of a sequence
        """
        self.shorten_names = shorten_names
        self.compute_gaps = compute_gaps
        self.strip_sequences = strip_sequences
        self.scanner = GapScanner(strict=strict_gaps)

    def process(self, lcbs: List[List[AlignedRegion]]) -> List[List[AlignedRegion]]:
        """
        Apply the configured transforms to every region.

        Args:
            lcbs: Parsed LCBs

        Returns:
            New list of LCBs with transformed regions
        """
        logger.debug(
            f"Post-processing {len(lcbs)} LCBs (gaps={self.compute_gaps}, "
            f"shorten={self.shorten_names}, strip={self.strip_sequences})"
        )
        return [[self.process_region(region) for region in lcb] for lcb in lcbs]

    def process_region(self, region: AlignedRegion) -> AlignedRegion:
        """Apply the configured transforms to a single region."""
        changes = {}

        if self.compute_gaps:
            if region.sequence is None:
                logger.warning(f"Cannot compute gaps for {region.name}: sequence already stripped")
            else:
                changes['gaps'] = self.scanner.scan(region.sequence)
                if self.scanner.invalid_characters:
                    logger.warning(
                        f"{len(self.scanner.invalid_characters)} invalid character(s) in "
                        f"{region.name} LCB {region.lcb_index} ({region.start}-{region.end})"
                    )

        if self.shorten_names:
            changes['name'] = shorten_name(region.name)

        if self.strip_sequences:
            changes['sequence'] = None

        return replace(region, **changes)

    @staticmethod
    def to_records(lcbs: List[List[AlignedRegion]]) -> List[List[Dict[str, Any]]]:
        """Convert LCBs to JSON-serializable lists of dicts."""
        return [[region.to_dict() for region in lcb] for lcb in lcbs]

    @staticmethod
    def summarize(lcbs: List[List[AlignedRegion]]) -> pd.DataFrame:
        """
        Build a per-region summary table.

        Gap columns come from region gaps when present, otherwise they are
        counted in the sequence, and are NA when neither is available.

        Args:
            lcbs: LCBs to summarize

        Returns:
            DataFrame with one row per region, LCBs numbered from 1
        """
        rows = []
        for lcb_number, lcb in enumerate(lcbs, 1):
            for region in lcb:
                gap_runs, gap_bases = _gap_stats(region)
                rows.append({
                    'lcb': lcb_number,
                    'name': region.name,
                    'lcbIndex': region.lcb_index,
                    'start': region.start,
                    'end': region.end,
                    'strand': region.strand,
                    'length': abs(region.end - region.start) + 1,
                    'gap_runs': gap_runs,
                    'gap_bases': gap_bases,
                })

        df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
        for column in ('gap_runs', 'gap_bases'):
            df[column] = df[column].astype('Int64')
        return df


def shorten_name(name: str) -> str:
    """
    Return the part of a name after its last '/'.

    Example:
        >>> shorten_name("path/to/genome.fasta")
        'genome.fasta'
    """
    return name[name.rfind('/') + 1:]


def _gap_stats(region):
    if region.gaps is not None:
        return len(region.gaps), sum(gap['end'] - gap['start'] for gap in region.gaps)
    if region.sequence is not None:
        return len(re.findall(r"-+", region.sequence)), region.sequence.count("-")
    return None, None
