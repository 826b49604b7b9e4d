#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
XMFA parser for Mauve alignments.

Contains functionality for:
1. Line-by-line parsing of XMFA (eXtended Multi-FASTA) alignment text
2. Grouping aligned regions into Locally Collinear Blocks (LCBs)
3. Header parsing with lenient or strict handling of malformed headers
4. Streaming a whole XMFA file from disk

An XMFA document is a series of blocks. Each block holds one '>' header per
genome followed by that genome's gapped sequence lines, and ends with a line
starting with '=' (or an empty line). Comment lines start with '#'.

Parsing keeps the behaviour of earlier releases: a block is only stored
once its terminator line is seen, so text that stops right after a sequence
line keeps its last block pending until ``finish()`` is called.
"""

import re
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional

from ..config import XmfaFormatError

# Set up module logger
logger = logging.getLogger(__name__)

SEQUENCE_FILE_PATTERN = re.compile(r'^#Sequence(\d+)File\t(.*)$')
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


@dataclass
class AlignedRegion:
    """
    One genome's contribution to one LCB.

    Coordinates are 1-based and inclusive as written in the header.
    ``sequence`` is None once it has been stripped and ``gaps`` is only
    set by gap annotation.
    """
    name: str
    start: int
    end: int
    strand: str
    lcb_index: int
    sequence: Optional[str] = ""
    gaps: Optional[List[Dict[str, int]]] = field(default=None)

    @property
    def is_valid(self) -> bool:
        """True when the header carried a usable coordinate pair."""
        return self.start != 0 and self.end != 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert region to the JSON record layout."""
        record = {
            'name': self.name,
            'start': self.start,
            'end': self.end,
            'strand': self.strand,
            'lcbIndex': self.lcb_index,
        }
        if self.sequence is not None:
            record['sequence'] = self.sequence
        if self.gaps is not None:
            record['gaps'] = self.gaps
        return record


class XmfaParser:
    """
    Stateful XMFA parser.

    Lines can be fed one at a time with ``parse_line`` or all at once with
    ``parse``; completed LCBs accumulate in ``lcbs`` in input order. Each
    parser instance owns its state, so independent documents need
    independent instances.

    Attributes:
        strict_headers: Raise XmfaFormatError on unparseable headers
        lcbs: Completed LCBs, each a list of AlignedRegion
        seq_count: Number of '#SequenceNFormat' declarations seen
        sequence_files: Mapping of sequence number to file path from comments
        index_mismatches: (line number, header index, coordinate index) pairs
            where the two LCB indices in a header disagreed

    Example:
        >>> parser = XmfaParser()
        >>> lcbs = parser.parse(">1 1:1-4 + seqA\\nACGT\\n=\\n")
        >>> lcbs[0][0].sequence
        'ACGT'
    """

    def __init__(self, strict_headers=False):
        """
        Initialize parser state.

        Args:
            strict_headers: Raise on malformed headers instead of discarding
                the region they describe
        """
        self.strict_headers = strict_headers
        self.lcbs: List[List[AlignedRegion]] = []
        self.seq_count = 0
        self.sequence_files: Dict[int, str] = {}
        self.index_mismatches = []
        self.line_number = 0
        self._region: Optional[AlignedRegion] = None
        self._chunks: List[str] = []
        self._lcb: List[AlignedRegion] = []

    @property
    def has_pending(self) -> bool:
        """True when regions are waiting for a terminator line."""
        return self.pending_regions > 0

    @property
    def pending_regions(self) -> int:
        """Number of valid regions not yet stored in a completed LCB."""
        pending = len(self._lcb)
        if self._region is not None and self._region.is_valid:
            pending += 1
        return pending

    def parse(self, text: str) -> List[List[AlignedRegion]]:
        """
        Parse a block of XMFA text.

        Args:
            text: XMFA content, lines separated by '\\n'

        Returns:
            All LCBs completed so far
        """
        return self.parse_lines(text.split('\n'))

    def parse_lines(self, lines: Iterable[str]) -> List[List[AlignedRegion]]:
        """Feed every line of an iterable and return the completed LCBs."""
        for line in lines:
            self.parse_line(line)
        return self.lcbs

    def parse_line(self, line: str):
        """
        Process a single line.

        Args:
            line: One line of XMFA text, with or without its line ending
        """
        self.line_number += 1
        line = line.rstrip('\r\n')

        if not line or line.startswith('='):
            self._end_lcb()
        elif line.startswith('#'):
            self._parse_comment(line)
        elif line.startswith('>'):
            self._close_region()
            self._region = self._parse_header(line)
        else:
            self._append_sequence(line)

    def finish(self) -> List[List[AlignedRegion]]:
        """
        Store any pending region and LCB as if a terminator line followed.

        Returns:
            All completed LCBs
        """
        if self.has_pending:
            logger.debug(f"Flushing {self.pending_regions} pending region(s) at end of input")
        self._end_lcb()
        return self.lcbs

    def _end_lcb(self):
        self._close_region()
        if self._lcb:
            self.lcbs.append(self._lcb)
        self._lcb = []

    def _close_region(self):
        region = self._region
        if region is not None and region.is_valid:
            self._lcb.append(replace(region, sequence=''.join(self._chunks)))
        self._region = None
        self._chunks = []

    def _append_sequence(self, line):
        if self._region is None:
            logger.debug(f"Ignoring sequence line {self.line_number} outside of any region")
            return
        self._chunks.append(line.replace('\n', '').replace('\r', ''))

    def _parse_comment(self, line):
        if '#Sequence' in line and 'Format\t' in line:
            self.seq_count += 1
            return

        match = SEQUENCE_FILE_PATTERN.match(line)
        if match:
            self.sequence_files[int(match.group(1))] = match.group(2)

    def _parse_header(self, line) -> AlignedRegion:
        """
        Parse a '>' header of the form '><idx> <idx>:<start>-<end> <strand> <name>'.

        Real Mauve output writes a bare '>' followed by a space, in which case
        the index before the colon is used as the LCB index.

        In lenient mode any integer field that does not parse turns the
        region into one with 0-0 coordinates, which is later discarded.
        """
        fields = line.split(' ')
        coords = fields[1].split(':') if len(fields) > 1 else []
        span = coords[1].split('-') if len(coords) > 1 else []

        start = self._to_int(span[0] if span else None, "start coordinate", line)
        end = self._to_int(span[1] if len(span) > 1 else None, "end coordinate", line)

        coord_index = self._to_int(coords[0] if coords else None, "LCB index", line)
        if len(fields[0]) > 1:
            lcb_index = self._to_int(fields[0][1:], "LCB index", line)
            if None not in (lcb_index, coord_index) and lcb_index != coord_index:
                logger.warning(
                    f"Line {self.line_number}: header index {lcb_index} differs from "
                    f"coordinate index {coord_index}, using {lcb_index}"
                )
                self.index_mismatches.append((self.line_number, lcb_index, coord_index))
        else:
            lcb_index = coord_index

        strand = fields[2] if len(fields) > 2 else ''
        name = fields[3] if len(fields) > 3 else ''

        if self.strict_headers:
            if strand not in ('+', '-'):
                raise XmfaFormatError(f"Invalid strand '{strand}'", self.line_number, line)
            if not name:
                raise XmfaFormatError("Missing sequence name", self.line_number, line)

        if None in (start, end, coord_index, lcb_index):
            logger.debug(f"Line {self.line_number}: malformed header, region will be discarded")
            start = end = 0
            lcb_index = lcb_index or 0

        region = AlignedRegion(name=name, start=start, end=end, strand=strand, lcb_index=lcb_index)
        if not region.is_valid:
            logger.debug(f"Line {self.line_number}: region without coordinates will be discarded")
        return region

    def _to_int(self, text, label, line) -> Optional[int]:
        """Parse a plain ASCII integer; None when lenient parsing fails."""
        if text is not None and INTEGER_PATTERN.fullmatch(text):
            return int(text)
        if self.strict_headers:
            raise XmfaFormatError(f"Invalid {label} '{text}'", self.line_number, line)
        logger.debug(f"Line {self.line_number}: invalid {label} '{text}'")
        return None


def parse_xmfa(text: str, flush: bool = False, strict_headers: bool = False) -> List[List[AlignedRegion]]:
    """
    Parse a complete XMFA document.

    Args:
        text: XMFA content
        flush: Keep a trailing LCB that is not followed by a terminator line
        strict_headers: Raise XmfaFormatError on malformed headers

    Returns:
        List of LCBs in input order
    """
    parser = XmfaParser(strict_headers=strict_headers)
    parser.parse(text)
    return _complete(parser, flush)


def parse_xmfa_file(path: str, flush: bool = False, strict_headers: bool = False) -> List[List[AlignedRegion]]:
    """
    Parse an XMFA file line by line without loading it whole.

    A final line ending counts as an empty last line, so files behave
    exactly like ``parse_xmfa`` on their full text.
    """
    parser = XmfaParser(strict_headers=strict_headers)
    last_line = None

    with open(path, 'r', encoding='utf-8') as handle:
        for line in handle:
            parser.parse_line(line)
            last_line = line

    if last_line is None or last_line.endswith('\n'):
        parser.parse_line('')

    return _complete(parser, flush)


def _complete(parser, flush):
    if flush:
        parser.finish()
    elif parser.has_pending:
        logger.warning(
            f"XMFA input ended without a block terminator; "
            f"{parser.pending_regions} region(s) of the last LCB were dropped"
        )

    logger.debug(f"Parsed {len(parser.lcbs)} LCBs ({parser.seq_count} declared sequences)")
    return parser.lcbs
