#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Alignment conversion workflow for p3mauve.

This module implements the XMFA to JSON conversion:
1. Parse the XMFA file written by Mauve into LCBs
2. Post-process regions (gaps, names, sequences)
3. Write the alignment JSON and, optionally, a CSV region summary
"""

import os
import json
import logging

from ..config import Config, AlignmentError, FileError, P3MauveError
from ..core import AlignmentPostProcessor, parse_xmfa_file

# Set up module logger
logger = logging.getLogger(__name__)


def load_alignment(xmfa_path, include_sequences=None, compute_gaps=None,
                   strict_gaps=None, flush=None, strict_headers=None):
    """
    Parse and post-process an XMFA file.

    Without sequences, names are shortened to file names; with sequences,
    names are kept unless Config.SHORTEN_NAMES_WITH_SEQUENCES is set.
    Unset arguments fall back to their Config defaults.

    Args:
        xmfa_path (str): Path to the XMFA file
        include_sequences (bool): Keep aligned sequences in the regions
        compute_gaps (bool): Annotate regions with gap runs
        strict_gaps (bool): Also report gap runs reaching the sequence end
        flush (bool): Keep a trailing LCB without a terminator line
        strict_headers (bool): Fail on malformed headers

    Returns:
        list: Post-processed LCBs

    Raises:
        FileError: If the XMFA file does not exist
        AlignmentError: If the file cannot be parsed
    """
    include_sequences = Config.resolve(include_sequences, 'INCLUDE_SEQUENCES')

    if not os.path.exists(xmfa_path):
        logger.error(f"XMFA file not found: {xmfa_path}")
        raise FileError(f"XMFA file not found: {xmfa_path}")

    logger.debug(f"Parsing XMFA file: {xmfa_path}")
    try:
        lcbs = parse_xmfa_file(
            xmfa_path,
            flush=Config.resolve(flush, 'FLUSH_AT_EOF'),
            strict_headers=Config.resolve(strict_headers, 'STRICT_HEADERS'),
        )
    except P3MauveError:
        raise
    except Exception as e:
        logger.error(f"Error parsing XMFA file: {xmfa_path}")
        logger.debug(f"Error details: {str(e)}", exc_info=True)
        raise AlignmentError(f"Failed to parse XMFA file: {str(e)}") from e

    processor = AlignmentPostProcessor(
        shorten_names=not include_sequences or Config.SHORTEN_NAMES_WITH_SEQUENCES,
        compute_gaps=Config.resolve(compute_gaps, 'COMPUTE_GAPS'),
        strip_sequences=not include_sequences,
        strict_gaps=Config.resolve(strict_gaps, 'STRICT_GAPS'),
    )
    lcbs = processor.process(lcbs)

    logger.info(f"Parsed {len(lcbs)} LCBs from {os.path.basename(xmfa_path)}")
    return lcbs


def write_alignment_json(lcbs, json_path):
    """
    Write LCBs as indented JSON.

    Args:
        lcbs (list): LCBs of AlignedRegion
        json_path (str): Destination path

    Returns:
        str: The destination path

    Raises:
        FileError: If the file cannot be written
    """
    logger.info(f"Writing Alignment JSON to {json_path}...")
    try:
        with open(json_path, 'w') as f:
            json.dump(AlignmentPostProcessor.to_records(lcbs), f, indent=4)
    except OSError as e:
        logger.error(f"Error writing alignment JSON: {json_path}")
        logger.debug(f"Error details: {str(e)}", exc_info=True)
        raise FileError(f"Error writing alignment JSON: {str(e)}") from e
    return json_path


def write_summary(lcbs, csv_path):
    """
    Write the per-region summary table as CSV.

    Raises:
        FileError: If the file cannot be written
    """
    df = AlignmentPostProcessor.summarize(lcbs)
    try:
        df.to_csv(csv_path, index=False)
    except OSError as e:
        logger.error(f"Error writing summary CSV: {csv_path}")
        logger.debug(f"Error details: {str(e)}", exc_info=True)
        raise FileError(f"Error writing summary CSV: {str(e)}") from e
    logger.debug(f"Wrote summary of {len(df)} regions to {csv_path}")
    return csv_path


def xmfa_to_json(xmfa_path, json_path=None, summary=None, **options):
    """
    Convert an XMFA file to alignment JSON.

    Args:
        xmfa_path (str): Path to the XMFA file
        json_path (str): Output path (defaults to the XMFA path with '.json')
        summary (bool): Also write '<name>.summary.csv' beside the JSON
        **options: Passed on to load_alignment

    Returns:
        str: Path to the JSON file
    """
    if json_path is None:
        json_path = _replace_extension(xmfa_path, '.json')

    lcbs = load_alignment(xmfa_path, **options)
    write_alignment_json(lcbs, json_path)

    if Config.resolve(summary, 'WRITE_SUMMARY'):
        write_summary(lcbs, _replace_extension(json_path, '.summary.csv'))

    return json_path


def _replace_extension(path, extension):
    root, ext = os.path.splitext(path)
    if ext.lower() in ('.xmfa', '.json'):
        return root + extension
    return path + extension
