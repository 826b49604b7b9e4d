"""
Helpers module for the p3mauve workflow.

This module provides the steps around the core parser:
1. GenomeFetcher - Downloads genome FASTA files from the data API
2. MauveRunner - Runs progressiveMauve or mauveAligner
3. Alignment workflow - Converts XMFA output to JSON
"""

from .genome_fetcher import GenomeFetcher
from .mauve_runner import MauveRunner
from .alignment_workflow import load_alignment, write_alignment_json, xmfa_to_json

__all__ = ['GenomeFetcher', 'MauveRunner', 'load_alignment', 'write_alignment_json', 'xmfa_to_json']
