#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Genome fetcher for the p3mauve workflow.

Contains functionality for:
1. Building data API queries for genome contig sequences
2. Streaming FASTA responses straight to disk
3. Sanity checking downloaded FASTA files

Genomes are written as ``<output>/<genome_id>[.<suffix>].fasta`` in the
order they were requested, which is the order they are handed to Mauve.
"""

import os
import shutil
import logging
import urllib.request
from typing import List, Optional

from Bio import SeqIO
from tqdm import tqdm

from ..config import Config, ExternalToolError, FileError

# Set up module logger
logger = logging.getLogger(__name__)


class GenomeFetcher:
    """
    Downloads genome contigs from the data API as FASTA files.

    Attributes:
        endpoint: Base URL of the data API
        token: Authorization token sent with each request

    Example:
        >>> fetcher = GenomeFetcher()
        >>> paths = fetcher.fetch_genome_fastas(["204722.5"], "out/")
    """

    def __init__(self, endpoint=None, token=None):
        """
        Initialize the fetcher.

        Args:
            endpoint: Data API URL (defaults to Config.DATA_API_URL)
            token: Authorization token (defaults to the KB_AUTH_TOKEN variable)
        """
        self.endpoint = (endpoint or Config.DATA_API_URL).rstrip('/')
        self.token = token if token is not None else Config.get_auth_token()

    def genome_url(self, genome_id: str) -> str:
        """Query URL for all contigs of a genome, longest first."""
        return (f"{self.endpoint}/genome_sequence/?eq(genome_id,{genome_id})"
                f"&sort(-length,+sequence_id)&limit({Config.FETCH_LIMIT})")

    @staticmethod
    def fasta_path(genome_id: str, out_dir: str, suffix: Optional[str] = None) -> str:
        """Output path of a genome's FASTA file."""
        filename = f"{genome_id}.{suffix}.fasta" if suffix else f"{genome_id}.fasta"
        return os.path.join(out_dir, filename)

    def fetch_genome_fastas(self, genome_ids: List[str], out_dir: str, suffix: Optional[str] = None) -> List[str]:
        """
        Download each genome to its own FASTA file.

        Args:
            genome_ids: Genome IDs, in the order they should be aligned
            out_dir: Directory for the FASTA files (created if missing)
            suffix: Optional suffix inserted before '.fasta'

        Returns:
            List of written file paths, in genome ID order

        Raises:
            FileError: If the output directory cannot be created
            ExternalToolError: If a download fails
        """
        try:
            os.makedirs(out_dir, exist_ok=True)
        except OSError as e:
            error_msg = f"Cannot create output directory: {out_dir}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise FileError(error_msg) from e

        paths = []
        for genome_id in tqdm(genome_ids, desc="Fetching genomes", unit="genome",
                              disable=not Config.SHOW_PROGRESS):
            logger.info(f"Fetching genome: {genome_id}")
            path = self.fasta_path(genome_id, out_dir, suffix)
            self.stream_file(self.genome_url(genome_id), path)
            self.check_fasta(path)
            paths.append(path)

        return paths

    def stream_file(self, url: str, path: str) -> str:
        """
        Stream a FASTA response to a file.

        Args:
            url: Data API query URL
            path: Destination file

        Returns:
            The destination path

        Raises:
            ExternalToolError: If the request or the write fails
        """
        request = urllib.request.Request(url, headers={
            'accept': Config.FASTA_ACCEPT,
            'authorization': self.token or '',
        })

        try:
            with urllib.request.urlopen(request) as response:
                logger.debug(f"Writing {path}...")
                with open(path, 'wb') as out:
                    shutil.copyfileobj(response, out)
        except Exception as e:
            error_msg = f"Error fetching genome from Data API: {str(e)}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ExternalToolError(error_msg, tool_name="data_api", command=url) from e

        return path

    @staticmethod
    def check_fasta(path: str) -> int:
        """
        Count FASTA records in a downloaded file.

        An empty result usually means an unknown genome ID or a missing
        authorization token for a private genome, so it is logged as a
        warning rather than raised.

        Returns:
            Number of records
        """
        with open(path, 'r') as handle:
            count = sum(1 for _ in SeqIO.parse(handle, "fasta"))

        if count == 0:
            logger.warning(f"No sequences in {path}; check the genome ID and KB_AUTH_TOKEN")
        else:
            logger.debug(f"{path}: {count} contig(s)")
        return count
