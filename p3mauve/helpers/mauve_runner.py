#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mauve runner module for p3mauve.

This module provides functionality for running progressiveMauve or
mauveAligner on downloaded genomes and converting the resulting XMFA
alignment to JSON.
"""

import os
import errno
import logging
import subprocess

from ..config import Config, AlignmentError, ConfigError, ExternalToolError
from .alignment_workflow import xmfa_to_json


class MauveRunner:
    """
    Runs a Mauve aligner as a subprocess.

    Handles command construction, output relaying and conversion of the
    alignment once the aligner has finished.
    """

    def __init__(self, config=None):
        """
        Initialize with configuration settings.

        Args:
            config: Configuration object (defaults to global Config)
        """
        self.config = config if config else Config
        self.logger = logging.getLogger(__name__)

    def create_directory(self, path):
        """
        Create a directory if it doesn't exist.

        Args:
            path (str): Directory path to create

        Returns:
            str: Absolute path to the directory

        Raises:
            AlignmentError: If directory cannot be created
        """
        try:
            os.makedirs(path, exist_ok=True)
            return os.path.abspath(path)
        except OSError as e:
            if e.errno != errno.EEXIST:
                self.logger.error(f"Cannot create directory: {path}")
                self.logger.debug(f"Error details: {str(e)}", exc_info=True)
                raise AlignmentError(f"Cannot create directory: {path}")
            return os.path.abspath(path)

    def build_command(self, recipe, paths, mauve_opts, output_dir):
        """
        Build the aligner command line.

        mauveAligner expects a sorted-mer file after each sequence file, so
        '<fasta>.sml' is inserted after every path for that recipe.

        Args:
            recipe (str): 'progressiveMauve' or 'mauveAligner' (None for default)
            paths (list): Genome FASTA files in alignment order
            mauve_opts (dict): Option name to value, falsy values skipped
            output_dir (str): Directory for the XMFA file

        Returns:
            tuple: (argv list, xmfa output path)

        Raises:
            ConfigError: If the recipe is unknown
        """
        cmd = recipe or self.config.MAUVE_RECIPE
        if cmd not in self.config.MAUVE_BINARIES:
            raise ConfigError(f"Invalid recipe: {cmd}")

        xmfa_path = os.path.join(output_dir, self.config.XMFA_FILENAME)

        if cmd == 'mauveAligner':
            seq_paths = []
            for path in paths:
                seq_paths.extend([path, f"{path}.sml"])
        else:
            seq_paths = list(paths)

        opts = [f"--{name}={value}" for name, value in (mauve_opts or {}).items() if value]

        argv = [cmd, f"--output={xmfa_path}"] + seq_paths + opts
        return argv, xmfa_path

    def run_command(self, argv):
        """
        Execute the aligner and relay its output to the log.

        Args:
            argv (list): Command and arguments

        Returns:
            int: Return code of the aligner

        Raises:
            ExternalToolError: If the aligner cannot be started or fails
        """
        self.logger.info(f"Running {argv[0]} with params:  " + "\n".join(argv[1:]))

        try:
            proc = subprocess.Popen(argv, stdout=subprocess.PIPE, stderr=subprocess.STDOUT,
                                    universal_newlines=True)
        except FileNotFoundError as e:
            error_msg = f"{argv[0]} not found on PATH"
            self.logger.error(error_msg)
            raise ExternalToolError(error_msg, tool_name=argv[0], command=" ".join(argv)) from e

        output = []
        with proc:
            try:
                for line in proc.stdout:
                    line = line.rstrip('\n')
                    output.append(line)
                    self.logger.info(line)
            except UnicodeDecodeError as e:
                proc.kill()
                error_msg = "unreadable aligner output"
                self.logger.error(f"{argv[0]}: {error_msg}")
                self.logger.debug(f"Error details: {str(e)}", exc_info=True)
                raise ExternalToolError(error_msg, tool_name=argv[0], command=" ".join(argv),
                                        stdout="\n".join(output[-20:])) from e
            proc.wait()

        self.logger.info(f"child process exited with code {proc.returncode}")

        if proc.returncode != 0:
            raise ExternalToolError(
                "alignment failed", tool_name=argv[0], command=" ".join(argv),
                return_code=proc.returncode, stdout="\n".join(output[-20:])
            )
        return proc.returncode

    def run(self, recipe, paths, mauve_opts, output_dir, **convert_options):
        """
        Align genomes and write the alignment JSON.

        Args:
            recipe (str): Aligner to use
            paths (list): Genome FASTA files
            mauve_opts (dict): Aligner options
            output_dir (str): Output directory
            **convert_options: Passed on to xmfa_to_json

        Returns:
            str: Path to the alignment JSON file

        Raises:
            ExternalToolError: If the aligner fails
            AlignmentError: If the alignment cannot be converted
        """
        output_dir = self.create_directory(output_dir)
        argv, xmfa_path = self.build_command(recipe, paths, mauve_opts, output_dir)

        self.run_command(argv)

        json_path = xmfa_to_json(xmfa_path, **convert_options)
        self.logger.info("Done.")
        return json_path
