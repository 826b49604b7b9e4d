#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for p3mauve tests.

This file contains fixtures that can be reused across multiple test modules.
"""

import os
import logging
import tempfile
import warnings

import pytest

from ..config import Config


# ============== Suppress logging ===============
class NullHandler(logging.Handler):
    def emit(self, record):
        pass


def silence_logger(logger_name):
    """Completely silence a logger by name."""
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.CRITICAL)
    logger.propagate = False
    logger.handlers = []
    logger.addHandler(NullHandler())


silence_logger("urllib3")
silence_logger("tqdm")

warnings.filterwarnings("ignore")


def pytest_configure(config):
    """Disable logging output during testing."""
    logging.disable(logging.CRITICAL)


# ============== Configuration ===============
@pytest.fixture(autouse=True)
def reset_config():
    """Restore Config class attributes after each test."""
    saved = Config.get_all_settings()
    yield
    for key, value in saved.items():
        setattr(Config, key, value)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


# ============== XMFA data ===============
SAMPLE_XMFA = """#FormatVersion Mauve1
#Sequence1File\t/data/genomes/204722.5.fasta
#Sequence1Format\tFastA
#Sequence2File\t/data/genomes/224914.11.fasta
#Sequence2Format\tFastA
#BackboneFile\talignment.xmfa.bbcols
> 1:1-10 + /data/genomes/204722.5.fasta
ACGTACGT--
AC
> 2:101-110 - /data/genomes/224914.11.fasta
ACG--CGTAA
AC
=
> 1:11-14 + /data/genomes/204722.5.fasta
AC-T
> 2:0-0 + /data/genomes/224914.11.fasta
----
=
"""


@pytest.fixture
def sample_xmfa_text():
    """Two-genome XMFA with one block shared by both genomes and one not."""
    return SAMPLE_XMFA


@pytest.fixture
def sample_xmfa_file(temp_dir):
    """SAMPLE_XMFA written to disk."""
    path = os.path.join(temp_dir, "alignment.xmfa")
    with open(path, 'w') as f:
        f.write(SAMPLE_XMFA)
    return path
