#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration package for the p3mauve workflow.
"""

from .config import Config
from .logging_config import setup_logging
from .exceptions import (P3MauveError, FileError, FileFormatError, XmfaFormatError,
                         ConfigError, AlignmentError, ExternalToolError)

__all__ = [
    'Config',
    'setup_logging',
    'P3MauveError',
    'FileError',
    'FileFormatError',
    'XmfaFormatError',
    'ConfigError',
    'AlignmentError',
    'ExternalToolError',
]
