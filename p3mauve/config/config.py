#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration module for the p3mauve workflow.

Contains functionality for:
1. Central configuration settings management with singleton pattern
2. JSON configuration file loading/saving
3. Data API endpoint and authentication token resolution
4. XMFA parsing and post-processing defaults

This module provides centralized configuration management for p3mauve,
supporting simple parameter overrides from a JSON file.
"""

import os
import json
import logging
from typing import Dict, Any, Optional

from .exceptions import ConfigError, FileFormatError

logger = logging.getLogger(__name__)


class Config:
    """
    Central configuration settings for p3mauve with singleton pattern.

    This class manages all configuration settings of the workflow,
    providing a singleton pattern for consistent settings access across
    all modules and JSON configuration file support.

    Attributes:
        DEBUG_MODE: Enable debug logging mode
        DATA_API_URL: Base URL of the data API genomes are fetched from
        MAUVE_RECIPE: Default aligner (progressiveMauve or mauveAligner)
        INCLUDE_SEQUENCES: Keep aligned sequences in the JSON output

    Example:
        >>> config = Config.get_instance()
        >>> config.COMPUTE_GAPS = True
        >>> Config.load_from_file("my_config.json")
    """

    # Singleton instance
    _instance = None

    #############################################################################
    #                           Workflow Mode Options
    #############################################################################
    DEBUG_MODE = False                   # Debug logging mode (enable with --debug flag)
    SHOW_PROGRESS = True

    #############################################################################
    #                           Data API Settings
    #############################################################################
    DATA_API_URL = "https://p3.theseed.org/services/data_api"
    FETCH_LIMIT = 25000                  # Max contigs requested per genome
    AUTH_TOKEN_ENV = "KB_AUTH_TOKEN"     # Environment variable holding the auth token
    FASTA_ACCEPT = "application/dna+fasta"

    #############################################################################
    #                           Aligner Settings
    #############################################################################
    MAUVE_RECIPE = "progressiveMauve"
    MAUVE_BINARIES = ["progressiveMauve", "mauveAligner"]
    XMFA_FILENAME = "alignment.xmfa"

    #############################################################################
    #                           XMFA Parsing and Output
    #############################################################################
    INCLUDE_SEQUENCES = False            # Keep aligned sequences in JSON output
    SHORTEN_NAMES_WITH_SEQUENCES = False # Strip paths from names even when keeping sequences
    COMPUTE_GAPS = False                 # Annotate each region with gap runs
    STRICT_GAPS = False                  # Also report gap runs reaching the sequence end
    FLUSH_AT_EOF = False                 # Keep the last LCB when the file lacks a terminator
    STRICT_HEADERS = False               # Raise on malformed '>' headers instead of discarding
    WRITE_SUMMARY = False                # Write a per-region CSV summary next to the JSON
    VALID_BASES = "ATGCN-"

    def __init__(self):
        """Initialize Config instance with default values."""
        # Implementation left empty as we're using class variables
        pass

    @classmethod
    def get_instance(cls) -> 'Config':
        """
        Get the singleton instance of Config.

        Returns:
            Config: Singleton instance
        """
        if cls._instance is None:
            logger.debug("Creating new Config singleton instance")
            cls._instance = cls()
        return cls._instance

    @classmethod
    def get_auth_token(cls) -> str:
        """
        Get the data API authorization token from the environment.

        Returns:
            Token string, empty when the variable is unset
        """
        return os.environ.get(cls.AUTH_TOKEN_ENV, "")

    @classmethod
    def load_from_file(cls, filepath: str) -> bool:
        """
        Load settings from a JSON configuration file.

        Args:
            filepath: Path to the JSON configuration file

        Returns:
            bool: True if settings were loaded successfully

        Raises:
            ConfigError: If file loading fails

        Example:
            >>> success = Config.load_from_file("my_config.json")
        """
        logger.debug(f"Loading configuration from {filepath}")

        try:
            cls.get_instance()

            if not os.path.exists(filepath):
                error_msg = f"Configuration file not found: {filepath}"
                logger.error(error_msg)
                raise FileFormatError(error_msg)

            result = cls._load_from_json(filepath)
            logger.debug("Configuration loaded successfully")
            return result

        except Exception as e:
            error_msg = f"Failed to load settings from {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

    @classmethod
    def _load_from_json(cls, filepath: str) -> bool:
        """
        Load settings from a JSON file.

        Args:
            filepath: Path to the JSON file

        Returns:
            bool: True if settings were loaded successfully
        """
        with open(filepath, 'r') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise FileFormatError(f"Configuration in {filepath} must be a JSON object")

        logger.debug(f"Loaded {len(settings)} settings from JSON")

        for key, value in settings.items():
            if not key.startswith('_') and hasattr(cls, key) and not callable(getattr(cls, key)):
                setattr(cls, key, value)
                logger.debug(f"Updated {key} = {value}")
            else:
                logger.warning(f"Ignoring unknown setting: {key}")

        return True

    @classmethod
    def save_to_file(cls, filepath: str) -> bool:
        """
        Save current settings to a JSON file.

        Args:
            filepath: Path to save the settings

        Returns:
            bool: True if settings were saved successfully

        Raises:
            ConfigError: If saving fails
        """
        try:
            with open(filepath, 'w') as f:
                json.dump(cls.get_all_settings(), f, indent=4)

            logger.debug(f"Saved JSON settings to {filepath}")
            return True
        except Exception as e:
            error_msg = f"Failed to save JSON settings to {filepath}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e

    @classmethod
    def get_all_settings(cls) -> Dict[str, Any]:
        """
        Get all settings as a dictionary.

        Returns:
            dict: Dictionary of all configuration settings
        """
        settings = {}

        for key in dir(cls):
            if key.startswith('_') or not key.isupper():
                continue
            value = getattr(cls, key)
            if isinstance(value, (str, int, float, bool, list, dict)) or value is None:
                settings[key] = value

        logger.debug(f"Retrieved {len(settings)} configuration settings")
        return settings

    @classmethod
    def resolve(cls, value: Optional[Any], setting: str) -> Any:
        """
        Return value unless it is None, otherwise the named setting.

        Args:
            value: Explicit value given by the caller
            setting: Name of the Config attribute to fall back to
        """
        return getattr(cls, setting) if value is None else value
