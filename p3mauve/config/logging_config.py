#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration module for p3mauve.

Contains functionality for:
1. Module-specific debug level control based on filenames
2. Colored console output for debug sessions
3. Automatic log file management

Debug output can be enabled for the whole package or for single modules,
e.g. ``--debug xmfa_parser`` while the rest stays at INFO level.
"""

import os
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class ModuleDebugConfig:
    """
    Configuration for module-specific debug settings.

    Attributes:
        MODULE_DEBUG_LEVELS: Dictionary mapping module names to log levels
        FILENAME_TO_MODULE: Dictionary mapping filenames to full module paths

    Example:
        >>> ModuleDebugConfig.MODULE_DEBUG_LEVELS['p3mauve.pipeline']
        20
    """

    # All modules default to INFO level
    MODULE_DEBUG_LEVELS = {
        'p3mauve.pipeline': logging.INFO,
        'p3mauve.core.gap_scanner': logging.INFO,
        'p3mauve.core.xmfa_parser': logging.INFO,
        'p3mauve.core.alignment_processor': logging.INFO,
        'p3mauve.helpers.genome_fetcher': logging.INFO,
        'p3mauve.helpers.mauve_runner': logging.INFO,
        'p3mauve.helpers.alignment_workflow': logging.INFO,
        'p3mauve.utils.job_params': logging.INFO,
        'p3mauve.config.config': logging.INFO,
    }

    # Filename to module mapping for intuitive usage
    FILENAME_TO_MODULE = {
        'pipeline': 'p3mauve.pipeline',

        # Core parsing
        'gap_scanner': 'p3mauve.core.gap_scanner',
        'xmfa_parser': 'p3mauve.core.xmfa_parser',
        'alignment_processor': 'p3mauve.core.alignment_processor',

        # Helpers
        'genome_fetcher': 'p3mauve.helpers.genome_fetcher',
        'mauve_runner': 'p3mauve.helpers.mauve_runner',
        'alignment_workflow': 'p3mauve.helpers.alignment_workflow',

        # Utilities and config
        'job_params': 'p3mauve.utils.job_params',
        'config': 'p3mauve.config.config',
    }


class SimpleDebugFormatter(logging.Formatter):
    """
    Simple formatter with colors for debug output.

    Attributes:
        use_colors: Whether to use ANSI color codes in output
        COLORS: Dictionary mapping log levels to ANSI color codes
    """

    def __init__(self, fmt=None, datefmt=None, use_colors=False):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

        # ANSI color codes
        self.COLORS = {
            'DEBUG': '\033[37m',      # White
            'INFO': '\033[1;37m',     # Bold White
            'WARNING': '\033[33m',    # Yellow
            'ERROR': '\033[31m',      # Red
            'CRITICAL': '\033[35m',   # Magenta
        }
        self.RESET = '\033[0m'

    def format(self, record):
        formatted_message = super().format(record)

        if self.use_colors and record.levelname in self.COLORS:
            color_code = self.COLORS[record.levelname]
            formatted_message = f"{color_code}{formatted_message}{self.RESET}"

        return formatted_message


class EnhancedDebugFilter(logging.Filter):
    """
    Filter that controls module-specific debug output.

    Records from a module are let through when their level reaches the
    level configured for that module or its closest configured parent.
    Modules that are not configured default to INFO.

    Example:
        >>> filter_obj = EnhancedDebugFilter({'p3mauve.pipeline': logging.DEBUG})
        >>> handler.addFilter(filter_obj)
    """

    def __init__(self, module_levels: Dict[str, int]):
        super().__init__()
        self.module_levels = module_levels

    def filter(self, record):
        module_name = record.name

        if module_name in self.module_levels:
            return record.levelno >= self.module_levels[module_name]

        for module_pattern, level in self.module_levels.items():
            if module_name.startswith(module_pattern + '.'):
                return record.levelno >= level

        return record.levelno >= logging.INFO


def setup_logging(debug: Union[bool, List[str], str] = False, log_dir: Optional[str] = None) -> str:
    """
    Configure logging with filename-based debug control.

    Args:
        debug: Debug configuration options:
               - False: No debug logging
               - True: Universal debug for all modules
               - str: Single filename for debug (e.g., 'xmfa_parser')
               - List[str]: List of filenames for debug
        log_dir: Directory for the log file (defaults to ~/.p3mauve/logs)

    Returns:
        str: Path to the created log file

    Raises:
        LoggingConfigError: If logging setup fails

    Example:
        >>> log_file = setup_logging(debug=['xmfa_parser', 'mauve_runner'])
    """
    try:
        from .config import Config

        debug_enabled, debug_modules = _normalize_debug_input(debug)

        module_config = ModuleDebugConfig.MODULE_DEBUG_LEVELS.copy()

        if debug_modules:
            for module in module_config:
                module_config[module] = logging.INFO

            for module_name in debug_modules:
                full_module_name = _resolve_module_name(module_name)
                if full_module_name:
                    module_config[full_module_name] = logging.DEBUG
        elif debug_enabled:
            for module in module_config:
                module_config[module] = logging.DEBUG

        if log_dir is None:
            log_dir = os.path.join(os.path.expanduser("~"), ".p3mauve", "logs")
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, f"p3mauve_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Clear existing handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        # File handler (detailed, no colors)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if debug_enabled else logging.INFO)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        ))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG if debug_enabled else logging.INFO)

        if debug_enabled:
            console_formatter = SimpleDebugFormatter(
                fmt='%(levelname)-8s [%(name)s] %(message)s',
                use_colors=True
            )
            console_handler.addFilter(EnhancedDebugFilter(module_config))
        else:
            console_formatter = SimpleDebugFormatter(fmt='%(message)s', use_colors=False)

        console_handler.setFormatter(console_formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        main_logger = logging.getLogger("p3mauve")
        if debug_enabled:
            main_logger.debug(f"Debug logging enabled, log file: {log_file}")
            if debug_modules:
                unresolved = [m for m in debug_modules if not _resolve_module_name(m)]
                if unresolved:
                    main_logger.warning(f"Unknown module names: {', '.join(unresolved)}")

        Config.DEBUG_MODE = debug_enabled
        return log_file

    except Exception as e:
        error_msg = "Failed to setup logging configuration"
        print(f"ERROR: {error_msg}: {str(e)}")  # Can't use logger here since setup failed
        raise LoggingConfigError(error_msg) from e


def _normalize_debug_input(debug: Union[bool, List[str], str]) -> Tuple[bool, Optional[List[str]]]:
    """
    Normalize various debug input formats to (debug_enabled, debug_modules).

    Example:
        >>> _normalize_debug_input(['xmfa_parser'])
        (True, ['xmfa_parser'])
    """
    from .config import Config

    if isinstance(debug, bool):
        return debug or Config.DEBUG_MODE, None
    if isinstance(debug, str):
        return True, [debug]
    if isinstance(debug, list):
        return True, debug
    return False, None


def _resolve_module_name(filename: str) -> Optional[str]:
    """Resolve a filename like 'xmfa_parser' to its full module path."""
    if filename in ModuleDebugConfig.FILENAME_TO_MODULE:
        return ModuleDebugConfig.FILENAME_TO_MODULE[filename]

    if filename in ModuleDebugConfig.MODULE_DEBUG_LEVELS:
        return filename

    return None


class LoggingConfigError(Exception):
    """Error during logging configuration setup."""
    pass
