#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Job parameter handling for the p3mauve workflow.

Contains functionality for:
1. Loading job parameters from a JSON file, a JSON string or CLI options
2. Validating the aligner recipe and output location
3. Mapping job parameters to Mauve command-line options
4. Reading the data API endpoint from a server config string

Job descriptions use the field names of the genome alignment service,
e.g. ``{"genome_ids": ["204722.5"], "recipe": "progressiveMauve",
"seedWeight": 15}``.
"""

import os
import json
import logging
from typing import Any, Dict, List, Optional

from ..config import Config, ConfigError

# Set up module logger
logger = logging.getLogger(__name__)

# Job parameter name -> Mauve option name
MAUVE_OPTION_FLAGS = {
    'seedWeight': 'seed-weight',
    'maxGappedAlignerLength': 'max-gapped-aligner-length',
    'maxBreakpointDistanceScale': 'max-breakpoint-distance-scale',
    'conservationDistanceScale': 'conservation-distance-scale',
    'weight': 'weight',
    'minScaledPenalty': 'min-scaled-penalty',
    'hmmPGoHomologous': 'hmm-p-go-homologous',
    'hmmPGoUnrelated': 'hmm-p-go-unrelated',
}


def load_job_params(jfile: Optional[str] = None, jstring: Optional[str] = None,
                    genome_ids: Optional[str] = None, output: Optional[str] = None,
                    **cli_options) -> Dict[str, Any]:
    """
    Load job parameters from the first available source.

    A job file takes precedence over a job string, which takes precedence
    over comma-delimited genome IDs given on the command line.

    Args:
        jfile: Path to a JSON job description
        jstring: JSON job description as a string
        genome_ids: Comma-delimited genome IDs
        output: Output directory; overrides an 'output' field of the job
        **cli_options: Further CLI options (recipe and Mauve options),
            used only when no job description is given

    Returns:
        dict: Job parameters with 'genome_ids' as a list

    Raises:
        ConfigError: If the job description cannot be read or parsed
    """
    if jfile:
        logger.debug(f"Loading job parameters from file {jfile}")
        try:
            with open(jfile, 'r') as f:
                params = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            error_msg = f"Failed to read job parameters from {jfile}"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e
        source = 'file'
    elif jstring:
        logger.debug("Loading job parameters from string")
        try:
            params = json.loads(jstring)
        except json.JSONDecodeError as e:
            error_msg = "Failed to parse job parameters (--jstring)"
            logger.error(error_msg)
            logger.debug(f"Error details: {str(e)}", exc_info=True)
            raise ConfigError(error_msg) from e
        source = 'string'
    else:
        params = {key: value for key, value in cli_options.items() if value is not None}
        params['genome_ids'] = _split_ids(genome_ids)
        source = 'cli'

    if not isinstance(params, dict):
        raise ConfigError("Job parameters must be a JSON object")

    params['genome_ids'] = _as_id_list(params.get('genome_ids'))
    if output:
        params['output'] = output
    params['source'] = source

    logger.debug(f"Job parameters ({source}): {len(params['genome_ids'])} genome(s)")
    return params


def validate_params(params: Dict[str, Any]) -> None:
    """
    Check job parameters before any data is fetched.

    Args:
        params: Job parameters from load_job_params

    Raises:
        ConfigError: If the recipe is unknown, no genomes are given or
            the output directory is missing
    """
    recipe = params.get('recipe')
    if recipe and recipe not in Config.MAUVE_BINARIES:
        raise ConfigError(f"Invalid recipe: {recipe}")

    if not params.get('genome_ids'):
        raise ConfigError("No genome IDs given (use --genome-ids, --jfile or --jstring)")

    if not params.get('output'):
        raise ConfigError("Must specify output directory path")

    output = params['output']
    if os.path.exists(output) and not os.path.isdir(output):
        raise ConfigError(f"Output path is not a directory: {output}")


def mauve_options(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Collect Mauve options from job parameters.

    Falsy values are left out so the aligner uses its own default.

    Example:
        >>> mauve_options({'seedWeight': 15, 'weight': None})
        {'seed-weight': 15}
    """
    options = {}
    for param_name, flag in MAUVE_OPTION_FLAGS.items():
        value = params.get(param_name)
        if value:
            options[flag] = value
    return options


def data_api_endpoint(sstring: Optional[str]) -> Optional[str]:
    """
    Read the data API URL from a server config JSON string.

    Args:
        sstring: Server config, e.g. '{"data_api": "https://..."}'

    Returns:
        The endpoint, or None when no server config is given

    Raises:
        ConfigError: If the server config is not valid JSON
    """
    if not sstring:
        return None

    try:
        server_config = json.loads(sstring)
    except json.JSONDecodeError as e:
        error_msg = "Error parsing server config (--sstring)"
        logger.error(error_msg)
        logger.debug(f"Error details: {str(e)}", exc_info=True)
        raise ConfigError(error_msg) from e

    if not isinstance(server_config, dict):
        raise ConfigError("Server config (--sstring) must be a JSON object")

    return server_config.get('data_api')


def _split_ids(genome_ids: Optional[str]) -> List[str]:
    if not genome_ids:
        return []
    return [genome_id.strip() for genome_id in genome_ids.split(',') if genome_id.strip()]


def _as_id_list(genome_ids) -> List[str]:
    if genome_ids is None:
        return []
    if isinstance(genome_ids, str):
        return _split_ids(genome_ids)
    return [str(genome_id) for genome_id in genome_ids]
