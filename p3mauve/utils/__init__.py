"""
Utility modules for the p3mauve workflow.

This subpackage contains utility functions:
- job_params: job description loading and validation
"""

from .job_params import load_job_params, validate_params, mauve_options, data_api_endpoint

__all__ = [
    'load_job_params',
    'validate_params',
    'mauve_options',
    'data_api_endpoint',
]
