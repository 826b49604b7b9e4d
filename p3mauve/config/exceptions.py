#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Custom exceptions for the p3mauve workflow.

This module defines exception classes used throughout p3mauve
to provide more specific error information and improve error handling.
"""


class P3MauveError(Exception):
    """Base exception class for all p3mauve-specific errors."""
    pass


class FileError(P3MauveError):
    """Base class for file-related errors."""
    pass


class FileFormatError(FileError):
    """Error with file formatting or parsing."""
    pass


class XmfaFormatError(FileFormatError):
    """Malformed XMFA content, raised only when strict header parsing is on."""

    def __init__(self, message, line_number=None, line=None):
        self.line_number = line_number
        self.line = line

        detailed_message = message
        if line_number is not None:
            detailed_message = f"line {line_number}: {message}"

        super().__init__(detailed_message)


class ConfigError(P3MauveError):
    """Error with configuration or job parameters."""
    pass


class AlignmentError(P3MauveError):
    """Error while producing or converting an alignment."""
    pass


class ExternalToolError(P3MauveError):
    """Error related to external tools like progressiveMauve or the data API."""
    
    def __init__(self, message, tool_name=None, command=None, return_code=None, stdout=None, stderr=None):
        """
        Initialize with extended information about the external tool error.
        
        Args:
            message (str): Error message
            tool_name (str, optional): Name of the external tool
            command (str, optional): Command that was executed
            return_code (int, optional): Return code from the command
            stdout (str, optional): Standard output from the command
            stderr (str, optional): Standard error from the command
        """
        self.tool_name = tool_name
        self.command = command
        self.return_code = return_code
        self.stdout = stdout
        self.stderr = stderr
        
        detailed_message = message
        if tool_name:
            detailed_message = f"{tool_name} error: {message}"
        if return_code is not None:
            detailed_message += f" (return code: {return_code})"
            
        super().__init__(detailed_message)
