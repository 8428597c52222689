"""
CLI module for the shopdb package.
Provides command-line interface functionality and utilities.

The click entry point lives in ``shopdb.cli.main``.
"""

from .base import BaseCommand, command_error_handler
from .logging import setup_logging, get_logger

__all__ = ['BaseCommand', 'command_error_handler', 'setup_logging', 'get_logger']
