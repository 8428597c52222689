"""
Base command infrastructure for the shopdb CLI.
Provides common functionality and utilities for all commands.
"""

import functools
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import click

from ..config import DatabaseConfig
from ..dao import ProductDAO
from ..db.exceptions import DataAccessError
from ..db.pool import ConnectionPool

class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)
        self._pool: Optional[ConnectionPool] = None

        # Get debug status from click context
        ctx = click.get_current_context(silent=True)
        self.debug = bool(ctx and ctx.obj and ctx.obj.get('debug'))
        if self.debug:
            self.logger.debug(f"Debug mode enabled for {self.__class__.__name__}")

    @property
    def pool(self) -> ConnectionPool:
        """Get or create the connection pool."""
        if self._pool is None:
            if self.debug:
                self.logger.debug(f"Creating connection pool (settings from {self.config.source.value})")
            self._pool = ConnectionPool(self.config)
        return self._pool

    def product_dao(self) -> ProductDAO:
        """Create a product DAO bound to this command's pool."""
        return ProductDAO(self.pool)

    def close(self) -> None:
        """Shut down the pool if one was created."""
        if self._pool is not None:
            self._pool.shutdown()

    @abstractmethod
    def execute(self) -> None:
        """Execute the command. Must be implemented by subclasses."""
        pass

def command_error_handler(f):
    """Decorator to handle command execution errors consistently.

    Data-access failures abort the command with a non-zero exit code. The
    pool is shut down whatever the outcome.
    """
    @functools.wraps(f)
    def wrapper(self, *args, **kwargs):
        start = time.time()
        if self.debug:
            self.logger.debug(f"Starting command execution: {f.__name__}")
        try:
            result = f(self, *args, **kwargs)
            if self.debug:
                self.logger.debug(f"Command completed in {time.time() - start:.3f}s")
            return result
        except DataAccessError as e:
            self.logger.error(f"Command failed ({e.kind.value}): {e.message}")
            if self.debug:
                self.logger.debug(f"Error context: {e.context}", exc_info=True)
            click.secho(f"Error: {e.message}", fg='red', err=True)
            raise click.Abort()
        finally:
            self.close()
    return wrapper
