"""
Utility commands for the shopdb CLI.
Provides helper commands for connectivity checks and pool diagnostics.
"""

import click

from ...cli.base import BaseCommand, command_error_handler
from ...db.exceptions import DatabaseConnectionError

class TestConnectionCommand(BaseCommand):
    """Command to test database connectivity."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the connection test."""
        self.logger.info("Testing database connection...")

        if not self.pool.test_connection():
            raise DatabaseConnectionError("Could not connect to the database")

        click.secho(
            "Successfully connected to the database!",
            fg='green'
        )

class PoolStatsCommand(BaseCommand):
    """Command to show connection pool occupancy."""

    @command_error_handler
    def execute(self) -> None:
        """Open the pool with a liveness check and print its counts."""
        if not self.pool.test_connection():
            raise DatabaseConnectionError("Could not connect to the database")

        stats = self.pool.log_stats()
        click.echo(f"Active connections: {stats.active}")
        click.echo(f"Idle connections:   {stats.idle}")
        click.echo(f"Total connections:  {stats.total}")

__all__ = ['TestConnectionCommand', 'PoolStatsCommand']
