"""Schema initialization command."""

import click

from ..cli.base import BaseCommand, command_error_handler
from ..db.initializer import initialize_database

class InitDatabaseCommand(BaseCommand):
    """Create the products table, its indexes and sample data."""

    @command_error_handler
    def execute(self) -> None:
        """Execute the command."""
        self.logger.info("=== Initializing database ===")
        inserted = initialize_database(self.pool)
        if inserted:
            click.secho(f"Database initialized with {inserted} sample products", fg='green')
        else:
            click.secho("Database initialized, existing products kept", fg='green')
