"""
Configuration management for the shopdb package.
Handles loading database and pool settings from a dotenv file and the environment.
"""

import enum
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values
from sqlalchemy.engine import URL, make_url

logger = logging.getLogger(__name__)

ENV_PREFIX = 'DB_'

DEFAULTS: Dict[str, str] = {
    'DB_URL': 'postgresql://localhost:5432/comercio_db',
    'DB_USERNAME': 'postgres',
    'DB_PASSWORD': 'postgres',
    'DB_DRIVER': 'psycopg2',
    'DB_POOL_MAXIMUM_SIZE': '10',
    'DB_POOL_MINIMUM_IDLE': '2',
    'DB_POOL_CONNECTION_TIMEOUT': '30000',
    'DB_POOL_IDLE_TIMEOUT': '600000',
    'DB_POOL_MAX_LIFETIME': '1800000',
    'DB_CACHE_PREP_STMTS': 'true',
    'DB_PREP_STMT_CACHE_SIZE': '250',
}

# Seconds SQLite waits on a locked database file
SQLITE_LOCK_TIMEOUT = 20


class ConfigSource(enum.Enum):
    """Where the loaded settings came from."""

    FILE = 'file'
    ENVIRONMENT = 'environment'
    DEFAULTS = 'defaults'


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class DatabaseConfig:
    """Connection and pool settings for the product database."""

    # Connection settings
    url: str = DEFAULTS['DB_URL']
    username: str = DEFAULTS['DB_USERNAME']
    password: str = field(default=DEFAULTS['DB_PASSWORD'], repr=False)
    driver: str = DEFAULTS['DB_DRIVER']

    # Pool settings (timeouts in milliseconds)
    maximum_pool_size: int = 10
    minimum_idle: int = 2
    connection_timeout_ms: int = 30000
    idle_timeout_ms: int = 600000
    max_lifetime_ms: int = 1800000

    # Statement cache settings
    cache_prep_stmts: bool = True
    prep_stmt_cache_size: int = 250

    source: ConfigSource = ConfigSource.DEFAULTS

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]], source: ConfigSource) -> 'DatabaseConfig':
        """Build a configuration from ``DB_*`` keys, defaulting any key that is missing or blank.

        Credentials may be blank, which leaves them out of the URL.

        Args:
            values: Raw key/value pairs
            source: Origin of the values

        Returns:
            DatabaseConfig: Configuration instance
        """
        def get(key: str, allow_empty: bool = False) -> str:
            value = values.get(key)
            if value is None or (value == '' and not allow_empty):
                return DEFAULTS[key]
            return value

        return cls(
            url=get('DB_URL'),
            username=get('DB_USERNAME', allow_empty=True),
            password=get('DB_PASSWORD', allow_empty=True),
            driver=get('DB_DRIVER'),
            maximum_pool_size=int(get('DB_POOL_MAXIMUM_SIZE')),
            minimum_idle=int(get('DB_POOL_MINIMUM_IDLE')),
            connection_timeout_ms=int(get('DB_POOL_CONNECTION_TIMEOUT')),
            idle_timeout_ms=int(get('DB_POOL_IDLE_TIMEOUT')),
            max_lifetime_ms=int(get('DB_POOL_MAX_LIFETIME')),
            cache_prep_stmts=_as_bool(get('DB_CACHE_PREP_STMTS')),
            prep_stmt_cache_size=int(get('DB_PREP_STMT_CACHE_SIZE')),
            source=source,
        )

    @classmethod
    def defaults(cls) -> 'DatabaseConfig':
        """Return the built-in default configuration."""
        return cls.from_mapping({}, ConfigSource.DEFAULTS)

    @classmethod
    def load(cls, env_file: Optional[Path] = None) -> 'DatabaseConfig':
        """Load configuration from a dotenv file overlaid by ``DB_*`` environment variables.

        A missing or unreadable file is not an error: when neither the file nor
        the environment provide any setting the built-in defaults are used.

        Args:
            env_file: Optional path to the dotenv file, ``.env`` when omitted

        Returns:
            DatabaseConfig: Configuration instance
        """
        path = Path(env_file) if env_file else Path('.env')
        values: Dict[str, Optional[str]] = {}
        source = ConfigSource.DEFAULTS

        if path.is_file():
            try:
                values.update(dotenv_values(path))
                source = ConfigSource.FILE
                logger.info(f"Loaded database settings from {path}")
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read database settings from {path}: {e}")
        else:
            logger.debug(f"Settings file {path} not found")

        environment = {k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)}
        if environment:
            values.update(environment)
            if source is ConfigSource.DEFAULTS:
                source = ConfigSource.ENVIRONMENT

        if source is ConfigSource.DEFAULTS:
            logger.warning("No database settings found, using default values")
            return cls.defaults()

        return cls.from_mapping(values, source)

    def sqlalchemy_url(self) -> URL:
        """Build the SQLAlchemy URL, applying driver and credentials.

        Returns:
            URL: Connection URL for ``create_engine``
        """
        url = make_url(self.url)
        if self.driver and '+' not in url.drivername:
            url = url.set(drivername=f"{url.drivername}+{self.driver}")
        if self.username:
            url = url.set(username=self.username)
        if self.password:
            url = url.set(password=self.password)
        return url

    def engine_options(self) -> Dict[str, Any]:
        """Translate pool settings into ``create_engine`` keyword arguments.

        Connections up to ``minimum_idle`` are kept in the pool; the rest of
        ``maximum_pool_size`` is overflow that is closed when returned.
        """
        # QueuePool treats pool_size=0 as unbounded
        minimum_idle = max(1, min(self.minimum_idle, self.maximum_pool_size))
        options: Dict[str, Any] = {
            'pool_size': minimum_idle,
            'max_overflow': max(0, self.maximum_pool_size - minimum_idle),
            'pool_timeout': self.connection_timeout_ms / 1000,
            'pool_recycle': self.max_lifetime_ms / 1000 if self.max_lifetime_ms > 0 else -1,
            'pool_pre_ping': True,
            'query_cache_size': self.prep_stmt_cache_size if self.cache_prep_stmts else 0,
        }
        backend = make_url(self.url).get_backend_name()
        if backend == 'postgresql':
            options['connect_args'] = {
                'connect_timeout': max(1, math.ceil(self.connection_timeout_ms / 1000)),
            }
        elif backend == 'sqlite':
            options['connect_args'] = {
                'check_same_thread': False,
                'timeout': SQLITE_LOCK_TIMEOUT,
            }
        return options
