"""Tests for loading database settings."""

from ..config import ConfigSource, DatabaseConfig, SQLITE_LOCK_TIMEOUT

def write_env(path, **values):
    path.write_text(''.join(f"{key}={value}\n" for key, value in values.items()))
    return path

def test_missing_file_uses_defaults(tmp_path):
    """A missing settings file falls back to the built-in defaults."""
    config = DatabaseConfig.load(tmp_path / 'missing.env')

    assert config.source is ConfigSource.DEFAULTS
    assert config.url == 'postgresql://localhost:5432/comercio_db'
    assert config.username == 'postgres'
    assert config.driver == 'psycopg2'
    assert config.maximum_pool_size == 10
    assert config.minimum_idle == 2
    assert config.connection_timeout_ms == 30000
    assert config.idle_timeout_ms == 600000
    assert config.max_lifetime_ms == 1800000
    assert config.cache_prep_stmts is True
    assert config.prep_stmt_cache_size == 250

def test_file_values_override_defaults(tmp_path):
    """Keys present in the file win, missing keys keep their defaults."""
    env_file = write_env(
        tmp_path / 'db.env',
        DB_URL='postgresql://db.internal:5432/shop',
        DB_POOL_MAXIMUM_SIZE='4',
        DB_CACHE_PREP_STMTS='false',
    )

    config = DatabaseConfig.load(env_file)

    assert config.source is ConfigSource.FILE
    assert config.url == 'postgresql://db.internal:5432/shop'
    assert config.maximum_pool_size == 4
    assert config.cache_prep_stmts is False
    assert config.minimum_idle == 2
    assert config.username == 'postgres'

def test_environment_overrides_file(tmp_path, monkeypatch):
    """DB_* environment variables take precedence over the file."""
    env_file = write_env(tmp_path / 'db.env', DB_USERNAME='from_file', DB_PASSWORD='file_pw')
    monkeypatch.setenv('DB_USERNAME', 'from_env')

    config = DatabaseConfig.load(env_file)

    assert config.source is ConfigSource.FILE
    assert config.username == 'from_env'
    assert config.password == 'file_pw'

def test_environment_only(tmp_path, monkeypatch):
    """Environment variables alone count as a settings source."""
    monkeypatch.setenv('DB_POOL_MINIMUM_IDLE', '3')

    config = DatabaseConfig.load(tmp_path / 'missing.env')

    assert config.source is ConfigSource.ENVIRONMENT
    assert config.minimum_idle == 3
    assert config.maximum_pool_size == 10

def test_password_not_in_repr():
    assert 's3cret' not in repr(DatabaseConfig(password='s3cret'))

def test_sqlalchemy_url_applies_driver_and_credentials():
    config = DatabaseConfig.defaults()

    url = config.sqlalchemy_url()

    assert url.drivername == 'postgresql+psycopg2'
    assert url.username == 'postgres'
    assert url.password == 'postgres'
    assert url.host == 'localhost'
    assert url.port == 5432
    assert url.database == 'comercio_db'

def test_sqlalchemy_url_keeps_explicit_driver():
    config = DatabaseConfig(url='postgresql+psycopg://localhost/shop', username='', password='')

    url = config.sqlalchemy_url()

    assert url.drivername == 'postgresql+psycopg'
    assert url.username is None
    assert url.password is None

def test_engine_options_map_pool_settings():
    options = DatabaseConfig.defaults().engine_options()

    assert options['pool_size'] == 2
    assert options['max_overflow'] == 8
    assert options['pool_timeout'] == 30.0
    assert options['pool_recycle'] == 1800.0
    assert options['pool_pre_ping'] is True
    assert options['query_cache_size'] == 250
    assert options['connect_args'] == {'connect_timeout': 30}

def test_engine_options_disabled_statement_cache():
    options = DatabaseConfig(cache_prep_stmts=False).engine_options()

    assert options['query_cache_size'] == 0

def test_engine_options_keep_pool_bounded():
    """A zero minimum idle must not turn into an unbounded pool."""
    options = DatabaseConfig(minimum_idle=0, maximum_pool_size=3).engine_options()

    assert options['pool_size'] == 1
    assert options['max_overflow'] == 2

def test_engine_options_for_sqlite(database_url):
    options = DatabaseConfig(url=database_url, driver='pysqlite').engine_options()

    assert options['connect_args'] == {
        'check_same_thread': False,
        'timeout': SQLITE_LOCK_TIMEOUT,
    }

def test_engine_options_round_up_postgresql_connect_timeout():
    options = DatabaseConfig(connection_timeout_ms=1500).engine_options()

    assert options['connect_args'] == {'connect_timeout': 2}

def test_engine_options_postgresql_connect_timeout_at_least_one_second():
    options = DatabaseConfig(connection_timeout_ms=250).engine_options()

    assert options['connect_args'] == {'connect_timeout': 1}

def test_blank_file_values_fall_back_to_defaults(tmp_path):
    """Blank numeric settings use the default, blank credentials stay blank."""
    env_file = write_env(
        tmp_path / 'db.env',
        DB_POOL_MAXIMUM_SIZE='',
        DB_CACHE_PREP_STMTS='',
        DB_USERNAME='',
        DB_PASSWORD='',
    )

    config = DatabaseConfig.load(env_file)

    assert config.source is ConfigSource.FILE
    assert config.maximum_pool_size == 10
    assert config.cache_prep_stmts is True
    assert config.username == ''
    assert config.password == ''
