import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from shipscan.config.settings import Settings
from shipscan.database import connection
from shipscan.database.connection import close_pool, get_connection, init_pool

_SCHEMA_PATH = Path(connection.__file__).parent / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "shipscan_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(_SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def owner_id(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """A throwaway owner whose documents are deleted after the test."""
    owner = f"it-{os.urandom(6).hex()}"
    yield owner
    with db_conn.cursor() as cur:
        cur.execute("DELETE FROM documents WHERE user_id = %s", (owner,))
    db_conn.commit()
