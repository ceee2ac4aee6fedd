import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.conninfo import make_conninfo

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "app" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "resumes_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    conninfo = make_conninfo(
        host=test_settings.db_host,
        port=test_settings.db_port,
        dbname=test_settings.db_database,
        user=test_settings.db_username,
        password=test_settings.db_password,
    )
    try:
        with psycopg.connect(conninfo, connect_timeout=3) as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run integration tests")
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def owner_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    owners: list[str] = []
    yield owners
    if not owners:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for owner_id in owners:
                cur.execute("DELETE FROM user_resumes WHERE owner_id = %s", (owner_id,))
        conn.commit()
