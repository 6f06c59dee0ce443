"""Global test configuration and fixtures."""

import json
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings
from sqlalchemy import create_engine, text

from datasource_sdk.common.crypto import FernetDecryptor
from datasource_sdk.config import configure_settings
from datasource_sdk.dto.data_source import DataSource, DataSourceType

# Function scoped fixtures are shared by every hypothesis example of a test
settings.register_profile(
    "datasource_sdk", suppress_health_check=[HealthCheck.function_scoped_fixture]
)
settings.load_profile("datasource_sdk")

SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY,
        email VARCHAR(255) NOT NULL,
        name VARCHAR(100),
        bio TEXT,
        is_active BOOLEAN,
        created_at DATETIME,
        manager_id INTEGER REFERENCES users (id) ON DELETE SET NULL
    )
    """,
    "CREATE TABLE audit_log (event VARCHAR(50), payload TEXT)",
    """
    CREATE TABLE memberships (
        user_id INTEGER NOT NULL,
        team_id INTEGER NOT NULL,
        PRIMARY KEY (user_id, team_id)
    )
    """,
]

USERS = [
    {"id": 1, "email": "ada@example.com", "name": "Ada", "manager_id": None},
    {"id": 2, "email": "grace@example.com", "name": "Grace", "manager_id": 1},
    {"id": 3, "email": "alan@example.com", "name": "Alan", "manager_id": 1},
]


@pytest.fixture(autouse=True)
def secret_key():
    """Configure a fresh Fernet key for every test."""
    key = FernetDecryptor.generate_key()
    configure_settings(secret_key=key)
    yield key
    configure_settings()


@pytest.fixture
def sqlite_path(tmp_path: Path) -> Path:
    """A SQLite database with a users table, a table without primary key and one with a composite key."""
    path = tmp_path / "app.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as connection:
        for statement in SCHEMA:
            connection.execute(text(statement))
        connection.execute(
            text(
                "INSERT INTO users (id, email, name, is_active, manager_id) "
                "VALUES (:id, :email, :name, 1, :manager_id)"
            ),
            USERS,
        )
        connection.execute(
            text("INSERT INTO audit_log (event, payload) VALUES ('boot', '{}')")
        )
        connection.execute(
            text("INSERT INTO memberships (user_id, team_id) VALUES (1, 1), (2, 1)")
        )
    engine.dispose()
    return path


def make_data_source(
    sqlite_path: Path, secret_key: str, **options
) -> DataSource:
    encrypted = FernetDecryptor(secret_key).encrypt(
        json.dumps({"database": str(sqlite_path)})
    )
    return DataSource(
        id=1,
        name="Local app",
        type=DataSourceType.SQLITE,
        encrypted_credentials=encrypted,
        options=options,
    )


@pytest.fixture
def data_source(sqlite_path: Path, secret_key: str) -> DataSource:
    return make_data_source(sqlite_path, secret_key)


@pytest.fixture
def read_only_data_source(sqlite_path: Path, secret_key: str) -> DataSource:
    return make_data_source(sqlite_path, secret_key, readOnly=True)
