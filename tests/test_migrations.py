"""
Tests para la migración inicial de Alembic sobre SQLite
"""
import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

MIGRATION_PATH = (
    Path(__file__).parent.parent
    / "alembic"
    / "versions"
    / "3b1f9c2d7e41_create_courts_and_bookings.py"
)


def _load_migration():
    spec = importlib.util.spec_from_file_location("initial_migration", MIGRATION_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def migrated_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    migration = _load_migration()
    with engine.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            migration.upgrade()
    yield engine
    engine.dispose()


def test_upgrade_creates_tables_on_sqlite(migrated_engine):
    """
    Test: La migración corre en SQLite sin la exclusion constraint de PostgreSQL
    """
    tables = inspect(migrated_engine).get_table_names()

    assert "courts" in tables
    assert "bookings" in tables


def test_upgrade_installs_overlap_triggers_on_sqlite(migrated_engine):
    insert_booking = text(
        'INSERT INTO bookings (user_id, court_type, court_number, "date", time_start, time_end) '
        "VALUES (:user_id, 'tennis', 1, '2024-06-01', :start, :end)"
    )
    with migrated_engine.begin() as connection:
        connection.execute(insert_booking, {"user_id": 1, "start": "10:00:00.000000", "end": "11:00:00.000000"})
        connection.execute(insert_booking, {"user_id": 2, "start": "11:00:00.000000", "end": "12:00:00.000000"})

    with pytest.raises(IntegrityError) as exc_info:
        with migrated_engine.begin() as connection:
            connection.execute(insert_booking, {"user_id": 3, "start": "10:30:00.000000", "end": "11:30:00.000000"})

    assert "bookings_no_overlap" in str(exc_info.value)


def test_downgrade_drops_tables_on_sqlite(migrated_engine):
    migration = _load_migration()
    with migrated_engine.begin() as connection:
        with Operations.context(MigrationContext.configure(connection)):
            migration.downgrade()

    assert inspect(migrated_engine).get_table_names() == []
