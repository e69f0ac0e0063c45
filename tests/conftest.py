import os
import tempfile

from cryptography.fernet import Fernet

# The project store and import settings are read when dbimport is first imported
_store_dir = tempfile.mkdtemp(prefix="dbimport-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_store_dir, 'store.db')}"
os.environ["IMPORT_BATCH_SIZE"] = "3"
os.environ["DATASOURCE_ENCRYPTION_KEY"] = Fernet.generate_key().decode()

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text

from dbimport.api.db.session import SessionLocal
from dbimport.connectors.mysql import MySQLConnectionManager
from dbimport.connectors.schemas import DatabaseConfiguration, DatabaseQueryInfo
from dbimport.connectors.sqlite import SQLiteConnectionManager
from dbimport.importing.job import importing_manager


EMPLOYEES = [
    (1, "Alice", 5000.5, "a"),
    (2, "Bob", 4200.0, None),
    (3, "Carol", None, ""),
    (4, "Dave", 3900.25, "x"),
    (None, None, None, None),
    (6, "Frank", 3100.0, "f"),
    (7, "Grace", 2800.0, "g"),
]

EMPLOYEES_QUERY = "SELECT id, name, salary, notes FROM employees ORDER BY rowid"


@pytest.fixture
def source_db(tmp_path):
    """SQLite database file with an employees table."""
    path = str(tmp_path / "source.db")
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE employees (id INTEGER, name TEXT, salary REAL, notes TEXT)"))
        conn.execute(
            text("INSERT INTO employees (id, name, salary, notes) VALUES (:id, :name, :salary, :notes)"),
            [{"id": i, "name": n, "salary": s, "notes": o} for i, n, s, o in EMPLOYEES]
        )
    engine.dispose()
    return path


@pytest.fixture
def sqlite_config(source_db):
    return DatabaseConfiguration(
        database_type="sqlite",
        database_host="localhost",
        database_port=0,
        database_user="tester",
        database_password="",
        database_name=source_db,
    )


@pytest.fixture
def query_info(sqlite_config):
    return DatabaseQueryInfo(db_config=sqlite_config, query=EMPLOYEES_QUERY)


@pytest.fixture
def import_params(source_db):
    """Form fields the import UI posts for the employees query."""
    return {
        "connectionName": "local",
        "databaseType": "sqlite",
        "databaseServer": "localhost",
        "databasePort": "0",
        "databaseUser": "tester",
        "databasePassword": "",
        "initialDatabase": source_db,
        "initialSchema": "",
        "query": EMPLOYEES_QUERY,
    }


@pytest.fixture
def test_db():
    db = SessionLocal()
    yield db
    db.close()


@pytest.fixture
def client():
    from dbimport.main import app
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_state():
    yield
    SQLiteConnectionManager.shutdown()
    MySQLConnectionManager.shutdown()
    importing_manager.clear()
