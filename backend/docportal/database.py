import sqlite3
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path) -> Engine:
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


SCHEMA_SQL = """\
-- ============================================================
-- DOCUMENTS
-- ============================================================
-- AUTOINCREMENT keeps ids from being reused after deletion.
CREATE TABLE IF NOT EXISTS documents (
    id           INTEGER PRIMARY KEY AUTOINCREMENT,
    filename     TEXT NOT NULL,
    filepath     TEXT NOT NULL,
    filesize     INTEGER NOT NULL,
    content_type TEXT,
    created_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_documents_filepath ON documents(filepath);
"""


MIGRATIONS = [
    # documents.db files created before content_type was recorded lack this column
    "ALTER TABLE documents ADD COLUMN content_type TEXT",
]


def init_db(db_path: Path):
    conn = sqlite3.connect(str(db_path))
    conn.executescript(SCHEMA_SQL)
    # ALTER TABLE fails if the column already exists
    for migration in MIGRATIONS:
        try:
            conn.execute(migration)
            conn.commit()
        except sqlite3.OperationalError:
            pass  # already applied
    conn.close()
