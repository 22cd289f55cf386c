import sqlite3
from pathlib import Path
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from dashboard.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None) -> Engine:
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def get_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db(request: Request):
    """Yield a session from the factory built at startup (see main.lifespan)."""
    db = request.app.state.sessionmaker()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- USERS
-- ============================================================
CREATE TABLE IF NOT EXISTS users (
    id       TEXT PRIMARY KEY,
    name     TEXT NOT NULL,
    email    TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL
);

-- ============================================================
-- CUSTOMERS
-- ============================================================
CREATE TABLE IF NOT EXISTS customers (
    id        TEXT PRIMARY KEY,
    name      TEXT NOT NULL,
    email     TEXT NOT NULL,
    image_url TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_customers_name ON customers(name);

-- ============================================================
-- INVOICES
-- ============================================================
CREATE TABLE IF NOT EXISTS invoices (
    id          TEXT PRIMARY KEY,
    customer_id TEXT NOT NULL REFERENCES customers(id),
    amount      INTEGER NOT NULL CHECK(amount >= 0),
    status      TEXT NOT NULL CHECK(status IN ('pending','paid')),
    date        TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_invoices_customer ON invoices(customer_id);
CREATE INDEX IF NOT EXISTS idx_invoices_date ON invoices(date);

-- ============================================================
-- REVIEWS
-- ============================================================
CREATE TABLE IF NOT EXISTS reviews (
    id           TEXT PRIMARY KEY,
    customer_id  TEXT NOT NULL REFERENCES customers(id),
    title        TEXT NOT NULL,
    status       TEXT NOT NULL CHECK(status IN ('pending','published','archived')),
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL,
    next_part_id TEXT REFERENCES reviews(id) ON DELETE SET NULL,
    text         TEXT,
    CHECK(updated_at >= created_at)
);

CREATE INDEX IF NOT EXISTS idx_reviews_customer ON reviews(customer_id);
CREATE INDEX IF NOT EXISTS idx_reviews_updated ON reviews(updated_at);
CREATE INDEX IF NOT EXISTS idx_reviews_status ON reviews(status);

-- ============================================================
-- IMAGES (owner is the document_id/document_type pair, no FK)
-- ============================================================
CREATE TABLE IF NOT EXISTS images (
    id            TEXT PRIMARY KEY,
    document_id   TEXT NOT NULL,
    document_type TEXT NOT NULL,
    url           TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_images_owner ON images(document_id, document_type);

-- ============================================================
-- REVENUE (monthly totals in whole dollars)
-- ============================================================
CREATE TABLE IF NOT EXISTS revenue (
    month   TEXT PRIMARY KEY CHECK(length(month) <= 4),
    revenue INTEGER NOT NULL
);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
