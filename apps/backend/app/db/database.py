"""
Connection helpers shared by FastAPI dependencies.
Supports both Postgres (via psycopg2 pool) and SQLite (single-file, handy for tests and demos).
"""
import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import psycopg2
from fastapi import HTTPException
from psycopg2.pool import SimpleConnectionPool

from app.config import (
    DB_DRIVER,
    DB_HOST,
    DB_NAME,
    DB_PASSWORD,
    DB_PORT,
    DB_USER,
    SQLITE_PATH,
)
from app.db.schema import ensure_tables

logger = logging.getLogger(__name__)

IS_SQLITE = DB_DRIVER == "sqlite"
DB_PLACEHOLDER = "?" if IS_SQLITE else "%s"

# Unique / check constraint violations from either driver
INTEGRITY_ERRORS = (sqlite3.IntegrityError, psycopg2.IntegrityError)

pool: Optional[SimpleConnectionPool] = None  # Postgres pool
_pool_lock = threading.Lock()  # guards creating and closing `pool`
sqlite_db_path = Path(SQLITE_PATH)


@contextmanager
def db_cursor(conn):
    """
    Context manager that works for both psycopg2 and sqlite3 cursors.
    """
    cur = conn.cursor()
    try:
        yield cur
    finally:
        cur.close()


def _connect_sqlite() -> sqlite3.Connection:
    conn = sqlite3.connect(sqlite_db_path, check_same_thread=False)
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def _init_sqlite() -> None:
    """
    Ensure SQLite database file exists and schema is created.
    A new connection is opened per request (see get_db_conn).
    """
    sqlite_db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = _connect_sqlite()
    try:
        ensure_tables(conn, dialect="sqlite")
    finally:
        conn.close()


def init_pool() -> None:
    """Bootstrap DB connectivity (pool for Postgres, file for SQLite)."""
    global pool
    if IS_SQLITE:
        _init_sqlite()
        logger.info("SQLite database ready at %s", sqlite_db_path)
        return

    with _pool_lock:
        if pool:
            return

        new_pool = SimpleConnectionPool(
            minconn=1,
            maxconn=5,
            host=DB_HOST,
            port=DB_PORT,
            dbname=DB_NAME,
            user=DB_USER,
            password=DB_PASSWORD,
            connect_timeout=5,
        )

        # Quick ping + ensure base schema
        conn = new_pool.getconn()
        try:
            with db_cursor(conn) as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
            ensure_tables(conn, dialect="postgres")
        except Exception:
            new_pool.putconn(conn)
            new_pool.closeall()
            raise
        new_pool.putconn(conn)
        pool = new_pool
    logger.info("Postgres pool initialized for %s@%s:%s/%s", DB_USER, DB_HOST, DB_PORT, DB_NAME)


def close_pool() -> None:
    """Close pooled connections when the app stops."""
    global pool
    if IS_SQLITE:
        return
    with _pool_lock:
        if pool:
            pool.closeall()
            pool = None
            logger.info("Postgres pool closed")


def ping() -> None:
    """
    Run a trivial liveness query. Raises whatever the driver raises.

    Used by /health, so it also tries to bring the pool up if startup failed.
    """
    if IS_SQLITE:
        conn = _connect_sqlite()
        try:
            with db_cursor(conn) as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        finally:
            conn.close()
        return

    if pool is None:
        init_pool()
    conn = pool.getconn()
    try:
        with db_cursor(conn) as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
    finally:
        pool.putconn(conn)


def get_db_conn() -> Generator:
    """
    FastAPI dependency that hands out a connection.
    For SQLite we open/close per request; for Postgres we borrow from the pool.
    """
    if IS_SQLITE:
        conn = _connect_sqlite()
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()
        return

    if pool is None:
        raise HTTPException(status_code=503, detail="Database is not available")
    conn = pool.getconn()
    try:
        yield conn
    finally:
        pool.putconn(conn)
