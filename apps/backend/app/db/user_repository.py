"""Queries for the `users` and `refresh_tokens` tables."""
import hashlib
from datetime import datetime
from typing import Optional

from app.db.database import DB_PLACEHOLDER, IS_SQLITE, db_cursor

USER_COLUMNS = "id, email, password_hash, role"


def _ph(count: int) -> str:
    """Return a comma-separated placeholder string matching the active DB driver."""
    return ", ".join([DB_PLACEHOLDER] * count)


def _row_to_user(row) -> Optional[dict]:
    if not row:
        return None
    return {"id": row[0], "email": row[1], "password_hash": row[2], "role": row[3] or "user"}


def email_exists(conn, email: str) -> bool:
    with db_cursor(conn) as cur:
        cur.execute(f"SELECT 1 FROM users WHERE email = {DB_PLACEHOLDER} LIMIT 1;", (email,))
        return cur.fetchone() is not None


def insert_user(conn, email: str, password_hash: str, role: str = "user") -> int:
    query = f"INSERT INTO users (email, password_hash, role) VALUES ({_ph(3)})"
    query += ";" if IS_SQLITE else " RETURNING id;"
    with db_cursor(conn) as cur:
        cur.execute(query, (email, password_hash, role))
        user_id = cur.lastrowid if IS_SQLITE else cur.fetchone()[0]
    conn.commit()
    return user_id


def get_user_by_email(conn, email: str) -> Optional[dict]:
    with db_cursor(conn) as cur:
        cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE email = {DB_PLACEHOLDER} LIMIT 1;", (email,))
        return _row_to_user(cur.fetchone())


def get_user_by_id(conn, user_id: int) -> Optional[dict]:
    with db_cursor(conn) as cur:
        cur.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = {DB_PLACEHOLDER} LIMIT 1;", (user_id,))
        return _row_to_user(cur.fetchone())


def _hash_refresh_token(token: str) -> str:
    # Only a digest is stored so a leaked table can't be replayed
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def save_refresh_token(conn, user_id: int, token: str, expires_at: datetime) -> None:
    expires_value = expires_at.strftime("%Y-%m-%d %H:%M:%S") if IS_SQLITE else expires_at
    with db_cursor(conn) as cur:
        cur.execute(
            f"""
            INSERT INTO refresh_tokens (user_id, token_hash, expires_at)
            VALUES ({_ph(3)})
            ON CONFLICT (token_hash) DO NOTHING;
            """,
            (user_id, _hash_refresh_token(token), expires_value),
        )
    conn.commit()


def revoke_refresh_token(conn, token: str) -> None:
    with db_cursor(conn) as cur:
        cur.execute(
            f"UPDATE refresh_tokens SET revoked = TRUE WHERE token_hash = {DB_PLACEHOLDER};",
            (_hash_refresh_token(token),),
        )
    conn.commit()


def is_refresh_token_valid(conn, token: str) -> bool:
    with db_cursor(conn) as cur:
        cur.execute(
            f"""
            SELECT 1 FROM refresh_tokens
            WHERE token_hash = {DB_PLACEHOLDER} AND revoked = FALSE AND expires_at > CURRENT_TIMESTAMP
            LIMIT 1;
            """,
            (_hash_refresh_token(token),),
        )
        return cur.fetchone() is not None
