"""Queries for the `sweets` table."""
from typing import List, Optional

from app.db.database import DB_PLACEHOLDER, IS_SQLITE, db_cursor

SWEET_COLUMNS = "id, name, category, price, quantity, created_at, updated_at"
UPDATABLE_FIELDS = ("name", "category", "price", "quantity")


def _row_to_sweet(row) -> Optional[dict]:
    if not row:
        return None
    created_at, updated_at = row[5], row[6]
    return {
        "id": row[0],
        "name": row[1],
        "category": row[2],
        "price": float(row[3]),
        "quantity": row[4],
        "created_at": created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
        "updated_at": updated_at.isoformat() if hasattr(updated_at, "isoformat") else updated_at,
    }


def list_sweets(conn, category: Optional[str] = None, query: Optional[str] = None) -> List[dict]:
    clauses = []
    params: list = []
    if category:
        clauses.append(f"LOWER(category) = LOWER({DB_PLACEHOLDER})")
        params.append(category)
    if query:
        clauses.append(f"LOWER(name) LIKE LOWER({DB_PLACEHOLDER})")
        params.append(f"%{query}%")

    sql = f"SELECT {SWEET_COLUMNS} FROM sweets"
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " ORDER BY name;"

    with db_cursor(conn) as cur:
        cur.execute(sql, tuple(params))
        return [_row_to_sweet(row) for row in cur.fetchall()]


def get_sweet(conn, sweet_id: int) -> Optional[dict]:
    with db_cursor(conn) as cur:
        cur.execute(f"SELECT {SWEET_COLUMNS} FROM sweets WHERE id = {DB_PLACEHOLDER};", (sweet_id,))
        return _row_to_sweet(cur.fetchone())


def insert_sweet(conn, name: str, category: str, price: float, quantity: int) -> dict:
    ph = ", ".join([DB_PLACEHOLDER] * 4)
    query = f"INSERT INTO sweets (name, category, price, quantity) VALUES ({ph})"
    query += ";" if IS_SQLITE else " RETURNING id;"
    with db_cursor(conn) as cur:
        cur.execute(query, (name, category, price, quantity))
        sweet_id = cur.lastrowid if IS_SQLITE else cur.fetchone()[0]
    conn.commit()
    return get_sweet(conn, sweet_id)


def update_sweet(conn, sweet_id: int, fields: dict) -> Optional[dict]:
    """
    Update the given columns and bump `updated_at`.
    Unknown keys are ignored; returns None when the row does not exist.
    """
    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
    if not changes:
        return get_sweet(conn, sweet_id)

    assignments = ", ".join(f"{column} = {DB_PLACEHOLDER}" for column in changes)
    with db_cursor(conn) as cur:
        cur.execute(
            f"UPDATE sweets SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = {DB_PLACEHOLDER};",
            (*changes.values(), sweet_id),
        )
        updated = cur.rowcount
    conn.commit()
    if not updated:
        return None
    return get_sweet(conn, sweet_id)


def delete_sweet(conn, sweet_id: int) -> bool:
    with db_cursor(conn) as cur:
        cur.execute(f"DELETE FROM sweets WHERE id = {DB_PLACEHOLDER};", (sweet_id,))
        deleted = cur.rowcount
    conn.commit()
    return deleted > 0
