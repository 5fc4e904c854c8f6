"""PostgreSQL catalog store backed by psycopg."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from bean_match.schema import Bag, Coffee, Roaster
from bean_match.stores.base import CatalogStore

JSON_COLUMNS = {"flavor_profile"}


class PostgresCatalogStore(CatalogStore):
    """Reads and writes the ``roasters``, ``coffees`` and ``bags`` tables."""

    def __init__(self, database_url: str, user_id: str | None = None):
        if not database_url:
            raise ValueError("database_url is required")
        self.database_url = database_url
        self.user_id = user_id

    def _conn(self) -> psycopg.Connection:
        return psycopg.connect(self.database_url, row_factory=dict_row)

    def find_roaster_by_name(self, name: str) -> Roaster | None:
        with self._conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "select * from roasters where name ilike %s order by created_at, id limit 1",
                    (_escape_like(name.strip()),),
                )
                row = cur.fetchone()
        return Roaster.model_validate(_plain(row)) if row else None

    def create_roaster(self, values: dict) -> Roaster:
        return Roaster.model_validate(self._insert("roasters", values))

    def list_coffees(self, roaster_id: str) -> list[Coffee]:
        with self._conn() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "select * from coffees where roaster_id = %s order by created_at, id",
                    (roaster_id,),
                )
                rows = cur.fetchall()
        return [Coffee.model_validate(_plain(row)) for row in rows]

    def create_coffee(self, values: dict) -> Coffee:
        return Coffee.model_validate(self._insert("coffees", values))

    def create_bag(self, values: dict) -> Bag:
        return Bag.model_validate(self._insert("bags", values))

    def _insert(self, table: str, values: dict) -> dict:
        row = {key: value for key, value in values.items() if value is not None}
        if self.user_id and "user_id" not in row:
            row["user_id"] = self.user_id
        columns = list(row)
        query = sql.SQL("insert into {table} ({columns}) values ({placeholders}) returning *").format(
            table=sql.Identifier(table),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            placeholders=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )
        params = [Jsonb(row[c]) if c in JSON_COLUMNS else row[c] for c in columns]
        with self._conn() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                created = cur.fetchone()
            conn.commit()
        if created is None:
            raise RuntimeError(f"insert into {table} returned no row")
        return _plain(created)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _plain(row: dict) -> dict:
    plain: dict = {}
    for key, value in row.items():
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        elif isinstance(value, uuid.UUID):
            value = str(value)
        elif isinstance(value, Decimal):
            value = float(value)
        plain[key] = value
    return plain
