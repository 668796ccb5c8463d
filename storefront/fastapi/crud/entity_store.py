"""
Generic row access for the archivable entity tables.

Works on reflected tables (SQLAlchemy Core) so it writes whatever columns the
live schema has, and silently drops values for columns it does not have.
None of the methods commit; the calling service owns the transaction.
"""

from typing import Any, Dict, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.orm import Session

from storefront.fastapi.crud.schema import SchemaCapabilities, get_schema_capabilities, reflect_table


class EntityStore:
    """Insert, update, delete and look up entity rows by table name."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.engine = db.get_bind()

    @property
    def capabilities(self) -> SchemaCapabilities:
        return get_schema_capabilities(self.engine)

    def table(self, name: str):
        return reflect_table(self.engine, name)

    def writable(self, name: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Keep only the values whose column exists in the live table."""
        columns = self.table(name).c
        return {key: value for key, value in row.items() if key in columns}

    def insert(self, name: str, row: Dict[str, Any]) -> int:
        """
        Insert a row.

        Args:
            name: Table name
            row: Column values; unknown columns are ignored

        Returns:
            Primary key of the new row
        """
        table = self.table(name)
        result = self.db.execute(insert(table).values(**self.writable(name, row)))
        return result.inserted_primary_key[0]

    def update(self, name: str, entity_id: int, patch: Dict[str, Any]) -> int:
        """
        Update a row by primary key.

        Returns:
            Number of rows changed (0 if missing or nothing writable)
        """
        values = self.writable(name, patch)
        values.pop("id", None)
        if not values:
            return 0
        table = self.table(name)
        result = self.db.execute(update(table).where(table.c.id == entity_id).values(**values))
        return result.rowcount

    def delete(self, name: str, entity_id: int) -> int:
        """
        Delete a row by primary key.

        Returns:
            Number of rows deleted; 0 means the row was already gone
        """
        table = self.table(name)
        result = self.db.execute(delete(table).where(table.c.id == entity_id))
        return result.rowcount

    def find_by_id(self, name: str, entity_id: int) -> Optional[Dict[str, Any]]:
        table = self.table(name)
        row = self.db.execute(select(table).where(table.c.id == entity_id)).mappings().first()
        return dict(row) if row is not None else None

    def find_by_slug(self, name: str, slug: str) -> Optional[Dict[str, Any]]:
        table = self.table(name)
        if "slug" not in table.c:
            return None
        row = self.db.execute(select(table).where(table.c.slug == slug).limit(1)).mappings().first()
        return dict(row) if row is not None else None

    def count(self, name: str) -> int:
        if not self.capabilities.has_table(name):
            return 0
        table = self.table(name)
        return self.db.execute(select(func.count()).select_from(table)).scalar_one()
