"""
Live-schema capabilities of the entity tables.

Deployments differ slightly in their columns (testimonials moderated by a
boolean ``approved`` flag or by a ``status`` string, columns added by later
migrations). The live schema is reflected once per engine and cached for the
process lifetime; callers consult the cached descriptor instead of probing
the database on every request.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, Optional

from sqlalchemy import MetaData, Table, inspect
from sqlalchemy.engine import Engine

from storefront.fastapi.models.recycle_bin import EntityType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaCapabilities:
    """Column sets of the entity tables as found in the live database."""

    columns: Dict[str, FrozenSet[str]]

    def has_table(self, table: str) -> bool:
        return table in self.columns

    def has_column(self, table: str, column: str) -> bool:
        return column in self.columns.get(table, frozenset())

    def columns_of(self, table: str) -> FrozenSet[str]:
        return self.columns.get(table, frozenset())

    @property
    def testimonial_moderation(self) -> Optional[str]:
        """Name of the column holding testimonial moderation state, if any."""
        if self.has_column(EntityType.TESTIMONIALS.value, "approved"):
            return "approved"
        if self.has_column(EntityType.TESTIMONIALS.value, "status"):
            return "status"
        return None


@lru_cache(maxsize=None)
def get_schema_capabilities(engine: Engine) -> SchemaCapabilities:
    """
    Reflect the entity tables of ``engine`` (cached per engine).

    Args:
        engine: SQLAlchemy engine bound to the live database

    Returns:
        SchemaCapabilities for the four entity tables that exist
    """
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())

    columns = {}
    for entity_type in EntityType:
        if entity_type.value in existing:
            columns[entity_type.value] = frozenset(
                col["name"] for col in inspector.get_columns(entity_type.value)
            )

    capabilities = SchemaCapabilities(columns=columns)
    logger.info(
        "Schema capabilities loaded: tables=%s testimonial_moderation=%s",
        sorted(columns), capabilities.testimonial_moderation
    )
    return capabilities


@lru_cache(maxsize=None)
def reflect_table(engine: Engine, name: str) -> Table:
    """Reflected Core table for ``name`` (cached per engine)."""
    return Table(name, MetaData(), autoload_with=engine)


def refresh_schema_cache():
    """Forget cached reflections, e.g. after running a migration in-process."""
    get_schema_capabilities.cache_clear()
    reflect_table.cache_clear()
