"""
Product model for the public catalogue.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, JSON

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base


class Product(Base):
    """
    Catalogue product.

    The slug is human-assigned and unique; only active products are shown on
    the public pages.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(200), nullable=False, doc="Display name")

    slug = Column(
        String(200),
        unique=True,
        nullable=False,
        index=True,
        doc="URL key, unique across products"
    )

    category = Column(String(100), nullable=False, default="Uncategorized")

    short_desc = Column(String(500), nullable=True)

    description = Column(Text, nullable=True)

    specs = Column(JSON, nullable=True, doc="Free-form key/value specifications")

    image = Column(String(500), nullable=True, doc="Public image path or URL")

    active = Column(Boolean, nullable=False, default=True, doc="Shown on the public pages")

    created_at = Column(DateTime, default=utcnow, nullable=False)

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug='{self.slug}', active={self.active})>"
