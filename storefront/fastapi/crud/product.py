"""
Product CRUD operations.

This module provides database operations for catalogue products. Deletion is
not here: products are soft-deleted through the archival service.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import DuplicateSlug
from storefront.fastapi.core.utils import normalize_slug, parse_specs
from storefront.fastapi.models.product import Product
from storefront.fastapi.schemas.product import ProductCreate, ProductUpdate


class ProductCRUD:
    """CRUD operations for Product model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_product(self, product_data: ProductCreate) -> Product:
        """
        Create a new product.

        The slug is normalized (lowercase, [a-z0-9-]) and derived from the
        name when not given.

        Raises:
            DuplicateSlug: If the slug is already used
        """
        slug = normalize_slug(product_data.slug or product_data.name)
        if not slug or self.get_product_by_slug(slug):
            raise DuplicateSlug(f"Slug '{slug}' is empty or already used")

        db_product = Product(
            name=product_data.name.strip(),
            slug=slug,
            category=(product_data.category or "Uncategorized").strip(),
            short_desc=product_data.short_desc or "",
            description=product_data.description or "",
            specs=parse_specs(product_data.specs),
            image=product_data.image or None,
            active=product_data.active
        )

        self.db.add(db_product)
        self.db.commit()
        self.db.refresh(db_product)

        return db_product

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_product_by_slug(self, slug: str, active_only: bool = False) -> Optional[Product]:
        query = self.db.query(Product).filter(Product.slug == slug)
        if active_only:
            query = query.filter(Product.active == True)
        return query.first()

    def get_products(self, skip: int = 0, limit: int = 100,
                     active_only: bool = False,
                     category: Optional[str] = None) -> List[Product]:
        """
        Get list of products, newest first.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            active_only: Only products shown on the public pages
            category: Filter by category (optional)
        """
        query = self.db.query(Product)

        if active_only:
            query = query.filter(Product.active == True)

        if category:
            query = query.filter(Product.category == category)

        return query.order_by(Product.created_at.desc(), Product.id.desc()).offset(skip).limit(limit).all()

    def count_products(self, active_only: bool = False) -> int:
        query = self.db.query(Product)
        if active_only:
            query = query.filter(Product.active == True)
        return query.count()

    def update_product(self, product_id: int, product_update: ProductUpdate) -> Optional[Product]:
        """
        Update product information.

        Returns:
            Updated Product instance or None if not found

        Raises:
            DuplicateSlug: If the new slug belongs to another product
        """
        db_product = self.get_product(product_id)
        if not db_product:
            return None

        update_data = product_update.model_dump(exclude_unset=True)

        if "slug" in update_data:
            slug = normalize_slug(update_data["slug"] or db_product.name)
            existing = self.get_product_by_slug(slug)
            if not slug or (existing and existing.id != product_id):
                raise DuplicateSlug(f"Slug '{slug}' is empty or already used")
            update_data["slug"] = slug

        if "specs" in update_data:
            update_data["specs"] = parse_specs(update_data["specs"])

        for field, value in update_data.items():
            setattr(db_product, field, value)

        self.db.commit()
        self.db.refresh(db_product)

        return db_product
