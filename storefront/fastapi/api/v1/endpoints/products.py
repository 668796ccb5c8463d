"""
Product catalogue endpoints.

The public router serves active products by slug; the admin router manages
the catalogue. Deleting a product archives it to the recycle bin first.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import EntityNotFound
from storefront.fastapi.crud.product import ProductCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.models.recycle_bin import EntityType
from storefront.fastapi.schemas.product import (
    ProductCreate, ProductUpdate, ProductRead, ProductListResponse
)
from storefront.fastapi.schemas.recycle_bin import SoftDeleteResponse
from storefront.fastapi.services.archival import ArchivalService
from storefront.security.dependencies import RequireAdmin, get_archival_service
from storefront.security.session import AdminIdentityRef


router = APIRouter(tags=["products"])
admin_router = APIRouter(tags=["admin-products"])


@router.get("", response_model=ProductListResponse, summary="List Products")
async def list_public_products(
    category: Optional[str] = Query(None, description="Filter by category"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_sync_db)
):
    """Active products only, newest first."""
    crud = ProductCRUD(db)
    products = crud.get_products(skip=skip, limit=limit, active_only=True, category=category)
    return ProductListResponse(
        products=[ProductRead.model_validate(p) for p in products],
        total=crud.count_products(active_only=True)
    )


@router.get("/{slug}", response_model=ProductRead, summary="Get Product by Slug")
async def get_public_product(slug: str, db: Session = Depends(get_sync_db)):
    product = ProductCRUD(db).get_product_by_slug(slug, active_only=True)
    if not product:
        raise EntityNotFound("Product not found")
    return ProductRead.model_validate(product)


@admin_router.get("", response_model=ProductListResponse, summary="List All Products (Admin)")
async def list_products(
    category: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    """All products, active or not."""
    crud = ProductCRUD(db)
    products = crud.get_products(skip=skip, limit=limit, category=category)
    return ProductListResponse(
        products=[ProductRead.model_validate(p) for p in products],
        total=crud.count_products()
    )


@admin_router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED, summary="Create Product")
async def create_product(
    product_data: ProductCreate,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    """
    Create a product.

    **Parameters:**
    - **slug**: optional; derived from the name when empty, then normalised
    - **specs**: JSON object or one `key: value` pair per line

    **Errors:**
    - **409**: Slug already used by another product
    """
    product = ProductCRUD(db).create_product(product_data)
    return ProductRead.model_validate(product)


@admin_router.get("/{product_id}", response_model=ProductRead, summary="Get Product (Admin)")
async def get_product(
    product_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    product = ProductCRUD(db).get_product(product_id)
    if not product:
        raise EntityNotFound("Product not found")
    return ProductRead.model_validate(product)


@admin_router.put("/{product_id}", response_model=ProductRead, summary="Update Product")
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    product = ProductCRUD(db).update_product(product_id, product_update)
    if not product:
        raise EntityNotFound("Product not found")
    return ProductRead.model_validate(product)


@admin_router.delete("/{product_id}", response_model=SoftDeleteResponse, summary="Delete Product")
async def delete_product(
    product_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    archival: ArchivalService = Depends(get_archival_service)
):
    """
    Move a product to the recycle bin.

    Deleting a product that no longer exists is not an error; nothing is
    archived and `deleted` is false.
    """
    entry = archival.archive_and_delete(EntityType.PRODUCTS, product_id, actor_label=admin.email)
    return SoftDeleteResponse(
        deleted=entry is not None,
        archive_id=entry.id if entry else None,
        redirect_to="/admin/products"
    )
