"""
Admin dashboard endpoint combining counts from every content module.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from storefront.fastapi.crud.blog_post import BlogPostCRUD
from storefront.fastapi.crud.contact import ContactCRUD
from storefront.fastapi.crud.product import ProductCRUD
from storefront.fastapi.crud.recycle_bin import RecycleBinCRUD
from storefront.fastapi.crud.testimonial import TestimonialCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.security.dependencies import RequireAdmin
from storefront.security.session import AdminIdentityRef

router = APIRouter()


class DashboardResponse(BaseModel):
    """Summary counts shown on the admin home page."""

    admin_email: str = Field(..., description="Signed-in admin")
    products: int = Field(..., description="All products")
    active_products: int = Field(..., description="Products shown publicly")
    blog_posts: int
    testimonials: int
    pending_testimonials: int = Field(..., description="Testimonials awaiting moderation")
    contacts: int
    recycle_bin: int = Field(..., description="Entries waiting to be restored or purged")


@router.get("", response_model=DashboardResponse, summary="Admin Dashboard")
async def get_dashboard(
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    products = ProductCRUD(db)
    testimonials = TestimonialCRUD(db)

    return DashboardResponse(
        admin_email=admin.email,
        products=products.count_products(),
        active_products=products.count_products(active_only=True),
        blog_posts=BlogPostCRUD(db).count_posts(),
        testimonials=testimonials.count_testimonials(),
        pending_testimonials=testimonials.count_testimonials(status="pending"),
        contacts=ContactCRUD(db).count_contacts(),
        recycle_bin=RecycleBinCRUD(db).count_archive()
    )
