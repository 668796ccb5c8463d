from storefront.fastapi.crud.admin import AdminCRUD, create_admin, get_admin_by_email, get_admin_count
from storefront.fastapi.crud.auth_session import AuthSessionStore
from storefront.fastapi.crud.blog_post import BlogPostCRUD
from storefront.fastapi.crud.contact import ContactCRUD
from storefront.fastapi.crud.entity_store import EntityStore
from storefront.fastapi.crud.product import ProductCRUD
from storefront.fastapi.crud.recycle_bin import RecycleBinCRUD
from storefront.fastapi.crud.schema import SchemaCapabilities, get_schema_capabilities, refresh_schema_cache
from storefront.fastapi.crud.testimonial import TestimonialCRUD
