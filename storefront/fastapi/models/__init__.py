from storefront.fastapi.models.admin import Admin
from storefront.fastapi.models.auth_session import AuthSessionRecord
from storefront.fastapi.models.blog_post import BlogPost
from storefront.fastapi.models.contact import ContactMessage
from storefront.fastapi.models.product import Product
from storefront.fastapi.models.recycle_bin import EntityType, RecycleBinEntry
from storefront.fastapi.models.testimonial import Testimonial
