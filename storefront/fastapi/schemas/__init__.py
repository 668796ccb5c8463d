from storefront.fastapi.schemas.admin import (
    AdminBase,
    AdminCreate,
    AdminRead,
    AdminLogin,
    AdminLoginResponse,
    OtpVerify,
    OtpVerifyResponse,
    LogoutResponse,
    SessionStateResponse
)
from storefront.fastapi.schemas.product import (
    ProductBase,
    ProductCreate,
    ProductUpdate,
    ProductRead,
    ProductListResponse
)
from storefront.fastapi.schemas.blog_post import (
    BlogPostBase,
    BlogPostCreate,
    BlogPostUpdate,
    BlogPostRead,
    BlogPostListResponse
)
from storefront.fastapi.schemas.testimonial import (
    TestimonialCreate,
    TestimonialRead,
    TestimonialStatusUpdate,
    TestimonialListResponse
)
from storefront.fastapi.schemas.contact import (
    ContactCreate,
    ContactRead,
    ContactListResponse
)
from storefront.fastapi.schemas.recycle_bin import (
    RecycleBinEntryRead,
    RecycleBinEntryDetail,
    RecycleBinListResponse,
    SoftDeleteResponse,
    RecycleActionResponse
)
