from fastapi import FastAPI
from storefront.fastapi.api.v1.endpoints import auth, dashboard, products, blog, testimonials, contacts, recycle_bin

def setup_routers(app: FastAPI):
    # Admin authentication (password, then one-time code)
    app.include_router(auth.router, prefix="/api/v1/admin/auth", tags=["admin-authentication"])

    # Admin console
    app.include_router(dashboard.router, prefix="/api/v1/admin/dashboard", tags=["admin-dashboard"])
    app.include_router(products.admin_router, prefix="/api/v1/admin/products", tags=["admin-products"])
    app.include_router(blog.admin_router, prefix="/api/v1/admin/blog", tags=["admin-blog"])
    app.include_router(testimonials.admin_router, prefix="/api/v1/admin/testimonials", tags=["admin-testimonials"])
    app.include_router(contacts.admin_router, prefix="/api/v1/admin/contacts", tags=["admin-contacts"])

    # Recycle bin (restore / purge soft-deleted content)
    app.include_router(recycle_bin.router, prefix="/api/v1/admin/recycle", tags=["admin-recycle-bin"])

    # Public site
    app.include_router(products.router, prefix="/api/v1/products", tags=["products"])
    app.include_router(blog.router, prefix="/api/v1/blog", tags=["blog"])
    app.include_router(testimonials.router, prefix="/api/v1/testimonials", tags=["testimonials"])
    app.include_router(contacts.router, prefix="/api/v1/contact", tags=["contact"])
