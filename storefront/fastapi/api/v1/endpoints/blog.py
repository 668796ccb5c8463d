"""
Blog endpoints.

Public readers only see posts whose publication time has passed; drafts and
scheduled posts are visible in the admin console.
"""

from datetime import datetime
from typing import Callable, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import EntityNotFound
from storefront.fastapi.crud.blog_post import BlogPostCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.models.recycle_bin import EntityType
from storefront.fastapi.schemas.blog_post import (
    BlogPostCreate, BlogPostUpdate, BlogPostRead, BlogPostListResponse
)
from storefront.fastapi.schemas.recycle_bin import SoftDeleteResponse
from storefront.fastapi.services.archival import ArchivalService
from storefront.security.dependencies import RequireAdmin, get_archival_service, get_clock
from storefront.security.session import AdminIdentityRef


router = APIRouter(tags=["blog"])
admin_router = APIRouter(tags=["admin-blog"])


@router.get("", response_model=BlogPostListResponse, summary="List Published Posts")
async def list_public_posts(
    tag: Optional[str] = Query(None, description="Filter by tag slug"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_sync_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    now = clock()
    crud = BlogPostCRUD(db)
    posts = crud.get_posts(skip=skip, limit=limit, published_before=now, tag_slug=tag)
    return BlogPostListResponse(posts=[BlogPostRead.model_validate(p) for p in posts], total=len(posts))


@router.get("/{slug}", response_model=BlogPostRead, summary="Get Published Post")
async def get_public_post(
    slug: str,
    db: Session = Depends(get_sync_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    post = BlogPostCRUD(db).get_published_post(slug, clock())
    if not post:
        raise EntityNotFound("Post not found")
    return BlogPostRead.model_validate(post)


@admin_router.get("", response_model=BlogPostListResponse, summary="List All Posts (Admin)")
async def list_posts(
    drafts: Optional[bool] = Query(None, description="true: drafts only, false: published only"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    crud = BlogPostCRUD(db)
    posts = crud.get_posts(skip=skip, limit=limit, drafts=drafts)
    return BlogPostListResponse(
        posts=[BlogPostRead.model_validate(p) for p in posts],
        total=crud.count_posts()
    )


@admin_router.post("", response_model=BlogPostRead, status_code=status.HTTP_201_CREATED, summary="Create Post")
async def create_post(
    post_data: BlogPostCreate,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    """
    Create a blog post. Leave `published_at` empty to keep it a draft.

    **Errors:**
    - **409**: Slug already used by another post
    """
    post = BlogPostCRUD(db).create_post(post_data)
    return BlogPostRead.model_validate(post)


@admin_router.get("/{post_id}", response_model=BlogPostRead, summary="Get Post (Admin)")
async def get_post(
    post_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    post = BlogPostCRUD(db).get_post(post_id)
    if not post:
        raise EntityNotFound("Post not found")
    return BlogPostRead.model_validate(post)


@admin_router.put("/{post_id}", response_model=BlogPostRead, summary="Update Post")
async def update_post(
    post_id: int,
    post_update: BlogPostUpdate,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    post = BlogPostCRUD(db).update_post(post_id, post_update)
    if not post:
        raise EntityNotFound("Post not found")
    return BlogPostRead.model_validate(post)


@admin_router.delete("/{post_id}", response_model=SoftDeleteResponse, summary="Delete Post")
async def delete_post(
    post_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    archival: ArchivalService = Depends(get_archival_service)
):
    """Move a post to the recycle bin."""
    entry = archival.archive_and_delete(EntityType.BLOG_POSTS, post_id, actor_label=admin.email)
    return SoftDeleteResponse(
        deleted=entry is not None,
        archive_id=entry.id if entry else None,
        redirect_to="/admin/blog"
    )
