"""
Blog post CRUD operations.

Deletion goes through the archival service (soft delete).
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import DuplicateSlug
from storefront.fastapi.core.utils import coerce_datetime, normalize_slug
from storefront.fastapi.models.blog_post import BlogPost
from storefront.fastapi.schemas.blog_post import BlogPostCreate, BlogPostUpdate


class BlogPostCRUD:
    """CRUD operations for BlogPost model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_post(self, post_data: BlogPostCreate) -> BlogPost:
        """
        Create a blog post (a draft unless ``published_at`` is given).

        Raises:
            DuplicateSlug: If the slug is already used
        """
        slug = normalize_slug(post_data.slug or post_data.title)
        if not slug or self.get_post_by_slug(slug):
            raise DuplicateSlug(f"Slug '{slug}' is empty or already used")

        values = post_data.model_dump(exclude={"slug"})
        values["published_at"] = coerce_datetime(values.get("published_at"))
        db_post = BlogPost(slug=slug, **values)

        self.db.add(db_post)
        self.db.commit()
        self.db.refresh(db_post)

        return db_post

    def get_post(self, post_id: int) -> Optional[BlogPost]:
        return self.db.query(BlogPost).filter(BlogPost.id == post_id).first()

    def get_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        return self.db.query(BlogPost).filter(BlogPost.slug == slug).first()

    def get_published_post(self, slug: str, now: datetime) -> Optional[BlogPost]:
        return self.db.query(BlogPost).filter(
            BlogPost.slug == slug,
            BlogPost.published_at.isnot(None),
            BlogPost.published_at <= now
        ).first()

    def get_posts(self, skip: int = 0, limit: int = 100,
                  published_before: Optional[datetime] = None,
                  tag_slug: Optional[str] = None,
                  drafts: Optional[bool] = None) -> List[BlogPost]:
        """
        Get list of posts.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            published_before: Only posts published at or before this time
            tag_slug: Filter by tag (optional)
            drafts: True for drafts only, False for published only, None for all
        """
        query = self.db.query(BlogPost)

        if published_before is not None:
            query = query.filter(BlogPost.published_at.isnot(None), BlogPost.published_at <= published_before)

        if drafts is True:
            query = query.filter(BlogPost.published_at.is_(None))
        elif drafts is False:
            query = query.filter(BlogPost.published_at.isnot(None))

        if tag_slug:
            query = query.filter(BlogPost.tag_slug == tag_slug)

        return query.order_by(
            BlogPost.published_at.desc(), BlogPost.created_at.desc(), BlogPost.id.desc()
        ).offset(skip).limit(limit).all()

    def count_posts(self) -> int:
        return self.db.query(BlogPost).count()

    def update_post(self, post_id: int, post_update: BlogPostUpdate) -> Optional[BlogPost]:
        """
        Update a blog post.

        Returns:
            Updated BlogPost instance or None if not found

        Raises:
            DuplicateSlug: If the new slug belongs to another post
        """
        db_post = self.get_post(post_id)
        if not db_post:
            return None

        update_data = post_update.model_dump(exclude_unset=True)

        if "slug" in update_data:
            slug = normalize_slug(update_data["slug"] or db_post.title)
            existing = self.get_post_by_slug(slug)
            if not slug or (existing and existing.id != post_id):
                raise DuplicateSlug(f"Slug '{slug}' is empty or already used")
            update_data["slug"] = slug

        if "published_at" in update_data:
            update_data["published_at"] = coerce_datetime(update_data["published_at"])

        for field, value in update_data.items():
            setattr(db_post, field, value)

        self.db.commit()
        self.db.refresh(db_post)

        return db_post
