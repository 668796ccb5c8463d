"""
Blog post model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base


class BlogPost(Base):
    """
    Blog post.

    A post without ``published_at`` is a draft; drafts and posts scheduled in
    the future are hidden from the public pages.
    """

    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)

    slug = Column(String(200), unique=True, nullable=False, index=True)

    title = Column(String(250), nullable=False)

    excerpt = Column(String(500), nullable=True)

    html = Column(Text, nullable=True)

    image = Column(String(500), nullable=True)

    tag_slug = Column(String(100), nullable=True, index=True)

    tag_name = Column(String(100), nullable=True)

    read_mins = Column(Integer, nullable=True)

    published_at = Column(DateTime, nullable=True, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, slug='{self.slug}')>"
