"""
Testimonial model.

Older deployments moderate testimonials with a boolean ``approved`` column
instead of ``status``; code that writes moderation state consults the cached
schema capabilities (see crud/schema.py) rather than this model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base

TESTIMONIAL_STATUSES = ("pending", "approved", "rejected")


class Testimonial(Base):
    """Customer testimonial awaiting or past moderation."""

    __tablename__ = "testimonials"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(120), nullable=False)

    rating = Column(Integer, nullable=False, default=5, doc="1 to 5 stars")

    comment = Column(Text, nullable=True)

    status = Column(
        String(20),
        nullable=False,
        default="pending",
        index=True,
        doc="pending, approved or rejected"
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Testimonial(id={self.id}, name='{self.name}', status='{self.status}')>"
