"""
Slug Routes — Article SQLAlchemy Model
======================================

What:  ORM model for the `articles` table; the sluggable example model.
Why:   Articles are addressed by URL-friendly slugs (/api/articles/hello-world),
       so the model implements the Sluggable capability via SluggableMixin.
Who:   Bound by the articles routes; created by tests and the Alembic migration.

Table Design:
    - Integer primary key: still reachable with force_id bindings
    - slug: VARCHAR(255) UNIQUE; uniqueness lives here, not in the resolver
    - created_at: UTC with timezone
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from slug_routes.database import Base
from slug_routes.sluggable import SluggableMixin


class Article(SluggableMixin, Base):
    """
    A published article.

    Query Patterns:
        - By slug: SELECT ... WHERE slug = :slug LIMIT 1 (unique index)
        - By id:   SELECT ... WHERE id = :id LIMIT 1 (primary key)
    """

    __tablename__ = "articles"
    __slug_column__ = "slug"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="URL-safe unique identifier used in article routes",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, slug='{self.slug}')>"
