"""
Slug Routes — Sluggable Capability
==================================

What:  Marks a model class as addressable by a human-readable slug column.
Why:   URLs like /articles/hello-world read better and survive id changes.
       Models opt in explicitly; anything else keeps primary-key lookup.
How:   `Sluggable` is a runtime-checkable Protocol with a single classmethod,
       `slug_identifier()`, returning the column name. ParameterResolver
       checks `issubclass(model, Sluggable)` before choosing its query.

The column must be unique within the table. That is the schema's job
(`unique=True` on the column); the resolver never checks it and simply takes
the first row the database returns.

Example:
    class Article(SluggableMixin, Base):
        __tablename__ = "articles"
        __slug_column__ = "slug"
        ...

    class Tag(Base):
        @classmethod
        def slug_identifier(cls) -> str:
            return "name"
"""

from typing import Protocol, runtime_checkable

from slug_routes.config import settings


@runtime_checkable
class Sluggable(Protocol):
    """Capability: the model exposes a unique, URL-safe lookup column."""

    @classmethod
    def slug_identifier(cls) -> str:
        """Name of the column holding the slug."""
        ...


class SluggableMixin:
    """
    Default `Sluggable` implementation driven by a class attribute.

    Set `__slug_column__` on the model; when left as None the configured
    `default_slug_column` setting is used (``slug`` unless overridden).
    """

    __slug_column__ = None

    @classmethod
    def slug_identifier(cls) -> str:
        return cls.__slug_column__ or settings.default_slug_column
