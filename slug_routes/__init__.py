"""
Slug Routes — Package Initializer
=================================

What:  Resolves FastAPI route parameters directly to SQLAlchemy records.
Why:   Handlers that take `{article}` in the path almost always start by
       loading the matching row and returning 404 when it is missing. Binding
       that lookup to the parameter once removes the repetition.
How:   `SlugRouter.model()` registers a `ParameterResolver` for a parameter
       name; `SlugRouter.binding()` exposes it as a FastAPI dependency.
       Models that implement `Sluggable` are looked up by their slug column,
       everything else by primary key.

Architecture Note:

    ┌─────────────────────────────────────┐
    │      SlugRouter (APIRouter)         │  ← bind / model / binding
    ├─────────────────────────────────────┤
    │      ParameterResolver              │  ← slug or primary-key lookup
    ├─────────────────────────────────────┤
    │      Sluggable capability           │  ← opt-in slug column
    ├─────────────────────────────────────┤
    │      AsyncSession (SQLAlchemy)      │  ← one SELECT per resolution
    └─────────────────────────────────────┘

    The `main`, `models`, `routes` and `schemas` modules form a small
    reference application that exercises the binder end to end.
"""

from slug_routes.exceptions import NotFoundError, SlugRoutesError
from slug_routes.resolution import ParameterResolver, resolve
from slug_routes.router import SlugRouter
from slug_routes.sluggable import Sluggable, SluggableMixin

__version__ = "1.0.0"

__all__ = [
    "NotFoundError",
    "ParameterResolver",
    "SlugRouter",
    "SlugRoutesError",
    "Sluggable",
    "SluggableMixin",
    "resolve",
]
