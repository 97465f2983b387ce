"""
Slug Routes — Binding Router
============================

What:  An APIRouter that can bind named route parameters to records.
Why:   FastAPI has no model binding; every handler would otherwise repeat
       "load by slug or id, 404 if missing".
How:   `bind(key, binder)` stores a binder for a parameter name.
       `model(key, Model, ...)` stores a ParameterResolver as that binder.
       `binding(key)` returns a dependency that feeds the raw path value and
       a database session to the binder when the route is matched.

Usage:
    router = SlugRouter(prefix="/api")
    router.model("article", Article)
    router.model("user", User, callback=lambda: None)

    @router.get("/articles/{article}")
    async def show(article: Article = Depends(router.binding("article"))):
        ...

Binders are looked up when the request arrives, not when the route is
declared, so `model()` may be called after the decorated handler.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from slug_routes.database import get_db_session
from slug_routes.exceptions import BindingNotRegisteredError
from slug_routes.resolution import Fallback, ParameterResolver

logger = logging.getLogger(__name__)

Binder = Callable[[Optional[str], AsyncSession], Union[Any, Awaitable[Any]]]


class SlugRouter(APIRouter):
    """
    APIRouter with per-parameter binders.

    Args:
        session_dependency: Dependency yielding the AsyncSession handed to
            binders. Defaults to `get_db_session`, so
            `app.dependency_overrides[get_db_session]` applies to bindings too.
        *args, **kwargs: Passed through to APIRouter.
    """

    def __init__(
        self,
        *args: Any,
        session_dependency: Callable[..., Any] = get_db_session,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.session_dependency = session_dependency
        self._binders: Dict[str, Binder] = {}

    def bind(self, key: str, binder: Binder) -> None:
        """Register `binder` for the route parameter named `key` (replaces any previous one)."""
        if key in self._binders:
            logger.debug("Replacing binder for route parameter '%s'", key)
        self._binders[key] = binder

    def model(
        self,
        key: str,
        model: type,
        callback: Optional[Fallback] = None,
        force_id: bool = False,
    ) -> ParameterResolver:
        """
        Bind `key` to a record of `model`.

        Sluggable models are looked up by their slug column unless
        `force_id` is set; everything else by primary key. When no record
        matches, `callback()` is returned if given, otherwise NotFoundError
        is raised.
        """
        resolver = ParameterResolver(model, callback=callback, force_id=force_id)
        self.bind(key, resolver)
        return resolver

    def has_binding(self, key: str) -> bool:
        return key in self._binders

    def get_binder(self, key: str) -> Binder:
        try:
            return self._binders[key]
        except KeyError:
            raise BindingNotRegisteredError(key) from None

    def binding(self, key: str) -> Callable[..., Awaitable[Any]]:
        """
        FastAPI dependency resolving the path parameter `key`.

        The raw value comes from `request.path_params`; a parameter that is
        not present yields None and the binder decides what that means
        (ParameterResolver returns None without querying).
        """

        async def resolve_binding(
            request: Request,
            db: AsyncSession = Depends(self.session_dependency),
        ) -> Any:
            binder = self.get_binder(key)
            value = request.path_params.get(key)
            result = binder(value, db)
            if inspect.isawaitable(result):
                result = await result
            return result

        resolve_binding.__name__ = f"resolve_{key}"
        return resolve_binding
