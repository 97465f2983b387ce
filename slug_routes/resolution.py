"""
Slug Routes — Parameter Resolution
==================================

What:  Turns one raw route-parameter string into one record, a fallback
       result, or a NotFoundError.
Why:   This is the only behavior the package adds on top of FastAPI and
       SQLAlchemy; keeping it free of HTTP types makes it testable with a
       mocked session.
How:   ParameterResolver picks a lookup column (slug or primary key), runs a
       single `SELECT ... WHERE column = :value LIMIT 1` and maps the result
       onto one of three outcomes.

Resolution Flow:
    raw value ──▶ None? ──yes──▶ return None (no query, no fallback)
                   │
                   no
                   ▼
        force_id or not Sluggable? ──yes──▶ WHERE <primary key> = value
                   │
                   no
                   ▼
           WHERE <slug_identifier()> = value
                   │
        ┌──────────┼─────────────────────┐
        ▼          ▼                     ▼
     Found    FallbackResult          Missing
    (record)  (callback() result)   (→ NotFoundError)

Multiple slug matches:
    Slug uniqueness is the schema's responsibility. If it is violated the
    first row in database order wins (`LIMIT 1`); no tie-break is applied.
"""

import inspect
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from slug_routes.exceptions import NotFoundError
from slug_routes.sluggable import Sluggable

logger = logging.getLogger(__name__)

Fallback = Callable[[], Any]

STRATEGY_SLUG = "slug"
STRATEGY_PRIMARY_KEY = "primary_key"

_CANONICAL_INT = re.compile(r"-?[0-9]+")


# ══════════════════════════════════════════════════════════════════════════
# Outcomes
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Found:
    """A record matched the parameter value."""
    record: Any


@dataclass(frozen=True)
class FallbackResult:
    """No record matched; `value` is what the fallback callback returned."""
    value: Any


@dataclass(frozen=True)
class Missing:
    """No record matched and there is no fallback."""
    model: type
    value: str

    def to_error(self) -> NotFoundError:
        return NotFoundError(
            resource=self.model.__name__,
            resource_id=self.value,
            context={"model": self.model.__name__},
        )


Resolution = Union[Found, FallbackResult, Missing]


class _Uncoercible(Exception):
    """The raw value cannot be converted to the lookup column's type."""


def _coerce(column: ColumnElement, value: str) -> Any:
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if isinstance(value, python_type):
        return value
    # int() also takes "+42", " 42 ", "4_2" and non-ASCII digits; only the
    # canonical spelling may name a row
    if python_type is int and not (isinstance(value, str) and _CANONICAL_INT.fullmatch(value)):
        raise _Uncoercible(f"{value!r} is not a canonical integer")
    try:
        return python_type(value)
    except (TypeError, ValueError) as e:
        raise _Uncoercible(str(e)) from e


# ══════════════════════════════════════════════════════════════════════════
# Resolver
# ══════════════════════════════════════════════════════════════════════════

class ParameterResolver:
    """
    Resolves a route parameter to an instance of `model`.

    One resolver is built per bound parameter (see SlugRouter.model) and is
    then called once per request. It keeps no state between calls, so the
    same inputs against an unchanged table always give the same outcome.

    Args:
        model:    SQLAlchemy mapped class to look up.
        callback: Optional zero-argument callable used when nothing matches.
                  May be sync or async. Its return value becomes the result
                  of the resolution.
        force_id: Look up by primary key even if `model` is Sluggable.

    Raises (from __call__):
        NotFoundError: no match and no callback.
        Anything the session raises propagates untouched.
    """

    def __init__(
        self,
        model: type,
        callback: Optional[Fallback] = None,
        force_id: bool = False,
    ):
        self.model = model
        self.callback = callback
        self.force_id = force_id

    def __repr__(self) -> str:
        return (
            f"<ParameterResolver(model={self.model.__name__}, "
            f"strategy='{self.strategy}', fallback={self.callback is not None})>"
        )

    @property
    def strategy(self) -> str:
        """Which lookup this resolver performs: 'slug' or 'primary_key'."""
        if not self.force_id and issubclass(self.model, Sluggable):
            return STRATEGY_SLUG
        return STRATEGY_PRIMARY_KEY

    def lookup_column(self) -> ColumnElement:
        """
        The column compared against the raw value.

        For Sluggable models this calls `slug_identifier()`; resolution calls
        this exactly once per lookup.
        """
        if self.strategy == STRATEGY_SLUG:
            return getattr(self.model, self.model.slug_identifier())
        return sa_inspect(self.model).primary_key[0]

    def build_query(self, column: ColumnElement, value: Any) -> Select:
        return select(self.model).where(column == value).limit(1)

    async def lookup(self, value: Optional[str], db: AsyncSession) -> Optional[Resolution]:
        """
        Resolve `value` without raising for a missing record.

        Returns:
            None when `value` is None, otherwise Found, FallbackResult or
            Missing.
        """
        if value is None:
            return None

        column = self.lookup_column()
        record = None
        try:
            identifier = _coerce(column, value)
        except _Uncoercible:
            # e.g. "abc" against an integer key: no row can match
            logger.debug("%s: '%s' is not a valid %s", self.model.__name__, value, column.key)
        else:
            logger.debug(
                "Resolving %s by %s (%s=%r)",
                self.model.__name__, self.strategy, column.key, identifier,
            )
            result = await db.execute(self.build_query(column, identifier))
            record = result.scalars().first()

        if record is not None:
            return Found(record)

        if self.callback is not None:
            logger.info("%s '%s' not found, using fallback", self.model.__name__, value)
            fallback_value = self.callback()
            if inspect.isawaitable(fallback_value):
                fallback_value = await fallback_value
            return FallbackResult(fallback_value)

        logger.info("%s '%s' not found", self.model.__name__, value)
        return Missing(self.model, value)

    async def __call__(self, value: Optional[str], db: AsyncSession) -> Any:
        outcome = await self.lookup(value, db)
        if outcome is None:
            return None
        if isinstance(outcome, Found):
            return outcome.record
        if isinstance(outcome, FallbackResult):
            return outcome.value
        raise outcome.to_error()


async def resolve(
    db: AsyncSession,
    value: Optional[str],
    model: type,
    callback: Optional[Fallback] = None,
    force_id: bool = False,
) -> Any:
    """One-shot resolution: `ParameterResolver(model, callback, force_id)(value, db)`."""
    return await ParameterResolver(model, callback=callback, force_id=force_id)(value, db)
