"""
Slug Routes — Article Route Handlers
====================================

What:  Article endpoints whose path parameters are bound to Article records.
How:   A SlugRouter binds three parameter names to the same model:

    {article}           slug lookup, 404 when missing
    {article_id}        primary-key lookup (force_id), 404 when missing
    {archived_article}  slug lookup, redirect to the list when missing

Handlers stay thin: by the time they run, the binding has either produced
the record (or the fallback's redirect) or NotFoundError has already been
turned into a 404 by the global handler.
"""

import logging

from fastapi import Depends, Response
from fastapi.responses import RedirectResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from slug_routes.database import get_db_session
from slug_routes.models.article import Article
from slug_routes.router import SlugRouter
from slug_routes.schemas.article import (
    ArticleListResponse,
    ArticleResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = SlugRouter(prefix="/api", tags=["Articles"])


def redirect_to_index() -> RedirectResponse:
    """Fallback for archived links: send the client to the article list."""
    return RedirectResponse(url="/api/articles", status_code=307)


router.model("article", Article)
router.model("article_id", Article, force_id=True)
router.model("archived_article", Article, callback=redirect_to_index)


@router.get(
    "/articles",
    response_model=ArticleListResponse,
    summary="List articles",
)
async def list_articles(db: AsyncSession = Depends(get_db_session)) -> ArticleListResponse:
    result = await db.execute(select(Article).order_by(Article.id))
    articles = [ArticleResponse.model_validate(a) for a in result.scalars().all()]
    return ArticleListResponse(articles=articles, total_count=len(articles))


@router.get(
    "/articles/{article}",
    response_model=ArticleResponse,
    responses={404: {"description": "No article with this slug", "model": ErrorResponse}},
    summary="Get an article by slug",
)
async def get_article(
    article: Article = Depends(router.binding("article")),
) -> ArticleResponse:
    return ArticleResponse.model_validate(article)


@router.get(
    "/articles/id/{article_id}",
    response_model=ArticleResponse,
    responses={404: {"description": "No article with this id", "model": ErrorResponse}},
    summary="Get an article by primary key",
)
async def get_article_by_id(
    article: Article = Depends(router.binding("article_id")),
) -> ArticleResponse:
    return ArticleResponse.model_validate(article)


@router.get(
    "/archive/{archived_article}",
    response_model=ArticleResponse,
    responses={307: {"description": "Unknown slug, redirected to the article list"}},
    summary="Get an archived article by slug",
)
async def get_archived_article(
    article=Depends(router.binding("archived_article")),
):
    """
    Old links may point at slugs that no longer exist. The binding's
    fallback hands back a redirect instead of raising, so pass it through.
    """
    if isinstance(article, Response):
        logger.debug("Archived article missing, redirecting to %s", article.headers["location"])
        return article
    return ArticleResponse.model_validate(article)
