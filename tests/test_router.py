"""
Slug Routes — SlugRouter and Endpoint Tests
===========================================

What:  Binding registration on SlugRouter and the reference routes end to end.
How:   Real aiosqlite database seeded by conftest; HTTP through httpx's
       ASGITransport.

Scenarios:
    ✅ Article by slug "hello-world" → 200
    ✅ Missing slug, no fallback → 404 with error body
    ✅ Missing slug with redirect fallback → 307 to /api/articles
    ✅ User 42 by primary key → 200
    ✅ Forced id lookup on a sluggable model
    ✅ Unregistered binding → BindingNotRegisteredError
"""

from unittest.mock import MagicMock

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient

from slug_routes.exceptions import BindingNotRegisteredError
from slug_routes.models.article import Article
from slug_routes.models.user import User
from slug_routes.resolution import ParameterResolver
from slug_routes.router import SlugRouter


class TestBindingRegistration:

    def test_model_registers_resolver(self):
        """model() should register and return a ParameterResolver."""
        router = SlugRouter()
        resolver = router.model("article", Article, force_id=True)

        assert isinstance(resolver, ParameterResolver)
        assert resolver.force_id is True
        assert router.has_binding("article")
        assert router.get_binder("article") is resolver

    def test_bind_replaces_previous_binder(self):
        """bind() should replace an earlier binder for the same key."""
        router = SlugRouter()
        router.model("user", User)
        custom = MagicMock()
        router.bind("user", custom)

        assert router.get_binder("user") is custom

    def test_unknown_binding_raises(self):
        """An unregistered key should raise BindingNotRegisteredError."""
        router = SlugRouter()

        with pytest.raises(BindingNotRegisteredError) as exc_info:
            router.get_binder("missing")

        assert exc_info.value.key == "missing"

    def test_router_kwargs_pass_through(self):
        """APIRouter arguments should pass through unchanged."""
        router = SlugRouter(prefix="/api", tags=["Things"])

        assert router.prefix == "/api"
        assert router.tags == ["Things"]


class TestBindingDependency:
    """SlugRouter.binding() inside a minimal app, with a session stub."""

    @staticmethod
    def build_app(router: SlugRouter) -> FastAPI:
        app = FastAPI()
        app.include_router(router)
        return app

    @pytest.mark.asyncio
    async def test_custom_binder_receives_raw_value_and_session(self):
        """A custom binder should get the raw path value and the session."""
        session = object()

        async def fake_session():
            yield session

        seen = {}

        def binder(value, db):
            seen["value"] = value
            seen["db"] = db
            return {"name": value.upper()}

        router = SlugRouter(session_dependency=fake_session)
        router.bind("thing", binder)

        @router.get("/things/{thing}")
        async def show(thing=Depends(router.binding("thing"))):
            return thing

        transport = ASGITransport(app=self.build_app(router))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/things/widget")

        assert response.status_code == 200
        assert response.json() == {"name": "WIDGET"}
        assert seen == {"value": "widget", "db": session}

    @pytest.mark.asyncio
    async def test_binding_registered_after_route(self):
        """A binder registered after the route should still be used."""
        async def fake_session():
            yield None

        router = SlugRouter(session_dependency=fake_session)

        @router.get("/things/{thing}")
        async def show(thing=Depends(router.binding("thing"))):
            return {"thing": thing}

        async def binder(value, db):
            return f"bound-{value}"

        router.bind("thing", binder)

        transport = ASGITransport(app=self.build_app(router))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/things/7")

        assert response.json() == {"thing": "bound-7"}

    @pytest.mark.asyncio
    async def test_parameter_absent_from_path_resolves_to_none(self, mock_db_session):
        """A parameter absent from the path should resolve to None."""
        async def fake_session():
            yield mock_db_session

        router = SlugRouter(session_dependency=fake_session)
        router.model("article", Article)

        @router.get("/latest")
        async def latest(article=Depends(router.binding("article"))):
            return {"article": article}

        transport = ASGITransport(app=self.build_app(router))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/latest")

        assert response.json() == {"article": None}
        mock_db_session.execute.assert_not_awaited()


class TestArticleRoutes:

    @pytest.mark.asyncio
    async def test_get_article_by_slug(self, test_client):
        """An existing slug should return the article."""
        response = await test_client.get("/api/articles/hello-world")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1
        assert body["slug"] == "hello-world"
        assert body["title"] == "Hello, World"

    @pytest.mark.asyncio
    async def test_numeric_value_is_not_treated_as_id(self, test_client):
        """Sluggable bindings never fall back to the primary key."""
        response = await test_client.get("/api/articles/1")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_slug_returns_404(self, test_client):
        """An unknown slug should return a 404 error body with the request ID."""
        response = await test_client.get(
            "/api/articles/missing-slug", headers={"X-Request-ID": "trace-1"}
        )

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "missing-slug" in body["message"]
        assert body["details"] == {"resource": "Article", "resource_id": "missing-slug"}
        assert body["request_id"] == "trace-1"
        assert response.headers["X-Request-ID"] == "trace-1"

    @pytest.mark.asyncio
    async def test_forced_id_lookup(self, test_client):
        """The forced-id route should find articles by primary key."""
        response = await test_client.get("/api/articles/id/2")

        assert response.status_code == 200
        assert response.json()["slug"] == "second-post"

    @pytest.mark.asyncio
    async def test_forced_id_lookup_ignores_slug(self, test_client):
        """The forced-id route should not accept slugs."""
        response = await test_client.get("/api/articles/id/hello-world")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_archived_article_found(self, test_client):
        """An existing archived slug should return the article."""
        response = await test_client.get("/api/archive/second-post")

        assert response.status_code == 200
        assert response.json()["id"] == 2

    @pytest.mark.asyncio
    async def test_archived_article_missing_redirects(self, test_client):
        """An unknown archived slug should redirect to the article list."""
        response = await test_client.get("/api/archive/missing-slug")

        assert response.status_code == 307
        assert response.headers["location"] == "/api/articles"

    @pytest.mark.asyncio
    async def test_list_articles(self, test_client):
        """The list route should return all articles ordered by id."""
        response = await test_client.get("/api/articles")

        assert response.status_code == 200
        body = response.json()
        assert body["total_count"] == 2
        assert [a["slug"] for a in body["articles"]] == ["hello-world", "second-post"]

    @pytest.mark.asyncio
    async def test_repeated_requests_are_idempotent(self, test_client):
        """Repeated requests against an unchanged store should match."""
        first = await test_client.get("/api/articles/hello-world")
        second = await test_client.get("/api/articles/hello-world")

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_get_user_by_primary_key(self, test_client):
        """An existing user id should return the user."""
        response = await test_client.get("/api/users/42")

        assert response.status_code == 200
        assert response.json() == {"id": 42, "name": "Ada", "email": "ada@example.com"}

    @pytest.mark.asyncio
    async def test_unknown_user_returns_404(self, test_client):
        """An unknown user id should return 404."""
        response = await test_client.get("/api/users/7")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["details"] == {"resource": "User", "resource_id": "7"}

    @pytest.mark.asyncio
    async def test_non_numeric_user_id_returns_404(self, test_client):
        """A non-numeric user id should return 404."""
        response = await test_client.get("/api/users/ada")

        assert response.status_code == 404


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        """Health should report a connected database."""
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
