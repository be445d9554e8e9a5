"""HTTP surface tests: file API, upload, auth, admin pre-filter and view."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from pubhost.config import settings
from pubhost.core.errors import StoreUnavailable
from pubhost.storage.memory import InMemoryObjectStore


async def _seed(store: InMemoryObjectStore, *pathnames: str) -> None:
    for pathname in pathnames:
        await store.put(pathname, f"<h1>{pathname}</h1>".encode(), "text/html")


def _login(client: AsyncClient, token: str) -> None:
    client.cookies.set(settings.session_cookie_name, token)


class TestListFiles:
    @pytest.mark.asyncio
    async def test_catalog_shape(self, client: AsyncClient, store):
        await _seed(store, "lessons/algebra.html", "index.html")

        resp = await client.get("/api/files")

        assert resp.status_code == 200
        data = resp.json()
        assert data["categories"] == ["lessons"]
        by_path = {f["pathname"]: f for f in data["files"]}
        algebra = by_path["lessons/algebra.html"]
        assert algebra["name"] == "algebra.html"
        assert algebra["category"] == "lessons"
        assert algebra["viewRoute"] == "/view/lessons/algebra"
        assert "uploadedAt" in algebra
        assert by_path["index.html"]["category"] is None

    @pytest.mark.asyncio
    async def test_store_unavailable(self, client: AsyncClient, store):
        with patch.object(store, "list_all", AsyncMock(side_effect=StoreUnavailable("down"))):
            resp = await client.get("/api/files")

        assert resp.status_code == 503
        assert resp.json()["error"] == "StoreUnavailable"


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_html(self, client: AsyncClient, store, token):
        _login(client, token)

        resp = await client.post(
            "/api/upload",
            files={"file": ("notes.html", b"<p>notes</p>", "text/html")},
            data={"category": "lessons"},
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["pathname"] == "lessons/notes.html"
        assert await store.get(data["url"]) == b"<p>notes</p>"

    @pytest.mark.asyncio
    async def test_bearer_token_accepted(self, client: AsyncClient, token):
        resp = await client.post(
            "/api/upload",
            files={"file": ("notes.html", b"x", "text/html")},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_rejects_non_html(self, client: AsyncClient, token):
        _login(client, token)

        resp = await client.post("/api/upload", files={"file": ("notes.txt", b"x", "text/plain")})

        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidFileType"

    @pytest.mark.asyncio
    async def test_missing_file(self, client: AsyncClient, token):
        _login(client, token)

        resp = await client.post("/api/upload", data={"category": "x"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidName"

    @pytest.mark.asyncio
    async def test_unauthorized(self, client: AsyncClient, store):
        resp = await client.post("/api/upload", files={"file": ("notes.html", b"x", "text/html")})

        assert resp.status_code == 401
        assert resp.json()["error"] == "Unauthorized"
        assert await store.list_all() == []


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, store, token):
        await _seed(store, "a.html")
        _login(client, token)

        resp = await client.request("DELETE", "/api/files", json={"url": "memory://a.html"})

        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_delete_missing_is_success(self, client: AsyncClient, token):
        _login(client, token)

        resp = await client.request("DELETE", "/api/files", json={"url": "memory://ghost.html"})

        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_unauthorized(self, client: AsyncClient, store):
        await _seed(store, "a.html")

        resp = await client.request("DELETE", "/api/files", json={"url": "memory://a.html"})

        assert resp.status_code == 401
        assert [b.pathname for b in await store.list_all()] == ["a.html"]


class TestMove:
    @pytest.mark.asyncio
    async def test_move(self, client: AsyncClient, store, token):
        await _seed(store, "lessons/algebra.html")
        _login(client, token)

        resp = await client.patch(
            "/api/files",
            json={"url": "memory://lessons/algebra.html", "newPathname": "archive/algebra"},
        )

        assert resp.status_code == 200
        assert resp.json()["pathname"] == "archive/algebra.html"
        assert [b.pathname for b in await store.list_all()] == ["archive/algebra.html"]

    @pytest.mark.asyncio
    async def test_partial_move(self, client: AsyncClient, store, token):
        await _seed(store, "a.html")
        _login(client, token)

        with patch.object(store, "delete", AsyncMock(side_effect=StoreUnavailable("timeout"))):
            resp = await client.patch("/api/files", json={"url": "memory://a.html", "newPathname": "b.html"})

        assert resp.status_code == 207
        data = resp.json()
        assert data["error"] == "PartialMoveCompleted"
        assert data["pathname"] == "b.html"
        assert data["sourceUrl"] == "memory://a.html"
        assert {b.pathname for b in await store.list_all()} == {"a.html", "b.html"}

    @pytest.mark.asyncio
    async def test_store_timeout_during_move(self, client: AsyncClient, store, token):
        await _seed(store, "a.html")
        _login(client, token)

        with patch.object(store, "get", AsyncMock(side_effect=StoreUnavailable("timeout"))):
            resp = await client.patch("/api/files", json={"url": "memory://a.html", "newPathname": "b.html"})

        assert resp.status_code == 503
        assert resp.json()["error"] == "StoreUnavailable"
        assert [b.pathname for b in await store.list_all()] == ["a.html"]

    @pytest.mark.asyncio
    async def test_source_missing(self, client: AsyncClient, token):
        _login(client, token)

        resp = await client.patch("/api/files", json={"url": "memory://gone.html", "newPathname": "b.html"})

        assert resp.status_code == 404
        assert resp.json()["error"] == "SourceFetchFailed"

    @pytest.mark.asyncio
    async def test_invalid_name(self, client: AsyncClient, store, token):
        await _seed(store, "a.html")
        _login(client, token)

        resp = await client.patch("/api/files", json={"url": "memory://a.html", "newPathname": "docs/"})

        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidName"

    @pytest.mark.asyncio
    async def test_unauthorized(self, client: AsyncClient, store):
        await _seed(store, "a.html")

        resp = await client.patch("/api/files", json={"url": "memory://a.html", "newPathname": "b.html"})

        assert resp.status_code == 401
        assert [b.pathname for b in await store.list_all()] == ["a.html"]


class TestAuth:
    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, client: AsyncClient, gate):
        with patch.object(settings, "admin_password", "hunter2"):
            resp = await client.post("/api/auth", json={"password": "hunter2"})

        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        cookie = resp.cookies.get(settings.session_cookie_name)
        assert cookie
        assert gate.is_authorized(cookie)
        assert "httponly" in resp.headers["set-cookie"].lower()

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient):
        with patch.object(settings, "admin_password", "hunter2"):
            resp = await client.post("/api/auth", json={"password": "nope"})

        assert resp.status_code == 401
        assert settings.session_cookie_name not in resp.cookies

    @pytest.mark.asyncio
    async def test_login_disabled_without_password(self, client: AsyncClient):
        with patch.object(settings, "admin_password", ""):
            resp = await client.post("/api/auth", json={"password": ""})

        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client: AsyncClient, token):
        _login(client, token)

        resp = await client.post("/api/logout")

        assert resp.status_code == 200
        assert f"{settings.session_cookie_name}=" in resp.headers["set-cookie"]


class TestAdminPrefilter:
    @pytest.mark.asyncio
    async def test_redirects_without_session(self, client: AsyncClient):
        resp = await client.get("/admin")

        assert resp.status_code == 303
        assert resp.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_redirects_any_admin_subpath(self, client: AsyncClient):
        resp = await client.get("/admin/anything")

        assert resp.status_code == 303

    @pytest.mark.asyncio
    async def test_redirects_with_invalid_session(self, client: AsyncClient):
        _login(client, "forged")

        resp = await client.get("/admin")

        assert resp.status_code == 303

    @pytest.mark.asyncio
    async def test_admin_page_with_session(self, client: AsyncClient, store, token):
        await _seed(store, "lessons/algebra.html")
        _login(client, token)

        resp = await client.get("/admin")

        assert resp.status_code == 200
        assert "lessons/algebra.html" in resp.text


class TestPages:
    @pytest.mark.asyncio
    async def test_admin_page_renders_controls_per_file(self, client: AsyncClient, store, token):
        await _seed(store, "lessons/algebra.html", "index.html")
        _login(client, token)

        resp = await client.get("/admin")

        html = resp.text
        assert 'id="logout"' in html
        assert 'id="upload"' in html
        assert "const api = '/api'" in html
        assert "api + '/logout'" in html
        for pathname in ("lessons/algebra.html", "index.html"):
            data = f'data-url="memory://{pathname}" data-pathname="{pathname}"'
            assert f'class="rename" {data}' in html
            assert f'class="delete" {data}' in html

    @pytest.mark.asyncio
    async def test_public_index_has_no_admin_controls(self, client: AsyncClient, store):
        await _seed(store, "index.html")

        resp = await client.get("/")

        assert 'class="delete"' not in resp.text
        assert 'class="rename"' not in resp.text

    @pytest.mark.asyncio
    async def test_index_groups_uncategorized_first(self, client: AsyncClient, store):
        await _seed(store, "zeta/z.html", "loose.html", "alpha/a.html")

        resp = await client.get("/")

        assert resp.status_code == 200
        html = resp.text
        assert html.index("Uncategorized") < html.index("alpha") < html.index("zeta")
        assert 'href="/view/alpha/a"' in html

    @pytest.mark.asyncio
    async def test_index_empty(self, client: AsyncClient):
        resp = await client.get("/")
        assert "No files uploaded yet." in resp.text

    @pytest.mark.asyncio
    async def test_login_page_is_public(self, client: AsyncClient):
        resp = await client.get("/login")
        assert resp.status_code == 200


class TestView:
    @pytest.mark.asyncio
    async def test_serves_document(self, client: AsyncClient, store):
        await _seed(store, "lessons/algebra.html")

        resp = await client.get("/view/lessons/algebra")

        assert resp.status_code == 200
        assert resp.text == "<h1>lessons/algebra.html</h1>"
        assert resp.headers["content-type"].startswith("text/html")
        assert resp.headers["cache-control"] == f"public, max-age={settings.view_cache_max_age}"

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient, store):
        await _seed(store, "lessons/algebra.html")

        resp = await client.get("/view/lessons/ALGEBRA")

        assert resp.status_code == 404
        assert resp.text == "Not found"
