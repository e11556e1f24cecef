"""Tests for the controller base class and the preview server."""

from pathlib import Path

import pytest
from aiohttp.test_utils import TestClient, TestServer

from view_engine import EngineConfig, ViewController, ViewEngine
from view_engine.preview_server import PreviewServer


@pytest.fixture
def controller(engine: ViewEngine, write_view) -> ViewController:
    write_view("page.html", "<h1>{{title}}</h1><p>{{body}}</p>")
    return ViewController(engine)


def test_controller_view_merges_data(controller: ViewController):
    controller.set("title", "Hello")
    controller.set({"body": "shared"})

    assert controller.view("page") == "<h1>Hello</h1><p>shared</p>"
    assert controller.view("page", {"body": "call"}) == "<h1>Hello</h1><p>call</p>"
    assert controller.view_data == {"title": "Hello", "body": "shared"}

    controller.clear_view_data()
    assert controller.view_data == {}


def test_controller_partial(controller: ViewController):
    assert controller.partial("page", {"title": "T", "body": "B"}) == "<h1>T</h1><p>B</p>"


def test_controller_render_response(controller: ViewController):
    response = controller.render("page", {"title": "T", "body": "B"})

    assert response.status == 200
    assert response.content_type == "text/html"
    assert response.charset == "utf-8"
    assert response.text == "<h1>T</h1><p>B</p>"


def test_controller_render_error_response(controller: ViewController):
    response = controller.render("missing")

    assert response.status == 500
    assert response.content_type == "text/plain"
    assert response.text == "Internal Server Error"


def test_controller_json_and_redirect(controller: ViewController):
    response = controller.json({"ok": True}, status=201)
    assert response.status == 201
    assert response.content_type == "application/json"
    assert response.text == '{"ok": true}'

    response = controller.redirect("/login")
    assert response.status == 302
    assert response.headers["Location"] == "/login"


def test_controller_creates_engine(tmp_path: Path):
    controller = ViewController(config=EngineConfig(views_path=tmp_path / "views"))
    assert controller.view_engine.views_path == (tmp_path / "views").resolve()


@pytest.mark.asyncio
async def test_preview_server_renders_views(engine: ViewEngine, write_view):
    write_view("hello.html", "Hello {{name}}")
    server = PreviewServer(engine)

    async with TestClient(TestServer(server.app)) as client:
        resp = await client.get("/views/hello", params={"name": "Ada"})
        assert resp.status == 200
        assert resp.content_type == "text/html"
        assert await resp.text() == "Hello Ada"

        resp = await client.post("/views/hello", json={"name": "Bob"})
        assert resp.status == 200
        assert await resp.text() == "Hello Bob"


@pytest.mark.asyncio
async def test_preview_server_errors(engine: ViewEngine, write_view):
    write_view("hello.html", "Hello {{name}}")
    server = PreviewServer(engine)

    async with TestClient(TestServer(server.app)) as client:
        resp = await client.get("/views/missing")
        assert resp.status == 404

        resp = await client.post("/views/hello", data="not json", headers={"Content-Type": "application/json"})
        assert resp.status == 400

        resp = await client.post("/views/hello", json=["a", "list"])
        assert resp.status == 400


@pytest.mark.asyncio
async def test_preview_server_views_cache_and_health(engine: ViewEngine, write_view):
    path = write_view("hello.html", "v1")
    server = PreviewServer(engine)

    async with TestClient(TestServer(server.app)) as client:
        resp = await client.get("/views")
        assert (await resp.json()) == {"views": ["hello"]}

        assert await (await client.get("/views/hello")).text() == "v1"
        path.write_text("v2", encoding="utf-8")
        assert await (await client.get("/views/hello")).text() == "v1"

        resp = await client.post("/cache/clear")
        assert (await resp.json()) == {"status": "cleared"}
        assert await (await client.get("/views/hello")).text() == "v2"

        resp = await client.get("/health")
        health = await resp.json()
        assert health["status"] == "healthy"
        assert health["cached_views"] == 1
