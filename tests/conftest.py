"""Shared fixtures: in-process HTTP targets and a client session."""

import logging
import socket

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ragcheck.config import SmokeConfig


def base_url(server: TestServer) -> str:
    return str(server.make_url("/")).rstrip("/")


def json_route(payload, status: int = 200):
    async def handler(request: web.Request) -> web.Response:
        return web.json_response(payload, status=status)
    return handler


def text_route(body: str, status: int = 200):
    async def handler(request: web.Request) -> web.Response:
        return web.Response(text=body, status=status)
    return handler


@pytest.fixture
async def serve():
    """Start an aiohttp app from a list of routes and return its base URL."""
    servers = []

    async def _serve(routes):
        app = web.Application()
        app.add_routes(routes)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return base_url(server)

    yield _serve

    for server in servers:
        await server.close()


@pytest.fixture
def dead_url():
    # A port that was free a moment ago; nothing listens on it
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture
async def session():
    async with aiohttp.ClientSession() as client_session:
        yield client_session


@pytest.fixture
def config(tmp_path):
    return SmokeConfig(timeout=5, log_dir=tmp_path / "logs")


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    checks = logging.getLogger("checks")
    saved_root, saved_level = root.handlers[:], root.level
    saved_checks, saved_propagate = checks.handlers[:], checks.propagate

    yield

    for logger, saved in ((root, saved_root), (checks, saved_checks)):
        for handler in logger.handlers[:]:
            if handler not in saved:
                logger.removeHandler(handler)
                handler.close()
        for handler in saved:
            if handler not in logger.handlers:
                logger.addHandler(handler)
    root.setLevel(saved_level)
    checks.propagate = saved_propagate
