import os

# Settings are read once at import time, so the environment must be in place first.
os.environ["ENV"] = "test"
os.environ.setdefault("DOWNSTREAM_BASE_URL", "http://downstream.test")
os.environ.setdefault("PRODUCT_STORE", "http")
os.environ.setdefault("AUTH_ENABLED", "false")

import threading
import time

import httpx
import pytest
import uvicorn
from fastapi.testclient import TestClient

from app.dao.product_dao import ProductDAO
from app.main import app
from app.sao.product_sao import ProductSAO
from app.services.product_service import (
    HttpProductService,
    InMemoryProductService,
    get_product_service,
)

DOWNSTREAM_URL = "http://downstream.test"


@pytest.fixture()
def http_service():
    """Build an HttpProductService whose downstream calls are answered by a handler."""

    def _build(handler) -> HttpProductService:
        sao = ProductSAO(
            base_url=DOWNSTREAM_URL,
            request_timeout=5.0,
            transport=httpx.MockTransport(handler),
        )
        return HttpProductService(sao)

    return _build


@pytest.fixture()
def memory_service():
    return InMemoryProductService(ProductDAO())


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def use_service():
    """Route the product endpoints to the given service for the duration of a test."""

    def _use(service):
        app.dependency_overrides[get_product_service] = lambda: service
        return service

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture()
def live_server():
    """Serve the app with uvicorn on a free local port and yield its base URL."""
    config = uvicorn.Config(app, host="127.0.0.1", port=0, log_config=None, lifespan="on")
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline or not thread.is_alive():
            raise RuntimeError("uvicorn did not start")
        time.sleep(0.01)

    port = server.servers[0].sockets[0].getsockname()[1]
    yield f"http://127.0.0.1:{port}"

    server.should_exit = True
    thread.join(timeout=10)
    app.dependency_overrides.clear()
