import asyncio

import pytest
from fastapi.testclient import TestClient

from pizza_api.app.core.config import Settings
from pizza_api.app.core.store import InMemoryRecordStore
from pizza_api.app.core.uploads import UploadStorage
from pizza_api.app.main import create_app
from pizza_api.app.services.ingredient_service import IngredientService, UploadedFile
from pizza_api.app.services.order_service import OrderService

ADMIN_ID = "1"
ADMIN_EMAIL = "admin@pizza.test"
ADMIN_PASSWORD = "s3cret-pass"
SECRET_KEY = "test-secret"


def run(coro):
    """Drive an async service method from a synchronous test."""
    return asyncio.run(coro)


def upload(filename: str, content: bytes = b"\x89PNG fake image") -> UploadedFile:
    return UploadedFile(filename=filename, content=content)


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        data_file=str(tmp_path / "db.json"),
        upload_dir=str(tmp_path / "uploads"),
        secret_key=SECRET_KEY,
        admin_id=ADMIN_ID,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        remove_stale_uploads=False,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    # Context manager so the startup handler builds the services
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def admin_headers(client):
    resp = client.post(
        "/admin-auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture()
def memory_store():
    return InMemoryRecordStore()


@pytest.fixture()
def uploads(tmp_path):
    return UploadStorage(tmp_path / "uploads")


@pytest.fixture()
def ingredient_service(memory_store, uploads):
    return IngredientService(memory_store, uploads)


@pytest.fixture()
def order_service(memory_store):
    return OrderService(memory_store)
