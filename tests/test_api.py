import base64
import json

import pytest

from pizza_api.app.core.errors import StorageError

from .conftest import ADMIN_EMAIL, ADMIN_PASSWORD

CUCUMBER_FORM = {"name": "Cucumber", "slug": "cucumber", "price": "100", "category": "vegetables"}
ORDER = {
    "name": "Ivan Ivanov",
    "ingredients": ["cucumber", "bacon"],
    "address": "Sesame Street",
    "card_number": "0000 0000 0000 1234",
}


def _files(image="cucumber.jpg", thumbnail="cucumber-small.png"):
    return {
        "image": (image, b"image-bytes", "image/jpeg"),
        "thumbnail": (thumbnail, b"thumb-bytes", "image/png"),
    }


def _create(client, headers, form=None):
    return client.post("/ingredients", data=form or CUCUMBER_FORM, files=_files(), headers=headers)


# --- admin auth ------------------------------------------------------------


def test_login_returns_token(client):
    resp = client.post("/admin-auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json()["token"].count(".") == 2


def test_login_with_wrong_password_is_unauthorized(client):
    resp = client.post("/admin-auth/login", json={"email": ADMIN_EMAIL, "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Wrong email or password"


def test_login_requires_both_fields(client):
    resp = client.post("/admin-auth/login", json={"email": ADMIN_EMAIL})
    assert resp.status_code == 422


def test_logout(client):
    resp = client.get("/admin-auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] is True


# --- ingredients -----------------------------------------------------------


def test_create_ingredient_and_serve_image(client, admin_headers):
    resp = _create(client, admin_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Cucumber"
    assert body["price"] == 100
    assert body["image"] == "cucumber.jpg"
    assert body["thumbnail"] == "cucumber-thumb.png"
    assert len(body["id"]) == 8

    listed = client.get("/ingredients").json()
    assert [i["id"] for i in listed] == [body["id"]]
    assert client.get(f"/ingredients/{body['id']}").json() == body

    image = client.get("/uploads/cucumber.jpg")
    assert image.status_code == 200
    assert image.content == b"image-bytes"


def test_mutating_routes_require_token(client, admin_headers):
    assert _create(client, {}).status_code == 401
    bad = {"Authorization": "Bearer not.a.token"}
    assert _create(client, bad).status_code == 401
    assert client.get("/ingredients").json() == []

    created = _create(client, admin_headers).json()
    assert client.put(f"/ingredients/{created['id']}", data=CUCUMBER_FORM).status_code == 401
    assert client.delete(f"/ingredients/{created['id']}").status_code == 401
    assert client.delete(f"/ingredients/{created['id']}", headers=bad).status_code == 401


def test_create_ingredient_validation_error(client, admin_headers):
    resp = _create(client, admin_headers, dict(CUCUMBER_FORM, category="fish"))
    assert resp.status_code == 422
    assert "category" in resp.json()["detail"]
    assert client.get("/ingredients").json() == []


@pytest.mark.parametrize("price", ["inf", "-inf", "nan", "1e999"])
def test_create_ingredient_rejects_non_finite_price(client, admin_headers, price):
    resp = _create(client, admin_headers, dict(CUCUMBER_FORM, price=price))
    assert resp.status_code == 422
    assert client.get("/ingredients").json() == []


def test_deeply_nested_token_is_unauthorized(client):
    nested = base64.urlsafe_b64encode(b"[" * 100000).rstrip(b"=").decode("ascii")
    headers = {"Authorization": f"Bearer {nested}.e30.c2ln"}
    assert client.delete("/ingredients/x", headers=headers).status_code == 401


def test_create_ingredient_requires_files(client, admin_headers):
    resp = client.post("/ingredients", data=CUCUMBER_FORM, headers=admin_headers)
    assert resp.status_code == 422


def test_get_unknown_ingredient_is_404(client):
    assert client.get("/ingredients/missing").status_code == 404


def test_update_ingredient(client, admin_headers):
    created = _create(client, admin_headers).json()
    resp = client.put(
        f"/ingredients/{created['id']}",
        data=dict(CUCUMBER_FORM, name="Pickle", price="120"),
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == created["id"]
    assert body["name"] == "Pickle"
    assert body["price"] == 120
    assert body["image"] == created["image"]


def test_update_unknown_ingredient_is_404(client, admin_headers):
    resp = client.put(
        "/ingredients/ghost", data=CUCUMBER_FORM, files=_files(), headers=admin_headers
    )
    assert resp.status_code == 404
    assert client.get("/ingredients").json() == []


def test_delete_ingredient(client, admin_headers):
    created = _create(client, admin_headers).json()
    resp = client.delete(f"/ingredients/{created['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"status": True, "message": "Success"}
    assert client.delete(f"/ingredients/{created['id']}", headers=admin_headers).status_code == 404
    assert client.get(f"/ingredients/{created['id']}").status_code == 404


def test_storage_failure_does_not_leak_details(client, admin_headers, monkeypatch):
    def broken_save(file_name, content):
        raise StorageError("Cannot store upload: [Errno 28] /srv/secret/uploads")

    monkeypatch.setattr(client.app.state.uploads, "save", broken_save)
    resp = _create(client, admin_headers)
    assert resp.status_code == 500
    assert resp.json() == {"detail": StorageError.public_message}
    assert "secret" not in resp.text
    assert client.get("/ingredients").json() == []


# --- orders ----------------------------------------------------------------


def test_create_order_masks_card_number(client, settings):
    resp = client.post("/orders", json=ORDER)
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Ivan Ivanov"
    assert body["ingredients"] == ["cucumber", "bacon"]
    assert body["address"] == "Sesame Street"
    assert body["card_number"] == "**** 1234"

    listed = client.get("/orders").json()
    assert [o["id"] for o in listed] == [body["id"]]
    assert listed[0]["card_number"] == "**** 1234"
    assert client.get(f"/orders/{body['id']}").json() == body

    with open(settings.data_path, encoding="utf-8") as fh:
        document = json.load(fh)
    assert document["orders"][0]["card_number"] == "0000 0000 0000 1234"


def test_order_with_unknown_ingredient_is_accepted(client):
    resp = client.post("/orders", json=dict(ORDER, ingredients=["nonexistent-slug"]))
    assert resp.status_code == 201
    assert client.get("/orders").json()[0]["ingredients"] == ["nonexistent-slug"]


def test_order_validation_error(client):
    resp = client.post("/orders", json={"name": "Ivan"})
    assert resp.status_code == 422
    detail = resp.json()["detail"]
    for field in ("ingredients", "address", "card_number"):
        assert field in detail
    assert client.get("/orders").json() == []


def test_order_with_non_finite_price_is_rejected(client):
    body = json.dumps(ORDER)[:-1] + ', "price": 1e999}'
    resp = client.post("/orders", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 422
    assert "price" in resp.json()["detail"]
    assert client.get("/orders").json() == []


def test_get_unknown_order_is_404(client):
    assert client.get("/orders/missing").status_code == 404


# --- application -----------------------------------------------------------


def test_api_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
    paths = client.get("/openapi.json").json()["paths"]
    for path in ("/ingredients", "/ingredients/{ingredient_id}", "/orders", "/admin-auth/login"):
        assert path in paths


def test_document_layout_on_disk(client, admin_headers, settings):
    _create(client, admin_headers)
    client.post("/orders", json=ORDER)
    with open(settings.data_path, encoding="utf-8") as fh:
        document = json.load(fh)
    assert set(document) == {"ingredients", "orders"}
    assert set(document["ingredients"][0]) == {
        "id", "name", "slug", "price", "category", "image", "thumbnail",
    }
