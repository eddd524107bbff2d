from __future__ import annotations

import json

from persistence import fingerprint

AUTH = {"X-Admin-Token": "test-admin-token"}


def test_get_products_serves_empty_catalog_with_etag(client):
    r = client.get("/api/products")
    assert r.status_code == 200
    assert r.content == b"[]"
    assert r.headers["etag"] == fingerprint(b"[]")
    assert r.headers["content-type"].startswith("application/json")


def test_save_then_read_back(client, settings):
    etag = client.get("/api/products").headers["etag"]

    r = client.post(
        "/api/save-products",
        content=json.dumps([{"id": "1", "name": "A"}]),
        headers={**AUTH, "If-Match": etag},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["etag"] == fingerprint(settings.data_file.read_bytes())
    assert r.headers["etag"] == body["etag"]

    r = client.get("/api/products")
    assert r.json() == [{"id": "1", "name": "A"}]
    assert r.headers["etag"] == body["etag"]


def test_save_requires_admin_token(client, settings):
    r = client.post("/api/save-products", content=b'[{"id": "a"}]')
    assert r.status_code == 401
    assert r.text == "Unauthorized"

    r = client.post("/api/save-products", content=b'[{"id": "a"}]', headers={"X-Admin-Token": "wrong"})
    assert r.status_code == 401
    assert not settings.data_file.exists()


def test_save_rejected_when_token_unconfigured(settings):
    from dataclasses import replace

    from fastapi.testclient import TestClient

    import app as app_module

    client = TestClient(app_module.create_app(replace(settings, admin_token="")))
    r = client.post("/api/save-products", content=b'[{"id": "a"}]', headers={"X-Admin-Token": ""})
    assert r.status_code == 401


def test_other_methods_not_allowed(client):
    for method in ("get", "put", "patch", "delete"):
        r = getattr(client, method)("/api/save-products")
        assert r.status_code == 405
        assert r.headers["allow"] == "POST"
        assert r.text == "Method Not Allowed"


def test_stale_if_match_is_412(client):
    r = client.post("/api/save-products", content=b'[{"id": "a"}]', headers=AUTH)
    assert r.status_code == 200
    first = r.json()["etag"]
    r = client.post("/api/save-products", content=b'[{"id": "b"}]', headers={**AUTH, "If-Match": first})
    assert r.status_code == 200

    r = client.post("/api/save-products", content=b'[{"id": "c"}]', headers={**AUTH, "If-Match": first})
    assert r.status_code == 412
    assert r.text == "Precondition Failed"
    assert client.get("/api/products").json() == [{"id": "b"}]


def test_bad_payloads_are_400(client):
    cases = {
        b"not json": "Payload must be a JSON array of products or an object with a products array",
        b"[]": "Payload must be a JSON array of products or an object with a products array",
        b'[{"id": "a"}, {"name": "x"}]': "Item 1 missing non-empty 'id'",
        b'[{"id": "a"}, {"id": "a"}]': "Duplicate id: a",
    }
    for body, message in cases.items():
        r = client.post("/api/save-products", content=body, headers=AUTH)
        assert r.status_code == 400
        assert r.text == message


def test_write_failure_is_500(client, settings, monkeypatch):
    import persistence.disk_store as disk_store

    def _no_staging(path):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(disk_store, "new_staging_path", _no_staging)
    r = client.post("/api/save-products", content=b'[{"id": "a"}]', headers=AUTH)
    assert r.status_code == 500
    assert r.text == "Failed to write temp file"
    assert not settings.data_file.exists()


def test_envelope_save_keeps_meta(client, settings):
    payload = {"products": [{"id": "x"}], "meta": "keep"}
    r = client.post("/api/save-products", content=json.dumps(payload), headers=AUTH)
    assert r.status_code == 200
    assert json.loads(settings.data_file.read_bytes()) == payload


def test_non_json_constants_are_400(client, settings):
    r = client.post("/api/save-products", content=b'[{"id": "a", "price": NaN}]', headers=AUTH)
    assert r.status_code == 400
    assert not settings.data_file.exists()
    assert client.get("/api/products").json() == []
