import pytest

from bakery.core.config import get_settings
from bakery.services import product_service as product_service_module

PUBLIC_BASE = "https://proj.supabase.co/storage/v1/object/public/assets/"


@pytest.fixture
def storage(monkeypatch):
    """Replace Supabase calls with in-memory fakes."""
    calls = {"uploaded": [], "deleted": []}

    def fake_upload(path, file_bytes, content_type):
        calls["uploaded"].append((path, len(file_bytes), content_type))
        return PUBLIC_BASE + path

    def fake_delete(url):
        calls["deleted"].append(url)

    monkeypatch.setattr(product_service_module, "upload_to_storage", fake_upload)
    monkeypatch.setattr(product_service_module, "delete_public_url", fake_delete)
    return calls


def _upload(client, product_id, headers, content_type="image/png", data=b"\x89PNG"):
    return client.post(
        f"/api/products/{product_id}/image",
        files={"file": ("cake.png", data, content_type)},
        headers=headers,
    )


def test_upload_sets_image_url(client, catalog, staff_headers, storage):
    res = _upload(client, catalog["croissant"], staff_headers)
    assert res.status_code == 200

    [(path, size, content_type)] = storage["uploaded"]
    assert path.startswith(f"products/{catalog['croissant']}/")
    assert path.endswith(".png")
    assert content_type == "image/png"
    assert res.json()["data"]["image_url"] == PUBLIC_BASE + path
    assert storage["deleted"] == []


def test_replacing_image_deletes_previous(client, catalog, staff_headers, storage):
    first = _upload(client, catalog["croissant"], staff_headers).json()["data"]
    second = _upload(
        client, catalog["croissant"], staff_headers, content_type="image/webp"
    ).json()["data"]

    assert second["image_url"].endswith(".webp")
    assert storage["deleted"] == [first["image_url"]]


def test_unsupported_type_rejected(client, catalog, staff_headers, storage):
    res = _upload(client, catalog["croissant"], staff_headers, content_type="text/plain")
    assert res.status_code == 400
    assert storage["uploaded"] == []


def test_image_too_large(client, catalog, staff_headers, storage, monkeypatch):
    monkeypatch.setattr(get_settings(), "MAX_IMAGE_BYTES", 3)
    res = _upload(client, catalog["croissant"], staff_headers, data=b"12345")
    assert res.status_code == 413
    assert res.json()["success"] is False
    assert storage["uploaded"] == []


def test_upload_requires_staff(client, catalog, storage):
    res = _upload(client, catalog["croissant"], {})
    assert res.status_code == 401


def test_upload_for_missing_product(client, catalog, staff_headers, storage):
    res = _upload(client, 9999, staff_headers)
    assert res.status_code == 404
