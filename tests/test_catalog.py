"""Catalog: public listing, admin management and image upload"""
from decimal import Decimal

from barberdesk import storage


class FakeR2:
    def __init__(self):
        self.objects = {}

    def put_object(self, Bucket, Key, Body, ContentType):
        self.objects[Key] = (Body, ContentType)


def test_public_catalog_lists_services_oldest_first(client, make_service):
    make_service(name="Corte")
    make_service(name="Barba")

    response = client.get("/catalog")

    assert response.status_code == 200
    assert {s["name"] for s in response.json()} == {"Corte", "Barba"}


def test_admin_creates_updates_and_deletes_a_service(admin_client):
    created = admin_client.post(
        "/admin/services",
        json={"name": "Corte + Barba", "description": "Completo", "price": "70000", "duration_minutes": 45},
    )
    assert created.status_code == 201
    service_id = created.json()["id"]

    updated = admin_client.patch(f"/admin/services/{service_id}", json={"price": "75000"})
    assert updated.status_code == 200
    assert Decimal(updated.json()["price"]) == Decimal("75000")
    assert updated.json()["name"] == "Corte + Barba"

    assert admin_client.delete(f"/admin/services/{service_id}").status_code == 200
    assert admin_client.get("/catalog").json() == []


def test_service_name_is_required(admin_client):
    response = admin_client.post("/admin/services", json={"name": "  "})
    assert response.status_code == 422


def test_image_upload_stores_public_url(admin_client, make_service, monkeypatch):
    fake = FakeR2()
    monkeypatch.setattr(storage, "get_r2_client", lambda: fake)
    monkeypatch.setattr(storage, "R2_PUBLIC_URL", "https://cdn.example.com")
    service = make_service()

    response = admin_client.post(
        f"/admin/services/{service.id}/image",
        files={"file": ("corte.png", b"\x89PNG fake image", "image/png")},
    )

    assert response.status_code == 200
    key = next(iter(fake.objects))
    assert key.startswith(f"services/{service.id}/") and key.endswith(".png")
    assert response.json()["image_url"] == f"https://cdn.example.com/{key}"


def test_image_upload_rejects_other_file_types(admin_client, make_service, monkeypatch):
    fake = FakeR2()
    monkeypatch.setattr(storage, "get_r2_client", lambda: fake)
    service = make_service()

    response = admin_client.post(
        f"/admin/services/{service.id}/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert fake.objects == {}


def test_service_price_must_fit_the_money_column(admin_client):
    response = admin_client.post("/admin/services", json={"name": "Corte", "price": "70000.001"})

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "price"]
