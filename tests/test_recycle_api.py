"""
HTTP tests for the recycle bin: listing, restore and purge.
"""

import pytest

from storefront.fastapi.models.recycle_bin import RecycleBinEntry


@pytest.fixture
def admin_client(signed_in_client):
    return signed_in_client


def archived_product(client, name="Rose Oud", slug="rose-oud"):
    product = client.post("/api/v1/admin/products", json={"name": name, "slug": slug}).json()
    return client.delete(f"/api/v1/admin/products/{product['id']}").json()["archive_id"]


class TestRestore:
    def test_restore_product(self, admin_client):
        archive_id = archived_product(admin_client)

        response = admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore")
        body = response.json()
        assert response.status_code == 200
        assert body["action"] == "restored"
        assert body["entity_type"] == "products"
        assert body["slug"] == "rose-oud"
        assert body["redirect_to"] == "/admin/recycle"

        restored = admin_client.get(f"/api/v1/admin/products/{body['entity_id']}").json()
        assert restored["name"] == "Rose Oud"
        assert admin_client.get("/api/v1/admin/recycle").json()["total"] == 0

    def test_restore_with_slug_taken(self, admin_client):
        archive_id = archived_product(admin_client)
        admin_client.post("/api/v1/admin/products", json={"name": "Rose Oud", "slug": "rose-oud"})

        body = admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore").json()

        assert body["action"] == "restored"
        assert body["slug"].startswith("rose-oud-restored-")

    def test_second_restore_is_noop(self, admin_client):
        archive_id = archived_product(admin_client)
        admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore")

        response = admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore")
        assert response.status_code == 200
        assert response.json()["action"] == "noop"
        assert admin_client.get("/api/v1/admin/products").json()["total"] == 1

    def test_restore_testimonial_keeps_moderation(self, admin_client, client):
        testimonial = client.post("/api/v1/testimonials", json={"name": "Ana", "rating": 4, "comment": "Nice"}).json()
        admin_client.post(f"/api/v1/admin/testimonials/{testimonial['id']}/status", json={"status": "approved"})
        archive_id = admin_client.delete(f"/api/v1/admin/testimonials/{testimonial['id']}").json()["archive_id"]

        body = admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore").json()

        public = client.get("/api/v1/testimonials").json()["testimonials"]
        assert [t["id"] for t in public] == [body["entity_id"]]
        assert public[0]["rating"] == 4

    def test_unsupported_entity_type(self, admin_client, session_factory):
        db = session_factory()
        try:
            entry = RecycleBinEntry(entity_type="orders", payload={"id": 1})
            db.add(entry)
            db.commit()
            archive_id = entry.id
        finally:
            db.close()

        response = admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore")
        assert response.status_code == 422
        assert response.json()["error"] == "unsupported_entity_type"


class TestPurge:
    def test_purge_then_noop(self, admin_client):
        archive_id = archived_product(admin_client)

        first = admin_client.delete(f"/api/v1/admin/recycle/{archive_id}").json()
        second = admin_client.delete(f"/api/v1/admin/recycle/{archive_id}").json()

        assert first["action"] == "purged"
        assert second["action"] == "noop"
        assert admin_client.get("/api/v1/admin/products").json()["total"] == 0

    def test_restore_then_purge_is_noop(self, admin_client):
        archive_id = archived_product(admin_client)
        admin_client.post(f"/api/v1/admin/recycle/{archive_id}/restore")

        body = admin_client.delete(f"/api/v1/admin/recycle/{archive_id}").json()
        assert body["action"] == "noop"
        assert admin_client.get("/api/v1/admin/products").json()["total"] == 1


class TestListing:
    def test_entry_detail_has_payload(self, admin_client):
        archive_id = archived_product(admin_client)

        detail = admin_client.get(f"/api/v1/admin/recycle/{archive_id}").json()
        assert detail["name"] == "Rose Oud"
        assert detail["payload"]["slug"] == "rose-oud"

    def test_missing_entry_detail(self, admin_client):
        assert admin_client.get("/api/v1/admin/recycle/999").status_code == 404

    def test_list_is_capped(self, admin_client, settings):
        settings.RECYCLE_LIST_LIMIT = 2
        for index in range(3):
            archived_product(admin_client, name=f"P{index}", slug=f"p{index}")

        body = admin_client.get("/api/v1/admin/recycle").json()
        assert len(body["items"]) == 2
        assert body["total"] == 3

    def test_recycle_requires_login(self, client):
        assert client.post("/api/v1/admin/recycle/1/restore").status_code == 401
        assert client.delete("/api/v1/admin/recycle/1").status_code == 401
