"""
HTTP tests for the public site and the admin content modules.
"""

import pytest


@pytest.fixture
def admin_client(signed_in_client):
    return signed_in_client


def create_product(client, **overrides):
    payload = {"name": "Sandalwood Incense", "category": "Incense", "specs": "Burn: 45 min\nSticks: 20"}
    payload.update(overrides)
    response = client.post("/api/v1/admin/products", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestProducts:
    def test_create_normalises_slug_and_specs(self, admin_client):
        product = create_product(admin_client, slug="  Sándalo Premium!! ")
        assert product["slug"] == "sandalo-premium"
        assert product["specs"] == {"Burn": "45 min", "Sticks": "20"}

    def test_slug_derived_from_name(self, admin_client):
        assert create_product(admin_client)["slug"] == "sandalwood-incense"

    def test_duplicate_slug(self, admin_client):
        create_product(admin_client)
        response = admin_client.post("/api/v1/admin/products", json={"name": "Sandalwood Incense"})
        assert response.status_code == 409
        assert response.json()["error"] == "duplicate_slug"

    def test_update(self, admin_client):
        product = create_product(admin_client)
        response = admin_client.put(
            f"/api/v1/admin/products/{product['id']}",
            json={"short_desc": "Slow burning", "specs": '{"burn": "1 h"}'}
        )
        assert response.status_code == 200
        assert response.json()["short_desc"] == "Slow burning"
        assert response.json()["specs"] == {"burn": "1 h"}

    def test_public_catalogue_hides_inactive(self, admin_client, client):
        create_product(admin_client, name="Shown")
        create_product(admin_client, name="Hidden", active=False)

        public = client.get("/api/v1/products").json()
        assert [p["slug"] for p in public["products"]] == ["shown"]
        assert client.get("/api/v1/products/hidden").status_code == 404
        assert client.get("/api/v1/products/shown").status_code == 200

    def test_soft_delete(self, admin_client):
        product = create_product(admin_client)

        response = admin_client.delete(f"/api/v1/admin/products/{product['id']}")
        body = response.json()
        assert body["deleted"] is True
        assert body["archive_id"] is not None
        assert body["redirect_to"] == "/admin/products"
        assert admin_client.get(f"/api/v1/admin/products/{product['id']}").status_code == 404

        items = admin_client.get("/api/v1/admin/recycle").json()["items"]
        assert items[0]["entity_type"] == "products"
        assert items[0]["deleted_by"] == "owner@example.com"

    def test_delete_missing_product(self, admin_client):
        body = admin_client.delete("/api/v1/admin/products/999").json()
        assert body["deleted"] is False
        assert body["archive_id"] is None

    def test_admin_routes_need_login(self, client):
        assert client.post("/api/v1/admin/products", json={"name": "X"}).status_code == 401
        assert client.delete("/api/v1/admin/products/1").status_code == 401


class TestBlog:
    def test_public_sees_only_published(self, admin_client, client):
        admin_client.post("/api/v1/admin/blog", json={"title": "Draft Post"})
        admin_client.post("/api/v1/admin/blog", json={"title": "Live Post", "published_at": "2026-03-01T08:00:00Z"})
        admin_client.post("/api/v1/admin/blog", json={"title": "Scheduled", "published_at": "2026-04-01T08:00:00Z"})

        slugs = [p["slug"] for p in client.get("/api/v1/blog").json()["posts"]]
        assert slugs == ["live-post"]
        assert client.get("/api/v1/blog/draft-post").status_code == 404
        assert client.get("/api/v1/blog/scheduled").status_code == 404
        assert client.get("/api/v1/blog/live-post").json()["title"] == "Live Post"

        drafts = admin_client.get("/api/v1/admin/blog", params={"drafts": True}).json()["posts"]
        assert [p["slug"] for p in drafts] == ["draft-post"]

    def test_soft_delete_post(self, admin_client):
        post = admin_client.post("/api/v1/admin/blog", json={"title": "Bye"}).json()
        body = admin_client.delete(f"/api/v1/admin/blog/{post['id']}").json()
        assert body["deleted"] is True
        assert body["redirect_to"] == "/admin/blog"


class TestTestimonials:
    def test_submission_waits_for_moderation(self, admin_client, client):
        response = client.post("/api/v1/testimonials", json={"name": "Ana", "rating": 5, "comment": "Lovely"})
        assert response.status_code == 201
        testimonial = response.json()
        assert testimonial["status"] == "pending"
        assert client.get("/api/v1/testimonials").json()["total"] == 0

        pending = admin_client.get("/api/v1/admin/testimonials", params={"status": "pending"}).json()
        assert [t["id"] for t in pending["testimonials"]] == [testimonial["id"]]

        response = admin_client.post(
            f"/api/v1/admin/testimonials/{testimonial['id']}/status", json={"status": "approved"}
        )
        assert response.json()["status"] == "approved"
        assert client.get("/api/v1/testimonials").json()["total"] == 1

    def test_rating_out_of_range(self, client):
        response = client.post("/api/v1/testimonials", json={"name": "Ana", "rating": 6, "comment": "!"})
        assert response.status_code == 422

    def test_unknown_status_filter(self, admin_client):
        assert admin_client.get("/api/v1/admin/testimonials", params={"status": "spam"}).status_code == 422

    def test_moderate_missing(self, admin_client):
        response = admin_client.post("/api/v1/admin/testimonials/999/status", json={"status": "rejected"})
        assert response.status_code == 404


class TestContacts:
    def test_submit_list_delete(self, admin_client, client):
        response = client.post("/api/v1/contact", json={
            "name": "Lead", "email": "lead@example.com", "country": "MX", "company": "Acme", "message": "Quote please"
        })
        assert response.status_code == 201
        contact = response.json()

        listing = admin_client.get("/api/v1/admin/contacts").json()
        assert listing["total"] == 1

        body = admin_client.delete(f"/api/v1/admin/contacts/{contact['id']}").json()
        assert body["deleted"] is True
        assert admin_client.get("/api/v1/admin/contacts").json()["total"] == 0

    def test_detail(self, admin_client, client):
        contact = client.post("/api/v1/contact", json={
            "name": "Lead", "email": "lead@example.com", "company": "Acme", "message": "Quote please"
        }).json()

        response = admin_client.get(f"/api/v1/admin/contacts/{contact['id']}")
        assert response.status_code == 200
        assert response.json()["company"] == "Acme"
        assert response.json()["message"] == "Quote please"

    def test_detail_missing(self, admin_client):
        response = admin_client.get("/api/v1/admin/contacts/999")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_detail_needs_login(self, client):
        assert client.get("/api/v1/admin/contacts/1").status_code == 401

    def test_invalid_email(self, client):
        assert client.post("/api/v1/contact", json={"name": "Lead", "email": "nope"}).status_code == 422
