import io
import shutil

from PIL import Image

from dashboard.config import settings
from dashboard.services.seed_service import CUSTOMERS, REVIEWS
from dashboard.utils.formatting import today


class TestReviews:
    def _form(self, **fields):
        data = {
            "customerId": CUSTOMERS[1]["id"],
            "title": "Great ride",
            "status": "pending",
            "text": "Smooth trip",
        }
        data.update(fields)
        return data

    def _find(self, client, headers, title):
        listing = client.get(f"/api/v1/reviews?query={title}", headers=headers).json()
        matches = [r for r in listing["reviews"] if r["title"] == title]
        assert len(matches) == 1
        return matches[0]

    def test_list_ordered_by_updated_at(self, client, auth_headers):
        r = client.get("/api/v1/reviews", headers=auth_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["total_pages"] == 1
        assert len(data["reviews"]) == 6
        assert data["reviews"][0]["title"] == "First track day"
        updated = [rev["updated_at"] for rev in data["reviews"]]
        assert updated == sorted(updated, reverse=True)

    def test_search_is_case_insensitive(self, client, auth_headers):
        r = client.get("/api/v1/reviews?query=ALPINE", headers=auth_headers)
        titles = {rev["title"] for rev in r.json()["reviews"]}
        assert titles == {"Alpine loop, part 1", "Alpine loop, part 2"}

    def test_search_by_author_email(self, client, auth_headers):
        r = client.get("/api/v1/reviews?query=lee@robinson", headers=auth_headers)
        reviews = r.json()["reviews"]
        assert len(reviews) == 1
        assert reviews[0]["author_name"] == "Lee Robinson"

    def test_search_by_created_date(self, client, auth_headers):
        r = client.get("/api/v1/reviews?query=2024-04", headers=auth_headers)
        assert [rev["title"] for rev in r.json()["reviews"]] == ["City commuter after one year"]

    def test_page_beyond_cap_rejected(self, client, auth_headers):
        r = client.get(f"/api/v1/reviews?page={settings.max_page + 1}", headers=auth_headers)
        assert r.status_code == 422

    def test_get_review_with_images(self, client, auth_headers):
        review = REVIEWS[1]
        r = client.get(f"/api/v1/reviews/{review['id']}", headers=auth_headers)
        assert r.status_code == 200
        data = r.json()
        assert data["title"] == "Alpine loop, part 1"
        assert data["next_part_id"] == REVIEWS[0]["id"]
        assert data["author_name"] == "Evil Rabbit"
        assert len(data["images"]) == 1
        assert data["images"][0]["document_type"] == "review"

    def test_get_missing_review(self, client, auth_headers):
        r = client.get("/api/v1/reviews/does-not-exist", headers=auth_headers)
        assert r.status_code == 404
        assert r.json()["detail"] == "Review not found"

    def test_create_with_jpeg_stores_png(self, client, auth_headers, tmp_data, make_image):
        r = client.post(
            "/api/v1/reviews",
            data=self._form(),
            files={"images": ("ride.jpg", make_image("JPEG"), "image/jpeg")},
            headers=auth_headers,
            follow_redirects=False,
        )
        assert r.status_code == 303
        assert r.headers["location"] == "/api/v1/reviews"

        created = self._find(client, auth_headers, "Great ride")
        review = client.get(f"/api/v1/reviews/{created['id']}", headers=auth_headers).json()
        assert review["status"] == "pending"
        assert review["text"] == "Smooth trip"
        assert review["created_at"] == review["updated_at"] == today()

        assert len(review["images"]) == 1
        image = review["images"][0]
        assert image["document_type"] == "review"
        assert image["document_id"] == created["id"]
        assert image["url"].startswith("/uploads/")
        assert image["url"].endswith(".png")

        stored = tmp_data / "uploads" / image["url"].rsplit("/", 1)[-1]
        with Image.open(io.BytesIO(stored.read_bytes())) as img:
            assert img.format == "PNG"

    def test_create_with_png_keeps_bytes(self, client, auth_headers, tmp_data, make_image):
        png = make_image("PNG")
        client.post(
            "/api/v1/reviews",
            data=self._form(title="Png upload"),
            files={"images": ("ride.png", png, "image/png")},
            headers=auth_headers,
            follow_redirects=False,
        )
        created = self._find(client, auth_headers, "Png upload")
        images = client.get(f"/api/v1/reviews/{created['id']}/images", headers=auth_headers).json()
        stored = tmp_data / "uploads" / images[0]["url"].rsplit("/", 1)[-1]
        assert stored.read_bytes() == png

    def test_create_without_image(self, client, auth_headers, tmp_data):
        r = client.post("/api/v1/reviews", data=self._form(), headers=auth_headers, follow_redirects=False)
        assert r.status_code == 303
        created = self._find(client, auth_headers, "Great ride")
        images = client.get(f"/api/v1/reviews/{created['id']}/images", headers=auth_headers).json()
        assert images == []
        assert list((tmp_data / "uploads").iterdir()) == []

    def test_create_with_undecodable_image(self, client, auth_headers):
        r = client.post(
            "/api/v1/reviews",
            data=self._form(),
            files={"images": ("ride.jpg", b"definitely not a jpeg", "image/jpeg")},
            headers=auth_headers,
            follow_redirects=False,
        )
        assert r.status_code == 422
        assert r.json()["errors"] == {"images": ["Please upload a valid image."]}

    def test_create_when_upload_dir_missing(self, client, auth_headers, tmp_data, make_image):
        shutil.rmtree(tmp_data / "uploads")
        r = client.post(
            "/api/v1/reviews",
            data=self._form(),
            files={"images": ("ride.jpg", make_image("JPEG"), "image/jpeg")},
            headers=auth_headers,
            follow_redirects=False,
        )
        assert r.status_code == 303
        created = self._find(client, auth_headers, "Great ride")
        review = client.get(f"/api/v1/reviews/{created['id']}", headers=auth_headers).json()
        assert review["images"] == []

    def test_create_validation_errors(self, client, auth_headers):
        r = client.post(
            "/api/v1/reviews",
            data={"title": "   ", "status": "draft"},
            headers=auth_headers,
            follow_redirects=False,
        )
        assert r.status_code == 422
        data = r.json()
        assert data["message"] == "Missing Fields. Failed to Create Review."
        assert data["errors"] == {
            "customerId": ["Please select an author."],
            "title": ["Please enter a title."],
            "status": ["Please select a review status."],
            "text": ["Please enter the review text."],
        }

    def test_create_upload_too_large(self, client, auth_headers):
        original = settings.max_upload_bytes
        settings.max_upload_bytes = 10
        try:
            r = client.post(
                "/api/v1/reviews",
                data=self._form(),
                files={"images": ("big.png", b"x" * 64, "image/png")},
                headers=auth_headers,
                follow_redirects=False,
            )
        finally:
            settings.max_upload_bytes = original
        assert r.status_code == 413

    def test_update_review_refreshes_updated_at(self, client, auth_headers):
        review = REVIEWS[2]
        r = client.post(
            f"/api/v1/reviews/{review['id']}",
            data=self._form(
                customerId=review["customer_id"],
                title=review["title"],
                status="archived",
                text=review["text"],
            ),
            headers=auth_headers,
            follow_redirects=False,
        )
        assert r.status_code == 303

        data = client.get(f"/api/v1/reviews/{review['id']}", headers=auth_headers).json()
        assert data["status"] == "archived"
        assert data["updated_at"] == today()
        assert data["created_at"] == review["created_at"]

    def test_update_keeps_images(self, client, auth_headers):
        review = REVIEWS[1]
        client.post(
            f"/api/v1/reviews/{review['id']}",
            data=self._form(customerId=review["customer_id"], title="Renamed"),
            headers=auth_headers,
            follow_redirects=False,
        )
        data = client.get(f"/api/v1/reviews/{review['id']}", headers=auth_headers).json()
        assert data["title"] == "Renamed"
        assert data["next_part_id"] == REVIEWS[0]["id"]
        assert len(data["images"]) == 1

    def test_delete_review_removes_its_images(self, client, auth_headers):
        review_id = REVIEWS[1]["id"]
        for _ in range(2):
            r = client.delete(f"/api/v1/reviews/{review_id}", headers=auth_headers)
            assert r.status_code == 200
            assert r.json() == {"message": "Review has been deleted."}
        assert client.get(f"/api/v1/reviews/{review_id}", headers=auth_headers).status_code == 404
        assert client.get(f"/api/v1/images/review/{review_id}", headers=auth_headers).json() == []

    def test_deleting_next_part_unlinks_previous(self, client, auth_headers):
        client.delete(f"/api/v1/reviews/{REVIEWS[0]['id']}", headers=auth_headers)
        data = client.get(f"/api/v1/reviews/{REVIEWS[1]['id']}", headers=auth_headers).json()
        assert data["next_part_id"] is None
