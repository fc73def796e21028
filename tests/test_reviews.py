"""Review submission, editing, deletion, helpful votes and moderation."""

from pathlib import Path

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlmodel import Session

from src.sustainareview.core.services import PhotoStorageService, ReviewService
from src.sustainareview.entities import ModerationStatus, ReviewRepository, User, UserRepository

JPEG = ("leaf.jpg", b"\xff\xd8\xff\xe0fake-jpeg-bytes", "image/jpeg")
PNG = ("leaf.png", b"\x89PNG\r\n\x1a\nfake-png-bytes", "image/png")


def _review_form(**overrides) -> dict[str, str]:
    form = {
        "title": "Holds up well",
        "body": "Three months of daily use and still going strong.",
        "overall_rating": "4",
        "sustainability_rating": "5",
        "confirmation_checkbox": "true",
    }
    form.update(overrides)
    return {k: v for k, v in form.items() if v is not None}


@pytest.fixture
def review_service(seeded_session: Session, photo_storage: PhotoStorageService) -> ReviewService:
    return ReviewService(seeded_session, photo_storage)


@pytest.fixture
def emily(seeded_session: Session) -> User:
    return UserRepository(seeded_session).get("user_abc")


class TestSubmitReview:
    def test_submit_creates_pending_review(
        self, api_client: TestClient, auth_headers, seeded_session: Session
    ):
        response = api_client.post(
            "/products/prod_002/reviews", data=_review_form(), headers=auth_headers
        )

        assert response.status_code == 201
        review = ReviewRepository(seeded_session).get(response.json()["review_id"])
        assert review.moderation_status == ModerationStatus.PENDING
        assert review.user_id == "user_abc"
        assert review.sustainability_rating == 5
        assert review.ethical_rating is None
        assert review.helpful_votes == 0

        # Not public until approved
        detail = api_client.get("/products/prod_002").json()
        assert review.id not in [r["review_id"] for r in detail["reviews"]]

    @pytest.mark.parametrize("confirmation", [None, "false", "", "no"])
    def test_confirmation_required(self, api_client: TestClient, auth_headers, confirmation):
        response = api_client.post(
            "/products/prod_002/reviews",
            data=_review_form(confirmation_checkbox=confirmation),
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert "confirm" in response.json()["error"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"title": "   "},
            {"body": None},
            {"overall_rating": None},
            {"overall_rating": "6"},
            {"overall_rating": "0"},
            {"durability_rating": "ten"},
        ],
    )
    def test_invalid_fields(self, api_client: TestClient, auth_headers, overrides):
        response = api_client.post(
            "/products/prod_002/reviews", data=_review_form(**overrides), headers=auth_headers
        )

        assert response.status_code == 400

    def test_unknown_product(self, api_client: TestClient, auth_headers):
        response = api_client.post(
            "/products/prod_999/reviews", data=_review_form(), headers=auth_headers
        )

        assert response.status_code == 404

    def test_requires_login(self, api_client: TestClient):
        response = api_client.post("/products/prod_002/reviews", data=_review_form())

        assert response.status_code == 401

    def test_photos_stored_and_shown_after_approval(
        self,
        api_client: TestClient,
        auth_headers,
        review_service: ReviewService,
        photo_storage: PhotoStorageService,
    ):
        response = api_client.post(
            "/products/prod_002/reviews",
            data=_review_form(),
            files=[("photos", JPEG), ("photos", PNG)],
            headers=auth_headers,
        )
        assert response.status_code == 201
        review_id = response.json()["review_id"]

        stored = sorted(p.suffix for p in Path(photo_storage.directory).iterdir())
        assert stored == [".jpg", ".png"]

        review_service.moderate(review_id, ModerationStatus.APPROVED)
        detail = api_client.get("/products/prod_002").json()
        review = next(r for r in detail["reviews"] if r["review_id"] == review_id)
        assert len(review["photos"]) == 2
        assert all(url.startswith("/uploads/") for url in review["photos"])
        assert set(review["photos"]) <= {image["url"] for image in detail["images"]}

    def test_bad_photo_rejects_whole_review(
        self, api_client: TestClient, auth_headers, seeded_session: Session
    ):
        before = len(ReviewRepository(seeded_session).list_by_status(None))

        response = api_client.post(
            "/products/prod_002/reviews",
            data=_review_form(),
            files=[("photos", JPEG), ("photos", ("notes.txt", b"hello", "text/plain"))],
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert len(ReviewRepository(seeded_session).list_by_status(None)) == before

    def test_too_many_photos(self, api_client: TestClient, auth_headers, configured):
        photos = [("photos", JPEG)] * (configured.uploads.max_files_per_review + 1)

        response = api_client.post(
            "/products/prod_002/reviews", data=_review_form(), files=photos, headers=auth_headers
        )

        assert response.status_code == 400


class TestUpdateReview:
    def test_owner_edit_returns_to_moderation(
        self, api_client: TestClient, auth_headers, seeded_session: Session
    ):
        response = api_client.put(
            "/reviews/rev_001", json={"title": "Still fantastic", "overall_rating": 4},
            headers=auth_headers,
        )

        assert response.status_code == 200
        review = ReviewRepository(seeded_session).get("rev_001")
        assert review.title == "Still fantastic"
        assert review.overall_rating == 4
        assert review.body.startswith("Love this bottle!")
        assert review.moderation_status == ModerationStatus.PENDING

        detail = api_client.get("/products/prod_001").json()
        assert "rev_001" not in [r["review_id"] for r in detail["reviews"]]

    def test_other_users_review(self, api_client: TestClient, other_auth_headers):
        response = api_client.put(
            "/reviews/rev_001", json={"title": "Hijacked"}, headers=other_auth_headers
        )

        assert response.status_code == 403

    def test_unknown_review(self, api_client: TestClient, auth_headers):
        response = api_client.put("/reviews/rev_999", json={"title": "x"}, headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [{}, {"overall_rating": 7}, {"title": ""}, {"body": None}, {"overall_rating": None}],
    )
    def test_invalid_edit(self, api_client: TestClient, auth_headers, payload):
        response = api_client.put("/reviews/rev_001", json=payload, headers=auth_headers)

        assert response.status_code == 400


class TestDeleteReview:
    def test_owner_delete(self, api_client: TestClient, auth_headers):
        response = api_client.delete("/reviews/rev_001", headers=auth_headers)

        assert response.status_code == 204
        assert api_client.delete("/reviews/rev_001", headers=auth_headers).status_code == 404
        detail = api_client.get("/products/prod_001").json()
        assert [r["review_id"] for r in detail["reviews"]] == ["rev_004"]

    def test_other_users_review(self, api_client: TestClient, other_auth_headers):
        response = api_client.delete("/reviews/rev_001", headers=other_auth_headers)

        assert response.status_code == 403

    def test_delete_removes_uploaded_photos(
        self, api_client: TestClient, auth_headers, photo_storage: PhotoStorageService
    ):
        response = api_client.post(
            "/products/prod_002/reviews",
            data=_review_form(),
            files=[("photos", JPEG)],
            headers=auth_headers,
        )
        review_id = response.json()["review_id"]
        assert len(list(Path(photo_storage.directory).iterdir())) == 1

        api_client.delete(f"/reviews/{review_id}", headers=auth_headers)

        assert list(Path(photo_storage.directory).iterdir()) == []


class TestHelpfulVotes:
    def test_vote_counts_once(self, api_client: TestClient, other_auth_headers):
        first = api_client.post(
            "/reviews/rev_001/vote", json={"vote_type": "helpful"}, headers=other_auth_headers
        )
        second = api_client.post(
            "/reviews/rev_001/vote", json={"vote_type": "helpful"}, headers=other_auth_headers
        )

        assert first.status_code == 200
        assert first.json() == {"review_id": "rev_001", "helpful_votes": 11}
        assert second.status_code == 409

    def test_unknown_vote_type(self, api_client: TestClient, auth_headers):
        response = api_client.post(
            "/reviews/rev_002/vote", json={"vote_type": "unhelpful"}, headers=auth_headers
        )

        assert response.status_code == 400

    def test_pending_review_cannot_be_voted(
        self, api_client: TestClient, auth_headers, other_auth_headers
    ):
        submitted = api_client.post(
            "/products/prod_002/reviews", data=_review_form(), headers=auth_headers
        )

        response = api_client.post(
            f"/reviews/{submitted.json()['review_id']}/vote",
            json={"vote_type": "helpful"},
            headers=other_auth_headers,
        )

        assert response.status_code == 404

    def test_unknown_review(self, api_client: TestClient, auth_headers):
        response = api_client.post(
            "/reviews/rev_999/vote", json={"vote_type": "helpful"}, headers=auth_headers
        )

        assert response.status_code == 404

    def test_duplicate_vote_racing_the_check(
        self, review_service: ReviewService, seeded_session: Session, monkeypatch
    ):
        paul = UserRepository(seeded_session).get("user_def")
        assert review_service.vote(paul, "rev_001", "helpful") == 11
        # A concurrent request that passed the lookup before this vote landed
        seeded_session.expunge_all()
        monkeypatch.setattr(ReviewRepository, "has_vote", lambda self, review_id, user_id: False)

        with pytest.raises(HTTPException) as exc_info:
            review_service.vote(paul, "rev_001", "helpful")

        assert exc_info.value.status_code == 409
        assert ReviewRepository(seeded_session).get("rev_001").helpful_votes == 11


class TestModeration:
    def test_approve_and_reject(self, configured, review_service: ReviewService, emily: User):
        review = review_service.submit_review(
            emily,
            "prod_006",
            {"title": "Loud", "body": "Works, but it is loud.", "overall_rating": "3"},
            True,
        )
        assert [r.id for r in review_service.list_by_status(ModerationStatus.PENDING)] == [
            review.id
        ]

        approved = review_service.moderate(review.id, ModerationStatus.APPROVED)
        assert approved.moderation_status == ModerationStatus.APPROVED
        assert review_service.list_by_status(ModerationStatus.PENDING) == []

        rejected = review_service.moderate(review.id, ModerationStatus.REJECTED)
        assert rejected.moderation_status == ModerationStatus.REJECTED

    def test_unknown_review(self, configured, review_service: ReviewService):
        with pytest.raises(HTTPException) as exc_info:
            review_service.moderate("rev_999", ModerationStatus.APPROVED)
        assert exc_info.value.status_code == 404

    def test_user_review_listing(self, configured, review_service: ReviewService, emily: User):
        items = review_service.list_user_reviews(emily)

        assert [item.review_id for item in items] == ["rev_005", "rev_001"]
        assert items[0].product_name == "SolarCharge Power Bank"
