"""Review submission, editing, voting and moderation."""

from fastapi import HTTPException
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.sustainareview.core.models.catalog import UserReviewListItem
from src.sustainareview.core.models.review import ReviewDraft, ReviewUpdate
from src.sustainareview.core.services.storage.photo_storage import (
    PhotoStorageService,
    UploadedPhoto,
)
from src.sustainareview.core.validation import first_validation_message
from src.sustainareview.entities.core.user import User
from src.sustainareview.entities.service.product import ProductRepository
from src.sustainareview.entities.service.review import (
    ModerationStatus,
    Review,
    ReviewRepository,
)

HELPFUL_VOTE = "helpful"


class ReviewService:
    def __init__(self, db_session: Session, storage: PhotoStorageService):
        self._db_session = db_session
        self._storage = storage
        self._reviews = ReviewRepository(db_session)
        self._products = ProductRepository(db_session)

    def _owned_review(self, user: User, review_id: str) -> Review:
        review = self._reviews.get(review_id)
        if review is None:
            raise HTTPException(status_code=404, detail="Review not found")
        if review.user_id != user.id:
            raise HTTPException(
                status_code=403, detail="You can only modify your own reviews"
            )
        return review

    def submit_review(
        self,
        user: User,
        product_id: str,
        fields: dict,
        confirmation: bool,
        photos: list[UploadedPhoto] | None = None,
    ) -> Review:
        """Validate and store a new review in the pending state.

        Photos are validated as a batch before anything is written, so a bad
        file never leaves a half-created review behind.
        """
        photos = photos or []
        if not self._products.exists(product_id):
            raise HTTPException(status_code=404, detail="Product not found")
        if not confirmation:
            raise HTTPException(
                status_code=400,
                detail="You must confirm that this review reflects your own experience",
            )
        try:
            draft = ReviewDraft.model_validate(fields)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=first_validation_message(e)) from e
        self._storage.validate_batch(photos)

        review = self._reviews.create(
            Review(
                product_id=product_id,
                user_id=user.id,
                moderation_status=ModerationStatus.PENDING,
                **draft.model_dump(),
            )
        )
        stored_urls = []
        try:
            for photo in photos:
                url = self._storage.save(photo)
                stored_urls.append(url)
                self._reviews.add_photo(review.id, url)
            self._db_session.commit()
        except Exception:
            self._db_session.rollback()
            for url in stored_urls:
                self._storage.delete(url)
            raise

        logger.info(
            "Review {} submitted for product {} by user {} with {} photos",
            review.id,
            product_id,
            user.id,
            len(photos),
        )
        return review

    def update_review(self, user: User, review_id: str, fields: dict) -> Review:
        """Apply a partial edit; the review goes back to moderation."""
        review = self._owned_review(user, review_id)
        try:
            update = ReviewUpdate.model_validate(fields)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=first_validation_message(e)) from e

        changes = update.model_dump(exclude_unset=True)
        if changes.get("title", "") is None or changes.get("body", "") is None:
            raise HTTPException(status_code=400, detail="Title and body cannot be removed")
        if "overall_rating" in changes and changes["overall_rating"] is None:
            raise HTTPException(status_code=400, detail="overall_rating cannot be removed")
        if not changes:
            raise HTTPException(status_code=400, detail="No fields to update")

        updated = review.model_copy(
            update={**changes, "moderation_status": ModerationStatus.PENDING}
        )
        result = self._reviews.update(updated)
        self._db_session.commit()
        logger.info("Review {} edited by user {}; awaiting moderation", review_id, user.id)
        return result

    def delete_review(self, user: User, review_id: str) -> None:
        self._owned_review(user, review_id)
        photo_urls = [
            photo.photo_url for photo in self._reviews.photos_for([review_id]).get(review_id, [])
        ]
        self._reviews.delete(review_id)
        self._db_session.commit()
        for url in photo_urls:
            self._storage.delete(url)
        logger.info("Review {} deleted by user {}", review_id, user.id)

    def vote(self, user: User, review_id: str, vote_type: str) -> int:
        """Record a helpful vote and return the new total.

        Raises:
            HTTPException: 400 for an unknown vote type, 404 when the review is
                missing or not public, 409 on a repeated vote
        """
        if vote_type != HELPFUL_VOTE:
            raise HTTPException(status_code=400, detail="vote_type must be 'helpful'")
        review = self._reviews.get(review_id)
        if review is None or review.moderation_status != ModerationStatus.APPROVED:
            raise HTTPException(status_code=404, detail="Review not found")
        if self._reviews.has_vote(review_id, user.id):
            raise HTTPException(status_code=409, detail="You have already voted on this review")

        try:
            helpful_votes = self._reviews.add_helpful_vote(review_id, user.id)
            self._db_session.commit()
        except IntegrityError as e:
            self._db_session.rollback()
            raise HTTPException(
                status_code=409, detail="You have already voted on this review"
            ) from e
        return helpful_votes

    def list_user_reviews(self, user: User) -> list[UserReviewListItem]:
        return [
            UserReviewListItem(
                review_id=review.id,
                product_id=review.product_id,
                product_name=product_name,
                title=review.title,
                body=review.body,
                overall_rating=review.overall_rating,
                moderation_status=review.moderation_status.value,
                created_at=review.created_at,
            )
            for review, product_name in self._reviews.list_for_user(user.id)
        ]

    def list_by_status(self, status: ModerationStatus | None = None) -> list[Review]:
        return self._reviews.list_by_status(status)

    def moderate(self, review_id: str, status: ModerationStatus) -> Review:
        """Set the moderation outcome of a review."""
        if self._reviews.get(review_id) is None:
            raise HTTPException(status_code=404, detail="Review not found")
        review = self._reviews.set_status(review_id, status)
        self._db_session.commit()
        logger.info("Review {} marked {}", review_id, status.value)
        return review
