"""Review repository for data access operations."""

from collections import defaultdict

from sqlmodel import Session, col, select

from src.sustainareview.entities._base import utcnow
from src.sustainareview.entities.core.user import UserTable
from src.sustainareview.entities.service.product import ProductTable
from src.sustainareview.entities.service.review.entity import (
    ModerationStatus,
    Review,
    ReviewPhoto,
)
from src.sustainareview.entities.service.review.table import (
    ReviewPhotoTable,
    ReviewTable,
    ReviewVoteTable,
)


class ReviewRepository:
    """Data-access layer for reviews, review photos and helpful votes."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: ReviewTable) -> Review:
        return Review.model_validate(row, from_attributes=True)

    def get(self, review_id: str) -> Review | None:
        row = self._session.get(ReviewTable, review_id)
        if row is None:
            return None
        return self._to_entity(row)

    def create(self, review: Review) -> Review:
        row = ReviewTable(
            **review.model_dump(exclude={"moderation_status"}),
            moderation_status=review.moderation_status.value,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_entity(row)

    def update(self, review: Review) -> Review:
        row = self._session.get(ReviewTable, review.id)
        if row is None:
            raise ValueError(f"Review {review.id} not found")
        row.title = review.title
        row.body = review.body
        row.overall_rating = review.overall_rating
        row.sustainability_rating = review.sustainability_rating
        row.ethical_rating = review.ethical_rating
        row.durability_rating = review.durability_rating
        row.moderation_status = review.moderation_status.value
        row.updated_at = utcnow()
        self._session.add(row)
        self._session.flush()
        return self._to_entity(row)

    def delete(self, review_id: str) -> bool:
        row = self._session.get(ReviewTable, review_id)
        if row is None:
            return False
        # Children are removed explicitly so backends without FK enforcement stay clean
        for photo in self._session.exec(
            select(ReviewPhotoTable).where(ReviewPhotoTable.review_id == review_id)
        ).all():
            self._session.delete(photo)
        for vote in self._session.exec(
            select(ReviewVoteTable).where(ReviewVoteTable.review_id == review_id)
        ).all():
            self._session.delete(vote)
        self._session.delete(row)
        self._session.flush()
        return True

    def set_status(self, review_id: str, status: ModerationStatus) -> Review:
        row = self._session.get(ReviewTable, review_id)
        if row is None:
            raise ValueError(f"Review {review_id} not found")
        row.moderation_status = status.value
        row.updated_at = utcnow()
        self._session.add(row)
        self._session.flush()
        return self._to_entity(row)

    def list_by_status(self, status: ModerationStatus | None = None) -> list[Review]:
        statement = select(ReviewTable)
        if status is not None:
            statement = statement.where(ReviewTable.moderation_status == status.value)
        rows = self._session.exec(statement.order_by(col(ReviewTable.created_at))).all()
        return [self._to_entity(row) for row in rows]

    def list_for_product(
        self, product_id: str, status: ModerationStatus = ModerationStatus.APPROVED
    ) -> list[tuple[Review, str]]:
        """Reviews of a product with the author's username, newest first."""
        statement = (
            select(ReviewTable, UserTable.username)
            .join(UserTable, UserTable.id == ReviewTable.user_id)
            .where(ReviewTable.product_id == product_id)
            .where(ReviewTable.moderation_status == status.value)
            .order_by(col(ReviewTable.created_at).desc(), col(ReviewTable.id))
        )
        return [(self._to_entity(row), username) for row, username in self._session.exec(statement).all()]

    def list_for_user(self, user_id: str) -> list[tuple[Review, str]]:
        """A user's own reviews in every moderation state, with product names."""
        statement = (
            select(ReviewTable, ProductTable.name)
            .join(ProductTable, ProductTable.id == ReviewTable.product_id)
            .where(ReviewTable.user_id == user_id)
            .order_by(col(ReviewTable.created_at).desc(), col(ReviewTable.id))
        )
        return [(self._to_entity(row), name) for row, name in self._session.exec(statement).all()]

    def add_photo(self, review_id: str, photo_url: str) -> ReviewPhoto:
        row = ReviewPhotoTable(review_id=review_id, photo_url=photo_url)
        self._session.add(row)
        self._session.flush()
        return ReviewPhoto.model_validate(row, from_attributes=True)

    def photos_for(self, review_ids: list[str]) -> dict[str, list[ReviewPhoto]]:
        if not review_ids:
            return {}
        statement = (
            select(ReviewPhotoTable)
            .where(col(ReviewPhotoTable.review_id).in_(review_ids))
            .order_by(col(ReviewPhotoTable.uploaded_at), col(ReviewPhotoTable.id))
        )
        photos: dict[str, list[ReviewPhoto]] = defaultdict(list)
        for row in self._session.exec(statement).all():
            photos[row.review_id].append(ReviewPhoto.model_validate(row, from_attributes=True))
        return dict(photos)

    def has_vote(self, review_id: str, user_id: str) -> bool:
        return self._session.get(ReviewVoteTable, (review_id, user_id)) is not None

    def add_helpful_vote(self, review_id: str, user_id: str) -> int:
        """Record a vote and return the review's new helpful_votes count."""
        row = self._session.get(ReviewTable, review_id)
        if row is None:
            raise ValueError(f"Review {review_id} not found")
        self._session.add(ReviewVoteTable(review_id=review_id, user_id=user_id))
        row.helpful_votes += 1
        self._session.add(row)
        self._session.flush()
        return row.helpful_votes
