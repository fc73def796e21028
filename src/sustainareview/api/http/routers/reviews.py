"""Review endpoints: submission, edits, deletion and helpful votes."""

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from pydantic import BaseModel

from src.sustainareview.api.http.deps import get_current_user, get_review_service
from src.sustainareview.core.models.review import VoteRequest
from src.sustainareview.core.services import ReviewService, UploadedPhoto
from src.sustainareview.entities.core.user import User
from src.sustainareview.runtime.context import get_config

router = APIRouter(tags=["reviews"])

_TRUTHY = {"true", "1", "on", "yes"}


class ReviewResponse(BaseModel):
    review_id: str
    message: str


class VoteResponse(BaseModel):
    review_id: str
    helpful_votes: int


class ReviewUpdateRequest(BaseModel):
    title: str | None = None
    body: str | None = None
    overall_rating: int | None = None
    sustainability_rating: int | None = None
    ethical_rating: int | None = None
    durability_rating: int | None = None


def read_upload(upload: UploadFile) -> UploadedPhoto:
    """Read an uploaded file, stopping one byte past the size limit.

    An oversized file keeps that extra byte so validation still rejects it.
    """
    max_bytes = get_config().uploads.max_bytes
    return UploadedPhoto(
        filename=upload.filename or "upload",
        content_type=upload.content_type or "application/octet-stream",
        data=upload.file.read(max_bytes + 1),
    )


@router.post(
    "/products/{product_id}/reviews", response_model=ReviewResponse, status_code=201
)
def submit_review(
    product_id: str,
    title: str | None = Form(default=None),
    body: str | None = Form(default=None),
    overall_rating: str | None = Form(default=None),
    sustainability_rating: str | None = Form(default=None),
    ethical_rating: str | None = Form(default=None),
    durability_rating: str | None = Form(default=None),
    confirmation_checkbox: str | None = Form(default=None),
    photos: list[UploadFile] | None = File(default=None),
    user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Submit a review; it stays pending until a moderator approves it."""
    fields = {
        "title": title or "",
        "body": body or "",
        "overall_rating": overall_rating,
        "sustainability_rating": sustainability_rating,
        "ethical_rating": ethical_rating,
        "durability_rating": durability_rating,
    }
    confirmed = (confirmation_checkbox or "").strip().lower() in _TRUTHY
    review = review_service.submit_review(
        user,
        product_id,
        fields,
        confirmed,
        [read_upload(upload) for upload in photos or []],
    )
    return ReviewResponse(
        review_id=review.id,
        message="Review submitted successfully and is pending moderation",
    )


@router.put("/reviews/{review_id}", response_model=ReviewResponse)
def update_review(
    review_id: str,
    body: ReviewUpdateRequest,
    user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    review = review_service.update_review(
        user, review_id, body.model_dump(exclude_unset=True)
    )
    return ReviewResponse(
        review_id=review.id,
        message="Review updated successfully and is pending moderation",
    )


@router.delete("/reviews/{review_id}", status_code=204)
def delete_review(
    review_id: str,
    user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> Response:
    review_service.delete_review(user, review_id)
    return Response(status_code=204)


@router.post("/reviews/{review_id}/vote", response_model=VoteResponse)
def vote_on_review(
    review_id: str,
    body: VoteRequest,
    user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> VoteResponse:
    helpful_votes = review_service.vote(user, review_id, body.vote_type)
    return VoteResponse(review_id=review_id, helpful_votes=helpful_votes)
