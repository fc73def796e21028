"""Account endpoints: registration and the authenticated user's own data."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from src.sustainareview.api.http.deps import (
    get_auth_service,
    get_bookmark_service,
    get_current_user,
    get_db_session,
    get_review_service,
    get_token_claims,
)
from src.sustainareview.api.http.routers.auth import MessageResponse
from src.sustainareview.core.models.auth import TokenClaims
from src.sustainareview.core.models.catalog import BookmarkListItem, UserReviewListItem
from src.sustainareview.core.services import AuthService, BookmarkService, ReviewService
from src.sustainareview.entities.core.user import User, UserRepository

router = APIRouter(prefix="/users", tags=["users"])


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str


class RegisterResponse(BaseModel):
    user_id: str
    message: str


class UserProfile(BaseModel):
    user_id: str
    username: str
    email: str


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


@router.post("", response_model=RegisterResponse, status_code=201)
def register_user(
    body: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)
) -> RegisterResponse:
    user = auth_service.register(body.username, body.email, body.password)
    return RegisterResponse(user_id=user.id, message="User registered successfully")


@router.get("/me", response_model=UserProfile)
def get_my_profile(
    claims: TokenClaims = Depends(get_token_claims),
    db: Session = Depends(get_db_session),
) -> UserProfile:
    user = UserRepository(db).get(claims.subject)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserProfile(user_id=user.id, username=user.username, email=user.email)


@router.put("/me", response_model=MessageResponse)
def change_my_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    auth_service.change_password(user, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.get("/me/reviews", response_model=list[UserReviewListItem])
def get_my_reviews(
    user: User = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> list[UserReviewListItem]:
    """All of the user's reviews, including ones still in moderation."""
    return review_service.list_user_reviews(user)


@router.get("/me/bookmarks", response_model=list[BookmarkListItem])
def get_my_bookmarks(
    user: User = Depends(get_current_user),
    bookmark_service: BookmarkService = Depends(get_bookmark_service),
) -> list[BookmarkListItem]:
    return bookmark_service.list_for_user(user)
