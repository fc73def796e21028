"""Login and password reset endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.sustainareview.api.http.deps import get_auth_service
from src.sustainareview.core.models.auth import AccessToken
from src.sustainareview.core.services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


class ResetPasswordRequest(BaseModel):
    email: str


class ExecuteResetRequest(BaseModel):
    reset_token: str
    new_password: str


class MessageResponse(BaseModel):
    message: str


@router.post("/login", response_model=AccessToken)
def login(
    body: LoginRequest, auth_service: AuthService = Depends(get_auth_service)
) -> AccessToken:
    """Exchange email and password for a bearer token."""
    return auth_service.login(body.email, body.password)


@router.post("/reset-password-request", response_model=MessageResponse)
def request_password_reset(
    body: ResetPasswordRequest, auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    return MessageResponse(message=auth_service.request_password_reset(body.email))


@router.post("/reset-password", response_model=MessageResponse)
def execute_password_reset(
    body: ExecuteResetRequest, auth_service: AuthService = Depends(get_auth_service)
) -> MessageResponse:
    auth_service.reset_password(body.reset_token, body.new_password)
    return MessageResponse(message="Password has been reset successfully")
