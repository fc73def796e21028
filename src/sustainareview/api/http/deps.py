"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.sustainareview.api.http.app_data import ApplicationDependencies
from src.sustainareview.core.models.auth import TokenClaims
from src.sustainareview.core.services import (
    AuthService,
    BookmarkService,
    CatalogService,
    EmailService,
    JwtGeneratorService,
    JwtVerificationService,
    PhotoStorageService,
    ReviewService,
)
from src.sustainareview.entities.core.user import User, UserRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Generator[Session]:
    """Yield a database session scoped to the request."""
    app_deps = get_app_dependencies(request)
    session = app_deps.database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return get_app_dependencies(request).jwt_verify_service


def get_jwt_generation_service(request: Request) -> JwtGeneratorService:
    """Get the JWT generation service instance."""
    return get_app_dependencies(request).jwt_generation_service


def get_email_service(request: Request) -> EmailService:
    return get_app_dependencies(request).email_service


def get_photo_storage(request: Request) -> PhotoStorageService:
    return get_app_dependencies(request).photo_storage


def get_auth_service(
    db: Session = Depends(get_db_session),
    jwt_service: JwtGeneratorService = Depends(get_jwt_generation_service),
    email_service: EmailService = Depends(get_email_service),
) -> AuthService:
    return AuthService(db, jwt_service, email_service)


def get_catalog_service(db: Session = Depends(get_db_session)) -> CatalogService:
    return CatalogService(db)


def get_review_service(
    db: Session = Depends(get_db_session),
    storage: PhotoStorageService = Depends(get_photo_storage),
) -> ReviewService:
    return ReviewService(db, storage)


def get_bookmark_service(db: Session = Depends(get_db_session)) -> BookmarkService:
    return BookmarkService(db)


def get_token_claims(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> TokenClaims:
    """Validate the Bearer token of the request."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")

    token = auth_header.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing Bearer token")
    return jwt_verify.verify_jwt(token)


def get_current_user(
    claims: TokenClaims = Depends(get_token_claims),
    db: Session = Depends(get_db_session),
) -> User:
    """Authenticate the request and load the account behind the token."""
    user = UserRepository(db).get(claims.subject)
    if user is None:
        raise HTTPException(status_code=401, detail="User no longer exists")
    return user
