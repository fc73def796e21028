import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from fastapi import HTTPException
from loguru import logger

from src.sustainareview.runtime.config.config_data import ConfigData
from src.sustainareview.runtime.context import get_config


class JwtGeneratorService:
    """Service for generating access tokens for API authentication."""

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int | None = None,
        include_jti: bool = True,
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT using authlib.

        Args:
            subject: Subject (sub) claim, the user id
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime (defaults to config TTL)
            include_jti: Whether to include a unique JWT ID claim
            secret: Optional signing key. If None, the config secret is used.

        Returns:
            Signed JWT token string

        Raises:
            HTTPException: If the signing secret or algorithm is misconfigured
        """
        config: ConfigData = get_config()
        jwt_cfg = config.jwt

        secret = secret or jwt_cfg.signing_secret
        if not secret:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        if jwt_cfg.algorithm not in jwt_cfg.allowed_algorithms:
            logger.debug(
                "Attempted to use disallowed algorithm {}, only {} are allowed",
                jwt_cfg.algorithm,
                jwt_cfg.allowed_algorithms,
            )
            raise HTTPException(
                status_code=500, detail=f"Algorithm {jwt_cfg.algorithm} not allowed"
            )

        now = int(time.time())
        ttl = expires_in_seconds if expires_in_seconds is not None else jwt_cfg.access_token_ttl_seconds
        payload = {
            "iss": jwt_cfg.issuer,
            "sub": subject,
            "aud": jwt_cfg.audience,
            "exp": now + ttl,
            "iat": now,
            "nbf": now,
        }
        if include_jti:
            payload["jti"] = generate_token(16)

        # Registered claims cannot be overridden by callers
        if claims:
            payload.update(
                {
                    k: v
                    for k, v in claims.items()
                    if k not in {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}
                }
            )

        try:
            header = {"alg": jwt_cfg.algorithm, "typ": "JWT"}
            token = jwt.encode(header, payload, secret)
            return token.decode() if isinstance(token, bytes) else token
        except JoseError as e:
            raise HTTPException(
                status_code=500, detail=f"JWT encoding failed: {str(e)}"
            ) from e

    def generate_access_token(self, user_id: str, username: str) -> str:
        """Access token for a logged-in user."""
        return self.generate_jwt(subject=user_id, claims={"username": username})
