"""JWT verification service."""

import time

from authlib.jose import JoseError, jwt
from fastapi import HTTPException
from loguru import logger

from src.sustainareview.core.models.auth import TokenClaims
from src.sustainareview.runtime.context import get_config

_REGISTERED = {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}


class JwtVerificationService:
    def verify_jwt(self, token: str, *, key: str | None = None) -> TokenClaims:
        """Verify the signature and registered claims of an access token.

        Raises:
            HTTPException: 401 for any invalid token, 500 when no secret is configured
        """
        cfg = get_config()
        verification_key = key or cfg.jwt.signing_secret
        if not verification_key:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        claims_options = {
            "iss": {"essential": True, "values": [cfg.jwt.issuer]},
            "aud": {"essential": True, "values": [cfg.jwt.audience]},
            "sub": {"essential": True},
            "exp": {"essential": True},
        }

        try:
            claims = jwt.decode(token, verification_key, claims_options=claims_options)
            claims.validate(leeway=cfg.jwt.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("Rejected access token: {}", exc)
            raise HTTPException(status_code=401, detail="Invalid or expired token") from exc

        alg = claims.header.get("alg")
        if alg not in cfg.jwt.allowed_algorithms:
            raise HTTPException(status_code=401, detail="Disallowed JWT algorithm")

        now = int(time.time())
        if int(claims["exp"]) + cfg.jwt.clock_skew < now:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        return TokenClaims(
            token=token,
            subject=claims["sub"],
            username=claims.get("username"),
            issuer=claims["iss"],
            audience=claims["aud"],
            expires_at=int(claims["exp"]),
            issued_at=int(claims.get("iat", now)),
            jti=claims.get("jti"),
            custom_claims={k: v for k, v in claims.items() if k not in _REGISTERED},
        )
