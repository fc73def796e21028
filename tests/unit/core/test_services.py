"""Unit tests for the stateless services: hashing, JWTs, email and photo storage."""

import json
import time

import httpx
import pytest
from fastapi import HTTPException

from src.sustainareview.core.security import (
    generate_secure_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.sustainareview.core.services import (
    EmailService,
    JwtGeneratorService,
    JwtVerificationService,
    PhotoStorageService,
    UploadedPhoto,
)
from src.sustainareview.core.services.email.email_service import EmailDeliveryError
from src.sustainareview.runtime.config.config_data import ConfigData
from src.sustainareview.runtime.context import with_context


class TestSecurity:
    def test_password_round_trip(self):
        hashed = hash_password("sustainable123")

        assert hashed != "sustainable123"
        assert verify_password("sustainable123", hashed)
        assert not verify_password("sustainable124", hashed)

    def test_long_passwords_compared_in_full(self):
        hashed = hash_password("x" * 72 + "tail-one")

        assert verify_password("x" * 72 + "tail-one", hashed)
        assert not verify_password("x" * 72 + "tail-two", hashed)

    def test_malformed_hash_never_matches(self):
        assert not verify_password("anything", "")
        assert not verify_password("anything", "not-a-bcrypt-hash")

    def test_tokens_are_random_and_url_safe(self):
        tokens = {generate_secure_token() for _ in range(20)}

        assert len(tokens) == 20
        assert all("=" not in t and "+" not in t and "/" not in t for t in tokens)

    def test_hash_token_is_stable(self):
        assert hash_token("abc") == hash_token("abc")
        assert hash_token("abc") != hash_token("abd")
        assert len(hash_token("abc")) == 64


class TestJwt:
    def test_generate_and_verify(self, configured):
        token = JwtGeneratorService().generate_access_token("user_abc", "ecowoman_emily")

        claims = JwtVerificationService().verify_jwt(token)

        assert claims.subject == "user_abc"
        assert claims.username == "ecowoman_emily"
        assert claims.issuer == configured.jwt.issuer
        assert claims.jti
        assert claims.custom_claims == {"username": "ecowoman_emily"}
        assert claims.expires_at - claims.issued_at == configured.jwt.access_token_ttl_seconds

    def test_registered_claims_cannot_be_overridden(self, configured):
        token = JwtGeneratorService().generate_jwt(
            subject="user_abc", claims={"sub": "someone_else", "role": "reader"}
        )

        claims = JwtVerificationService().verify_jwt(token)

        assert claims.subject == "user_abc"
        assert claims.custom_claims["role"] == "reader"

    def test_expired_token(self, configured):
        token = JwtGeneratorService().generate_jwt(
            subject="user_abc", expires_in_seconds=-(configured.jwt.clock_skew + 60)
        )

        with pytest.raises(HTTPException) as exc_info:
            JwtVerificationService().verify_jwt(token)
        assert exc_info.value.status_code == 401

    def test_wrong_audience(self, configured):
        token = JwtGeneratorService().generate_jwt(subject="user_abc")
        override = ConfigData()
        override.jwt.audience = "another-app"

        with with_context(override):
            with pytest.raises(HTTPException) as exc_info:
                JwtVerificationService().verify_jwt(token)
        assert exc_info.value.status_code == 401

    def test_tampered_token(self, configured):
        token = JwtGeneratorService().generate_jwt(subject="user_abc")
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"

        with pytest.raises(HTTPException) as exc_info:
            JwtVerificationService().verify_jwt(tampered)
        assert exc_info.value.status_code == 401

    def test_missing_secret(self, configured):
        override = ConfigData()
        override.jwt.signing_secret = None

        with with_context(override):
            with pytest.raises(HTTPException) as exc_info:
                JwtGeneratorService().generate_jwt(subject="user_abc")
        assert exc_info.value.status_code == 500

    def test_disallowed_algorithm(self, configured):
        override = ConfigData()
        override.jwt.algorithm = "HS512"

        with with_context(override):
            with pytest.raises(HTTPException) as exc_info:
                JwtGeneratorService().generate_jwt(subject="user_abc")
        assert exc_info.value.status_code == 500


class TestEmailService:
    def _enabled(self) -> ConfigData:
        override = ConfigData()
        override.email.enabled = True
        override.email.api_url = "https://mail.example.test/v3/send"
        override.email.api_key = "mail-key"
        return override

    def test_disabled_only_logs(self, configured):
        calls = []
        transport = httpx.MockTransport(lambda request: calls.append(request))

        EmailService(transport=transport).send("a@example.com", "Hi", "Body")

        assert calls == []

    def test_sends_through_provider(self, configured):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202)

        with with_context(self._enabled()):
            EmailService(transport=httpx.MockTransport(handler)).send_password_reset(
                "emily@sustainareview.com", "reset-token-123"
            )

        assert len(seen) == 1
        request = seen[0]
        assert str(request.url) == "https://mail.example.test/v3/send"
        assert request.headers["Authorization"] == "Bearer mail-key"
        assert request.headers["Idempotency-Key"].startswith("email:")
        payload = json.loads(request.content)
        assert payload["personalizations"][0]["to"] == [{"email": "emily@sustainareview.com"}]
        assert "token=reset-token-123" in payload["content"][0]["value"]

    def test_same_message_same_idempotency_key(self, configured):
        keys = []

        def handler(request: httpx.Request) -> httpx.Response:
            keys.append(request.headers["Idempotency-Key"])
            return httpx.Response(200)

        with with_context(self._enabled()):
            service = EmailService(transport=httpx.MockTransport(handler))
            service.send("a@example.com", "Hi", "Body")
            service.send("a@example.com", "Hi", "Body")
            service.send("a@example.com", "Hi", "Other body")

        assert keys[0] == keys[1]
        assert keys[0] != keys[2]

    def test_provider_error(self, configured):
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))

        with with_context(self._enabled()):
            with pytest.raises(EmailDeliveryError, match="500"):
                EmailService(transport=transport).send("a@example.com", "Hi", "Body")

    def test_provider_unreachable(self, configured):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with with_context(self._enabled()):
            with pytest.raises(EmailDeliveryError, match="unreachable"):
                EmailService(transport=httpx.MockTransport(handler)).send(
                    "a@example.com", "Hi", "Body"
                )

    def test_enabled_without_provider(self, configured):
        override = ConfigData()
        override.email.enabled = True

        with with_context(override):
            with pytest.raises(EmailDeliveryError, match="not configured"):
                EmailService().send("a@example.com", "Hi", "Body")


class TestPhotoStorage:
    def test_save_and_delete(self, configured, tmp_path):
        storage = PhotoStorageService(tmp_path / "photos")

        url = storage.save(UploadedPhoto("leaf.png", "image/png", b"png-bytes"))

        name = url.rsplit("/", 1)[1]
        assert url == f"{configured.uploads.public_path}/{name}"
        assert (tmp_path / "photos" / name).read_bytes() == b"png-bytes"

        storage.delete(url)
        assert not (tmp_path / "photos" / name).exists()

    def test_delete_ignores_external_urls(self, configured, tmp_path):
        storage = PhotoStorageService(tmp_path / "photos")

        storage.delete("https://picsum.photos/seed/x/400/300")

    @pytest.mark.parametrize(
        "photo",
        [
            UploadedPhoto("leaf.webp", "image/webp", b"data"),
            UploadedPhoto("empty.jpg", "image/jpeg", b""),
        ],
    )
    def test_rejected_photos(self, configured, tmp_path, photo):
        with pytest.raises(HTTPException) as exc_info:
            PhotoStorageService(tmp_path).validate(photo)
        assert exc_info.value.status_code == 400

    def test_size_limit(self, configured, tmp_path):
        override = ConfigData()
        override.uploads.max_bytes = 10

        with with_context(override):
            with pytest.raises(HTTPException) as exc_info:
                PhotoStorageService(tmp_path).validate(
                    UploadedPhoto("big.jpg", "image/jpeg", b"x" * 11)
                )
        assert exc_info.value.status_code == 400

    def test_batch_limit(self, configured, tmp_path):
        photos = [UploadedPhoto("a.jpg", "image/jpeg", b"x")] * (
            configured.uploads.max_files_per_review + 1
        )

        with pytest.raises(HTTPException) as exc_info:
            PhotoStorageService(tmp_path).validate_batch(photos)
        assert exc_info.value.status_code == 400


def test_token_lifetime_uses_clock(configured):
    before = int(time.time())
    token = JwtGeneratorService().generate_jwt(subject="user_abc", expires_in_seconds=120)

    claims = JwtVerificationService().verify_jwt(token)

    assert before <= claims.issued_at <= int(time.time())
    assert claims.expires_at == claims.issued_at + 120
