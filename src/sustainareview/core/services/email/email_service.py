"""Outbound email through an HTTP provider."""

from __future__ import annotations

import hashlib

import httpx
from loguru import logger

from src.sustainareview.runtime.context import get_config


class EmailDeliveryError(RuntimeError):
    """The provider refused or failed to accept a message."""


def _idempotency_key(to: str, subject: str, body: str) -> str:
    """Stable key so the provider won't send duplicates on a resubmit."""
    payload_hash = hashlib.sha256(
        (to + "\x1f" + subject + "\x1f" + body).encode("utf-8")
    ).hexdigest()
    return f"email:{payload_hash}"


class EmailService:
    """Sends plain-text mail, or logs it when delivery is disabled."""

    def __init__(self, transport: httpx.BaseTransport | None = None):
        self._transport = transport

    def send(self, to: str, subject: str, body: str) -> None:
        cfg = get_config().email
        if not cfg.enabled:
            logger.info("Email delivery disabled; would send {!r} to {}", subject, to)
            return

        if not cfg.api_url or not cfg.api_key:
            raise EmailDeliveryError("Email provider not configured")

        # JSON shaped like many providers
        payload = {
            "from": {"email": cfg.sender},
            "personalizations": [{"to": [{"email": to}], "subject": subject}],
            "content": [{"type": "text/plain", "value": body}],
        }
        headers = {
            "Authorization": f"Bearer {cfg.api_key}",
            "Idempotency-Key": _idempotency_key(to, subject, body),
            "Content-Type": "application/json",
            "User-Agent": "sustainareview-api",
        }

        try:
            with httpx.Client(timeout=cfg.timeout_seconds, transport=self._transport) as client:
                resp = client.post(cfg.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

        if 200 <= resp.status_code < 300:
            logger.info("Email {!r} accepted by provider for {}", subject, to)
            return

        raise EmailDeliveryError(
            f"Email send failed {resp.status_code}: {resp.text[:200]}"
        )

    def send_password_reset(self, to: str, token: str) -> None:
        cfg = get_config().security
        minutes = max(cfg.reset_token_ttl_seconds // 60, 1)
        link = f"{cfg.reset_password_url}?token={token}"
        body = (
            "We received a request to reset your SustainaReview password.\n\n"
            f"Open the link below within {minutes} minutes to choose a new one:\n"
            f"{link}\n\n"
            "If you did not ask for this, you can ignore this message."
        )
        self.send(to, "Reset your SustainaReview password", body)
