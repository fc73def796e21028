from .email_service import EmailDeliveryError, EmailService

__all__ = ["EmailDeliveryError", "EmailService"]
