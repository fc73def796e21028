"""Entity package: PasswordResetToken."""

from .entity import PasswordResetToken
from .repository import PasswordResetTokenRepository
from .table import PasswordResetTokenTable

__all__ = ["PasswordResetToken", "PasswordResetTokenRepository", "PasswordResetTokenTable"]
