"""PasswordResetToken repository for data access operations."""

from datetime import datetime

from sqlmodel import Session, select

from src.sustainareview.entities.core.password_reset.entity import PasswordResetToken
from src.sustainareview.entities.core.password_reset.table import PasswordResetTokenTable


class PasswordResetTokenRepository:
    """Data-access layer for password reset tokens."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, token: PasswordResetToken) -> PasswordResetToken:
        row = PasswordResetTokenTable.model_validate(token, from_attributes=True)
        self._session.add(row)
        self._session.flush()
        return PasswordResetToken.model_validate(row, from_attributes=True)

    def get_by_token_hash(self, token_hash: str) -> PasswordResetToken | None:
        statement = select(PasswordResetTokenTable).where(
            PasswordResetTokenTable.token_hash == token_hash
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return PasswordResetToken.model_validate(row, from_attributes=True)

    def mark_used(self, token_id: str, used_at: datetime) -> None:
        row = self._session.get(PasswordResetTokenTable, token_id)
        if row is None:
            raise ValueError(f"Reset token {token_id} not found")
        row.used_at = used_at
        self._session.add(row)
        self._session.flush()
