"""Schema management."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.sustainareview.core.services.database.db_session import build_engine
from src.sustainareview.runtime.context import get_config


class DbManageService:
    def __init__(self, engine: Engine | None = None):
        self._engine = engine or build_engine(get_config())

    def create_all(self) -> None:
        """Create all database tables."""
        # Register every table on SQLModel.metadata
        import src.sustainareview.entities  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        import src.sustainareview.entities  # noqa: F401

        SQLModel.metadata.drop_all(self._engine)
        logger.info("Database tables dropped.")
