"""Create the schema and optionally load the demo catalog."""

from loguru import logger

from src.sustainareview.core.services.database import DbManageService, DbSessionService
from src.sustainareview.runtime.seed import seed_database


def init_db(seed: bool = False, db_service: DbSessionService | None = None) -> bool:
    """Create every table; when ``seed`` is set, also load the demo data.

    Returns True when demo data was inserted.
    """
    db_service = db_service or DbSessionService()
    DbManageService(db_service.engine).create_all()
    if not seed:
        return False
    with db_service.session_scope() as session:
        seeded = seed_database(session)
    logger.info("Database initialization complete (seeded={})", seeded)
    return seeded
