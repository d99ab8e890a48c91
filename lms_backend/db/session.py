import logging
from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from lms_backend.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    from lms_backend.db.seed import seed_if_needed

    if settings.seed_data:
        with SessionLocal() as db:
            seed_if_needed(db)


def close_db() -> None:
    engine.dispose()
    logger.info("Database engine disposed")
