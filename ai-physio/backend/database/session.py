from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import settings
from models.base import Base
from services.seed_service import seed_demo_data

# Register every table on Base.metadata before create_all().
import models.hypothesis  # noqa: F401
import models.plan  # noqa: F401
import models.session_log  # noqa: F401
import models.user  # noqa: F401

connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, connect_args=connect_args, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def init_db() -> None:
    # Create tables (MVP). For production, use Alembic migrations.
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables verified")

    if not settings.seed_demo_data:
        return

    # Seed the demo user (idempotent).
    with SessionLocal() as db:
        seed_demo_data(db)
