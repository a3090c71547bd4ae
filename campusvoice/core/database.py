import logging
from pathlib import Path
from typing import Generator

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from campusvoice.core.config import DATABASE_ECHO, DATABASE_URL

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    """Create an engine appropriate for the database backend."""
    if url.startswith("sqlite"):
        db_path = url.replace("sqlite:///", "")
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            url,
            echo=DATABASE_ECHO,
            connect_args={"check_same_thread": False},
        )

    # PostgreSQL (or other)
    return create_engine(url, echo=DATABASE_ECHO, pool_pre_ping=True)


engine = build_engine(DATABASE_URL)


def create_db_and_tables():
    # Import models so their tables are registered on SQLModel.metadata
    from campusvoice.models import complaints  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database ready: %s", DATABASE_URL.split("@")[-1])


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
