"""Database configuration and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import URL, create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from accounts_api.config import Settings, get_settings

settings = get_settings()


def build_database_url(config: Settings) -> str | URL:
    """Return DATABASE_URL if set, otherwise assemble a PostgreSQL URL from the DB_* parts."""
    if config.database_url:
        return config.database_url
    return URL.create(
        "postgresql+psycopg2",
        username=config.db_user,
        password=config.db_password,
        host=config.db_host,
        port=config.db_port,
        database=config.db_name,
    )


def create_db_engine(url: str | URL):
    """Create an engine with a bounded connection pool."""
    if str(url).startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


engine = create_db_engine(build_database_url(settings))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from accounts_api import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def check_db_connection(db: Session) -> None:
    """Run a trivial query; raises if the store is unreachable."""
    db.execute(text("SELECT 1"))
