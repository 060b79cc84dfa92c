# File: streamsplit/core/database/connection.py

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

from streamsplit.core.config.settings import settings
from .base import Base

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Engine:
    # check_same_thread=False is needed only for SQLite
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args
    )


# Creating the engine does not open a connection; nothing touches disk until first use.
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(target: Engine = None) -> None:
    """
    Creates the database (if the backend needs it) and all ledger tables.
    """
    target = target or engine

    # Import models so they are registered on Base.metadata
    import streamsplit.features.ledger.data.sql_models  # noqa: F401

    if not database_exists(target.url):
        logger.info(f"Creating ledger database: {target.url}")
        create_database(target.url)

    Base.metadata.create_all(bind=target)


def get_db():
    """Yields a session and always closes it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
