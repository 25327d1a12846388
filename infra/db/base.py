# infra/db/base.py
from __future__ import annotations
import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def database_url() -> str:
    override = (os.getenv("PM_SCHEDULE_DB_URL") or "").strip()
    if override:
        return override
    return f"sqlite:///{default_db_path().as_posix()}"


def build_session_factory(db_url: str | None = None) -> sessionmaker:
    url = db_url or database_url()
    logger.info("Using database at: %s", url)
    engine = create_engine(url, echo=False, future=True)

    # Table classes must be registered on Base before create_all.
    import infra.db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
