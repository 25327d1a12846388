# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import infra.db.models  # noqa: F401
from infra.db.base import Base
from infra.services import build_service_graph


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _isolated_schedule_env(monkeypatch):
    # message locale and default week come from the environment
    monkeypatch.delenv("PM_SCHEDULE_LOCALE", raising=False)
    monkeypatch.delenv("PM_DEFAULT_WORKING_DAYS", raising=False)


@pytest.fixture
def services(session):
    return build_service_graph(session).as_dict()
