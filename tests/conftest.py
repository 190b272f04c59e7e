"""
Pytest fixtures for testing
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from cgest.infrastructure.db.session import Base
from cgest.infrastructure.db import models  # noqa: F401  (registra as tabelas)
from cgest.infrastructure.storage.repository import open_local_storage, open_sql_storage


@pytest.fixture
def db_engine():
    """Create in-memory SQLite engine for tests"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def sample_account_id():
    """Sample account ID for tests"""
    return 1


@pytest.fixture
def sql_storage(db_session, sample_account_id):
    return open_sql_storage(db_session, sample_account_id)


@pytest.fixture
def local_storage(tmp_path, sample_account_id):
    return open_local_storage(tmp_path / "store", sample_account_id)


@pytest.fixture(params=["sql", "local"])
def storage(request):
    """Same tests against both backends"""
    return request.getfixturevalue(f"{request.param}_storage")
