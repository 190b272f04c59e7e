"""
Database session management (SQLAlchemy)
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from cgest.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Engine e session factory únicos por processo, criados no primeiro uso
_engine = None
_SessionLocal = None


def get_engine():
    """Get or create the process-wide SQLAlchemy engine"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(settings.get_sqlalchemy_url(), pool_pre_ping=True)
    return _engine


def get_session_factory():
    """Get or create the process-wide session factory"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


def check_db_connection() -> None:
    """
    Health check - verifica se o banco responde

    Raises:
        sqlalchemy.exc.OperationalError: se o banco estiver indisponível
    """
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
