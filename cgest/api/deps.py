"""
FastAPI dependencies (storage, account, clock)
"""
from datetime import date
from typing import Iterator

from fastapi import Request

from cgest.config import get_settings
from cgest.infrastructure.db.session import get_session_factory
from cgest.infrastructure.storage.repository import (
    BACKEND_SQL, Storage, open_local_storage, open_sql_storage,
)


def get_account_id(request: Request) -> int:
    """
    Conta do usuário logado; sem sessão usa DEFAULT_ACCOUNT_ID (modo local).
    """
    user_id = request.session.get("user_id")
    if user_id:
        return int(user_id)
    return get_settings().DEFAULT_ACCOUNT_ID


def get_storage(request: Request) -> Iterator[Storage]:
    """
    Storage for the backend selected at startup (app.state.storage_backend)

    Usage:
        @router.get("/clients")
        def list_clients(storage: Storage = Depends(get_storage)):
            ...
    """
    backend = request.app.state.storage_backend
    account_id = get_account_id(request)

    if backend == BACKEND_SQL:
        db = get_session_factory()()
        try:
            yield open_sql_storage(db, account_id)
        finally:
            db.close()
    else:
        yield open_local_storage(get_settings().LOCAL_STORE_DIR, account_id)


def get_today() -> date:
    """Hoje no fuso configurado (TIMEZONE)."""
    return get_settings().today()
