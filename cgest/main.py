"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import Response

from cgest.config import get_settings
from cgest.infrastructure.db.session import check_db_connection
from cgest.infrastructure.storage.repository import BACKENDS, BACKEND_SQL
from cgest.api.v1 import backup, clients, dashboard, goals, payments, profile, projects, tasks

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Loga o traceback de qualquer exceção não tratada (inclusive do storage)"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return Response(content=f"Internal Server Error: {exc}", status_code=500)


def create_app() -> FastAPI:
    """
    Application factory - cria e configura o app FastAPI

    O backend de armazenamento é escolhido aqui, uma única vez, e fica em
    app.state.storage_backend para as dependências.
    """
    settings = get_settings()
    if settings.STORAGE_BACKEND not in BACKENDS:
        raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")

    app = FastAPI(
        title="CGest",
        debug=settings.DEBUG,
    )
    app.state.storage_backend = settings.STORAGE_BACKEND
    logger.info("Storage backend: %s", settings.STORAGE_BACKEND)

    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY)

    app.include_router(clients.router)
    app.include_router(payments.router)
    app.include_router(projects.router)
    app.include_router(goals.router)
    app.include_router(tasks.router)
    app.include_router(dashboard.router)
    app.include_router(backup.router)
    app.include_router(profile.router)

    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check (verifica o banco quando o backend é SQL)"""
        if app.state.storage_backend == BACKEND_SQL:
            check_db_connection()
        return "ok"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "cgest.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
