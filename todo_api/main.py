import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from todo_api.api.errors import register_exception_handlers
from todo_api.api.http import health_router, tasks_router, users_router
from todo_api.core.auth import AuthorizationGateway
from todo_api.core.config import Settings, settings as default_settings
from todo_api.core.db import create_engine, create_session_factory, init_models
from todo_api.core.logging_setup import setup_logging
from todo_api.core.security import PasswordHasher
from todo_api.domains.identity.services import UserService
from todo_api.domains.tasks.services import TaskService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    """Build the application with all services wired to one engine"""
    settings = settings or default_settings
    engine = engine or create_engine(settings.database_url, echo=settings.sql_echo)
    session_factory = create_session_factory(engine)

    hasher = PasswordHasher()
    user_service = UserService(
        session_factory,
        hasher=hasher,
        enforce_session_expiry=settings.enforce_session_expiry,
    )
    task_service = TaskService(session_factory)
    gateway = AuthorizationGateway(user_service, cookie_name=settings.session_cookie_name)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        if settings.auto_create_schema:
            await init_models(engine)
            logger.info("Database schema is up to date")
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Todo API",
        description="Personal task lists behind session-cookie authentication",
        version="1.0.0",
        lifespan=lifespan,
        dependencies=[Depends(gateway)],
    )

    app.state.settings = settings
    app.state.hasher = hasher
    app.state.user_service = user_service
    app.state.task_service = task_service
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "GET", "OPTIONS", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("HTTP/%s %s %s", request.scope.get("http_version", "1.1"), request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(tasks_router)

    return app


app = create_app()
