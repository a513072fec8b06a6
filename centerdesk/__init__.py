#centerdesk/__init__.py
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from centerdesk.core.config import settings
from centerdesk.core.database import build_engine
from centerdesk.core.errors import BaseAPIError, ValidationError, StoreUnavailable, get_error_message
from centerdesk.core.i18n import resolve_language
from centerdesk.core.logging import logger
from centerdesk.middleware.request_id import RequestIDMiddleware
from centerdesk.schemas.common import ErrorResponse
from centerdesk.routes import (
    attendance,
    classes,
    navigation,
    records,
    reports,
    students
)
from centerdesk.services.record_store import DocumentStore
from centerdesk.utils.validators import field_errors


def _error_response(request: Request, error: Exception) -> JSONResponse:
    language = resolve_language(request.headers.get("accept-language"))
    payload = get_error_message(error, language)
    return JSONResponse(status_code=payload["status_code"], content=payload)


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="API for running a learning center: students, classes, payments, attendance and reports",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        responses={
            403: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
            503: {"model": ErrorResponse},
        },
    )
    app.state.store = store if store is not None else DocumentStore(build_engine())

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    # Include routers
    app.include_router(students.router)
    app.include_router(classes.router)
    app.include_router(records.courses_router)
    app.include_router(records.instructors_router)
    app.include_router(records.payments_router)
    app.include_router(records.expenses_router)
    app.include_router(attendance.router)
    app.include_router(reports.router)
    app.include_router(navigation.router)

    @app.exception_handler(BaseAPIError)
    async def api_error_handler(request: Request, exc: BaseAPIError):
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc}")
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(request, ValidationError(details=field_errors(exc.errors())))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return _error_response(request, exc)

    @app.on_event("startup")
    async def startup_event():
        try:
            await app.state.store.initialize()
        except StoreUnavailable:
            # Requests will answer 503 until a database is configured
            logger.warning("Document store is not configured")
        logger.info("Application startup completed")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.store.close()
        logger.info("Application shutdown completed")

    return app
