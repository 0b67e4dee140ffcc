"""FastAPI application for the personal finance tracker."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from finance_tracker import auth, routes
from finance_tracker.config import Settings, get_settings
from finance_tracker.storage import Storage, StorageError, build_storage

logger = logging.getLogger(__name__)

VALIDATION_MESSAGES = {
    ("POST", "/api/transactions"): "Invalid transaction data",
    ("POST", "/api/budgets"): "Invalid budget data",
}


def _field_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for err in exc.errors():
        # Drop the leading "body" / "query" / "path" location
        loc = [str(part) for part in err.get("loc", ())[1:]]
        key = ".".join(loc) or "_errors"
        errors.setdefault(key, []).append(err.get("msg", "Invalid value"))
    return errors


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        message = VALIDATION_MESSAGES.get((request.method, request.url.path), "Invalid request data")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": message, "errors": _field_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"message": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(storage: Optional[Storage] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = FastAPI(title="Personal Finance Tracker", version="0.1.0")
    app.state.storage = storage or build_storage(settings)

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret, max_age=settings.session_max_age)
    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(routes.router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    logger.info("Finance tracker app ready (storage=%s)", type(app.state.storage).__name__)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("finance_tracker.server:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
