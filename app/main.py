import logging

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.app_context import AppContext, get_app_context
from utils.logging_config import setup_logging
from .api.router import router as api_router
from .db import Base, engine
from .services.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

PUBLIC_PATHS = {"/", "/sign-in", "/docs", "/redoc", "/openapi.json", "/api/status"}
PUBLIC_PREFIXES = ("/api/auth", "/docs/")


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def on_request_validation(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ]
        return _error(400, "Invalid input", details=details)

    @app.exception_handler(NotFoundError)
    async def on_not_found(request: Request, exc: NotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(ValidationError)
    async def on_validation(request: Request, exc: ValidationError):
        return _error(400, str(exc))

    @app.exception_handler(ConflictError)
    async def on_conflict(request: Request, exc: ConflictError):
        details = {to_camel(key): value for key, value in exc.details.items()}
        return _error(409, str(exc), **details)

    @app.exception_handler(ForbiddenError)
    async def on_forbidden(request: Request, exc: ForbiddenError):
        return _error(403, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def authenticate(request: Request, call_next):
        path = request.url.path
        if is_public_path(path):
            return await call_next(request)

        gateway = request.app.state.context.auth_gateway
        identity = await run_in_threadpool(gateway.get_session, request.headers.get("cookie"))
        if identity is None:
            if path.startswith("/api/"):
                return _error(401, "Unauthorized")
            return RedirectResponse("/?auth_required=true", status_code=307)
        request.state.identity = identity
        return await call_next(request)

    # added last so it wraps everything above
    @app.middleware("http")
    async def catch_unhandled(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return _error(500, "Internal server error")


def create_app(context: AppContext | None = None) -> FastAPI:
    context = context or get_app_context()
    setup_logging(context.settings)

    app = FastAPI(title="Company Database")
    app.state.context = context
    Base.metadata.create_all(bind=engine)
    register_exception_handlers(app)
    register_middleware(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    def index():
        return {"status": "ok", "service": "cdb"}

    return app


def main() -> None:
    import uvicorn

    uvicorn.run(create_app(), host="127.0.0.1", port=8000)


app = create_app()


if __name__ == "__main__":
    main()
