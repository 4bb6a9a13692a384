from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, List
import uvicorn

from app.core.config import settings
from app.core.logging import setup_logging
from app.core.responses import VALIDATION_TITLE, problem_response
from app.middleware.exception_middleware import ExceptionSafetyNetMiddleware
from app.middleware.logging_middleware import LoggingMiddleware
from app.controllers import product_controller

APP_VERSION = "1.0.0"

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Application startup",
        environment=settings.environment,
        product_store=settings.product_store,
        downstream_base_url=settings.downstream_base_url,
        auth_enabled=settings.auth_enabled,
    )
    yield
    logger.info("Application shutdown")


app = FastAPI(
    title="Gateway API",
    description="Product gateway returning a uniform success/failure envelope.",
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "local" else None,
    redoc_url="/redoc" if settings.environment == "local" else None,
)

# Added first so it sits innermost, below request logging and CORS
app.add_middleware(ExceptionSafetyNetMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(product_controller.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "message": "Gateway API is running",
        "version": APP_VERSION,
        "environment": settings.environment,
        "docs_url": "/docs" if settings.environment == "local" else "Documentation disabled in production"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "Healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": APP_VERSION,
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        "HTTP Exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )
    return problem_response(
        exc.status_code,
        str(exc.detail),
        instance=request.url.path,
        headers=getattr(exc, "headers", None),
    )


def _field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = _field_errors(exc)
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        method=request.method,
        fields=sorted(errors),
    )
    return problem_response(
        400,
        "See the errors property for details.",
        instance=request.url.path,
        title=VALIDATION_TITLE,
        errors=errors,
    )


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "local",
        log_config=None
    )
