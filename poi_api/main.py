import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from poi_api.core.config import settings
from poi_api.core.logging_config import setup_logging
from poi_api.db.base import Base
from poi_api.db import models  # noqa: F401  registers every table on Base.metadata
from poi_api.db.session import async_engine
from poi_api.exceptions import NotFoundError, PersistenceError, ValidationFailedError
from poi_api.services.validation import field_errors

from poi_api.api.routers.health import router as health_router
from poi_api.api.routers.poi import router as poi_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    setup_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{settings.APP_NAME} started ({settings.ENV})")


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": exc.message})


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError):
    return JSONResponse(
        status_code=400,
        content={"error": exc.message, "details": exc.field_errors},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON bodies are validation failures as well
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": field_errors(exc)},
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    return JSONResponse(status_code=500, content={"error": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.include_router(health_router, tags=["health"])
app.include_router(poi_router, tags=["poi"])
