import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

# Import routers
from routers.public import interests_router as public_interests_router
from routers.private import user_router as private_user_router

from config import settings
from logging_config import setup_logging
from models.db import init_engine, dispose_engine

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup: one engine per process, reused by every request
    init_engine()
    yield
    # shutdown
    dispose_engine()


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    log.error("Unhandled database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    public_router = APIRouter(tags=["Public"])
    public_router.include_router(public_interests_router)

    private_router = APIRouter(tags=["Private"])
    private_router.include_router(private_user_router)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SQLAlchemyError, database_error_handler)

    app.include_router(private_router, prefix=settings.api_prefix) # private needs to be mounted before public
    app.include_router(public_router, prefix=settings.api_prefix)

    return app


app = create_app()
