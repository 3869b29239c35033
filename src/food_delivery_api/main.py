import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .api import health
from .api.routes import customers, menu, orders, restaurants
from .config import Settings, get_settings, setup_logging
from .db.session import Database
from .errors import DeliveryError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    db = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    if settings.AUTO_CREATE_TABLES:
        await db.create_all()
    app.state.db = db
    logger.info("🚀 Application started")
    yield
    await db.dispose()
    logger.info("🛑 Application stopped")


async def delivery_error_handler(request: Request, exc: DeliveryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, sql_echo=settings.SQL_ECHO)

    app = FastAPI(title=settings.APP_NAME, version=__version__, lifespan=lifespan)
    app.state.settings = settings

    app.add_exception_handler(DeliveryError, delivery_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Подключаем роуты
    app.include_router(health.router)
    app.include_router(customers.router)
    app.include_router(restaurants.router)
    app.include_router(menu.router)
    app.include_router(orders.router)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run("food_delivery_api.main:app", host=settings.API_HOST, port=settings.API_PORT)
