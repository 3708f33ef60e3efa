from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.routers import auth, checkout, dashboard
from .shared.config import get_settings, validate_settings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    validate_settings(get_settings())
    logger.info("main: configuration validated")
    yield


app = FastAPI(title="Arketype API", lifespan=lifespan)
app.include_router(checkout.router)
app.include_router(auth.router)
app.include_router(dashboard.router)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(_: Request, exc: RequestValidationError):
    logger.info("main: request validation failed errors=%s", len(exc.errors()))
    return JSONResponse(status_code=400, content={"detail": "Invalid request payload."})
