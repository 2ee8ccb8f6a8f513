"""Unit Preferences: FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from unitprefs.config import settings
from unitprefs.errors import UnitsError
from unitprefs.api.routes_conversions import router as conversions_router
from unitprefs.api.routes_convert import router as convert_router
from unitprefs.api.routes_zones import router as zones_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Resolve telemetry paths to units and convert values into preferred display units.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(conversions_router, prefix="/api")
app.include_router(convert_router, prefix="/api")
app.include_router(zones_router, prefix="/api")


@app.exception_handler(UnitsError)
async def units_error_handler(request: Request, exc: UnitsError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status, exc.message)
    return JSONResponse(status_code=exc.status, content=exc.to_dict())


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
