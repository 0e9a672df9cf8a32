# src/neverbeen/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance, installs CORS and the error handlers.
Endpoint logic lives in `neverbeen.api.routes`; the map/UI is a separate frontend.
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from neverbeen.core.errors import NeverBeenError
from neverbeen.core.logging import configure_logging
from neverbeen.ingestion.place_search import PlaceSearchError

from .routes import router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="NeverBeen API", version="0.1.0")

# CORS (dev-friendly): allow local frontends (e.g. http://localhost:3000) to call this API.
# Configure via env:
# - NEVERBEEN_CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000"
# - NEVERBEEN_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("NEVERBEEN_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("NEVERBEEN_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = os.getenv("NEVERBEEN_CORS_ALLOW_ORIGIN_REGEX", "").strip() or (
    r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local and not cors_origins else ""
)
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(NeverBeenError)
async def _invalid_input(request: Request, exc: NeverBeenError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": exc.kind})


@app.exception_handler(PlaceSearchError)
async def _search_unavailable(request: Request, exc: PlaceSearchError) -> JSONResponse:
    logger.warning("Place search unavailable: %s", exc)
    return JSONResponse(status_code=502, content={"detail": str(exc), "error": "place_search_unavailable"})


app.include_router(router)
