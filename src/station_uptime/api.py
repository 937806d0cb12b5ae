"""FastAPI backend exposing station availability."""
from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .analyze import availability_from_coverage, compute_coverage
from .data import fetch_data, parse_reports
from .errors import AvailabilityError, InputUnavailable
from .logging_utils import setup_logging
from .render import availability_document

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Runtime configuration for the backend service."""

    data_file: Path | None
    data_url: str | None
    cors_origins: list[str]
    debug: bool


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def load_settings() -> Settings:
    """Load backend configuration from environment variables."""

    data_file_env = os.getenv("STATION_UPTIME_DATA_FILE")
    data_file = Path(data_file_env) if data_file_env else None
    data_url = os.getenv("STATION_UPTIME_DATA_URL") or None
    cors_env = os.getenv("STATION_UPTIME_CORS_ORIGINS", "*")
    cors_origins = [origin.strip() for origin in cors_env.split(",") if origin.strip()]
    debug = _parse_bool(os.getenv("STATION_UPTIME_DEBUG"), False)

    return Settings(
        data_file=data_file,
        data_url=data_url,
        cors_origins=cors_origins or ["*"],
        debug=debug,
    )


_INITIAL_SETTINGS = load_settings()

app = FastAPI(title="Station Uptime API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_INITIAL_SETTINGS.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)


@app.exception_handler(AvailabilityError)
async def availability_error_handler(
    request: Request, exc: AvailabilityError
) -> JSONResponse:
    status_code = 503 if isinstance(exc, InputUnavailable) else 422
    logger.warning("%s while computing availability: %s", exc.kind, exc)
    return JSONResponse(
        status_code=status_code,
        content={"kind": exc.kind, "message": str(exc)},
    )


def _build_availability(text: str) -> Dict[str, Any]:
    membership, timelines = parse_reports(text)
    coverage = compute_coverage(membership, timelines)
    results = availability_from_coverage(coverage)
    return availability_document(results, coverage)


@app.on_event("startup")
async def on_startup() -> None:
    settings = load_settings()
    setup_logging(settings.debug)
    logger.debug("Loaded settings: %s", settings)
    app.state.settings = settings
    if settings.cors_origins != _INITIAL_SETTINGS.cors_origins:
        logger.warning(
            "CORS origin configuration changed to %s after startup; restart required for changes to apply.",
            settings.cors_origins,
        )


def _require_settings() -> Settings:
    settings = getattr(app.state, "settings", None)
    if settings is None:  # pragma: no cover - startup should populate
        raise HTTPException(status_code=503, detail="Service not initialised")
    return settings


@app.get("/healthz")
async def healthz() -> Dict[str, Any]:
    settings = _require_settings()
    return {
        "status": "ok",
        "data_file": str(settings.data_file) if settings.data_file else None,
        "data_url": settings.data_url,
    }


@app.get("/api/availability")
async def configured_availability() -> Dict[str, Any]:
    settings = _require_settings()
    if settings.data_file is None and settings.data_url is None:
        raise HTTPException(status_code=404, detail="No report source configured")
    text = await asyncio.to_thread(fetch_data, settings.data_file, settings.data_url)
    return await asyncio.to_thread(_build_availability, text)


@app.post("/api/availability")
async def posted_availability(request: Request) -> Dict[str, Any]:
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail="Report must be UTF-8 text") from exc
    return await asyncio.to_thread(_build_availability, text)


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    import uvicorn

    uvicorn.run(
        "station_uptime.api:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
    )
