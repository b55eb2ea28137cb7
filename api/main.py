"""
EnrollPilot API

Document requirement resolution for group benefits enrollment.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import enrollpilot
from enrollpilot.canon import compute_catalog_hash
from enrollpilot.config import EngineSettings
from enrollpilot.engine import DocumentValidator
from enrollpilot.exceptions import (
    CatalogLoadError,
    CatalogNotFoundError,
    CatalogValidationError,
    CatalogVersionMismatch,
    ConditionEvaluationError,
    EnrollPilotError,
    OverrideNotPermittedError,
)
from enrollpilot.packs import CatalogLoader

from api.routes import catalog, documents, requirements


# =============================================================================
# Configuration
# =============================================================================

settings = EngineSettings.from_env()


# =============================================================================
# Logging Setup (Structured JSON)
# =============================================================================

_EXTRA_FIELDS = (
    "request_id",
    "company_id",
    "role",
    "overridden_by",
    "catalog_id",
    "catalog_hash_short",
    "satisfied_groups",
    "total_groups",
    "status_code",
    "duration_ms",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Add extra fields if present
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


# Configure logging
logger = logging.getLogger("enrollpilot")
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
logger.addHandler(handler)

# Loaded at startup
validator: DocumentValidator = None
catalog_hash: str = ""


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog pack on startup."""
    global validator, catalog_hash

    loader = CatalogLoader(strict_conditions=settings.strict_conditions)
    try:
        loaded = loader.load(settings.catalog_path)
    except EnrollPilotError as e:
        logger.error("Failed to load catalog pack: %s", e)
        raise

    validator = DocumentValidator.from_settings(loaded, settings)
    catalog_hash = compute_catalog_hash(loaded)
    logger.info(
        "Catalog pack ready",
        extra={"catalog_id": loaded.id, "catalog_hash_short": catalog_hash[:12]},
    )

    # Share catalog and validator with routes
    catalog.set_catalog(loaded, catalog_hash)
    requirements.set_validator(validator, catalog_hash)
    documents.set_validator(validator)

    yield

    logger.info("Shutting down")


# Create app
app = FastAPI(
    title="EnrollPilot API",
    description="""
**Document requirement resolution for group benefits enrollment.**

EnrollPilot decides which documents an employer must upload before an
enrollment can be submitted, and whether the uploads on file are enough.

## Quick Start

1. `GET /catalog` - See the loaded requirement catalog
2. `POST /requirements/resolve` - Resolve the groups for an applicant
3. `POST /validate-documents` - Validate uploads before submission
    """,
    version=enrollpilot.__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(catalog.router)
app.include_router(requirements.router)
app.include_router(documents.router)


# =============================================================================
# Middleware
# =============================================================================

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id
    start_time = time.time()

    response = await call_next(request)

    response.headers["X-Request-ID"] = request_id
    logger.debug(
        "%s %s",
        request.method,
        request.url.path,
        extra={
            "request_id": request_id,
            "status_code": response.status_code,
            "duration_ms": round((time.time() - start_time) * 1000, 2),
        },
    )
    return response


# =============================================================================
# Error Handling
# =============================================================================

def _status_code_for(exc: EnrollPilotError) -> int:
    if isinstance(exc, OverrideNotPermittedError):
        return 403
    if isinstance(exc, CatalogNotFoundError):
        return 404
    if isinstance(
        exc,
        (CatalogLoadError, CatalogValidationError, CatalogVersionMismatch,
         ConditionEvaluationError),
    ):
        return 500
    return 400


@app.exception_handler(EnrollPilotError)
async def enrollpilot_error_handler(request: Request, exc: EnrollPilotError):
    """Translate domain errors to JSON responses."""
    status_code = _status_code_for(exc)
    request_id = getattr(request.state, "request_id", "unknown")
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "%s",
        exc,
        extra={
            "request_id": request_id,
            "company_id": exc.company_id,
            "status_code": status_code,
        },
    )
    content = exc.to_dict()
    content["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=content)


# =============================================================================
# Health Endpoints
# =============================================================================

@app.get("/api", tags=["Health"])
async def api_info():
    """API info endpoint - JSON health check and info."""
    return {
        "service": "EnrollPilot API",
        "version": enrollpilot.__version__,
        "status": "running",
        "catalog_id": validator.catalog.id if validator else None,
        "catalog_hash": catalog_hash or None,
        "smart_documents": settings.flags.smart_documents,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["Health"])
async def health():
    """Health check endpoint."""
    return {
        "healthy": validator is not None,
        "catalog_loaded": validator is not None,
        "catalog_id": validator.catalog.id if validator else None,
        "catalog_hash": catalog_hash or None,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
