"""Performance review FastAPI application."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from perfreview.api.consensus import router as consensus_router
from perfreview.api.cycles import router as cycles_router
from perfreview.api.drafts import router as drafts_router
from perfreview.api.evaluations import router as evaluations_router
from perfreview.api.health import router as health_router
from perfreview.api.pdi import router as pdi_router
from perfreview.config import settings
from perfreview.errors import ReviewError, TransientError, ValidationError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Performance Review Service",
    description="Competency scoring, nine-box consensus and development plans per evaluation cycle",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReviewError)
async def review_error_handler(request: Request, exc: ReviewError):
    """Map the error taxonomy onto HTTP status codes."""
    if isinstance(exc, TransientError):
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    content = {"detail": exc.message}
    if isinstance(exc, ValidationError):
        content["fields"] = exc.fields
    return JSONResponse(status_code=exc.status_code, content=content)


app.include_router(health_router, tags=["Health"])
app.include_router(cycles_router, prefix="/v1", tags=["Cycles"])
app.include_router(evaluations_router, prefix="/v1", tags=["Evaluations"])
app.include_router(consensus_router, prefix="/v1", tags=["Consensus"])
app.include_router(pdi_router, prefix="/v1", tags=["PDI"])
app.include_router(drafts_router, prefix="/v1", tags=["Drafts"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "perfreview", "version": "0.1.0", "docs": "/docs"}
