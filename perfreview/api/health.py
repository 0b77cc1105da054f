"""Liveness and readiness endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from perfreview.api.deps import DraftsDep
from perfreview.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/health/ready")
async def ready(db: Annotated[AsyncSession, Depends(get_db)], drafts: DraftsDep):
    """503 until the review database answers."""
    body = {"database": "ok", "drafts": type(drafts).__name__}
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Readiness check failed: %s", exc)
        body["database"] = "unavailable"
        return JSONResponse(status_code=503, content=body)
    return body
