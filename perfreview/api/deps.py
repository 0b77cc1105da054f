"""Shared dependencies for routers."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from perfreview.database import get_db
from perfreview.storage.drafts import DraftStore, build_draft_store
from perfreview.storage.repositories import SqlReviewStore


async def get_store(db: Annotated[AsyncSession, Depends(get_db)]) -> SqlReviewStore:
    return SqlReviewStore(db)


@lru_cache(maxsize=1)
def get_draft_store() -> DraftStore:
    return build_draft_store()


# Type aliases for dependency injection
StoreDep = Annotated[SqlReviewStore, Depends(get_store)]
DraftsDep = Annotated[DraftStore, Depends(get_draft_store)]
