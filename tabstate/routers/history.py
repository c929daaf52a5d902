# tabstate/routers/history.py
# FastAPI router for the saved-exports history

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from tabstate.config import get_settings
from tabstate.repositories.history_repository import HistoryRepository
from tabstate.schemas.history import HistoryEntry
from tabstate.schemas.tabs import UrlListRequest, UrlListResponse
from tabstate.utils.kv import build_kv_store


router = APIRouter(tags=["History"])

# Module-level repository (lazy init) so the save lock is shared by all requests
_repository: Optional[HistoryRepository] = None


def get_history_repository() -> HistoryRepository:
    """Provide the history repository with DI so handlers stay thin."""
    global _repository
    if _repository is None:
        settings = get_settings()
        _repository = HistoryRepository(
            build_kv_store(settings),
            key=settings.HISTORY_KEY,
            capacity=settings.HISTORY_CAPACITY,
        )
    return _repository


@router.post("/history", response_model=HistoryEntry, response_model_by_alias=False,
             status_code=status.HTTP_201_CREATED)
async def save_history(
    payload: UrlListRequest,
    repo: HistoryRepository = Depends(get_history_repository),
) -> HistoryEntry:
    """Save the given tab list as a new history entry."""
    return await repo.save(payload.urls)


@router.get("/history", response_model=List[HistoryEntry], response_model_by_alias=False)
async def list_history(repo: HistoryRepository = Depends(get_history_repository)) -> List[HistoryEntry]:
    return await repo.list()


@router.get("/history/{entry_id}", response_model=HistoryEntry, response_model_by_alias=False)
async def get_history_entry(
    entry_id: int,
    repo: HistoryRepository = Depends(get_history_repository),
) -> HistoryEntry:
    return await repo.get(entry_id)


@router.get("/history/{entry_id}/restore", response_model=UrlListResponse)
async def restore_history_entry(
    entry_id: int,
    repo: HistoryRepository = Depends(get_history_repository),
) -> UrlListResponse:
    """Decode a saved entry back into its URLs."""
    urls = await repo.restore(entry_id)
    return UrlListResponse(urls=urls, count=len(urls))


async def close_history_repository() -> None:
    """Release the storage connection on shutdown."""
    global _repository
    if _repository is not None:
        await _repository.store.close()
        _repository = None
