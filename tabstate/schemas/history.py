from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntry(BaseModel):
    """
    One saved export. Stored under the wire names
    {id, timestamp, data, tabCount, preview}.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    timestamp: int
    token: str = Field(..., alias="data")
    tab_count: int = Field(..., alias="tabCount")
    preview: str = ""
