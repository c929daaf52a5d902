from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Tab(BaseModel):
    """One open tab as reported by the tab inventory."""
    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    title: Optional[str] = None
    fav_icon_url: Optional[str] = Field(None, alias="favIconUrl")


class TabState(BaseModel):
    tabs: List[Tab] = []
    timestamp: int = 0

    @property
    def urls(self) -> List[str]:
        return [t.url for t in self.tabs]


class UrlListRequest(BaseModel):
    urls: List[str]


class TokenRequest(BaseModel):
    token: str


class ParseRequest(BaseModel):
    text: str


class ExportResult(BaseModel):
    token: str
    locator: str
    tab_count: int
    data_size: int


class UrlListResponse(BaseModel):
    urls: List[str]
    count: int


class ParseResponse(UrlListResponse):
    kind: str
