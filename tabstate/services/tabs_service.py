# tabstate/services/tabs_service.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Iterable, List, Protocol, Sequence

from tabstate.constants import INTERNAL_URL_PREFIXES, SHARE_PREFIX
from tabstate.schemas.tabs import ExportResult, Tab, TabState
from tabstate.services.codec import encode

logger = logging.getLogger(__name__)


class TabInventory(Protocol):
    """Source of the currently open tabs."""

    async def get_tabs(self) -> List[Tab]:
        ...


class TabSink(Protocol):
    """Opens one tab for a URL."""

    def __call__(self, url: str) -> Awaitable[Any]:
        ...


@dataclass
class OpenTabsReport:
    opened: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def is_exportable(tab: Tab) -> bool:
    return bool(tab.url) and not tab.url.startswith(INTERNAL_URL_PREFIXES)


def snapshot(tabs: Iterable[Tab], timestamp: int | None = None) -> TabState:
    """Current window's tabs minus browser-internal pages, order kept."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return TabState(tabs=[t for t in tabs if is_exportable(t)], timestamp=timestamp)


async def take_snapshot(inventory: TabInventory) -> TabState:
    return snapshot(await inventory.get_tabs())


def select(state: TabState, indices: Iterable[int]) -> TabState:
    """Subset of state at the given positions, in the original order."""
    chosen = set(indices)
    return TabState(
        tabs=[t for i, t in enumerate(state.tabs) if i in chosen],
        timestamp=int(time.time() * 1000),
    )


def export_state(urls: Sequence[str], prefix: str = SHARE_PREFIX) -> ExportResult:
    token = encode(urls)
    locator = prefix + token
    return ExportResult(
        token=token,
        locator=locator,
        tab_count=len(urls),
        data_size=len(locator),
    )


async def open_tabs(urls: Iterable[str], sink: TabSink) -> OpenTabsReport:
    """
    Open urls one after another so the new tabs keep their order.
    A failure is logged and recorded; the remaining URLs are still opened.
    """
    report = OpenTabsReport()
    for url in urls:
        try:
            await sink(url)
        except Exception as e:
            logger.warning(f"Failed to open tab {url}: {e}")
            report.failed.append(url)
        else:
            report.opened.append(url)
    logger.info(f"Opened {len(report.opened)} tabs, {len(report.failed)} failed")
    return report
