# tests/unit/test_tabs_service.py
# Unit tests for tab snapshot, selection, export and sequential opening

import pytest

from tabstate.constants import SHARE_PREFIX
from tabstate.schemas.tabs import Tab, TabState
from tabstate.services.codec import decode, encode
from tabstate.services.tabs_service import (
    export_state,
    open_tabs,
    select,
    snapshot,
    take_snapshot,
)


@pytest.fixture
def browser_tabs():
    return [
        Tab(url="https://a.com", title="A", favIconUrl="https://a.com/favicon.ico"),
        Tab(url="chrome://settings", title="Settings"),
        Tab(url="https://b.com", title="B"),
        Tab(url="", title="Loading"),
        Tab(url="chrome-extension://abc/popup.html", title="Popup"),
        Tab(url="http://c.com", title="C"),
    ]


class FakeInventory:
    def __init__(self, tabs):
        self.tabs = tabs

    async def get_tabs(self):
        return self.tabs


def test_snapshot_drops_internal_pages(browser_tabs):
    state = snapshot(browser_tabs, timestamp=123)
    assert state.urls == ["https://a.com", "https://b.com", "http://c.com"]
    assert state.timestamp == 123
    assert state.tabs[0].fav_icon_url == "https://a.com/favicon.ico"


@pytest.mark.asyncio
async def test_take_snapshot_uses_inventory(browser_tabs):
    state = await take_snapshot(FakeInventory(browser_tabs))
    assert state.urls == ["https://a.com", "https://b.com", "http://c.com"]
    assert state.timestamp > 0


def test_select_keeps_original_order(browser_tabs):
    state = snapshot(browser_tabs)
    chosen = select(state, [2, 0])
    assert chosen.urls == ["https://a.com", "http://c.com"]


def test_select_ignores_unknown_positions():
    state = TabState(tabs=[Tab(url="https://a.com")])
    assert select(state, [0, 5]).urls == ["https://a.com"]


def test_export_state():
    urls = ["https://a.com", "https://b.com"]
    result = export_state(urls)
    assert result.token == encode(urls)
    assert result.locator == SHARE_PREFIX + result.token
    assert result.tab_count == 2
    assert result.data_size == len(result.locator)
    assert decode(result.token) == urls


class TestOpenTabs:

    @pytest.mark.asyncio
    async def test_opens_in_order_one_at_a_time(self):
        calls = []
        in_flight = 0

        async def sink(url):
            nonlocal in_flight
            in_flight += 1
            assert in_flight == 1, "tab creation must not overlap"
            calls.append(url)
            in_flight -= 1

        urls = ["https://1.com", "https://2.com", "https://3.com"]
        report = await open_tabs(urls, sink)

        assert calls == urls
        assert report.opened == urls
        assert report.failed == []

    @pytest.mark.asyncio
    async def test_failure_does_not_stop_remaining_opens(self):
        calls = []

        async def sink(url):
            calls.append(url)
            if "bad" in url:
                raise RuntimeError("tab creation refused")

        report = await open_tabs(["https://ok.com", "https://bad.com", "https://later.com"], sink)

        assert calls == ["https://ok.com", "https://bad.com", "https://later.com"]
        assert report.opened == ["https://ok.com", "https://later.com"]
        assert report.failed == ["https://bad.com"]
