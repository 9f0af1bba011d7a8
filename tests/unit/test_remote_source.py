"""
Unit tests for the HTTP remote source.

The network is replaced by httpx.MockTransport.
"""

import httpx
import pytest

from syncboard.core.errors import SyncError
from syncboard.sync import HttpRemoteSource, parse_items

URL = "https://remote.test/posts"


def source_for(handler, **kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    kwargs.setdefault("retry_delay", 0)
    return HttpRemoteSource(url=URL, client=client, **kwargs)


class TestParseItems:
    """Tests for parse_items"""

    def test_valid_items_keep_order(self):
        items, skipped = parse_items([
            {"id": 2, "title": "b", "body": "B", "userId": 1},
            {"id": 1, "title": "a", "body": "A"},
        ])

        assert [item.id for item in items] == ["2", "1"]
        assert skipped == 0

    def test_malformed_items_are_skipped(self):
        items, skipped = parse_items([
            {"id": 1, "title": "ok", "body": "fine"},
            {"id": 2, "title": "no body"},
            {"id": 3, "title": "", "body": "empty title"},
            "not an object",
            {"title": "no id", "body": "x"},
        ])

        assert [item.id for item in items] == ["1"]
        assert skipped == 4

    def test_non_list_payload(self):
        with pytest.raises(SyncError, match="JSON list"):
            parse_items({"posts": []})


@pytest.mark.asyncio
class TestHttpRemoteSource:
    """Tests for HttpRemoteSource.fetch_remote_items"""

    async def test_fetch_parses_items(self):
        def handler(request):
            assert request.url == URL
            return httpx.Response(200, json=[{"id": 1, "title": "t", "body": "b"}])

        items = await source_for(handler).fetch_remote_items()

        assert [(i.id, i.title, i.body) for i in items] == [("1", "t", "b")]

    async def test_error_status_raises_sync_error(self):
        source = source_for(lambda request: httpx.Response(503))

        with pytest.raises(SyncError, match="503"):
            await source.fetch_remote_items()

    async def test_invalid_json_raises_sync_error(self):
        source = source_for(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(SyncError, match="invalid JSON"):
            await source.fetch_remote_items()

    async def test_transport_errors_are_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=[])

        items = await source_for(handler, max_retries=3).fetch_remote_items()

        assert items == []
        assert len(calls) == 3

    async def test_gives_up_after_max_retries(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(SyncError, match="after 2 attempts"):
            await source_for(handler, max_retries=2).fetch_remote_items()
        assert len(calls) == 2

    async def test_status_errors_are_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(SyncError):
            await source_for(handler, max_retries=3).fetch_remote_items()
        assert len(calls) == 1
