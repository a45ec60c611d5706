"""Unit tests for the Storybook index fetcher."""

import httpx
import pytest

from storybook_mcp.errors import FetchFailedError, IndexSchemaError
from storybook_mcp.models import StorybookV3Index, StorybookV5Index
from storybook_mcp.services.index_fetcher import StorybookIndexFetcher

INDEX_URL = "http://localhost:6006/index.json"


def fetcher_for(handler) -> StorybookIndexFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StorybookIndexFetcher(INDEX_URL, client=client)


@pytest.mark.asyncio
async def test_fetch_v5(v5_index_document):
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=v5_index_document)

    index = await fetcher_for(handler).fetch()

    assert isinstance(index, StorybookV5Index)
    assert index.list_components() == ["Button", "Input"]
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == INDEX_URL


@pytest.mark.asyncio
async def test_fetch_v3(v3_index_document):
    index = await fetcher_for(lambda request: httpx.Response(200, json=v3_index_document)).fetch()
    assert isinstance(index, StorybookV3Index)


@pytest.mark.asyncio
async def test_each_fetch_issues_a_request(v5_index_document):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=v5_index_document)

    fetcher = fetcher_for(handler)
    await fetcher.fetch()
    await fetcher.fetch()
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_non_success_status():
    fetcher = fetcher_for(lambda request: httpx.Response(404))
    with pytest.raises(FetchFailedError, match="Failed to fetch Storybook data: Not Found"):
        await fetcher.fetch()


@pytest.mark.asyncio
async def test_transport_failure():
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(FetchFailedError, match="Connection refused"):
        await fetcher_for(handler).fetch()


@pytest.mark.asyncio
async def test_invalid_json_body():
    fetcher = fetcher_for(lambda request: httpx.Response(200, text="<html>not json</html>"))
    with pytest.raises(FetchFailedError, match="not valid JSON"):
        await fetcher.fetch()


@pytest.mark.asyncio
async def test_unsupported_document():
    fetcher = fetcher_for(lambda request: httpx.Response(200, json={"v": 7}))
    with pytest.raises(IndexSchemaError):
        await fetcher.fetch()
