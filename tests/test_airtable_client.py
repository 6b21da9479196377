"""
Airtable client: request shape, first-page semantics and error mapping.
"""

from __future__ import annotations

import httpx
import pytest

from core.airtable import AirtableClient, AirtableError


@pytest.mark.anyio
async def test_fetch_first_page_requests_view_with_bearer_key(make_client):
    calls: list[httpx.Request] = []
    client = make_client({"Action Cards": [{"id": "a1", "fields": {"Name": "Search"}}]}, calls=calls)

    async with client:
        records = await client.fetch_first_page("Action Cards")

    assert records == [{"id": "a1", "fields": {"Name": "Search"}}]
    assert len(calls) == 1  # offset cursor is not followed
    request = calls[0]
    assert request.method == "GET"
    assert request.url.host == "airtable.test"
    assert request.url.path == "/v0/appTEST/Action Cards"
    assert request.url.params["view"] == "Grid view"
    assert "offset" not in request.url.params
    assert request.headers["Authorization"] == "Bearer keyTEST"


@pytest.mark.anyio
async def test_fetch_first_page_passes_page_size(make_client):
    calls: list[httpx.Request] = []
    client = make_client({"Rooms": []}, calls=calls)

    async with client:
        await client.fetch_first_page("Rooms", view="Sorted", page_size=50)

    assert calls[0].url.params["view"] == "Sorted"
    assert calls[0].url.params["pageSize"] == "50"


@pytest.mark.anyio
async def test_records_are_normalized(make_client):
    client = make_client(
        {
            "Items": [
                {"id": "i1", "createdTime": "2020-01-01T00:00:00.000Z", "fields": {"Name": "Knife"}},
                {"id": "i2"},
                {"fields": {"Name": "no id"}},
                "garbage",
            ]
        }
    )

    async with client:
        records = await client.fetch_first_page("Items")

    assert records == [
        {"id": "i1", "fields": {"Name": "Knife"}},
        {"id": "i2", "fields": {}},
    ]


@pytest.mark.anyio
async def test_non_200_raises_airtable_error(make_client):
    client = make_client({"Rooms": []}, status_for={"Rooms": 401})

    async with client:
        with pytest.raises(AirtableError) as excinfo:
            await client.fetch_first_page("Rooms")

    assert "401" in str(excinfo.value)
    assert "Rooms" in str(excinfo.value)


@pytest.mark.anyio
async def test_missing_records_list_raises_airtable_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"unexpected": True}))
    client = AirtableClient(api_key="keyTEST", base_id="appTEST", transport=transport)

    async with client:
        with pytest.raises(AirtableError):
            await client.fetch_first_page("Rooms")


@pytest.mark.anyio
async def test_non_json_body_raises_airtable_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    client = AirtableClient(api_key="keyTEST", base_id="appTEST", transport=transport)

    async with client:
        with pytest.raises(AirtableError):
            await client.fetch_first_page("Rooms")


@pytest.mark.anyio
async def test_transport_error_raises_airtable_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = AirtableClient(api_key="keyTEST", base_id="appTEST", transport=httpx.MockTransport(handler))

    async with client:
        with pytest.raises(AirtableError) as excinfo:
            await client.fetch_first_page("Categories")

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_empty_api_key_is_rejected():
    with pytest.raises(AirtableError):
        AirtableClient(api_key="  ", base_id="appTEST")


def test_empty_base_id_is_rejected():
    with pytest.raises(AirtableError):
        AirtableClient(api_key="keyTEST", base_id="")
