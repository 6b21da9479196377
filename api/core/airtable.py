"""
Airtable REST client.

Used endpoint:
- GET /v0/{base_id}/{table}?view=...  -> {"records": [{"id": "...", "fields": {...}}], "offset": "..."}

Only the first page of a view is ever read; the `offset` cursor is ignored.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

DEFAULT_API_URL = "https://api.airtable.com/v0"
DEFAULT_VIEW = "Grid view"

logger = logging.getLogger(__name__)


# Airtable failures are explicit and separable from other runtime errors.
class AirtableError(RuntimeError):
    pass


def _normalize_api_url(api_url: str) -> str:
    api_url = (api_url or "").strip()
    if not api_url:
        raise AirtableError("AIRTABLE_API_URL is empty.")
    return api_url.rstrip("/")


def _parse_records(data: Any, *, table_name: str) -> list[dict[str, Any]]:
    records = data.get("records") if isinstance(data, dict) else None
    if not isinstance(records, list):
        raise AirtableError(f"Airtable returned no records list for table {table_name!r}.")

    parsed: list[dict[str, Any]] = []
    for item in records:
        if not isinstance(item, dict):
            continue
        record_id = item.get("id")
        if not isinstance(record_id, str) or not record_id:
            continue
        fields = item.get("fields")
        parsed.append(
            {
                "id": record_id,
                "fields": dict(fields) if isinstance(fields, dict) else {},
            }
        )
    return parsed


class AirtableClient:
    """
    Read-only access to the tables of one Airtable base.

    Construct once per process and close it on shutdown; the underlying
    `httpx.AsyncClient` keeps a connection pool.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_id: str,
        api_url: str = DEFAULT_API_URL,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        api_key = (api_key or "").strip()
        if not api_key:
            raise AirtableError("AIRTABLE_API_KEY is empty.")
        base_id = (base_id or "").strip()
        if not base_id:
            raise AirtableError("AIRTABLE_BASE_ID is empty.")

        self.base_id = base_id
        self._http = httpx.AsyncClient(
            base_url=f"{_normalize_api_url(api_url)}/{quote(base_id, safe='')}",
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout_s,
            transport=transport,
        )

    async def __aenter__(self) -> AirtableClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def fetch_first_page(
        self,
        table_name: str,
        *,
        view: str = DEFAULT_VIEW,
        page_size: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Return the first page of `view` in `table_name` as `{"id", "fields"}` dicts.
        """
        params: dict[str, Any] = {"view": view}
        if page_size is not None:
            params["pageSize"] = int(page_size)

        try:
            resp = await self._http.get(f"/{quote(table_name, safe='')}", params=params)
        except httpx.HTTPError as exc:
            raise AirtableError(f"Airtable request for table {table_name!r} failed: {exc}") from exc

        if resp.status_code != 200:
            # Avoid dumping huge bodies; include a small snippet.
            body = resp.text[:500]
            raise AirtableError(
                f"Airtable list request for table {table_name!r} failed: {resp.status_code} {body}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise AirtableError(f"Airtable returned a non-JSON body for table {table_name!r}.") from exc

        records = _parse_records(data, table_name=table_name)
        logger.debug("airtable_page_fetched table=%s view=%s records=%s", table_name, view, len(records))
        return records
