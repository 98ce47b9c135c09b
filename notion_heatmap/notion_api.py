from collections.abc import Mapping
from typing import Any

import httpx


def build_query_body(
    date_property: str, start_cursor: str | None = None
) -> dict[str, object]:
    """Build the database query body filtering pages with a set date."""

    body: dict[str, object] = {
        "filter": {"property": date_property, "date": {"is_not_empty": True}},
        "sorts": [{"property": date_property, "direction": "ascending"}],
        "page_size": 100,
    }
    if start_cursor:
        body["start_cursor"] = start_cursor
    return body


def query_database(
    database_id: str,
    token: str,
    date_property: str,
    api_url: str,
    notion_version: str,
) -> list[dict[str, Any]]:
    """Fetch every page of a Notion database that has `date_property` set."""

    if not token:
        raise ValueError("NOTION_TOKEN is required for database queries")

    headers = {
        "Authorization": f"Bearer {token}",
        "Notion-Version": notion_version,
        "Content-Type": "application/json",
    }
    url = f"{api_url.rstrip('/')}/databases/{database_id}/query"

    records: list[dict[str, Any]] = []
    start_cursor: str | None = None
    while True:
        response = httpx.post(
            url,
            json=build_query_body(date_property, start_cursor),
            headers=headers,
            timeout=20.0,
        )
        response.raise_for_status()

        payload: Any = response.json()
        if not isinstance(payload, Mapping):
            raise ValueError("Notion query response is invalid")

        results = payload.get("results")
        if not isinstance(results, list):
            raise ValueError("Notion query results are missing")

        records.extend(item for item in results if isinstance(item, Mapping))

        next_cursor = payload.get("next_cursor")
        if not payload.get("has_more") or not isinstance(next_cursor, str):
            break
        start_cursor = next_cursor

    return records
