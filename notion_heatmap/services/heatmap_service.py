import logging
from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

import httpx

from notion_heatmap.notion_api import query_database
from notion_heatmap.settings import Settings


logger = logging.getLogger(__name__)

HEATMAP_COLORS = ("#ebedf0", "#c6e48b", "#7bc96f", "#239a3b", "#196127")


class InvalidNotionTokenError(Exception):
    """Raised when Notion rejects the provided token."""


class NotionAPIError(Exception):
    """Raised when Notion requests fail for non-auth reasons."""


def contribution_level(count: int) -> int:
    """Map a daily record count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    if count == 1:
        return 1
    if count <= 3:
        return 2
    if count <= 6:
        return 3
    return 4


def color_for_count(count: int) -> str:
    return HEATMAP_COLORS[contribution_level(count)]


def extract_record_date(record: Mapping[str, Any], property_name: str) -> str | None:
    """Return the `YYYY-MM-DD` part of a page's date property, if present."""

    properties = record.get("properties")
    if not isinstance(properties, Mapping):
        return None
    date_property = properties.get(property_name)
    if not isinstance(date_property, Mapping):
        return None
    date_value = date_property.get("date")
    if not isinstance(date_value, Mapping):
        return None
    start = date_value.get("start")
    if not isinstance(start, str) or not start:
        return None
    return start.split("T", 1)[0]


def count_records_by_date(
    records: Iterable[Mapping[str, Any]], property_name: str
) -> dict[str, int]:
    """Count records per calendar day, skipping records without a start date."""

    counts: dict[str, int] = {}
    for record in records:
        day = extract_record_date(record, property_name)
        if day is None:
            continue
        counts[day] = counts.get(day, 0) + 1
    return counts


def total_count(counts: Mapping[str, int]) -> int:
    return sum(counts.values())


def fetch_date_counts(
    settings: Settings, database_id: str, token: str
) -> dict[str, int]:
    """Query a Notion database and aggregate per-day counts of its pages."""

    try:
        records = query_database(
            database_id=database_id,
            token=token,
            date_property=settings.date_property,
            api_url=settings.notion_api_url,
            notion_version=settings.notion_version,
        )
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidNotionTokenError("Notion token is invalid") from exc
        raise NotionAPIError(
            f"Notion API error: {exc.response.status_code}"
        ) from exc
    except Exception as exc:
        raise NotionAPIError("Notion API request failed") from exc

    logger.debug("Received %d records from Notion", len(records))
    return count_records_by_date(records, settings.date_property)
