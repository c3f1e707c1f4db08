"""Public render path: live collection merged with the bundled fallback list.

The live records come from the collection endpoints over HTTP, exactly as
any other consumer would see them.  A failed fetch never aborts a page; it
degrades to an empty live list so the static records are still served.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from visacms.config import FETCH_TIMEOUT, PUBLIC_BASE_URL, SITE_NAME
from visacms.services.normalizer import slugify

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

DEFAULT_NEWS_TITLE = f"Latest Visa & Immigration News | {SITE_NAME}"
DEFAULT_NEWS_DESCRIPTION = (
    "Get the latest updates on visa changes, migration routes, and PR policies "
    "impacting Indian migrants."
)
DEFAULT_VISA_DESCRIPTION = "Eligibility, documents and processing details for this visa program."


async def fetch_live_records(path: str) -> List[Record]:
    """GET *path* from the public base URL and return the decoded record list.

    Returns an empty list on any transport error, non-2xx status, or a body
    that is not a JSON array.
    """
    url = PUBLIC_BASE_URL.rstrip("/") + path
    try:
        async with httpx.AsyncClient(timeout=FETCH_TIMEOUT) as client:
            response = await client.get(url, headers={"Cache-Control": "no-cache"})
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Error loading live records from %s: %s", url, exc)
        return []

    if not isinstance(data, list):
        logger.warning("Unexpected payload from %s: %s", url, type(data).__name__)
        return []
    return [item for item in data if isinstance(item, dict)]


def merge_records(live: List[Record], static: List[Record]) -> List[Record]:
    """Return *live* followed by *static*; live entries win on lookup."""
    return [*live, *static]


def news_key(record: Record) -> str:
    return slugify(record.get("title") or "")


def visa_key(record: Record) -> str:
    return slugify(record.get("slug") or record.get("name") or "")


def find_record(
    records: List[Record], slug: str, key: Callable[[Record], str] = news_key
) -> Optional[Record]:
    """Return the first record whose lookup key equals *slug*, or *None*."""
    for record in records:
        if key(record) == slug:
            return record
    return None


def other_records(
    records: List[Record], slug: str, key: Callable[[Record], str] = news_key
) -> List[Record]:
    return [record for record in records if key(record) != slug]


def lookup_paths(records: List[Record], key: Callable[[Record], str] = news_key) -> List[str]:
    """Every distinct, non-empty lookup key in *records*, in first-seen order."""
    seen: set = set()
    paths: List[str] = []
    for record in records:
        path = key(record)
        if path and path not in seen:
            seen.add(path)
            paths.append(path)
    return paths


def news_metadata(story: Record) -> Dict[str, str]:
    return {
        "title": f"{story.get('title', '')} | {SITE_NAME}",
        "description": story.get("summary") or story.get("description") or DEFAULT_NEWS_DESCRIPTION,
    }


def visa_metadata(visa: Record) -> Dict[str, str]:
    return {
        "title": visa.get("metaTitle") or f"{visa.get('name', '')} | {SITE_NAME}",
        "description": (
            visa.get("metaDescription") or visa.get("description") or DEFAULT_VISA_DESCRIPTION
        ),
        "keywords": visa.get("metaKeywords") or None,
    }
