"""Best-effort Wikipedia lookup for author biography links."""

from __future__ import annotations

import json
import logging
import os
from json import JSONDecodeError
from typing import Any

import requests

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
REQUEST_TIMEOUT_SECONDS = 20
USER_AGENT = "LOA-Scraper/1.0 (https://github.com/example/loa-scraper)"
UNKNOWN_AUTHOR = "Unknown"

LOGGER = logging.getLogger(__name__)


def find_author_wikipedia_link(author: str, session: requests.Session | None = None) -> str:
    """Return the first Wikipedia article URL for author, or "" if none.

    Never raises: network errors, error statuses and malformed payloads all
    degrade to an empty link. No retry.
    """
    if not author or author == UNKNOWN_AUTHOR:
        return ""
    return _lookup_author_link(author, session) or ""


def _lookup_author_link(author: str, session: requests.Session | None) -> str | None:
    url = os.getenv("WIKIPEDIA_API_URL", WIKIPEDIA_API_URL)
    timeout = float(os.getenv("REQUEST_TIMEOUT_SECONDS", REQUEST_TIMEOUT_SECONDS))
    get = session.get if session is not None else requests.get
    params = {
        "action": "opensearch",
        "search": author,
        "limit": 1,
        "format": "json",
    }

    try:
        response = get(url, params=params, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
        text = response.text
    except (requests.RequestException, UnicodeDecodeError) as exc:
        LOGGER.debug("Wikipedia lookup failed for author=%r: %s", author, exc)
        return None

    if not text or not text.strip():
        LOGGER.debug("Wikipedia lookup returned an empty body for author=%r", author)
        return None

    try:
        payload = json.loads(text)
    except (JSONDecodeError, RecursionError):
        LOGGER.debug("Wikipedia lookup returned non-JSON for author=%r", author)
        return None

    return _first_result_url(payload)


def _first_result_url(payload: Any) -> str | None:
    """Pick urls[0] from an OpenSearch payload: [query, titles, descriptions, urls]."""
    if not isinstance(payload, list) or len(payload) < 4:
        return None

    urls = payload[3]
    if not isinstance(urls, list) or not urls:
        return None

    first = urls[0]
    return first if isinstance(first, str) and first else None
