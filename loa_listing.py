"""Library of America collection page fetching and parsing."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup, Tag

from classifier import split_author_title
from models import Volume

# Single static page listing every volume in the series.
LOA_COLLECTION_URL = "https://www.loa.org/books/loa_collection/"
REQUEST_TIMEOUT_SECONDS = 20

_VOLUME_NUMBER_RE = re.compile(r"\+?[0-9]+")
_MAX_VOLUME_NUMBER = 2**32 - 1

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListingSelectors:
    """CSS selectors locating one catalog entry and its parts."""

    entry: str = "li.content-listing.content-listing--book"
    link: str = "a"
    number: str = "i.book-listing__number"
    title: str = "b.content-listing__title"


DEFAULT_SELECTORS = ListingSelectors()


def fetch_collection_page(session: requests.Session | None = None) -> str:
    """Download the collection page HTML.

    Raises requests.RequestException on network failure or a non-2xx status.
    There is no retry.
    """
    url = os.getenv("LOA_COLLECTION_URL", LOA_COLLECTION_URL)
    timeout = float(os.getenv("REQUEST_TIMEOUT_SECONDS", REQUEST_TIMEOUT_SECONDS))
    get = session.get if session is not None else requests.get

    response = get(url, timeout=timeout)
    response.raise_for_status()
    LOGGER.info("Fetched collection page %s (%s bytes)", url, len(response.content))
    return response.text


def parse_volumes(html: str, selectors: ListingSelectors = DEFAULT_SELECTORS) -> list[Volume]:
    """Parse every catalog entry into a Volume, sorted by volume number.

    Entries missing a number, link or title element, or whose number is not a
    positive integer, are skipped. Duplicate numbers are kept; the sort is
    stable so they stay in document order. A page with no entries yields an
    empty list.
    """
    soup = BeautifulSoup(html, "html.parser")

    volumes: list[Volume] = []
    skipped = 0
    for entry in soup.select(selectors.entry):
        volume = _parse_entry(entry, selectors)
        if volume is None:
            skipped += 1
            continue
        volumes.append(volume)

    volumes.sort(key=lambda v: v.volume_number)
    LOGGER.info("Parsed %s volumes (skipped %s entries)", len(volumes), skipped)
    return volumes


def _parse_entry(entry: Tag, selectors: ListingSelectors) -> Volume | None:
    link = entry.select_one(selectors.link)
    number = entry.select_one(selectors.number)
    title = entry.select_one(selectors.title)
    if link is None or number is None or title is None:
        return None

    volume_number = _parse_volume_number(number.get_text())
    if volume_number is None:
        return None

    label = title.get_text().strip()
    href = link.get("href") or ""
    author, book_title = split_author_title(label)

    return Volume(
        volume_number=volume_number,
        title=book_title,
        author=author,
        author_wikipedia_link="",
        loa_detail_link=str(href),
        original_volume_name=label,
    )


def _parse_volume_number(raw: str) -> int | None:
    """Return the label as a positive integer, or None for placeholders."""
    text = raw.strip()
    if not _VOLUME_NUMBER_RE.fullmatch(text):
        return None
    value = int(text)
    return value if 0 < value <= _MAX_VOLUME_NUMBER else None
