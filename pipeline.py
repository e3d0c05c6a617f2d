"""Scrape, enrich and write Library of America volumes."""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Protocol

import requests
from tqdm import tqdm

from loa_listing import fetch_collection_page, parse_volumes
from models import Volume
from pacing import FixedDelayPacer
from wikipedia_client import find_author_wikipedia_link

LOGGER = logging.getLogger(__name__)

_PROGRESS_TITLE_CHARS = 40


class VolumeSink(Protocol):
    """Destination for finished volumes; csv_sink.VolumeCsvSink is the usual one."""

    def open(self) -> None: ...

    def write(self, volume: Volume) -> None: ...


class Pacer(Protocol):
    """Politeness hook around each lookup; pacing.FixedDelayPacer is the default."""

    def before_record(self, index: int) -> None: ...

    def after_record(self, index: int) -> None: ...


def filter_volume_range(volumes: Iterable[Volume], start: int, end: int | None) -> list[Volume]:
    """Keep volumes numbered start..end inclusive (no upper bound when end is None)."""
    return [
        v for v in volumes
        if v.volume_number >= start and (end is None or v.volume_number <= end)
    ]


def format_volume_range(start: int, end: int | None) -> str:
    return f"{start}-{end}" if end is not None else f"{start}+"


def run(
    sink: VolumeSink,
    start: int = 1,
    end: int | None = None,
    *,
    session: requests.Session | None = None,
    pacer: Pacer | None = None,
    show_progress: bool = True,
) -> int:
    """Run one scrape and return the number of volumes written to sink.

    Fetch or parse failures and sink errors propagate; Wikipedia lookups never
    fail the run. Volumes are enriched and written one at a time in ascending
    volume order. When the range is empty the sink is never opened.
    """
    owns_session = session is None
    session = session or requests.Session()
    pacer = pacer or FixedDelayPacer.from_env()

    try:
        LOGGER.info("Scraping Library of America volumes")
        LOGGER.info("Fetching collection page...")
        html = fetch_collection_page(session)

        LOGGER.info("Parsing volumes...")
        volumes = filter_volume_range(parse_volumes(html), start, end)
        LOGGER.info(
            "Found %s volumes (volumes %s)", len(volumes), format_volume_range(start, end)
        )

        if not volumes:
            LOGGER.warning("No volumes found in specified range")
            return 0

        sink.open()
        LOGGER.info("Processing volumes and finding Wikipedia links...")
        return _enrich_and_write(volumes, sink, session, pacer, show_progress)
    finally:
        if owns_session:
            session.close()


def _enrich_and_write(
    volumes: list[Volume],
    sink: VolumeSink,
    session: requests.Session,
    pacer: Pacer,
    show_progress: bool,
) -> int:
    written = 0
    linked = 0
    pbar = tqdm(total=len(volumes), unit="vol", file=sys.stderr, disable=not show_progress)
    try:
        for index, volume in enumerate(volumes):
            pbar.set_description(
                f"Volume {volume.volume_number}: {volume.title[:_PROGRESS_TITLE_CHARS]}"
            )
            pacer.before_record(index)

            link = find_author_wikipedia_link(volume.author, session=session)
            enriched = volume.with_author_link(link)
            if enriched.author_wikipedia_link:
                linked += 1

            sink.write(enriched)
            written += 1
            pbar.update(1)
            pacer.after_record(index)
    finally:
        pbar.close()

    LOGGER.info("Run complete. written=%s with_wikipedia_link=%s", written, linked)
    return written
