"""Shared typed models for the scraper."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Volume:
    """One Library of America volume as written to the CSV output.

    Field order is the CSV column order.
    """

    volume_number: int
    title: str
    author: str
    author_wikipedia_link: str
    loa_detail_link: str
    original_volume_name: str
    own_volume: str = ""

    def with_author_link(self, link: str) -> Volume:
        """Return a copy carrying the resolved Wikipedia link.

        A volume without an author never gets a link.
        """
        return replace(self, author_wikipedia_link=link if self.author else "")
