"""CSV output for scraped volumes (file or stdout)."""

from __future__ import annotations

import csv
import logging
import sys
from dataclasses import asdict, fields
from pathlib import Path
from typing import TextIO

from models import Volume

LOGGER = logging.getLogger(__name__)

CSV_COLUMNS = [f.name for f in fields(Volume)]


class VolumeCsvSink:
    """Write Volume rows with a header to a CSV file, or to stdout when path is None.

    Nothing is created or written until open() is called, so a run that finds
    no volumes leaves no empty file behind. Use as a context manager so the
    file is closed even when the run fails.
    """

    def __init__(self, path: str | Path | None = None, stream: TextIO | None = None) -> None:
        self.path = Path(path) if path else None
        self._stream = stream
        self._owns_stream = False
        self._writer: csv.DictWriter | None = None
        self.rows_written = 0

    @property
    def is_open(self) -> bool:
        return self._writer is not None

    def open(self) -> None:
        """Create the destination and write the header row.

        Raises OSError when the output file cannot be created.
        """
        if self._writer is not None:
            return

        if self._stream is None:
            if self.path is not None:
                self._stream = self.path.open("w", newline="", encoding="utf-8")
                self._owns_stream = True
            else:
                self._stream = sys.stdout

        self._writer = csv.DictWriter(self._stream, fieldnames=CSV_COLUMNS, lineterminator="\n")
        self._writer.writeheader()
        LOGGER.debug("Opened CSV output %s", self.path or "<stdout>")

    def write(self, volume: Volume) -> None:
        if self._writer is None:
            raise RuntimeError("CSV sink must be opened before writing")
        self._writer.writerow(asdict(volume))
        self.rows_written += 1

    def close(self) -> None:
        if self._stream is None:
            return
        self._stream.flush()
        if self._owns_stream:
            self._stream.close()
        self._stream = None
        self._writer = None

    def __enter__(self) -> VolumeCsvSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
