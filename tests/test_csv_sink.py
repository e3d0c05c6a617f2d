from __future__ import annotations

import csv
import io
from pathlib import Path

import pytest

from csv_sink import CSV_COLUMNS, VolumeCsvSink
from models import Volume

SAMPLE_VOLUME = Volume(
    volume_number=1,
    title="The Adventures of Tom Sawyer",
    author="Mark Twain",
    author_wikipedia_link="https://en.wikipedia.org/wiki/Mark_Twain",
    loa_detail_link="https://www.loa.org/books/1",
    original_volume_name="Mark Twain: The Adventures of Tom Sawyer",
)


def test_columns_follow_volume_field_order() -> None:
    assert CSV_COLUMNS == [
        "volume_number",
        "title",
        "author",
        "author_wikipedia_link",
        "loa_detail_link",
        "original_volume_name",
        "own_volume",
    ]


def test_write_creates_file_with_header(tmp_path: Path) -> None:
    output = tmp_path / "volumes.csv"

    with VolumeCsvSink(output) as sink:
        sink.open()
        sink.write(SAMPLE_VOLUME)

    with output.open(newline="", encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))

    assert len(rows) == 1
    row = rows[0]
    assert row["volume_number"] == "1"
    assert row["author"] == "Mark Twain"
    assert row["title"] == "The Adventures of Tom Sawyer"
    assert row["own_volume"] == ""


def test_file_not_created_until_opened(tmp_path: Path) -> None:
    output = tmp_path / "never.csv"

    with VolumeCsvSink(output):
        pass

    assert not output.exists()


def test_values_with_delimiters_and_quotes_are_quoted() -> None:
    stream = io.StringIO()
    volume = Volume(
        volume_number=2,
        title='Typee, Omoo, "Mardi"',
        author="Herman Melville",
        author_wikipedia_link="",
        loa_detail_link="",
        original_volume_name='Herman Melville: Typee, Omoo, "Mardi"',
    )

    sink = VolumeCsvSink(stream=stream)
    sink.open()
    sink.write(volume)

    lines = stream.getvalue().splitlines()
    assert lines[0] == ",".join(CSV_COLUMNS)
    assert lines[1] == (
        '2,"Typee, Omoo, ""Mardi""",Herman Melville,,,'
        '"Herman Melville: Typee, Omoo, ""Mardi""",'
    )


def test_rows_are_counted_and_header_written_once() -> None:
    stream = io.StringIO()
    sink = VolumeCsvSink(stream=stream)
    sink.open()
    sink.open()
    sink.write(SAMPLE_VOLUME)
    sink.write(SAMPLE_VOLUME)

    assert sink.rows_written == 2
    assert stream.getvalue().count("volume_number") == 1


def test_write_before_open_raises() -> None:
    sink = VolumeCsvSink(stream=io.StringIO())
    with pytest.raises(RuntimeError):
        sink.write(SAMPLE_VOLUME)


def test_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    with VolumeCsvSink() as sink:
        sink.open()
        sink.write(SAMPLE_VOLUME)

    out = capsys.readouterr().out
    assert out.startswith("volume_number,title,author,")
    assert "Mark Twain" in out


def test_unwritable_destination_raises(tmp_path: Path) -> None:
    sink = VolumeCsvSink(tmp_path / "missing-dir" / "volumes.csv")
    with pytest.raises(OSError):
        sink.open()
