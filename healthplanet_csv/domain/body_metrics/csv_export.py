"""CSV rendering of daily body measurements."""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Iterable, List, NamedTuple

from ...errors import ParseError
from ...models.body import MeasurementRecord

CSV_HEADER = ["Date", "Weight", "BMI", "Fat"]
DATE_FORMAT = "%Y-%m-%d"


class CsvRow(NamedTuple):
    day: date
    weight_kg: float
    bmi: float
    body_fat_percent: float


def _fixed(value: float) -> str:
    return f"{value:.6f}"


def render_csv(records: Iterable[MeasurementRecord]) -> str:
    """Render records as ``Date,Weight,BMI,Fat`` rows with six decimals."""

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in records:
        writer.writerow(
            [
                record.day.strftime(DATE_FORMAT),
                _fixed(record.weight_kg),
                _fixed(record.bmi),
                _fixed(record.body_fat_percent),
            ]
        )
    return output.getvalue()


def parse_csv(text: str) -> List[CsvRow]:
    """Read back text produced by :func:`render_csv`."""

    reader = csv.reader(io.StringIO(text))
    header = next(reader, None)
    if header != CSV_HEADER:
        raise ParseError(f"unexpected CSV header: {header!r}")

    rows: List[CsvRow] = []
    for line in reader:
        if not line:
            continue
        try:
            day_text, weight, bmi, fat = line
            rows.append(
                CsvRow(
                    day=datetime.strptime(day_text, DATE_FORMAT).date(),
                    weight_kg=float(weight),
                    bmi=float(bmi),
                    body_fat_percent=float(fat),
                )
            )
        except ValueError as exc:
            raise ParseError(f"malformed CSV row {line!r}") from exc
    return rows


__all__ = ["CSV_HEADER", "CsvRow", "parse_csv", "render_csv"]
