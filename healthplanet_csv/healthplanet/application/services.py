"""Application services orchestrating the innerscan export."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Union

from ...domain.body_metrics import decode_innerscan, render_csv
from ...models.body import Innerscan
from .ports import HealthPlanetMeasurementsPort

DEFAULT_WINDOW_DAYS = 90

CsvRenderer = Callable[[Innerscan], str]


def validate_window(from_: date, to: date, max_days: int = DEFAULT_WINDOW_DAYS) -> None:
    """Reject windows the innerscan endpoint would refuse."""

    if from_ > to:
        raise ValueError("From date cannot be after To date.")
    if (to - from_) > timedelta(days=max_days):
        raise ValueError(f"The date range cannot exceed {max_days} days.")


def window_bounds(from_: date, to: date) -> tuple[datetime, datetime]:
    """Expand a day range to timestamps covering both days completely."""

    return datetime.combine(from_, time.min), datetime.combine(to, time(23, 59, 59))


def export_measurements(
    port: HealthPlanetMeasurementsPort,
    from_: date,
    to: date,
    tz: Union[str, tzinfo] = "UTC",
) -> Innerscan:
    """Fetch innerscan data for ``from_``..``to`` and reconcile it."""

    start, end = window_bounds(from_, to)
    payload = port.fetch(start, end)
    return decode_innerscan(payload, tz)


def _render(innerscan: Innerscan) -> str:
    return render_csv(innerscan.records)


@dataclass
class ExportMeasurementsUseCase:
    """Return the CSV export for a validated day range."""

    port: HealthPlanetMeasurementsPort
    timezone: Union[str, tzinfo] = "UTC"
    max_window_days: int = DEFAULT_WINDOW_DAYS
    renderer: CsvRenderer = _render

    def __call__(self, from_: date, to: date) -> str:
        validate_window(from_, to, self.max_window_days)
        innerscan = export_measurements(self.port, from_, to, self.timezone)
        return self.renderer(innerscan)


__all__ = [
    "DEFAULT_WINDOW_DAYS",
    "ExportMeasurementsUseCase",
    "export_measurements",
    "validate_window",
    "window_bounds",
]
