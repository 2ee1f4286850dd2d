"""Turn tagged innerscan samples into one measurement per day."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from itertools import groupby
from typing import Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError

from ...errors import MeasurementValidationError, ParseError, UnknownTagError
from ...models.body import (
    Innerscan,
    MeasurementRecord,
    MeasurementTag,
    RawSample,
    SubjectProfile,
)

logger = logging.getLogger(__name__)

INSTANT_KEY_FORMAT = "%Y%m%d%H%M"
BIRTH_DATE_FORMAT = "%Y%m%d"


class InnerscanSampleResponse(BaseModel):
    date: str
    keydata: Optional[str] = ""
    tag: str
    model: str = ""


class InnerscanResponse(BaseModel):
    """Wire format of ``/status/innerscan.json``."""

    birth_date: str
    height: str
    sex: str = ""
    data: List[InnerscanSampleResponse] = Field(default_factory=list)


@dataclass
class _PendingRecord:
    instant: datetime
    weight_kg: float = 0.0
    body_fat_percent: float = 0.0
    bmi: float = 0.0


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Return ``weight / height_m**2`` or 0 when either input is missing."""

    if weight_kg == 0 or height_cm == 0:
        return 0.0
    return weight_kg / (height_cm / 100) ** 2


def parse_instant_key(key: str) -> datetime:
    """Parse a ``YYYYMMDDhhmm`` key, read as UTC wall-clock time."""

    try:
        parsed = datetime.strptime(key, INSTANT_KEY_FORMAT)
    except ValueError as exc:
        raise ParseError(f"failed to parse date {key!r}") from exc
    return parsed.replace(tzinfo=timezone.utc)


def _parse_float(value: str, field: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ParseError(f"failed to parse {field} {value!r}") from exc


def _parse_tag(tag: str) -> MeasurementTag:
    try:
        return MeasurementTag(tag)
    except ValueError:
        raise UnknownTagError(tag) from None


def parse_profile(response: InnerscanResponse) -> SubjectProfile:
    try:
        birth_date = datetime.strptime(response.birth_date, BIRTH_DATE_FORMAT).date()
    except ValueError as exc:
        raise ParseError(f"failed to parse birth date {response.birth_date!r}") from exc
    return SubjectProfile(
        birth_date=birth_date,
        height_cm=_parse_float(response.height, "height"),
        sex=response.sex,
    )


def parse_samples(response: InnerscanResponse) -> List[RawSample]:
    """Convert wire samples to ``RawSample``; any unknown tag aborts."""

    return [
        RawSample(
            instant_key=item.date,
            tag=_parse_tag(item.tag),
            value=item.keydata or "",
            model=item.model,
        )
        for item in response.data
    ]


def reconcile(
    samples: Iterable[RawSample],
    height_cm: float,
    tz: tzinfo = timezone.utc,
) -> List[MeasurementRecord]:
    """Merge samples per instant, validate, then keep the latest per day.

    Samples are grouped by exact instant key. An empty value leaves the
    reading for that instant unchanged. Records failing validation are
    dropped before the per-day pick, so an invalid later reading never hides
    an earlier valid one.
    """

    pending: Dict[str, _PendingRecord] = {}
    for sample in samples:
        record = pending.get(sample.instant_key)
        if record is None:
            record = _PendingRecord(instant=parse_instant_key(sample.instant_key))
            pending[sample.instant_key] = record

        if sample.tag is MeasurementTag.WEIGHT:
            if sample.value != "":
                record.weight_kg = _parse_float(sample.value, "weight")
        elif sample.tag is MeasurementTag.BODY_FAT:
            if sample.value != "":
                record.body_fat_percent = _parse_float(sample.value, "body fat")
        else:
            raise UnknownTagError(str(sample.tag))

        if record.weight_kg != 0 and height_cm != 0:
            record.bmi = calculate_bmi(record.weight_kg, height_cm)

    valid: List[MeasurementRecord] = []
    for key in sorted(pending):
        record = pending[key]
        local_instant = record.instant.astimezone(tz)
        candidate = MeasurementRecord(
            day=local_instant.date(),
            instant=local_instant,
            instant_key=key,
            weight_kg=record.weight_kg,
            body_fat_percent=record.body_fat_percent,
            bmi=record.bmi,
        )
        try:
            candidate.validate_values()
        except MeasurementValidationError as exc:
            logger.warning("Dropping measurement at %s: %s", key, exc)
            continue
        valid.append(candidate)

    return dedupe_by_day(valid)


def dedupe_by_day(records: Iterable[MeasurementRecord]) -> List[MeasurementRecord]:
    """Keep the record with the greatest instant key for each day."""

    ordered = sorted(records, key=lambda r: (r.day, r.instant_key))
    return [list(group)[-1] for _, group in groupby(ordered, key=lambda r: r.day)]


def _resolve_timezone(tz: Union[str, tzinfo]) -> tzinfo:
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ParseError(f"unknown timezone {tz!r}") from exc


def decode_innerscan(
    payload: Union[bytes, str], tz: Union[str, tzinfo] = timezone.utc
) -> Innerscan:
    """Decode a raw innerscan payload into profile and daily records."""

    try:
        response = InnerscanResponse.model_validate_json(payload)
    except ValidationError as exc:
        raise ParseError(f"malformed innerscan response: {exc}") from exc

    profile = parse_profile(response)
    samples = parse_samples(response)
    logger.debug("Decoded %d raw samples", len(samples))
    records = reconcile(samples, profile.height_cm, _resolve_timezone(tz))
    logger.info("Reconciled %d samples into %d daily records", len(samples), len(records))
    return Innerscan(profile=profile, records=records)


__all__ = [
    "InnerscanResponse",
    "InnerscanSampleResponse",
    "calculate_bmi",
    "decode_innerscan",
    "dedupe_by_day",
    "parse_instant_key",
    "parse_profile",
    "parse_samples",
    "reconcile",
]
