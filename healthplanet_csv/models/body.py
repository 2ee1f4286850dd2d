from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from ..errors import MeasurementValidationError


class MeasurementTag(str, Enum):
    """Innerscan tag codes understood by this tool."""

    WEIGHT = "6021"
    BODY_FAT = "6022"


@dataclass(frozen=True)
class RawSample:
    """A single tagged reading as returned by the innerscan endpoint."""

    instant_key: str
    tag: MeasurementTag
    value: str
    model: str = ""


class SubjectProfile(BaseModel):
    """Profile metadata returned alongside the measurements."""

    birth_date: date
    height_cm: float = Field(..., description="Body height in centimeters")
    sex: str = Field(..., description="Sex as reported by Health Planet")


class MeasurementRecord(BaseModel):
    """Weight, body fat and BMI taken at one instant."""

    day: date = Field(..., description="Calendar day of the measurement")
    instant: datetime = Field(..., description="Measurement time at minute precision")
    instant_key: str = Field(..., description="Raw instant key from the payload")
    weight_kg: float = Field(0.0, description="Body weight in kilograms")
    body_fat_percent: float = Field(0.0, description="Body fat percentage")
    bmi: float = Field(0.0, description="Body mass index derived from weight and height")

    def validate_values(self) -> None:
        if not self.instant_key or self.instant.replace(tzinfo=None) == datetime.min:
            raise MeasurementValidationError("date is not set")
        # NaN fails every comparison
        if not (math.isfinite(self.weight_kg) and self.weight_kg > 0):
            raise MeasurementValidationError("weight must be greater than 0")
        if not 0 <= self.body_fat_percent <= 100:
            raise MeasurementValidationError("body fat must be between 0 and 100")
        if not self.bmi >= 0:
            raise MeasurementValidationError("BMI must be greater than or equal to 0")

    class Config:
        json_schema_extra = {
            "example": {
                "day": "2024-05-01",
                "instant": "2024-05-01T08:00:00+00:00",
                "instant_key": "202405010800",
                "weight_kg": 65.0,
                "body_fat_percent": 20.0,
                "bmi": 22.491349,
            }
        }


class Innerscan(BaseModel):
    """Decoded result of one innerscan fetch."""

    profile: SubjectProfile
    records: List[MeasurementRecord] = Field(default_factory=list)
