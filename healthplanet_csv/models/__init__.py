from .body import (
    Innerscan,
    MeasurementRecord,
    MeasurementTag,
    RawSample,
    SubjectProfile,
)
from .token import ONE_WEEK_SECONDS, Credential

__all__ = [
    'Credential',
    'Innerscan',
    'MeasurementRecord',
    'MeasurementTag',
    'ONE_WEEK_SECONDS',
    'RawSample',
    'SubjectProfile',
]
