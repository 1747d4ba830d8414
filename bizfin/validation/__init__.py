"""Validation package: the typed boundary for raw backend rows."""

from bizfin.validation.parser import (
    UNSCHEDULED_SENTINELS,
    BizfinError,
    InvalidRecordError,
    RecordParser,
)

__all__ = [
    "UNSCHEDULED_SENTINELS",
    "BizfinError",
    "InvalidRecordError",
    "RecordParser",
]
