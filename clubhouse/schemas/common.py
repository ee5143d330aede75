"""
Shared schema helpers
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are UTC (SQLite drops the offset); aware ones are converted to UTC"""
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
