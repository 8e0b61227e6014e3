"""Validated options for a single report run."""
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class ReportOptions(BaseModel):
    """Pydantic schema for report run arguments."""
    csv_path: Path = Field(description="Ledger file to read")
    location: str = Field(min_length=1, description="IANA time zone name used for 'today'")
    days_back: int = Field(gt=0, description="Entries older than this many days are ignored")
    include_all: bool = Field(default=False, description="Disable the recency filter")
    show_records: bool = Field(default=True, description="Include the per-record listing")

    @field_validator("csv_path", mode="before")
    @classmethod
    def _require_path(cls, value):
        if value is None or str(value).strip() == "":
            raise ValueError("You must specify a CSV file")
        return value

    @field_validator("location")
    @classmethod
    def _known_location(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ValueError(f"Invalid location: {value}") from e
        return value

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.location)

    @property
    def window(self) -> Optional[int]:
        """Days-back window, or None when the whole file is reported."""
        return None if self.include_all else self.days_back
