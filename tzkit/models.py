"""Data models for tzkit."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeZoneEntry(BaseModel):
    """One row of the bundled time zone table."""

    label: str = Field(..., description="Human-readable display name")
    value: str = Field(..., description="Canonical IANA identifier or 'UTC'")
    country: Optional[str] = None
    phone_code: Optional[str] = Field(default=None, alias="phoneCode")
    utc_offset: Optional[str] = Field(
        default=None, alias="utcOffset", description="Standard offset as +HH:MM"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the data file, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ConversionError(str, Enum):
    """Failure codes reported by the conversion functions."""

    INVALID_TIME_ZONE = "Invalid timezone provided."
    INVALID_DATE_FORMAT = "Invalid date format."
    INVALID_UNIT = "Invalid time unit provided."


class ConversionResult(BaseModel):
    """Outcome of a conversion.

    Either ``value`` holds the rendered date-time string, or ``error`` and
    ``error_message`` describe why the conversion was rejected.
    """

    success: bool
    value: Optional[str] = None
    error: Optional[ConversionError] = None
    error_message: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def ok(cls, value: str) -> ConversionResult:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: ConversionError) -> ConversionResult:
        return cls(success=False, error=error, error_message=error.value)

    def __bool__(self) -> bool:
        return self.success

    def __str__(self) -> str:
        if self.success:
            return self.value or ""
        return self.error_message or ""


class FormatOptions(BaseModel):
    """Presentation options for rendered date-times.

    ``return_iso`` overrides every other option except ``include_offset``.
    The camelCase names used by the JavaScript-era API are accepted as aliases.
    """

    return_iso: bool = Field(default=True, alias="returnISO")
    is_24_hour: bool = Field(default=True, alias="is24Hour")
    date_separator: str = Field(default="-", alias="dateSeparator")
    time_separator: str = Field(default=":", alias="timeSeparator")
    include_offset: bool = Field(default=False, alias="includeOffset")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
