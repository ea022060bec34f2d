# FILE: voyage/models/memory.py
"""
Memory models
"""
from datetime import date
from typing import Annotated, Optional
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, StringConstraints, TypeAdapter, field_validator

from voyage.exceptions import ValidationError as VoyageValidationError
from voyage.services.dates import parse_date

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
PlaceName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
Photo = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

_url_adapter = TypeAdapter(HttpUrl)


def _check_location_link(v):
    if v is None:
        return None
    if not isinstance(v, str):
        raise ValueError("Location link must be a valid URL")
    v = v.strip()
    if not v:
        return None
    try:
        _url_adapter.validate_python(v)
    except ValueError:
        raise ValueError("Location link must be a valid URL")
    return v


def _check_iso_date(v):
    if v is None or isinstance(v, date):
        return v
    try:
        return parse_date(v)
    except VoyageValidationError:
        raise ValueError("Must be a valid ISO date")


class MemoryCreate(BaseModel):
    """Create memory request"""
    model_config = ConfigDict(extra="ignore")

    title: Title
    description: Optional[Description] = None
    placeName: PlaceName
    locationLink: Optional[str] = Field(default=None, description="Absolute http(s) URL")
    fromDate: date
    toDate: date
    photo: Photo = Field(..., description="Base64 encoded image")

    @field_validator("locationLink", mode="before")
    @classmethod
    def validate_location_link(cls, v):
        return _check_location_link(v)

    @field_validator("fromDate", "toDate", mode="before")
    @classmethod
    def validate_dates(cls, v):
        return _check_iso_date(v)


class MemoryUpdate(BaseModel):
    """Partial memory update; only the fields sent are applied"""
    model_config = ConfigDict(extra="ignore")

    title: Optional[Title] = None
    description: Optional[Description] = None
    placeName: Optional[PlaceName] = None
    locationLink: Optional[str] = None
    fromDate: Optional[date] = None
    toDate: Optional[date] = None
    photo: Optional[Photo] = None

    @field_validator("locationLink", mode="before")
    @classmethod
    def validate_location_link(cls, v):
        return _check_location_link(v)

    @field_validator("fromDate", "toDate", mode="before")
    @classmethod
    def validate_dates(cls, v):
        return _check_iso_date(v)
