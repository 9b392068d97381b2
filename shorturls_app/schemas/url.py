from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StrictInt

from shorturls_app.config import settings


def to_rfc3339(value: datetime) -> str:
    """Format as RFC3339 in UTC with second precision, e.g. 2026-10-18T12:00:00Z"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_short_link(short_code: str) -> str:
    return f"{settings.base_url.rstrip('/')}/{short_code}"


RFC3339Datetime = Annotated[datetime, PlainSerializer(to_rfc3339, return_type=str)]


class URLCreate(BaseModel):
    """Body of POST /shorturls"""
    url: str = Field(..., min_length=1, description="The original URL to be shortened")
    # Strict: "5" is rejected like any other non-integer. Negative values give an already expired link
    validity: Optional[StrictInt] = Field(None, description="Validity window in minutes (0 or absent: default)")
    shortcode: Optional[str] = Field(None, description="Custom short code")


class URLCreateResponse(BaseModel):
    short_link: str = Field(..., alias="shortLink")
    expiry: RFC3339Datetime

    # Pydantic V2 style configuration
    model_config = ConfigDict(populate_by_name=True)


class ClickResponse(BaseModel):
    time: RFC3339Datetime
    referrer: str
    geo: str


class URLStatsResponse(BaseModel):
    total_clicks: int = Field(..., alias="totalClicks")
    original_url: str = Field(..., alias="originalURL")
    created_at: RFC3339Datetime = Field(..., alias="createdAt")
    expiry: RFC3339Datetime
    clicks: List[ClickResponse]

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
