import threading
from datetime import datetime
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ClickEvent(BaseModel):
    """
    One redirect through a short code.

    Immutable once created; appended to the owning URLRecord.
    """

    timestamp: datetime = Field(..., description="When the redirect happened")
    referrer: str = Field("", description="HTTP referer, empty when the client sent none")
    geo: str = Field(..., description="Country code (placeholder, not derived from the request)")

    model_config = ConfigDict(frozen=True)


class URLStats(BaseModel):
    """Read-only snapshot of a record, as returned by the registry"""

    original_url: str
    created_at: datetime
    expires_at: datetime
    clicks: Tuple[ClickEvent, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def total_clicks(self) -> int:
        return len(self.clicks)


class URLRecord:
    """
    A stored short URL.

    Only the click list changes after creation. Each record has its own lock
    so clicks on different codes never wait on each other.
    """

    __slots__ = ("original_url", "created_at", "expires_at", "_clicks", "_lock")

    def __init__(self, original_url: str, created_at: datetime, expires_at: datetime):
        self.original_url = original_url
        self.created_at = created_at
        self.expires_at = expires_at
        self._clicks: List[ClickEvent] = []
        self._lock = threading.Lock()

    def is_expired(self, now: datetime) -> bool:
        # Strictly after: a lookup at the exact expiry instant is still valid
        return now > self.expires_at

    def add_click(self, click: ClickEvent) -> None:
        with self._lock:
            self._clicks.append(click)

    def snapshot(self) -> URLStats:
        with self._lock:
            clicks = tuple(self._clicks)
        return URLStats(
            original_url=self.original_url,
            created_at=self.created_at,
            expires_at=self.expires_at,
            clicks=clicks,
        )

    def __repr__(self) -> str:
        return f"URLRecord(original_url={self.original_url!r}, expires_at={self.expires_at!r})"
