import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Tuple

from shorturls_app.config import settings
from shorturls_app.exceptions import (
    InvalidInputError,
    ShortcodeExpiredError,
    ShortcodeNotFoundError,
    ShortcodeTakenError,
)
from shorturls_app.models.url import ClickEvent, URLRecord, URLStats
from shorturls_app.services.short_code_factory import ShortCodeFactory
from shorturls_app.services.short_code_strategies import ShortCodeStrategy

logger = logging.getLogger(__name__)

# Paths served by the app itself, a short code with these names could never redirect
RESERVED_CODES = frozenset({"health", "shorturls"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class URLRegistry:
    """
    Thread-safe in-memory store of short code -> URLRecord.

    Locking:
    - ``_lock`` guards the key set. It is held for lookups and for the
      generate-check-insert step of ``create``, so two creates can never
      both claim the same code.
    - Each URLRecord has its own lock for its click list, so redirects on
      different codes only share the brief key-set lookup.

    Records are never removed. Expired codes stop redirecting but stay
    visible through ``stats``.
    """

    def __init__(
        self,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        default_validity_minutes: Optional[int] = None,
        geo: Optional[str] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Args:
            short_code_strategy: Generator for codes (defaults to the configured one)
            default_validity_minutes: Used when create() gets no validity
            geo: Value stored in every ClickEvent
            clock: Returns the current time, injectable for tests
        """
        self._records: Dict[str, URLRecord] = {}
        self._lock = threading.Lock()
        self.short_code_strategy = short_code_strategy or ShortCodeFactory.create_strategy()
        self.default_validity_minutes = default_validity_minutes or settings.default_validity_minutes
        self.geo = geo if geo is not None else settings.geo_placeholder
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, short_code: str) -> bool:
        with self._lock:
            return short_code in self._records

    def create(
        self,
        original_url: str,
        requested_code: Optional[str] = None,
        validity_minutes: Optional[int] = None,
    ) -> Tuple[str, datetime]:
        """
        Store a new short URL.

        An empty requested_code is treated as absent, and a zero or missing
        validity falls back to the default.

        Returns:
            (short_code, expires_at)

        Raises:
            InvalidInputError: original_url is empty or the expiry is out of range
            ShortcodeTakenError: requested_code is already stored or reserved
            GenerationExhaustedError: no free code found within the retry cap
        """
        if not original_url:
            raise InvalidInputError()

        validity = validity_minutes or self.default_validity_minutes
        created_at = self._clock()
        try:
            expires_at = created_at + timedelta(minutes=validity)
        except OverflowError:
            raise InvalidInputError()
        record = URLRecord(original_url=original_url, created_at=created_at, expires_at=expires_at)

        with self._lock:
            if requested_code:
                if self._is_taken(requested_code):
                    logger.info("Rejected create: shortcode %r already exists", requested_code)
                    raise ShortcodeTakenError()
                short_code = requested_code
            else:
                short_code = self.short_code_strategy.generate(
                    len(self._records) + 1, self._is_taken
                )
            self._records[short_code] = record

        logger.info(
            "Created shortcode %r -> %s (expires %s)",
            short_code, original_url, record.expires_at.isoformat()
        )
        return short_code, record.expires_at

    def resolve(self, short_code: str, referrer: str = "") -> str:
        """
        Look up a code for redirection and record the click.

        Raises:
            ShortcodeNotFoundError: unknown code
            ShortcodeExpiredError: the code's validity window has passed
        """
        record = self._get(short_code)

        now = self._clock()
        if record.is_expired(now):
            logger.debug("Shortcode %r expired at %s", short_code, record.expires_at.isoformat())
            raise ShortcodeExpiredError()

        record.add_click(ClickEvent(timestamp=now, referrer=referrer or "", geo=self.geo))
        return record.original_url

    def stats(self, short_code: str) -> URLStats:
        """Snapshot of a record. Expired codes are still reported."""
        return self._get(short_code).snapshot()

    def _is_taken(self, short_code: str) -> bool:
        # Caller holds _lock
        return short_code in self._records or short_code in RESERVED_CODES

    def _get(self, short_code: str) -> URLRecord:
        with self._lock:
            record = self._records.get(short_code)
        if record is None:
            logger.debug("Shortcode %r not found", short_code)
            raise ShortcodeNotFoundError()
        return record
