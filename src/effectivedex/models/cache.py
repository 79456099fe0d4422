"""Cache entry model."""

from pydantic import BaseModel, ConfigDict

from effectivedex.models.payloads import CachePayload


class CacheEntry(BaseModel):
    """A cached value and the time it was fetched.

    Entries are replaced wholesale, never mutated in place.
    """

    model_config = ConfigDict(frozen=True)

    value: CachePayload
    fetched_at: float  # epoch seconds

    def is_live(self, now: float, ttl_seconds: float) -> bool:
        """An entry is valid iff now - fetched_at < TTL."""
        return now - self.fetched_at < ttl_seconds
