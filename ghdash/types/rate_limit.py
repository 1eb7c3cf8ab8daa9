"""Rate-limit data model."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Last observed API quota. Fields are None when the header was absent."""

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None  # epoch seconds

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitSnapshot":
        return cls(
            limit=_parse_int(headers.get("X-RateLimit-Limit")),
            remaining=_parse_int(headers.get("X-RateLimit-Remaining")),
            reset=_parse_int(headers.get("X-RateLimit-Reset")),
        )

    @property
    def reset_at(self) -> datetime | None:
        if self.reset is None:
            return None
        return datetime.fromtimestamp(self.reset, tz=timezone.utc)
