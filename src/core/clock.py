"""Injectable source of the current time.

Scoring depends on "now" (deadline proximity, estimated completion date). Services
take an explicit ``now`` and the HTTP layers resolve it through ``get_now`` so tests
can pin it with ``app.dependency_overrides``.
"""

from collections.abc import Callable
from datetime import UTC, datetime


Clock = Callable[[], datetime]


def system_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(UTC)


class FixedClock:
    """Clock that always returns the same instant."""

    def __init__(self, instant: datetime) -> None:
        self._instant = resolve_now(instant)

    def __call__(self) -> datetime:
        return self._instant


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now`` in UTC, defaulting to the system clock.

    Naive values are taken as UTC; aware values are converted.
    """
    if now is None:
        return system_now()
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def get_now() -> datetime:
    """FastAPI dependency providing the request's notion of "now"."""
    return system_now()
