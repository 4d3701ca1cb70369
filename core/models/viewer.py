# =============================================================================
# core/models/viewer.py - Viewer Context
# =============================================================================
# Who is asking, and what their clock says.
#
# Every query-issuing function receives a ViewerContext explicitly instead of
# reading a global "current user". Date buckets are evaluated against the
# viewer's local calendar day, so the zone travels with the user id.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class ViewerContext:
    """
    Identity and clock for one request.

    Attributes:
        user_id: Signed-in user's id, or None for anonymous browsing
        tz: The viewer's IANA time zone
        now: The instant the request is evaluated at (aware)

    Example:
        viewer = ViewerContext.create(user_id="u-1", tz_name="America/Chicago")
        viewer.today_start()  # local midnight, tz-aware
    """

    user_id: str | None
    tz: ZoneInfo
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        user_id: str | None = None,
        tz_name: str = "UTC",
        now: datetime | None = None,
    ) -> ViewerContext:
        """
        Build a context from raw values.

        Raises:
            zoneinfo.ZoneInfoNotFoundError: If tz_name is not a known zone
        """
        tz = ZoneInfo(tz_name)
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=tz)
        return cls(user_id=str(user_id) if user_id else None, tz=tz, now=now)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def local_now(self) -> datetime:
        return self.now.astimezone(self.tz)

    def local_today(self) -> date:
        return self.local_now().date()

    def local_midnight(self, day: date) -> datetime:
        """Start of the given calendar day in the viewer's zone."""
        return datetime.combine(day, time.min, tzinfo=self.tz)

    def today_start(self) -> datetime:
        return self.local_midnight(self.local_today())
