# =============================================================================
# core/models/promotions.py - Announcement & Advertisement Schemas
# =============================================================================
# User-created promotional content shown on the dashboard with a derived
# status. Status is never stored; see core/dashboard.py for derivation.
# =============================================================================

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lib.utils import parse_timestamp
from .entities import RowModel


class AnnouncementStatus(str, Enum):
    """
    - active: flagged active and not yet expired
    - inactive: switched off by its owner
    - expired: expires_at has passed (wins over the flag)
    """
    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"


class AdvertisementStatus(str, Enum):
    """
    - pending: start_date is still in the future
    - active: now falls within [start_date, end_date]
    - expired: end_date has passed
    """
    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"


class Announcement(RowModel):
    """An announcements row."""
    id: str
    title: str
    content: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    priority: int = 0
    active: bool = False
    expires_at: datetime | None = None
    learnmore_link: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

    @field_validator("expires_at", mode="before")
    @classmethod
    def parse_expiry(cls, v: Any) -> datetime | None:
        return parse_timestamp(v)

    @field_validator("priority", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> int:
        return v or 0

    @field_validator("active", mode="before")
    @classmethod
    def none_to_false(cls, v: Any) -> bool:
        return bool(v)


class Advertisement(RowModel):
    """
    An advertisements row.

    start_date / end_date may be stored as plain dates; a date-only end_date
    covers the whole day (see core/dashboard.py).
    """
    id: str
    title: str
    content: str | None = None
    button_text: str | None = None
    button_link: str | None = None
    background_image: str | None = None
    start_date: datetime | date
    end_date: datetime | date
    views: int = 0
    clicks: int = 0
    user_id: str | None = None
    price: float | None = None
    created_at: datetime | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_range(cls, v: Any) -> Any:
        # Keep plain dates as dates; they are widened to day bounds later
        if isinstance(v, str) and len(v) == 10:
            return date.fromisoformat(v)
        if isinstance(v, (str, datetime)):
            return parse_timestamp(v)
        return v

    @field_validator("views", "clicks", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> int:
        return v or 0


class AnnouncementSummary(BaseModel):
    """Announcement as shown on the owner's dashboard."""
    id: str
    title: str
    status: AnnouncementStatus
    priority: int = 0
    expires_at: datetime | None = None
    created_at: datetime | None = None


class AdvertisementSummary(BaseModel):
    """Advertisement as shown on the owner's dashboard."""
    id: str
    title: str
    status: AdvertisementStatus
    start_date: datetime | date
    end_date: datetime | date
    views: int = 0
    clicks: int = 0
    click_through_rate: float | None = Field(
        default=None,
        description="clicks / views; omitted when there are no views"
    )


class ActiveAdvertisement(BaseModel):
    """The running advertisement as shown in the public banner."""
    id: str
    title: str
    content: str | None = None
    button_text: str | None = None
    button_link: str | None = None
    background_image: str | None = None

    @classmethod
    def from_advertisement(cls, ad: Advertisement) -> "ActiveAdvertisement":
        return cls(
            id=ad.id,
            title=ad.title,
            content=ad.content,
            button_text=ad.button_text,
            button_link=ad.button_link,
            background_image=ad.background_image,
        )


class AdClickResult(BaseModel):
    """Outcome of recording a banner click."""
    advertisement_id: str
    recorded: bool = Field(
        ...,
        description="False when the counter could not be updated; the click is not retried"
    )
