from __future__ import annotations

from enum import Enum

from pydantic import Field

from ..catalog.models import CamelModel


class SubscriptionTier(str, Enum):
    """Customer service level. Declaration order is the priority order, lowest first."""

    FREE = "FREE"
    PREMIUM = "PREMIUM"

    @property
    def rank(self) -> int:
        return list(SubscriptionTier).index(self)


class CustomerCandidate(CamelModel):
    id: str = Field(..., min_length=1)
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE


class StylistSlot(CamelModel):
    id: str = Field(..., min_length=1)
    elo_rating: float
    cost_per_hour: float = Field(default=0.0, ge=0.0)
    distance: float = Field(default=0.0, ge=0.0)
    capacity: int = Field(default=1, ge=0)


class Pair(CamelModel):
    customer_id: str
    stylist_id: str


class StableMatchRequest(CamelModel):
    customers: list[CustomerCandidate] = Field(default_factory=list)
    stylists: list[StylistSlot] = Field(default_factory=list)


class MatchingResult(CamelModel):
    pairs: list[Pair]
    proposals: int
