from __future__ import annotations

from dataclasses import dataclass

from ..recommendations.scoring import RankingPolicy, by_attribute
from .models import CustomerCandidate, StylistSlot

# Same chain as the recommendation engine, applied to matching inputs.
STYLIST_RANKING = RankingPolicy((
    by_attribute("elo_rating", descending=True),
    by_attribute("cost_per_hour"),
    by_attribute("distance"),
    by_attribute("id"),
))


@dataclass(frozen=True)
class PolicyPreference:
    """Customer-side preference: every customer orders stylists by one policy."""

    policy: RankingPolicy = STYLIST_RANKING

    def order(self, customer: CustomerCandidate, stylists: list[StylistSlot]) -> list[StylistSlot]:
        return self.policy.rank(stylists)


@dataclass(frozen=True)
class TierPriority:
    """Stylist-side preference: higher subscription tier first, then earlier submission.

    ``key`` returns a sort key; smaller means more preferred.
    """

    def key(self, customer: CustomerCandidate, position: int) -> tuple[int, int]:
        return (-customer.subscription_tier.rank, position)


CUSTOMER_PREFERENCE = PolicyPreference()
STYLIST_PREFERENCE = TierPriority()
