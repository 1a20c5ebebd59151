from __future__ import annotations

import logging
from collections import deque
from typing import Sequence

from .models import CustomerCandidate, MatchingResult, Pair, StylistSlot
from .preferences import (
    CUSTOMER_PREFERENCE,
    STYLIST_PREFERENCE,
    PolicyPreference,
    TierPriority,
)

logger = logging.getLogger(__name__)


def _check_unique(ids: list[str], label: str) -> None:
    seen: set[str] = set()
    for i in ids:
        if i in seen:
            raise ValueError(f"Duplicate {label} id: {i}")
        seen.add(i)


def _preference_tables(
    customers: Sequence[CustomerCandidate],
    stylists: Sequence[StylistSlot],
    customer_preference: PolicyPreference,
    stylist_preference: TierPriority,
) -> tuple[dict[str, list[str]], dict[str, tuple]]:
    stylist_list = list(stylists)
    prefs = {
        c.id: [s.id for s in customer_preference.order(c, stylist_list)]
        for c in customers
    }
    priority = {c.id: stylist_preference.key(c, pos) for pos, c in enumerate(customers)}
    return prefs, priority


def stable_match(
    customers: Sequence[CustomerCandidate],
    stylists: Sequence[StylistSlot],
    customer_preference: PolicyPreference = CUSTOMER_PREFERENCE,
    stylist_preference: TierPriority = STYLIST_PREFERENCE,
) -> MatchingResult:
    """Customer-proposing deferred acceptance (Gale-Shapley).

    Each free customer proposes to the best stylist that has not rejected it
    yet. A stylist holds the best ``capacity`` proposals seen so far and
    rejects the rest; held proposals can still be displaced later. Stops when
    every customer is held or has been rejected by every stylist, after at
    most ``len(customers) * len(stylists)`` proposals.

    Pairs are returned in customer submission order; unmatched customers and
    stylists are left out.
    """
    _check_unique([c.id for c in customers], "customer")
    _check_unique([s.id for s in stylists], "stylist")
    if not customers or not stylists:
        return MatchingResult(pairs=[], proposals=0)

    prefs, priority = _preference_tables(customers, stylists, customer_preference, stylist_preference)
    capacity = {s.id: s.capacity for s in stylists}
    held: dict[str, list[str]] = {s.id: [] for s in stylists}
    next_choice = {c.id: 0 for c in customers}
    free = deque(c.id for c in customers)
    proposals = 0

    while free:
        customer_id = free.popleft()
        ranking = prefs[customer_id]
        if next_choice[customer_id] >= len(ranking):
            continue  # rejected everywhere
        stylist_id = ranking[next_choice[customer_id]]
        next_choice[customer_id] += 1
        proposals += 1

        holding = held[stylist_id]
        holding.append(customer_id)
        holding.sort(key=priority.__getitem__)
        if len(holding) > capacity[stylist_id]:
            free.append(holding.pop())

    assignment = {cid: sid for sid, cids in held.items() for cid in cids}
    pairs = [
        Pair(customer_id=c.id, stylist_id=assignment[c.id])
        for c in customers
        if c.id in assignment
    ]

    logger.info(
        "Stable matching paired %d of %d customers with %d stylists in %d proposals",
        len(pairs), len(customers), len(stylists), proposals,
    )
    if logger.isEnabledFor(logging.DEBUG):
        blocking = find_blocking_pairs(customers, stylists, pairs, customer_preference, stylist_preference)
        logger.debug("Blocking pairs after matching: %s", blocking)

    return MatchingResult(pairs=pairs, proposals=proposals)


def find_blocking_pairs(
    customers: Sequence[CustomerCandidate],
    stylists: Sequence[StylistSlot],
    pairs: Sequence[Pair],
    customer_preference: PolicyPreference = CUSTOMER_PREFERENCE,
    stylist_preference: TierPriority = STYLIST_PREFERENCE,
) -> list[tuple[str, str]]:
    """Return every ``(customer_id, stylist_id)`` that would rather be together.

    The customer is unmatched or prefers the stylist to its assignment, and
    the stylist has a free slot or holds someone it ranks below the customer.
    """
    if not customers or not stylists:
        return []

    prefs, priority = _preference_tables(customers, stylists, customer_preference, stylist_preference)
    capacity = {s.id: s.capacity for s in stylists}
    assigned = {p.customer_id: p.stylist_id for p in pairs}
    holders: dict[str, list[str]] = {s.id: [] for s in stylists}
    for p in pairs:
        holders[p.stylist_id].append(p.customer_id)

    blocking: list[tuple[str, str]] = []
    for c in customers:
        current = assigned.get(c.id)
        for stylist_id in prefs[c.id]:
            if stylist_id == current:
                break  # everything further down is worse than what c has
            held = holders[stylist_id]
            if len(held) < capacity[stylist_id] or any(
                priority[c.id] < priority[other] for other in held
            ):
                blocking.append((c.id, stylist_id))
    return blocking
