from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from hypothesis import given, strategies as st

from stylematch.app import app
from stylematch.matching.models import CustomerCandidate, Pair, StylistSlot, SubscriptionTier
from stylematch.matching.preferences import STYLIST_RANKING
from stylematch.matching.stable import find_blocking_pairs, stable_match

client = TestClient(app)

FREE = SubscriptionTier.FREE
PREMIUM = SubscriptionTier.PREMIUM


def _customer(cid, tier=FREE):
    return CustomerCandidate(id=cid, subscription_tier=tier)


def _stylist(sid, elo, cost=50.0, distance=1.0, capacity=1):
    return StylistSlot(id=sid, elo_rating=elo, cost_per_hour=cost, distance=distance, capacity=capacity)


# ── Scenarios ────────────────────────────────────────────────────────────


def test_premium_customer_wins_single_stylist():
    result = stable_match([_customer("free", FREE), _customer("premium", PREMIUM)], [_stylist("s", 1600)])
    assert result.pairs == [Pair(customer_id="premium", stylist_id="s")]


def test_premium_displaces_earlier_free_proposal():
    customers = [_customer("c1", FREE), _customer("c2", PREMIUM)]
    result = stable_match(customers, [_stylist("top", 1900), _stylist("low", 1300)])
    assert result.pairs == [
        Pair(customer_id="c1", stylist_id="low"),
        Pair(customer_id="c2", stylist_id="top"),
    ]


def test_submission_order_breaks_tier_ties():
    customers = [_customer("first"), _customer("second")]
    result = stable_match(customers, [_stylist("s", 1600)])
    assert result.pairs == [Pair(customer_id="first", stylist_id="s")]


def test_every_customer_gets_best_remaining_stylist():
    customers = [_customer("c1"), _customer("c2"), _customer("c3")]
    stylists = [_stylist("mid", 1600), _stylist("top", 1800), _stylist("low", 1400)]
    pairs = stable_match(customers, stylists).pairs
    assert [(p.customer_id, p.stylist_id) for p in pairs] == [("c1", "top"), ("c2", "mid"), ("c3", "low")]


def test_unmatched_customers_are_omitted():
    customers = [_customer("c1"), _customer("c2"), _customer("c3")]
    pairs = stable_match(customers, [_stylist("s1", 1500), _stylist("s2", 1500, cost=60.0)]).pairs
    assert {p.customer_id for p in pairs} == {"c1", "c2"}


def test_capacity_two_holds_two_customers():
    customers = [_customer("c1"), _customer("c2", PREMIUM), _customer("c3")]
    pairs = stable_match(customers, [_stylist("salon", 1700, capacity=2)]).pairs
    assert {p.customer_id for p in pairs} == {"c1", "c2"}


def test_zero_capacity_stylist_is_skipped():
    pairs = stable_match([_customer("c1")], [_stylist("closed", 2000, capacity=0), _stylist("open", 1500)]).pairs
    assert pairs == [Pair(customer_id="c1", stylist_id="open")]


def test_cost_breaks_elo_ties_in_customer_preference():
    pairs = stable_match([_customer("c1")], [_stylist("pricey", 1600, cost=90), _stylist("cheap", 1600, cost=40)]).pairs
    assert pairs[0].stylist_id == "cheap"


def test_distance_breaks_cost_ties_in_customer_preference():
    stylists = [_stylist("far", 1600, distance=12.0), _stylist("near", 1600, distance=3.0)]
    assert STYLIST_RANKING.rank(stylists)[0].id == "near"


@pytest.mark.parametrize("customers,stylists", [
    ([], [_stylist("s", 1500)]),
    ([_customer("c")], []),
    ([], []),
])
def test_empty_inputs_give_no_pairs(customers, stylists):
    result = stable_match(customers, stylists)
    assert result.pairs == []
    assert result.proposals == 0


def test_duplicate_customer_ids_rejected():
    with pytest.raises(ValueError):
        stable_match([_customer("c"), _customer("c")], [_stylist("s", 1500)])


def test_duplicate_stylist_ids_rejected():
    with pytest.raises(ValueError):
        stable_match([_customer("c")], [_stylist("s", 1500), _stylist("s", 1600)])


def test_find_blocking_pairs_flags_unstable_assignment():
    customers = [_customer("free", FREE), _customer("premium", PREMIUM)]
    stylists = [_stylist("s", 1600)]
    bad = [Pair(customer_id="free", stylist_id="s")]
    assert find_blocking_pairs(customers, stylists, bad) == [("premium", "s")]


def test_find_blocking_pairs_flags_free_capacity():
    customers = [_customer("c1")]
    stylists = [_stylist("s", 1600)]
    assert find_blocking_pairs(customers, stylists, []) == [("c1", "s")]


# ── Properties ───────────────────────────────────────────────────────────

tiers = st.sampled_from(list(SubscriptionTier))
stylist_specs = st.tuples(
    st.integers(min_value=1400, max_value=1800),     # elo, narrow so ties happen
    st.sampled_from([40.0, 50.0, 60.0]),             # cost
    st.sampled_from([1.0, 5.0]),                     # distance
    st.integers(min_value=0, max_value=2),           # capacity
)


@given(
    customer_tiers=st.lists(tiers, max_size=10),
    specs=st.lists(stylist_specs, max_size=6),
)
def test_matching_has_no_blocking_pair(customer_tiers, specs):
    customers = [_customer(f"c{i}", t) for i, t in enumerate(customer_tiers)]
    stylists = [_stylist(f"s{i}", e, c, d, cap) for i, (e, c, d, cap) in enumerate(specs)]

    result = stable_match(customers, stylists)

    assert find_blocking_pairs(customers, stylists, result.pairs) == []
    assert result.proposals <= len(customers) * len(stylists)


@given(
    customer_tiers=st.lists(tiers, max_size=10),
    specs=st.lists(stylist_specs, max_size=6),
)
def test_matching_respects_capacity_and_uniqueness(customer_tiers, specs):
    customers = [_customer(f"c{i}", t) for i, t in enumerate(customer_tiers)]
    stylists = [_stylist(f"s{i}", e, c, d, cap) for i, (e, c, d, cap) in enumerate(specs)]

    pairs = stable_match(customers, stylists).pairs

    matched = [p.customer_id for p in pairs]
    assert len(matched) == len(set(matched))
    capacity = {s.id: s.capacity for s in stylists}
    for sid, cap in capacity.items():
        assert sum(1 for p in pairs if p.stylist_id == sid) <= cap
    assert len(pairs) == min(len(customers), sum(capacity.values()))


# ── HTTP ─────────────────────────────────────────────────────────────────


def test_stable_endpoint_scenario():
    resp = client.post("/stable", json={
        "customers": [
            {"id": "c-free", "subscriptionTier": "FREE"},
            {"id": "c-premium", "subscriptionTier": "PREMIUM"},
        ],
        "stylists": [{"id": "s1", "eloRating": 1600, "costPerHour": 50, "distance": 2.5}],
    })
    assert resp.status_code == 200
    assert resp.json() == [{"customerId": "c-premium", "stylistId": "s1"}]


def test_stable_endpoint_empty_body():
    resp = client.post("/stable", json={"customers": [], "stylists": []})
    assert resp.status_code == 200
    assert resp.json() == []


def test_stable_endpoint_rejects_duplicate_ids():
    resp = client.post("/stable", json={
        "customers": [{"id": "c", "subscriptionTier": "FREE"}, {"id": "c", "subscriptionTier": "FREE"}],
        "stylists": [{"id": "s1", "eloRating": 1600}],
    })
    assert resp.status_code == 422


def test_stable_endpoint_rejects_unknown_tier():
    resp = client.post("/stable", json={
        "customers": [{"id": "c", "subscriptionTier": "PLATINUM"}],
        "stylists": [{"id": "s1", "eloRating": 1600}],
    })
    assert resp.status_code == 422
