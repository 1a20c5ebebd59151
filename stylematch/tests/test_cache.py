from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from stylematch.app import app
from stylematch.ratings.service import record_outcome
from stylematch.recommendations.cache import (
    cache_get,
    cache_set,
    clear_cache,
    get_cache_stats,
    sync_generation,
)
from stylematch.recommendations.models import RecommendQuery
from stylematch.recommendations.retrieval import get_recommendations

client = TestClient(app)

BOB = {"styleName": "bob", "latitude": 40.0, "longitude": -105.0}


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


def test_cache_miss_then_hit(bob_catalog):
    resp1 = client.get("/recommend", params=BOB)
    assert resp1.status_code == 200
    assert get_cache_stats()["misses"] == 1

    resp2 = client.get("/recommend", params=BOB)
    assert resp2.status_code == 200
    assert get_cache_stats()["hits"] == 1
    assert resp1.json() == resp2.json()


def test_cache_different_queries_miss(bob_catalog):
    client.get("/recommend", params=BOB)
    client.get("/recommend", params={**BOB, "styleName": "mohawk"})
    client.get("/recommend", params={**BOB, "maxCost": 60})
    stats = get_cache_stats()
    assert stats["misses"] == 3
    assert stats["hits"] == 0


def test_catalog_write_invalidates_cached_results(bob_catalog):
    client.get("/recommend", params=BOB)
    bob_catalog.update_ratings([("A", 1900.0, 0)])

    resp = client.get("/recommend", params=BOB)

    assert get_cache_stats()["hits"] == 0
    assert resp.json()["content"][0]["stylistId"] == "A"


def test_cache_entries_expire():
    request = {"style_name": "bob"}
    with patch("stylematch.recommendations.cache.time.time", return_value=1000.0):
        cache_set(request, "value")
    with patch("stylematch.recommendations.cache.time.time", return_value=1010.0):
        assert cache_get(request, ttl=60) == "value"
    with patch("stylematch.recommendations.cache.time.time", return_value=1100.0):
        assert cache_get(request, ttl=60) is None
    assert get_cache_stats()["size"] == 0


def test_clear_cache_resets_counters():
    cache_set({"k": 1}, "v")
    cache_get({"k": 1})
    clear_cache()
    assert get_cache_stats() == {"size": 0, "hits": 0, "misses": 0, "hit_rate": 0.0}


def test_cache_stats_endpoint(bob_catalog):
    client.get("/recommend", params=BOB)
    client.get("/recommend", params=BOB)
    _login_admin(client)
    resp = client.get("/cache/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["hits"] == 1
    assert body["hit_rate"] == 50.0


def test_cache_size_stays_bounded_across_rating_updates(bob_catalog):
    query = RecommendQuery(style_name="bob", latitude=40.0, longitude=-105.0)
    for _ in range(50):
        get_recommendations(query)
        record_outcome(bob_catalog, "A", "B")
    assert get_cache_stats()["size"] <= 1


def test_generation_change_empties_cache():
    sync_generation(1)
    cache_set({"k": 1}, "v")
    sync_generation(1)
    assert get_cache_stats()["size"] == 1
    sync_generation(2)
    assert get_cache_stats()["size"] == 0


def test_cache_set_sweeps_expired_entries():
    with patch("stylematch.recommendations.cache.time.time", return_value=1000.0):
        cache_set({"k": 1}, "old", ttl=60)
    with patch("stylematch.recommendations.cache.time.time", return_value=1100.0):
        cache_set({"k": 2}, "new", ttl=60)
    assert get_cache_stats()["size"] == 1
