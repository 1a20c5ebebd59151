from __future__ import annotations

import logging
import math
import time
from typing import Iterable

from ..analytics.store import record_event
from ..catalog.data_store import get_catalog
from ..catalog.models import ServiceOffering
from ..catalog.store import OfferingCatalog
from .cache import cache_get, cache_set, sync_generation
from .geo import haversine_km
from .models import (
    CatalogLookup,
    PagedResponse,
    RankedOffering,
    RecommendationResult,
    RecommendQuery,
)
from .scoring import OFFERING_RANKING, RankingPolicy

logger = logging.getLogger(__name__)


def lookup_offerings(catalog: OfferingCatalog, style_name: str) -> CatalogLookup:
    """Exact style match, or the whole catalog when nothing matches.

    Customers see alternatives rather than an empty page; ``used_fallback``
    tells the caller which of the two it got.
    """
    offerings = catalog.find_offerings_by_style_name(style_name)
    if offerings:
        return CatalogLookup(offerings=offerings, used_fallback=False)
    return CatalogLookup(offerings=catalog.find_all_offerings(), used_fallback=True)


def rank_offerings(
    offerings: Iterable[ServiceOffering],
    latitude: float,
    longitude: float,
    policy: RankingPolicy = OFFERING_RANKING,
) -> list[RankedOffering]:
    scored = [
        RankedOffering.from_offering(
            o, haversine_km(latitude, longitude, o.stylist.latitude, o.stylist.longitude),
        )
        for o in offerings
    ]
    return policy.rank(scored)


def filter_by_cost(
    ranked: list[RankedOffering],
    min_cost: float | None = None,
    max_cost: float | None = None,
) -> list[RankedOffering]:
    """Inclusive bounds on ``total_cost``; order is preserved."""
    return [
        r for r in ranked
        if (min_cost is None or r.total_cost >= min_cost)
        and (max_cost is None or r.total_cost <= max_cost)
    ]


def paginate(items: list[RankedOffering], page: int, size: int) -> PagedResponse[RankedOffering]:
    # Negative values are rejected at the HTTP layer; the engine clamps them.
    page = max(page, 0)
    size = max(size, 0)
    total = len(items)
    start = page * size
    end = min(start + size, total)
    content = items[start:end] if start < total else []
    total_pages = math.ceil(total / size) if size > 0 else 1
    return PagedResponse[RankedOffering](
        content=content,
        page=page,
        size=size,
        total_elements=total,
        total_pages=total_pages,
        last=page >= total_pages - 1,
    )


def recommend(
    catalog: OfferingCatalog,
    style_name: str,
    latitude: float,
    longitude: float,
    page: int = 0,
    size: int = 10,
    min_cost: float | None = None,
    max_cost: float | None = None,
) -> RecommendationResult:
    lookup = lookup_offerings(catalog, style_name)
    ranked = rank_offerings(lookup.offerings, latitude, longitude)
    filtered = filter_by_cost(ranked, min_cost, max_cost)
    return RecommendationResult(
        page=paginate(filtered, page, size),
        used_fallback=lookup.used_fallback,
    )


def get_recommendations(query: RecommendQuery) -> RecommendationResult:
    start_time = time.time()
    catalog = get_catalog()

    # Any catalog write (onboarding, rating update) changes the revision and
    # empties the cache. The revision also stays in the key so a write racing
    # this lookup cannot serve a result computed from older data.
    revision = catalog.revision
    sync_generation(revision)
    request_dict = query.model_dump()
    request_dict["_revision"] = revision

    cached = cache_get(request_dict)
    cache_hit = cached is not None
    if cache_hit:
        result = cached
    else:
        result = recommend(
            catalog,
            query.style_name,
            query.latitude,
            query.longitude,
            page=query.page,
            size=query.size,
            min_cost=query.min_cost,
            max_cost=query.max_cost,
        )
        cache_set(request_dict, result)
        if result.used_fallback:
            logger.info(
                "No offerings for style %r, served %d results from the full catalog",
                query.style_name, result.page.total_elements,
            )

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("recommend", {
        "style_name": query.style_name,
        "used_fallback": result.used_fallback,
        "min_cost": query.min_cost,
        "max_cost": query.max_cost,
        "page": query.page,
        "size": query.size,
        "total_elements": result.page.total_elements,
        "results_returned": len(result.page.content),
        "response_time_ms": elapsed_ms,
        "cache_hit": cache_hit,
    })
    return result
