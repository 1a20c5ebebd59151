from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "recommend"]
    runs = [e for e in events if e["type"] == "stable_match"]
    elo_updates = [e for e in events if e["type"] == "elo_update"]
    onboardings = [e for e in events if e["type"] == "onboarding"]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    style_counter: Counter[str] = Counter(s.get("style_name", "unknown") for s in searches)
    top_styles = [{"name": n, "count": c} for n, c in style_counter.most_common(10)]

    fallbacks = sum(1 for s in searches if s.get("used_fallback"))
    cost_filtered = sum(
        1 for s in searches if s.get("min_cost") is not None or s.get("max_cost") is not None
    )
    cache_hits = sum(1 for s in searches if s.get("cache_hit"))

    # Match rate per run is pairs over the smaller side's total slots.
    match_rates = [
        r["pairs"] / r["possible_pairs"] * 100 for r in runs if r.get("possible_pairs")
    ]

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_styles": top_styles,
        "fallback_rate": _rate(fallbacks, total),
        "cost_filter_usage": _rate(cost_filtered, total),
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": _rate(cache_hits, total),
        },
        "stable_matching": {
            "runs": len(runs),
            "pairs": sum(r.get("pairs", 0) for r in runs),
            "proposals": sum(r.get("proposals", 0) for r in runs),
            "avg_match_rate": round(sum(match_rates) / len(match_rates), 1) if match_rates else 0.0,
        },
        "elo_updates": len(elo_updates),
        "elo_retries": sum(e.get("attempts", 1) - 1 for e in elo_updates),
        "stylists_onboarded": len(onboardings),
    }
