"""
Recommendation engine.

Responsibilities:
- Look up offerings for a style, falling back to the whole catalog.
- Score each offering with distance to the customer and total cost.
- Rank with a deterministic comparator chain (Elo, cost, distance, id).
- Filter by cost and page the ranked list for API serialisation.
"""
