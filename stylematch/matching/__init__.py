"""
Stable matching engine.

Responsibilities:
- Rank stylists for customers (Elo, cost, distance) and customers for
  stylists (subscription tier, then submission order).
- Run customer-proposing deferred acceptance under per-stylist capacity.
- Report customer/stylist pairs and verify the absence of blocking pairs.
"""
