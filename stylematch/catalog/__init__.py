"""
Offering catalog.

Responsibilities:
- Hold stylist records (identity, location, specialties, Elo rating).
- Hold the service offerings each stylist publishes.
- Serve read-only snapshots to the recommendation engine.
- Persist Elo ratings with optimistic version checks.
"""
