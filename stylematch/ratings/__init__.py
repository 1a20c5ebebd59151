"""
Elo rating layer.

Responsibilities:
- Compute a stylist's new rating after a win or loss (pure function).
- Apply match outcomes to both stylists from the same pre-update snapshot.
- Persist ratings through the catalog's versioned compare-and-set, retrying
  on lost-update races.
"""
