from __future__ import annotations

import math

DEFAULT_K_FACTOR = 32.0


def expected_score(self_rating: float, opponent_rating: float) -> float:
    """Probability that *self* beats *opponent* under the Elo model."""
    exponent = (opponent_rating - self_rating) / 400.0
    # 10 ** 309 overflows a float; the score is already 0.0 at that gap.
    if exponent > 308:
        return 0.0
    return 1.0 / (1.0 + 10 ** exponent)


def update_elo(
    self_rating: float,
    opponent_rating: float,
    self_won: bool,
    k_factor: float = DEFAULT_K_FACTOR,
) -> float:
    """Return *self*'s rating after one event against *opponent*.

    Not rounded or clamped, so a winner always gains and a loser always
    loses. When the change is smaller than the float spacing at
    *self_rating* the result moves by one representable step instead.
    Update both sides with two calls that each use the other side's
    rating from before the event.
    """
    actual = 1.0 if self_won else 0.0
    updated = self_rating + k_factor * (actual - expected_score(self_rating, opponent_rating))
    if self_won and updated <= self_rating:
        return math.nextafter(self_rating, math.inf)
    if not self_won and updated >= self_rating:
        return math.nextafter(self_rating, -math.inf)
    return updated
