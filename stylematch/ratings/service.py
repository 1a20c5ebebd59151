from __future__ import annotations

import logging

from pydantic import Field

from ..analytics.store import record_event
from ..catalog.errors import StaleRatingError
from ..catalog.models import CamelModel, RatingSnapshot
from ..catalog.store import OfferingCatalog
from .config import DEFAULT_RATINGS_CONFIG, RatingsConfig
from .elo import update_elo

logger = logging.getLogger(__name__)


class MatchOutcome(CamelModel):
    winner_id: str = Field(..., min_length=1)
    loser_id: str = Field(..., min_length=1)


class EloChange(CamelModel):
    stylist_id: str
    before: float
    after: float
    version: int


class EloOutcome(CamelModel):
    winner: EloChange
    loser: EloChange
    attempts: int


def record_outcome(
    catalog: OfferingCatalog,
    winner_id: str,
    loser_id: str,
    config: RatingsConfig = DEFAULT_RATINGS_CONFIG,
) -> EloOutcome:
    """Apply one win/loss event to both stylists.

    Both new ratings are computed from the same pre-update snapshot and
    written together with the snapshot versions. A concurrent write makes the
    catalog raise ``StaleRatingError``; the whole read-modify-write is then
    retried, up to ``config.max_retries`` attempts, before the error is
    re-raised to the caller.
    """
    if winner_id == loser_id:
        raise ValueError("A stylist cannot be matched against itself")

    attempts = 0
    while True:
        attempts += 1
        winner: RatingSnapshot = catalog.get_rating(winner_id)
        loser: RatingSnapshot = catalog.get_rating(loser_id)

        new_winner = update_elo(winner.rating, loser.rating, True, config.k_factor)
        new_loser = update_elo(loser.rating, winner.rating, False, config.k_factor)

        try:
            written = catalog.update_ratings([
                (winner_id, new_winner, winner.version),
                (loser_id, new_loser, loser.version),
            ])
        except StaleRatingError:
            if attempts >= config.max_retries:
                logger.warning(
                    "Giving up on Elo update %s beat %s after %d attempts",
                    winner_id, loser_id, attempts,
                )
                raise
            logger.warning(
                "Concurrent Elo write for %s/%s, retrying (attempt %d)",
                winner_id, loser_id, attempts,
            )
            continue
        break

    logger.info(
        "Updated Elo ratings: %s %.1f -> %.1f (won), %s %.1f -> %.1f (lost)",
        winner_id, winner.rating, new_winner, loser_id, loser.rating, new_loser,
    )
    record_event("elo_update", {
        "winner_id": winner_id,
        "loser_id": loser_id,
        "winner_delta": new_winner - winner.rating,
        "attempts": attempts,
    })

    return EloOutcome(
        winner=EloChange(
            stylist_id=winner_id, before=winner.rating, after=new_winner, version=written[0].version,
        ),
        loser=EloChange(
            stylist_id=loser_id, before=loser.rating, after=new_loser, version=written[1].version,
        ),
        attempts=attempts,
    )
