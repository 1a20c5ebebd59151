from __future__ import annotations

import logging

from ..analytics.store import record_event
from ..catalog.models import StylistCandidate
from ..catalog.store import OfferingCatalog
from ..ratings.config import DEFAULT_RATINGS_CONFIG, RatingsConfig
from .models import OnboardingRequest, OnboardingResult
from .role_client import RoleClient, RoleGrantError

logger = logging.getLogger(__name__)


def onboard_stylist(
    request: OnboardingRequest,
    catalog: OfferingCatalog,
    role_client: RoleClient,
    ratings_config: RatingsConfig = DEFAULT_RATINGS_CONFIG,
) -> OnboardingResult:
    """
    Register a stylist and its offerings, then grant the STYLIST role.

    Steps:
    - Create the stylist record (id = user id) at the initial Elo rating.
    - Persist each offering with its add-ons, in request order.
    - Grant the role; on failure remove the stylist and its offerings and
      re-raise, so a stylist never exists without the role.
    """
    stylist = catalog.add_stylist(StylistCandidate(
        id=request.user_id,
        elo_rating=ratings_config.initial_rating,
        latitude=request.latitude,
        longitude=request.longitude,
        specialties=frozenset(request.specialties),
    ))

    try:
        offering_ids = [
            catalog.add_offering(
                stylist_id=stylist.id,
                style_name=o.style_name,
                cost_per_hour=o.cost_per_hour,
                estimated_hours=o.estimated_hours,
                add_ons=o.add_ons,
            ).id
            for o in request.offerings
        ]
        role_granted = role_client.grant_role(request.user_id, role_client.config.stylist_role)
    except RoleGrantError:
        catalog.remove_stylist(stylist.id)
        logger.warning("Rolled back onboarding of %s after role grant failure", stylist.id)
        raise

    logger.info("Onboarded stylist %s with %d offerings", stylist.id, len(offering_ids))
    record_event("onboarding", {
        "stylist_id": stylist.id,
        "offerings": len(offering_ids),
        "role_granted": role_granted,
    })

    return OnboardingResult(
        stylist_id=stylist.id,
        elo_rating=stylist.elo_rating,
        offering_ids=offering_ids,
        role_granted=role_granted,
    )
