from __future__ import annotations

import pytest
from hypothesis import HealthCheck, settings

from stylematch.analytics.store import clear_events
from stylematch.catalog.data_store import reset_catalog
from stylematch.catalog.models import AddOn, StylistCandidate
from stylematch.catalog.store import OfferingCatalog
from stylematch.recommendations.cache import clear_cache

# Property tests build their own catalogs, so the autouse reset below is harmless to them.
settings.register_profile(
    "stylematch",
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
    max_examples=75,
)
settings.load_profile("stylematch")


@pytest.fixture(autouse=True)
def clean_state():
    """Every test starts with an empty catalog, cache and event log."""
    reset_catalog()
    clear_cache()
    clear_events()
    yield


@pytest.fixture
def catalog() -> OfferingCatalog:
    return reset_catalog()


@pytest.fixture
def bob_catalog(catalog: OfferingCatalog) -> OfferingCatalog:
    """Two "bob" offerings: A (Elo 1600, total 50) and B (Elo 1700, total 90)."""
    catalog.add_stylist(StylistCandidate(id="A", elo_rating=1600, latitude=40.0, longitude=-105.0))
    catalog.add_stylist(StylistCandidate(id="B", elo_rating=1700, latitude=40.1, longitude=-105.1))
    catalog.add_offering("A", "bob", 50.0, 1.0, offering_id="offer-A")
    catalog.add_offering(
        "B", "bob", 70.0, 1.0, add_ons=[AddOn(name="deep-condition", cost=20.0)], offering_id="offer-B",
    )
    return catalog
