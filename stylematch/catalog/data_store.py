from __future__ import annotations

import logging

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import AddOn, StylistCandidate
from .store import OfferingCatalog

logger = logging.getLogger(__name__)

_catalog: OfferingCatalog | None = None


def _parse_specialties(raw: object) -> frozenset[str]:
    if pd.isna(raw):
        return frozenset()
    return frozenset(s.strip() for s in str(raw).split(",") if s.strip())


def _parse_add_ons(raw: object) -> list[AddOn]:
    """Decode ``"name:cost;name:cost"`` into add-ons, keeping their order."""
    if pd.isna(raw):
        return []
    add_ons: list[AddOn] = []
    for chunk in str(raw).split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, _, cost = chunk.rpartition(":")
        add_ons.append(AddOn(name=name.strip(), cost=float(cost)))
    return add_ons


def load_seed(catalog: OfferingCatalog, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> int:
    """Populate *catalog* from the seed CSV files. Returns the offering count."""
    stylists = pd.read_csv(config.stylists_path, dtype={"id": str})
    offerings = pd.read_csv(config.offerings_path, dtype={"id": str, "stylist_id": str})

    for _, row in stylists.iterrows():
        catalog.add_stylist(StylistCandidate(
            id=row["id"],
            elo_rating=float(row["elo_rating"]),
            latitude=float(row["latitude"]),
            longitude=float(row["longitude"]),
            specialties=_parse_specialties(row.get("specialties")),
        ))

    for _, row in offerings.iterrows():
        catalog.add_offering(
            stylist_id=row["stylist_id"],
            style_name=row["style_name"],
            cost_per_hour=float(row["cost_per_hour"]),
            estimated_hours=float(row["estimated_hours"]),
            add_ons=_parse_add_ons(row.get("add_ons")),
            offering_id=row["id"],
        )

    logger.info("Seeded catalog with %d stylists and %d offerings", len(stylists), len(offerings))
    return len(offerings)


def get_catalog() -> OfferingCatalog:
    """Return the process-wide catalog, seeding it on first call."""
    global _catalog
    if _catalog is None:
        catalog = OfferingCatalog()
        if DEFAULT_CATALOG_CONFIG.seed_enabled and DEFAULT_CATALOG_CONFIG.offerings_path.exists():
            load_seed(catalog)
        _catalog = catalog
    return _catalog


def reset_catalog(catalog: OfferingCatalog | None = None) -> OfferingCatalog:
    """Swap in *catalog* (or an empty one) as the process-wide catalog."""
    global _catalog
    _catalog = catalog if catalog is not None else OfferingCatalog()
    return _catalog
