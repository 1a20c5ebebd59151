from __future__ import annotations

import threading
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .errors import StaleRatingError, StylistAlreadyExistsError, StylistNotFoundError
from .models import AddOn, RatingSnapshot, ServiceOffering, StylistCandidate


@dataclass(frozen=True)
class _OfferingRecord:
    id: str
    stylist_id: str
    style_name: str
    cost_per_hour: float
    estimated_hours: float
    add_ons: tuple[AddOn, ...]


class OfferingCatalog:
    """In-memory stylist and offering catalog.

    Reads return immutable snapshots, so callers can score and sort them
    without holding the lock. Every write bumps ``revision``.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._stylists: dict[str, StylistCandidate] = {}
        self._offerings: dict[str, _OfferingRecord] = {}
        self._revision = 0

    @property
    def revision(self) -> int:
        return self._revision

    # ── Reads ───────────────────────────────────────────────────────────

    def find_offerings_by_style_name(self, style_name: str) -> list[ServiceOffering]:
        with self._lock:
            return [
                self._materialise(rec)
                for rec in self._offerings.values()
                if rec.style_name == style_name
            ]

    def find_all_offerings(self) -> list[ServiceOffering]:
        with self._lock:
            return [self._materialise(rec) for rec in self._offerings.values()]

    def get_stylist(self, stylist_id: str) -> StylistCandidate:
        with self._lock:
            stylist = self._stylists.get(stylist_id)
        if stylist is None:
            raise StylistNotFoundError(stylist_id)
        return stylist

    def has_stylist(self, stylist_id: str) -> bool:
        with self._lock:
            return stylist_id in self._stylists

    def list_stylists(self) -> list[StylistCandidate]:
        with self._lock:
            return list(self._stylists.values())

    def styles(self) -> list[str]:
        with self._lock:
            return sorted({rec.style_name for rec in self._offerings.values()})

    def offering_count(self) -> int:
        with self._lock:
            return len(self._offerings)

    # ── Onboarding writes ───────────────────────────────────────────────

    def add_stylist(self, stylist: StylistCandidate) -> StylistCandidate:
        with self._lock:
            if stylist.id in self._stylists:
                raise StylistAlreadyExistsError(stylist.id)
            self._stylists[stylist.id] = stylist
            self._revision += 1
        return stylist

    def add_offering(
        self,
        stylist_id: str,
        style_name: str,
        cost_per_hour: float,
        estimated_hours: float,
        add_ons: Iterable[AddOn] = (),
        offering_id: str | None = None,
    ) -> ServiceOffering:
        with self._lock:
            if stylist_id not in self._stylists:
                raise StylistNotFoundError(stylist_id)
            record = _OfferingRecord(
                id=offering_id or str(uuid.uuid4()),
                stylist_id=stylist_id,
                style_name=style_name,
                cost_per_hour=cost_per_hour,
                estimated_hours=estimated_hours,
                add_ons=tuple(add_ons),
            )
            # Validate through the public model before storing.
            offering = self._materialise(record)
            self._offerings[record.id] = record
            self._revision += 1
        return offering

    def remove_stylist(self, stylist_id: str) -> None:
        """Drop a stylist and every offering it owns."""
        with self._lock:
            if self._stylists.pop(stylist_id, None) is None:
                raise StylistNotFoundError(stylist_id)
            self._offerings = {
                oid: rec for oid, rec in self._offerings.items() if rec.stylist_id != stylist_id
            }
            self._revision += 1

    # ── Elo ratings ─────────────────────────────────────────────────────

    def get_rating(self, stylist_id: str) -> RatingSnapshot:
        stylist = self.get_stylist(stylist_id)
        return RatingSnapshot(
            stylist_id=stylist.id, rating=stylist.elo_rating, version=stylist.version,
        )

    def update_ratings(self, updates: Sequence[tuple[str, float, int]]) -> list[RatingSnapshot]:
        """Compare-and-set one or more ratings as a single unit.

        Each update is ``(stylist_id, new_rating, expected_version)``. If any
        expected version is stale nothing is written.
        """
        with self._lock:
            for stylist_id, _, expected in updates:
                current = self._stylists.get(stylist_id)
                if current is None:
                    raise StylistNotFoundError(stylist_id)
                if current.version != expected:
                    raise StaleRatingError(stylist_id, expected, current.version)

            written: list[RatingSnapshot] = []
            for stylist_id, rating, _ in updates:
                current = self._stylists[stylist_id]
                updated = current.model_copy(
                    update={"elo_rating": rating, "version": current.version + 1},
                )
                self._stylists[stylist_id] = updated
                written.append(RatingSnapshot(
                    stylist_id=stylist_id, rating=updated.elo_rating, version=updated.version,
                ))
            self._revision += 1
        return written

    def _materialise(self, record: _OfferingRecord) -> ServiceOffering:
        return ServiceOffering(
            id=record.id,
            stylist=self._stylists[record.stylist_id],
            style_name=record.style_name,
            cost_per_hour=record.cost_per_hour,
            estimated_hours=record.estimated_hours,
            add_ons=record.add_ons,
        )
