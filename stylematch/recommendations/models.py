from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import Field

from ..catalog.models import AddOn, CamelModel, ServiceOffering

T = TypeVar("T")


class RecommendQuery(CamelModel):
    style_name: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    page: int = Field(default=0, ge=0)
    size: int = Field(default=10, ge=0)
    min_cost: float | None = Field(default=None, ge=0.0)
    max_cost: float | None = Field(default=None, ge=0.0)


class RankedOffering(CamelModel):
    offering_id: str
    stylist_id: str
    specialties: list[str]
    elo_rating: float
    distance: float
    style_name: str
    cost_per_hour: float
    estimated_hours: float
    add_ons: list[AddOn]
    total_cost: float

    @classmethod
    def from_offering(cls, offering: ServiceOffering, distance: float) -> RankedOffering:
        return cls(
            offering_id=offering.id,
            stylist_id=offering.stylist.id,
            specialties=sorted(offering.stylist.specialties),
            elo_rating=offering.stylist.elo_rating,
            distance=distance,
            style_name=offering.style_name,
            cost_per_hour=offering.cost_per_hour,
            estimated_hours=offering.estimated_hours,
            add_ons=list(offering.add_ons),
            total_cost=offering.total_cost,
        )


class PagedResponse(CamelModel, Generic[T]):
    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    last: bool


class CatalogLookup(CamelModel):
    offerings: list[ServiceOffering]
    used_fallback: bool


class RecommendationResult(CamelModel):
    page: PagedResponse[RankedOffering]
    used_fallback: bool
