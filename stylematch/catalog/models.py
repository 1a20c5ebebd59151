from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


class AddOn(CamelModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    cost: float = Field(..., ge=0.0)


class StylistCandidate(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    elo_rating: float
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    specialties: frozenset[str] = Field(default_factory=frozenset)
    version: int = 0


class ServiceOffering(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    stylist: StylistCandidate
    style_name: str = Field(..., min_length=1)
    cost_per_hour: float = Field(..., ge=0.0)
    estimated_hours: float = Field(..., gt=0.0)
    add_ons: tuple[AddOn, ...] = ()

    @property
    def total_cost(self) -> float:
        """Hourly rate times hours plus every add-on."""
        return self.cost_per_hour * self.estimated_hours + sum(a.cost for a in self.add_ons)


class RatingSnapshot(CamelModel):
    stylist_id: str
    rating: float
    version: int
