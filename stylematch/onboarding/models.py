from __future__ import annotations

from pydantic import Field

from ..catalog.models import AddOn, CamelModel


class OfferingRequest(CamelModel):
    style_name: str = Field(..., min_length=1)
    cost_per_hour: float = Field(..., ge=0.0)
    estimated_hours: float = Field(..., gt=0.0)
    add_ons: list[AddOn] = Field(default_factory=list)


class OnboardingRequest(CamelModel):
    user_id: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    specialties: list[str] = Field(default_factory=list)
    offerings: list[OfferingRequest] = Field(..., min_length=1)


class OnboardingResult(CamelModel):
    stylist_id: str
    elo_rating: float
    offering_ids: list[str]
    role_granted: bool
