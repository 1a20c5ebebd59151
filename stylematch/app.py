from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .auth.dependencies import require_admin, require_user
from .auth.users import authenticate
from .catalog.data_store import get_catalog
from .catalog.errors import StaleRatingError, StylistAlreadyExistsError, StylistNotFoundError
from .catalog.models import CamelModel, RatingSnapshot
from .matching.models import Pair, StableMatchRequest
from .matching.stable import stable_match
from .onboarding.models import OnboardingRequest, OnboardingResult
from .onboarding.role_client import RoleGrantError, get_role_client
from .onboarding.service import onboard_stylist
from .ratings.service import EloOutcome, MatchOutcome, record_outcome
from .recommendations.cache import get_cache_stats
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG
from .recommendations.models import PagedResponse, RankedOffering, RecommendQuery
from .recommendations.retrieval import get_recommendations


app = FastAPI(title="StyleMatch Matching API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "stylematch-secret-change-in-production"),
)


class LoginRequest(CamelModel):
    username: str
    password: str


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    catalog = get_catalog()
    return {
        "styles": catalog.styles(),
        "stylists": len(catalog.list_stylists()),
        "offerings": catalog.offering_count(),
    }


@app.get("/recommend", response_model=PagedResponse[RankedOffering])
def recommend(
    response: Response,
    style_name: str = Query(..., alias="styleName", min_length=1),
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    page: int = Query(0, ge=0),
    size: int = Query(
        DEFAULT_RECOMMENDATION_CONFIG.default_page_size,
        ge=0,
        le=DEFAULT_RECOMMENDATION_CONFIG.max_page_size,
    ),
    min_cost: float | None = Query(None, alias="minCost", ge=0.0),
    max_cost: float | None = Query(None, alias="maxCost", ge=0.0),
) -> PagedResponse[RankedOffering]:
    query = RecommendQuery(
        style_name=style_name,
        latitude=latitude,
        longitude=longitude,
        page=page,
        size=size,
        min_cost=min_cost,
        max_cost=max_cost,
    )
    result = get_recommendations(query)
    response.headers["X-Used-Fallback"] = "true" if result.used_fallback else "false"
    return result.page


@app.post("/stable", response_model=list[Pair])
def stable(body: StableMatchRequest) -> list[Pair]:
    try:
        result = stable_match(body.customers, body.stylists)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    slots = sum(s.capacity for s in body.stylists)
    record_event("stable_match", {
        "customers": len(body.customers),
        "stylists": len(body.stylists),
        "pairs": len(result.pairs),
        "possible_pairs": min(len(body.customers), slots),
        "proposals": result.proposals,
    })
    return result.pairs


@app.get("/stylists/{stylist_id}/elo", response_model=RatingSnapshot)
def stylist_elo(stylist_id: str) -> RatingSnapshot:
    try:
        return get_catalog().get_rating(stylist_id)
    except StylistNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.post("/onboard-stylist", response_model=OnboardingResult, status_code=201)
def onboard(
    body: OnboardingRequest,
    user: dict = Depends(require_user),
) -> OnboardingResult:
    try:
        return onboard_stylist(body, get_catalog(), get_role_client())
    except StylistAlreadyExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except RoleGrantError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.post("/elo/outcome", response_model=EloOutcome)
def elo_outcome(
    body: MatchOutcome,
    user: dict = Depends(require_admin),
) -> EloOutcome:
    try:
        return record_outcome(get_catalog(), body.winner_id, body.loser_id)
    except StylistNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StaleRatingError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats(user: dict = Depends(require_admin)) -> dict:
    return get_cache_stats()
