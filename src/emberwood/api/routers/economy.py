"""
Economy API router for sessions, summaries, quotes, and economy events.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from emberwood.api.schemas import (
    AdvanceRequest, BattleRequest, CreateSessionRequest, DayTickRequest,
    DecreeRequest, EventResponse, GovernmentEffectRequest, PriceResponse,
    PurchaseRequest, RestCostResponse, SessionResponse,
)
from emberwood.core.config import EconomyConfig
from emberwood.core.decrees import DecreeStatus, decree_status

router = APIRouter()


def _manager(request: Request):
    return request.app.state.session_manager


def _get_session(request: Request, session_id: str):
    try:
        return _manager(request).get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


def _get_service(request: Request, session_id: str, settlement_id: str):
    _get_session(request, session_id)
    try:
        return _manager(request).get_service(session_id, settlement_id)
    except KeyError:
        raise HTTPException(
            status_code=404,
            detail=f"Settlement '{settlement_id}' not found",
        )


def _event_response(service, event) -> EventResponse:
    return EventResponse(
        applied=event is not None,
        event=event.to_dict() if event is not None else None,
        state=service.state.to_dict(),
    )


# ------------------------------------------------------------------
# Sessions
# ------------------------------------------------------------------

@router.post("/sessions", response_model=SessionResponse)
def create_session(request: Request, body: CreateSessionRequest):
    config = EconomyConfig.from_dict(body.config) if body.config else None
    session = _manager(request).create_session(
        config=config, name=body.name, settlements=body.settlements,
    )
    return session.to_dict()


@router.get("/sessions", response_model=list[SessionResponse])
def list_sessions(request: Request):
    return [s.to_dict() for s in _manager(request).list_sessions()]


@router.get("/sessions/{session_id}", response_model=SessionResponse)
def get_session(request: Request, session_id: str):
    return _get_session(request, session_id).to_dict()


@router.delete("/sessions/{session_id}")
def delete_session(request: Request, session_id: str):
    _get_session(request, session_id)
    _manager(request).delete_session(session_id)
    return {"deleted": True, "id": session_id}


@router.post("/sessions/{session_id}/advance", response_model=SessionResponse)
def advance_days(request: Request, session_id: str, body: AdvanceRequest):
    """Advance the session clock; the primary settlement ticks once per day."""
    _get_session(request, session_id)
    return _manager(request).advance(session_id, body.days).to_dict()


@router.get("/{session_id}/tiers")
def get_tiers(request: Request, session_id: str):
    session = _get_session(request, session_id)
    service = next(iter(session.services.values()))
    return {"tiers": [t.to_dict() for t in service.get_tiers()]}


@router.get("/{session_id}/history")
def get_history(request: Request, session_id: str):
    session = _get_session(request, session_id)
    return {
        "records": session.history.export(),
        "stats": session.history.summary_stats(),
    }


# ------------------------------------------------------------------
# Settlement reads
# ------------------------------------------------------------------

@router.get("/{session_id}/settlements/{settlement_id}/summary")
def get_summary(request: Request, session_id: str, settlement_id: str):
    """Government-adjusted metrics and tier."""
    service = _get_service(request, session_id, settlement_id)
    return service.get_summary().to_dict()


@router.get("/{session_id}/settlements/{settlement_id}/state")
def get_raw_state(request: Request, session_id: str, settlement_id: str):
    """Stored metrics before government influence."""
    service = _get_service(request, session_id, settlement_id)
    return service.state.to_dict()


@router.get(
    "/{session_id}/settlements/{settlement_id}/merchant-price",
    response_model=PriceResponse,
)
def get_merchant_price(
    request: Request, session_id: str, settlement_id: str,
    base_price: float, context: str = "village",
):
    service = _get_service(request, session_id, settlement_id)
    price = service.get_merchant_price(base_price, context)
    return PriceResponse(base_price=base_price, context=context, price=price)


@router.get(
    "/{session_id}/settlements/{settlement_id}/rest-cost",
    response_model=RestCostResponse,
)
def get_rest_cost(request: Request, session_id: str, settlement_id: str):
    """Tavern rest cost for today. Removes the decree if it has expired."""
    service = _get_service(request, session_id, settlement_id)
    cost = service.get_rest_cost()
    today = service.today()
    active = decree_status(service.decrees.get(settlement_id), today) is DecreeStatus.ACTIVE
    return RestCostResponse(day=today, cost=cost, decree_active=active)


# ------------------------------------------------------------------
# Settlement events
# ------------------------------------------------------------------

@router.post(
    "/{session_id}/settlements/{settlement_id}/day-tick",
    response_model=EventResponse,
)
def day_tick(
    request: Request, session_id: str, settlement_id: str, body: DayTickRequest,
):
    service = _get_service(request, session_id, settlement_id)
    return _event_response(service, service.handle_day_tick(body.absolute_day))


@router.post(
    "/{session_id}/settlements/{settlement_id}/battle",
    response_model=EventResponse,
)
def after_battle(
    request: Request, session_id: str, settlement_id: str, body: BattleRequest,
):
    service = _get_service(request, session_id, settlement_id)
    event = service.handle_after_battle(body.enemy.model_dump(), body.area)
    return _event_response(service, event)


@router.post(
    "/{session_id}/settlements/{settlement_id}/purchase",
    response_model=EventResponse,
)
def after_purchase(
    request: Request, session_id: str, settlement_id: str, body: PurchaseRequest,
):
    service = _get_service(request, session_id, settlement_id)
    event = service.handle_after_purchase(body.gold_spent, body.context)
    return _event_response(service, event)


# ------------------------------------------------------------------
# Collaborator inputs (government and town hall)
# ------------------------------------------------------------------

@router.put("/{session_id}/settlements/{settlement_id}/government")
def set_government_effect(
    request: Request, session_id: str, settlement_id: str,
    body: GovernmentEffectRequest,
):
    session = _get_session(request, session_id)
    service = _get_service(request, session_id, settlement_id)
    session.host.government.set_effect(settlement_id, body.model_dump())
    return service.get_summary().to_dict()


@router.delete("/{session_id}/settlements/{settlement_id}/government")
def clear_government_effect(request: Request, session_id: str, settlement_id: str):
    session = _get_session(request, session_id)
    service = _get_service(request, session_id, settlement_id)
    session.host.government.clear_effect(settlement_id)
    return service.get_summary().to_dict()


@router.put("/{session_id}/settlements/{settlement_id}/decree")
def post_decree(
    request: Request, session_id: str, settlement_id: str, body: DecreeRequest,
):
    service = _get_service(request, session_id, settlement_id)
    decree = service.decrees.post(settlement_id, body.model_dump())
    return {"decree": decree.to_dict()}


@router.get("/{session_id}/settlements/{settlement_id}/decree")
def get_decree(request: Request, session_id: str, settlement_id: str):
    """Current decree as stored; reading here does not expire it."""
    service = _get_service(request, session_id, settlement_id)
    decree = service.decrees.get(settlement_id)
    return {"decree": decree.to_dict() if decree is not None else None}


@router.delete("/{session_id}/settlements/{settlement_id}/decree")
def remove_decree(request: Request, session_id: str, settlement_id: str):
    service = _get_service(request, session_id, settlement_id)
    return {"deleted": service.decrees.remove(settlement_id)}
