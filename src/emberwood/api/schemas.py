"""
Pydantic models for API request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any


# === Sessions ===

class CreateSessionRequest(BaseModel):
    config: dict[str, Any] | None = None
    name: str | None = None
    settlements: list[str] | None = None


class SessionResponse(BaseModel):
    id: str
    name: str
    day: int
    settlements: list[str]
    config: dict[str, Any]


class AdvanceRequest(BaseModel):
    days: int = Field(default=1, ge=1, le=365)


# === Economy events ===

class DayTickRequest(BaseModel):
    absolute_day: int


class EnemyModel(BaseModel):
    is_boss: bool = False


class BattleRequest(BaseModel):
    enemy: EnemyModel = Field(default_factory=EnemyModel)
    area: str


class PurchaseRequest(BaseModel):
    gold_spent: float
    context: str = "village"


class EventResponse(BaseModel):
    applied: bool
    event: dict[str, Any] | None = None
    state: dict[str, Any]


# === Collaborator inputs ===

class GovernmentEffectRequest(BaseModel):
    has_data: bool = True
    prosperity_modifier: float = Field(default=0.0, ge=-0.3, le=0.3)
    safety_modifier: float = Field(default=0.0, ge=-0.3, le=0.3)


class DecreeRequest(BaseModel):
    expires_on_day: int
    petition_id: str | None = None
    rest_cost_multiplier: float | None = Field(default=None, gt=0)
    econ_prosperity_delta: int | None = None
    econ_trade_delta: int | None = None
    econ_security_delta: int | None = None


# === Quotes ===

class PriceResponse(BaseModel):
    base_price: float
    context: str
    price: int


class RestCostResponse(BaseModel):
    day: int
    cost: int
    decree_active: bool
