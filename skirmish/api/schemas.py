"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Entities ---

class ItemSchema(BaseModel):
    id: int
    name: str
    kind: str
    x: int
    y: int
    lootable: bool = True
    removable: bool = True
    durability: int | None = None
    max_durability: int | None = None
    broken: bool = False
    base_damage: int | None = None
    base_defense: int | None = None
    damage_type: str | None = None
    heal_amount: int | None = None


class CreatureSchema(BaseModel):
    id: int
    name: str
    team: str
    x: int
    y: int
    life_points: int
    max_health: int
    base_damage: int
    base_defense: int
    alive: bool
    weapon: ItemSchema | None = None
    armor: ItemSchema | None = None


class EncounterStateResponse(BaseModel):
    round: int
    current_creature_id: int | None = None
    turn_order: list[int] = Field(default_factory=list)
    creatures: list[CreatureSchema] = Field(default_factory=list)
    objects: list[ItemSchema] = Field(default_factory=list)
    is_over: bool = False
    winner: str | None = None


class CellResponse(BaseModel):
    x: int
    y: int
    creatures: list[CreatureSchema] = Field(default_factory=list)
    objects: list[ItemSchema] = Field(default_factory=list)


# --- Events ---

class EventSchema(BaseModel):
    round: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)
    metadata: dict | None = None


class EventsResponse(BaseModel):
    events: list[EventSchema]


# --- Actions ---

class AttackRequest(BaseModel):
    target_id: int


class SpecialAttackRequest(BaseModel):
    target_id: int
    strategy: str = "power_strike"


class MoveRequest(BaseModel):
    x: int
    y: int


class AttackResponse(BaseModel):
    attacker_id: int
    target_id: int
    damage_dealt: int
    damage_taken: int
    target_life: int
    killed: bool
    is_over: bool = False
    winner: str | None = None


class PickResponse(BaseModel):
    picked: list[ItemSchema]


class TurnResponse(BaseModel):
    round: int
    current_creature_id: int


class ControlResponse(BaseModel):
    status: str
    message: str
    round: int = 1


# --- Config ---

class EncounterConfigResponse(BaseModel):
    max_x: int
    max_y: int
    difficulty: str
    seed: int
    critical_multiplier: float
    special_attack_wear: int
    armor_wear_per_hit: int
