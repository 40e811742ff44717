"""GET /api/v1/state, /cells, /events — encounter state polled by clients."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from skirmish.api.dependencies import get_encounter_manager
from skirmish.api.encounter_manager import EncounterManager
from skirmish.api.schemas import (
    CellResponse,
    CreatureSchema,
    EncounterStateResponse,
    EventSchema,
    EventsResponse,
    ItemSchema,
)
from skirmish.core.creature import Creature
from skirmish.core.entity import Entity
from skirmish.core.items import AttackItem, DefenceItem, DurableItem, HealthPotion
from skirmish.core.models import Vector2

router = APIRouter()


def serialize_item(e: Entity) -> ItemSchema:
    schema = ItemSchema(
        id=e.id, name=e.name, kind=type(e).__name__,
        x=e.pos.x, y=e.pos.y, lootable=e.lootable, removable=e.removable,
    )
    if isinstance(e, DurableItem):
        schema.durability = e.durability
        schema.max_durability = e.max_durability
        schema.broken = e.is_broken
    if isinstance(e, AttackItem):
        schema.base_damage = e.base_damage
        schema.damage_type = e.damage_type.name.lower()
    elif isinstance(e, DefenceItem):
        schema.base_defense = e.get_total_defense()
        schema.damage_type = e.defense_type.name.lower()
    elif isinstance(e, HealthPotion):
        schema.heal_amount = e.heal_amount
    return schema


def serialize_creature(c: Creature) -> CreatureSchema:
    return CreatureSchema(
        id=c.id, name=c.name, team=c.team,
        x=c.pos.x, y=c.pos.y,
        life_points=c.life_points, max_health=c.max_health,
        base_damage=c.base_damage, base_defense=c.base_defense,
        alive=c.alive,
        weapon=serialize_item(c.equipped_weapon) if c.equipped_weapon else None,
        armor=serialize_item(c.equipped_armor) if c.equipped_armor else None,
    )


@router.get("/state", response_model=EncounterStateResponse)
def get_state(manager: EncounterManager = Depends(get_encounter_manager)) -> EncounterStateResponse:
    with manager.locked() as encounter:
        order = encounter.turns.get_turn_order()
        return EncounterStateResponse(
            round=encounter.round_number,
            current_creature_id=order[0].id if order else None,
            turn_order=[c.id for c in order],
            creatures=[serialize_creature(c) for c in encounter.world.creatures],
            objects=[serialize_item(o) for o in encounter.world.world_objects],
            is_over=encounter.is_over,
            winner=encounter.winner,
        )


@router.get("/cells/{x}/{y}", response_model=CellResponse)
def get_cell(x: int, y: int, manager: EncounterManager = Depends(get_encounter_manager)) -> CellResponse:
    with manager.locked() as encounter:
        pos = Vector2(x, y)
        if not encounter.world.is_position_valid(pos):
            raise HTTPException(status_code=404, detail=f"Cell {pos} is outside the world")
        occupants = encounter.world.get_objects_at(pos)
        return CellResponse(
            x=x, y=y,
            creatures=[serialize_creature(e) for e in occupants if isinstance(e, Creature)],
            objects=[serialize_item(e) for e in occupants if not isinstance(e, Creature)],
        )


@router.get("/events", response_model=EventsResponse)
def get_events(
    since_round: int = Query(0, ge=0, description="Only events from this round onward"),
    limit: int = Query(100, ge=1, le=1000),
    manager: EncounterManager = Depends(get_encounter_manager),
) -> EventsResponse:
    with manager.locked() as encounter:
        events = encounter.event_log.since_round(since_round)[-limit:]
    return EventsResponse(events=[
        EventSchema(
            round=e.round, category=e.category, message=e.message,
            entity_ids=list(e.entity_ids), metadata=e.metadata,
        )
        for e in events
    ])
