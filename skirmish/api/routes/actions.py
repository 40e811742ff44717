"""POST /api/v1/actions/* — the current creature acts on the caller's behalf."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from skirmish.api.dependencies import get_encounter_manager
from skirmish.api.encounter_manager import EncounterManager
from skirmish.api.routes.state import serialize_item
from skirmish.api.schemas import (
    AttackRequest,
    AttackResponse,
    MoveRequest,
    PickResponse,
    SpecialAttackRequest,
    TurnResponse,
)
from skirmish.engine.encounter import AttackResult, Encounter
from skirmish.engine.exceptions import (
    ActionError,
    EncounterOverError,
    UnknownEntityError,
)

router = APIRouter(prefix="/actions")


def _to_http(exc: ActionError) -> HTTPException:
    if isinstance(exc, UnknownEntityError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, EncounterOverError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _attack_response(result: AttackResult, encounter: Encounter) -> AttackResponse:
    return AttackResponse(
        attacker_id=result.attacker_id,
        target_id=result.target_id,
        damage_dealt=result.damage_dealt,
        damage_taken=result.damage_taken,
        target_life=result.target_life,
        killed=result.killed,
        is_over=encounter.is_over,
        winner=encounter.winner,
    )


@router.post("/attack", response_model=AttackResponse)
def attack(body: AttackRequest, manager: EncounterManager = Depends(get_encounter_manager)) -> AttackResponse:
    with manager.locked() as encounter:
        try:
            result = encounter.attack(body.target_id)
        except ActionError as exc:
            raise _to_http(exc) from exc
        return _attack_response(result, encounter)


@router.post("/special", response_model=AttackResponse)
def special_attack(
    body: SpecialAttackRequest,
    manager: EncounterManager = Depends(get_encounter_manager),
) -> AttackResponse:
    with manager.locked() as encounter:
        try:
            result = encounter.special_attack(body.target_id, body.strategy)
        except ActionError as exc:
            raise _to_http(exc) from exc
        return _attack_response(result, encounter)


@router.post("/pick", response_model=PickResponse)
def pick(manager: EncounterManager = Depends(get_encounter_manager)) -> PickResponse:
    with manager.locked() as encounter:
        try:
            picked = encounter.pick_up()
        except ActionError as exc:
            raise _to_http(exc) from exc
        return PickResponse(picked=[serialize_item(i) for i in picked])


@router.post("/move", response_model=TurnResponse)
def move(body: MoveRequest, manager: EncounterManager = Depends(get_encounter_manager)) -> TurnResponse:
    with manager.locked() as encounter:
        try:
            encounter.move(body.x, body.y)
        except ActionError as exc:
            raise _to_http(exc) from exc
        return TurnResponse(round=encounter.round_number, current_creature_id=encounter.current_creature.id)


@router.post("/end-turn", response_model=TurnResponse)
def end_turn(manager: EncounterManager = Depends(get_encounter_manager)) -> TurnResponse:
    with manager.locked() as encounter:
        try:
            current = encounter.end_turn()
        except ActionError as exc:
            raise _to_http(exc) from exc
        return TurnResponse(round=encounter.round_number, current_creature_id=current.id)
