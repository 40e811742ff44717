"""POST /api/v1/control/{action} — encounter lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from skirmish.api.dependencies import get_encounter_manager
from skirmish.api.encounter_manager import EncounterManager
from skirmish.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    reset = "reset"
    initiative = "initiative"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EncounterManager = Depends(get_encounter_manager),
) -> ControlResponse:
    match action:
        case ControlAction.reset:
            encounter = manager.reset()
            return ControlResponse(
                status="ok",
                message=f"Encounter reset (#{manager.resets}).",
                round=encounter.round_number,
            )

        case ControlAction.initiative:
            with manager.locked() as encounter:
                encounter.turns.sort_by_initiative()
                first = encounter.current_creature.name if len(encounter.turns) else "nobody"
                return ControlResponse(
                    status="ok",
                    message=f"Turn order sorted by initiative; {first} acts first.",
                    round=encounter.round_number,
                )
