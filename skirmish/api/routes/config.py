"""GET /api/v1/config — expose the encounter configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from skirmish.api.dependencies import get_encounter_manager
from skirmish.api.encounter_manager import EncounterManager
from skirmish.api.schemas import EncounterConfigResponse

router = APIRouter()


@router.get("/config", response_model=EncounterConfigResponse)
def get_config(
    manager: EncounterManager = Depends(get_encounter_manager),
) -> EncounterConfigResponse:
    cfg = manager.config
    return EncounterConfigResponse(
        max_x=cfg.max_x,
        max_y=cfg.max_y,
        difficulty=cfg.difficulty.name.lower(),
        seed=cfg.seed,
        critical_multiplier=cfg.critical_multiplier,
        special_attack_wear=cfg.special_attack_wear,
        armor_wear_per_hit=cfg.armor_wear_per_hit,
    )
