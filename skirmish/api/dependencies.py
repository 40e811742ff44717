"""FastAPI dependency injection — provides the EncounterManager singleton."""

from __future__ import annotations

from skirmish.api.encounter_manager import EncounterManager

_encounter_manager: EncounterManager | None = None


def set_encounter_manager(manager: EncounterManager | None) -> None:
    global _encounter_manager
    _encounter_manager = manager


def get_encounter_manager() -> EncounterManager:
    if _encounter_manager is None:
        raise RuntimeError("EncounterManager not initialized; server not started correctly.")
    return _encounter_manager
