"""Engine layer: turn scheduling and encounter coordination."""

from skirmish.engine.encounter import AttackResult, Encounter
from skirmish.engine.turn_manager import TurnManager

__all__ = ["AttackResult", "Encounter", "TurnManager"]
