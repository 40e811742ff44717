"""Encounter — coordinates one fight: world, turn order and notifications.

The encounter is the single writer for its world.  It never decides what a
creature does; an external driver (CLI script, HTTP client, test) asks the
current creature to attack, pick up, move or end its turn.

Death contract: the encounter listens for CREATURE_DIED and immediately
removes the creature from the turn rotation and the spatial index.  The
creature stays in ``World.creatures`` for record keeping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from skirmish.config import EncounterConfig
from skirmish.core.creature import Creature
from skirmish.core.entity import Entity
from skirmish.core.events import EventBus, EventKind, GameEvent
from skirmish.core.items import Item, Obstacle
from skirmish.core.models import Vector2
from skirmish.core.strategies import get_strategy
from skirmish.core.world import World
from skirmish.engine.exceptions import (
    EncounterOverError,
    InvalidActionError,
    UnknownEntityError,
)
from skirmish.engine.turn_manager import TurnManager
from skirmish.utils.event_log import EventLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AttackResult:
    attacker_id: int
    target_id: int
    damage_dealt: int       # value produced by the attacker
    damage_taken: int       # value actually subtracted from the target
    target_life: int
    killed: bool


class Encounter:
    """One combat encounter on one world."""

    def __init__(
        self,
        config: EncounterConfig | None = None,
        world: World | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config if config is not None else EncounterConfig()
        self.world = world if world is not None else World(self.config.max_x, self.config.max_y)
        self.bus = bus if bus is not None else EventBus()
        self._rotation: list[Creature] = []
        self.turns = TurnManager(self._rotation)
        self.event_log = EventLog(round_source=lambda: self.turns.round_number)
        self.event_log.attach(self.bus)
        self.bus.subscribe(EventKind.CREATURE_DIED, self._on_creature_died)

    # -- setup --

    def _adopt(self, entity: Entity) -> None:
        """Route the entity's (and its gear's) notifications to the shared bus."""
        entity.bus = self.bus
        if isinstance(entity, Creature):
            for item in entity.inventory:
                item.bus = self.bus

    def add_creature(self, creature: Creature) -> bool:
        if creature is None:
            logger.warning("Attempted to add null creature to encounter")
            return False
        if not self.world.add_creature(creature):
            return False
        self._adopt(creature)
        if creature.alive:
            self.turns.add_creature(creature)
        return True

    def add_object(self, world_object: Entity) -> bool:
        if world_object is None:
            logger.warning("Attempted to add null object to encounter")
            return False
        if not self.world.add_world_object(world_object):
            return False
        self._adopt(world_object)
        return True

    # -- state --

    @property
    def current_creature(self) -> Creature:
        return self.turns.current_creature

    @property
    def round_number(self) -> int:
        return self.turns.round_number

    @property
    def teams_alive(self) -> set[str]:
        return {c.team for c in self._rotation}

    @property
    def is_over(self) -> bool:
        return len(self.teams_alive) <= 1

    @property
    def winner(self) -> str | None:
        teams = self.teams_alive
        if len(teams) == 1:
            return next(iter(teams))
        return None

    def creature(self, creature_id: int) -> Creature:
        entity = self.world.find_entity(creature_id)
        if not isinstance(entity, Creature):
            raise UnknownEntityError(creature_id)
        return entity

    # -- actions --

    def _require_active(self) -> Creature:
        if self.is_over:
            raise EncounterOverError(f"Encounter is over (winner: {self.winner})")
        return self.turns.current_creature

    def _resolve_target(self, actor: Creature, target_id: int, reach: int) -> Creature:
        target = self.creature(target_id)
        if target is actor:
            raise InvalidActionError(f"{actor.name} cannot attack itself")
        if not target.alive:
            raise InvalidActionError(f"{target.name} is already dead")
        distance = actor.pos.chebyshev(target.pos)
        if distance > reach:
            raise InvalidActionError(f"{target.name} is out of range ({distance} > {reach})")
        return target

    @staticmethod
    def _reach(actor: Creature) -> int:
        weapon = actor.equipped_weapon
        if weapon is not None and not weapon.is_broken:
            return max(1, weapon.range)
        return 1

    def attack(self, target_id: int) -> AttackResult:
        """The current creature attacks *target_id*."""
        actor = self._require_active()
        target = self._resolve_target(actor, target_id, self._reach(actor))

        damage = actor.attack()
        taken = target.receive_hit(damage)
        logger.info(
            "Round %d: %s hits %s for %d (%d taken) [HP: %d/%d]",
            self.round_number, actor.name, target.name, damage, taken,
            target.life_points, target.max_health,
        )
        return AttackResult(actor.id, target.id, damage, taken, target.life_points, target.is_dead)

    def special_attack(self, target_id: int, strategy_name: str) -> AttackResult:
        """The current creature uses its weapon's special attack on *target_id*."""
        actor = self._require_active()
        strategy = get_strategy(strategy_name)
        if strategy is None:
            raise InvalidActionError(f"Unknown special attack '{strategy_name}'")
        weapon = actor.equipped_weapon
        if weapon is None or weapon.is_broken:
            raise InvalidActionError(f"{actor.name} has no usable weapon")
        target = self._resolve_target(actor, target_id, self._reach(actor))

        damage = weapon.perform_special_attack(strategy, target)
        taken = target.receive_hit(damage)
        return AttackResult(actor.id, target.id, damage, taken, target.life_points, target.is_dead)

    def pick_up(self) -> list[Item]:
        """The current creature picks up every lootable item on its cell."""
        actor = self._require_active()
        picked: list[Item] = []
        for entity in self.world.get_objects_at(actor.pos):
            if entity is actor or not entity.lootable or not isinstance(entity, Item):
                continue
            if actor.pick(entity):
                self.world.remove_world_object(entity)
                picked.append(entity)
        if not picked:
            logger.info("%s finds nothing to pick up at %s", actor.name, actor.pos)
        return picked

    def move(self, x: int, y: int) -> Vector2:
        """Move the current creature one step (including diagonals)."""
        actor = self._require_active()
        destination = Vector2(x, y)
        if not self.world.is_position_valid(destination):
            raise InvalidActionError(f"{destination} is outside the world")
        if actor.pos.chebyshev(destination) > 1:
            raise InvalidActionError(f"{destination} is more than one step from {actor.pos}")
        if any(isinstance(e, Obstacle) for e in self.world.get_objects_at(destination)):
            raise InvalidActionError(f"{destination} is blocked")
        self.world.move_entity(actor, destination)
        return destination

    def end_turn(self) -> Creature:
        self._require_active()
        return self.turns.next_turn()

    # -- death reconciliation --

    def _on_creature_died(self, event: GameEvent) -> None:
        creature = event.source
        self.turns.remove_creature(creature)
        self.world.unindex_creature(creature)
        logger.info("%s leaves the turn order (%d remain)", creature.name, len(self.turns))
        if self.is_over:
            logger.info("Encounter decided in round %d, winner: %s", self.round_number, self.winner)
