"""Creature — a combatant entity with health, gear and a damage pipeline.

Combat protocol:
  - attack()       base damage + weapon roll + creature modifiers, floor 1
  - receive_hit()  max(1, hit - effective defense), clamps life at 0,
                   fires CREATURE_DIED exactly once
  - pick()         dispatch on item capability: equip / consume / reject
"""

from __future__ import annotations

import logging
from typing import Iterable

from skirmish.core.entity import Entity
from skirmish.core.enums import ItemCapability
from skirmish.core.events import EventBus, EventKind, GameEvent
from skirmish.core.items import AttackItem, DefenceItem, HealthPotion, Item
from skirmish.core.models import Vector2
from skirmish.core.modifiers import DamageModifier, apply_damage_modifiers

logger = logging.getLogger(__name__)


class Creature(Entity):
    """A living combatant placed in the world."""

    def __init__(
        self,
        pos: Vector2 | tuple[int, int],
        name: str,
        *,
        max_health: int = 100,
        base_damage: int = 5,
        base_defense: int = 0,
        life_points: int | None = None,
        team: str = "neutral",
        damage_modifiers: Iterable[DamageModifier] = (),
        armor_wear_per_hit: int = 0,
        bus: EventBus | None = None,
    ) -> None:
        if max_health <= 0:
            raise ValueError(f"max_health must be > 0, got {max_health}")
        super().__init__(pos, name, lootable=False, removable=False, bus=bus)
        self.max_health = max_health
        self.life_points = max_health if life_points is None else max(0, min(life_points, max_health))
        self.base_damage = base_damage
        self.base_defense = base_defense
        self.team = team
        self.armor_wear_per_hit = armor_wear_per_hit
        self.equipped_weapon: AttackItem | None = None
        self.equipped_armor: DefenceItem | None = None
        self.inventory: list[Item] = []
        self.damage_modifiers: list[DamageModifier] = list(damage_modifiers)
        self._dead = self.life_points == 0

    # -- state --

    @property
    def alive(self) -> bool:
        return not self._dead

    @property
    def is_dead(self) -> bool:
        return self._dead

    @property
    def health_ratio(self) -> float:
        return self.life_points / self.max_health

    def effective_defense(self) -> int:
        armor = self.equipped_armor
        armor_defense = armor.get_total_defense() if armor is not None and not armor.is_broken else 0
        return self.base_defense + armor_defense

    # -- combat --

    def attack(self) -> int:
        damage = self.base_damage
        weapon = self.equipped_weapon
        if weapon is not None and not weapon.is_broken:
            damage += weapon.calculate_damage()
        damage = apply_damage_modifiers(damage, self.damage_modifiers, is_critical=False)
        damage = max(1, damage)
        logger.debug("%s attacks for %d", self.name, damage)
        return damage

    def receive_hit(self, hit: int) -> int:
        """Apply an incoming hit and return the damage actually taken."""
        if self._dead:
            logger.debug("%s is already dead; hit of %d ignored", self.name, hit)
            return 0

        damage_taken = max(1, hit - self.effective_defense())
        self.life_points = max(0, self.life_points - damage_taken)
        logger.info(
            "%s takes %d damage [HP: %d/%d]",
            self.name, damage_taken, self.life_points, self.max_health,
        )
        self.bus.emit(GameEvent(EventKind.DAMAGE_TAKEN, self, damage_taken))

        armor = self.equipped_armor
        if self.armor_wear_per_hit > 0 and armor is not None and not armor.is_broken:
            armor.reduce_durability(self.armor_wear_per_hit)

        if self.life_points == 0:
            self._dead = True
            logger.info("%s has died.", self.name)
            self.bus.emit(GameEvent(EventKind.CREATURE_DIED, self))
        return damage_taken

    def add_damage_modifier(self, modifier: DamageModifier) -> None:
        self.damage_modifiers.append(modifier)
        logger.debug("Added %s to %s", type(modifier).__name__, self.name)

    # -- items --

    def pick(self, item: Item | None) -> bool:
        """Equip or consume *item* depending on its capability."""
        capability = getattr(item, "capability", ItemCapability.NONE)
        match capability:
            case ItemCapability.WEAPON:
                self.equip_weapon(item)
            case ItemCapability.ARMOR:
                self.equip_armor(item)
            case ItemCapability.CONSUMABLE:
                return self.consume(item)
            case _:
                logger.warning("%s cannot pick up %r", self.name, item)
                return False
        return True

    def _take(self, item: Item, previous: Item | None) -> None:
        """Own *item* in place of *previous*; owned items publish on our bus."""
        if previous is not None and previous in self.inventory:
            self.inventory.remove(previous)
        item.bus = self.bus
        self.inventory.append(item)

    def equip_weapon(self, weapon: AttackItem) -> None:
        previous = self.equipped_weapon
        self._take(weapon, previous)
        self.equipped_weapon = weapon
        if previous is not None:
            logger.info("%s discards %s and equips %s", self.name, previous.name, weapon.name)
        else:
            logger.info("%s equips %s", self.name, weapon.name)

    def equip_armor(self, armor: DefenceItem) -> None:
        previous = self.equipped_armor
        self._take(armor, previous)
        self.equipped_armor = armor
        if previous is not None:
            logger.info("%s discards %s and equips %s", self.name, previous.name, armor.name)
        else:
            logger.info("%s equips %s", self.name, armor.name)

    def consume(self, potion: HealthPotion) -> bool:
        if self._dead:
            logger.warning("%s is dead and cannot drink %s", self.name, potion.name)
            return False
        if potion.consumed:
            logger.warning("%s has already been consumed", potion.name)
            return False
        before = self.life_points
        self.life_points = min(self.max_health, self.life_points + potion.heal_amount)
        potion.consumed = True
        if potion in self.inventory:
            self.inventory.remove(potion)
        logger.info(
            "%s drinks %s and heals %d [HP: %d/%d]",
            self.name, potion.name, self.life_points - before, self.life_points, self.max_health,
        )
        return True

    # -- interaction --

    def _execute_interaction(self) -> None:
        weapon = self.equipped_weapon.name if self.equipped_weapon else "bare hands"
        armor = self.equipped_armor.name if self.equipped_armor else "no armor"
        logger.info(
            "%s [%s] HP %d/%d, wielding %s, wearing %s.",
            self.name, self.team, self.life_points, self.max_health, weapon, armor,
        )
