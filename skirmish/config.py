"""Encounter configuration with sensible defaults.

Configuration is an explicit value passed to constructors; nothing reads a
global.  ``load_config`` reads world size and difficulty from XML::

    <Config>
      <WorldSize><maxX>10</maxX><maxY>10</maxY></WorldSize>
      <Difficulty>Beginner</Difficulty>
    </Config>

Any failure to read or validate the file is logged and the defaults are
used instead.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, replace
from pathlib import Path

from pydantic import BaseModel, Field, PositiveInt, ValidationError, field_validator

from skirmish.core.enums import Difficulty

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.xml"


@dataclass(frozen=True)
class EncounterConfig:
    """Immutable configuration for one encounter."""

    # World
    max_x: int = 10
    max_y: int = 10
    difficulty: Difficulty = Difficulty.BEGINNER
    seed: int = 42

    # Combat
    critical_multiplier: float = 1.5
    special_attack_wear: int = 5
    armor_wear_per_hit: int = 0            # 0 = armor never wears on hits

    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None             # None = console only


class ConfigDocument(BaseModel):
    """Validated contents of a config file."""

    max_x: PositiveInt = 10
    max_y: PositiveInt = 10
    difficulty: Difficulty = Field(default=Difficulty.BEGINNER)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _parse_difficulty(cls, value: object) -> Difficulty:
        if isinstance(value, Difficulty):
            return value
        return Difficulty.parse(str(value) if value is not None else None)


def _read_xml(path: Path) -> dict[str, str]:
    root = ET.parse(path).getroot()
    raw: dict[str, str] = {}
    for key, xpath in (("max_x", ".//WorldSize/maxX"), ("max_y", ".//WorldSize/maxY"), ("difficulty", ".//Difficulty")):
        node = root.find(xpath)
        if node is not None and node.text is not None:
            raw[key] = node.text.strip()
    return raw


def load_config(path: str | Path = DEFAULT_CONFIG_FILE, base: EncounterConfig | None = None) -> EncounterConfig:
    """Load world size and difficulty from *path* on top of *base*.

    Never raises for a bad file: the defaults are substituted and the
    problem is logged.
    """
    base = base if base is not None else EncounterConfig()
    try:
        document = ConfigDocument(**_read_xml(Path(path)))
    except (OSError, ET.ParseError, ValidationError) as exc:
        logger.error("Error loading config from %s: %s; using defaults", path, exc)
        return replace(base, max_x=10, max_y=10, difficulty=Difficulty.BEGINNER)

    logger.info(
        "Loaded config %s: world %dx%d, difficulty %s",
        path, document.max_x, document.max_y, document.difficulty.name,
    )
    return replace(base, max_x=document.max_x, max_y=document.max_y, difficulty=document.difficulty)
