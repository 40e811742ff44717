"""EncounterManager — owns the live encounter behind the HTTP API.

Every request that touches the encounter goes through ``locked()``, so
requests served on different threads still mutate the world one at a time
(single writer).
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from skirmish.systems.generator import build_encounter

if TYPE_CHECKING:
    from skirmish.config import EncounterConfig
    from skirmish.engine.encounter import Encounter

logger = logging.getLogger(__name__)


class EncounterManager:
    """Builds, serves and resets one encounter."""

    def __init__(self, config: EncounterConfig) -> None:
        self.config = config
        self._lock = threading.Lock()
        self._encounter: Encounter = build_encounter(config)
        self._resets = 0

    @contextmanager
    def locked(self) -> Iterator[Encounter]:
        with self._lock:
            yield self._encounter

    def reset(self) -> Encounter:
        with self._lock:
            self._encounter = build_encounter(self.config)
            self._resets += 1
            logger.info("Encounter reset (#%d)", self._resets)
            return self._encounter

    @property
    def resets(self) -> int:
        return self._resets
