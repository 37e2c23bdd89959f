from __future__ import annotations

import json
import logging
from pathlib import Path

from esper import World

from slingo.components.play_counter import PlayCounter
from slingo.utils.singletons import get_or_create

logger = logging.getLogger(__name__)


class PlayCounterSystem:
    """Persists the number of games started on this installation.

    The counter only ever grows; next_counter() is handed to GameSessionSystem as
    its counter provider so every new game gets a strictly larger value.
    """

    def __init__(
        self,
        world: World,
        *,
        save_path: Path | None = None,
        load_existing: bool = True,
    ) -> None:
        self.world = world
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self._counter = get_or_create(self.world, PlayCounter)
        if load_existing:
            self.load()
        else:
            self.save()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "play_counter.json"

    @property
    def games_started(self) -> int:
        return self._counter.games_started

    def load(self) -> None:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            self._counter.games_started = 0
            self.save()
            return
        except json.JSONDecodeError:
            logger.warning("Play counter file %s is corrupt; starting over", self._save_path)
            self._counter.games_started = 0
            self.save()
            return
        try:
            value = int(payload.get("games_started", 0))
        except (AttributeError, TypeError, ValueError):
            value = 0
        self._counter.games_started = max(0, value)

    def save(self) -> None:
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump({"games_started": self._counter.games_started}, handle, indent=2)

    def next_counter(self) -> int:
        """Increment, persist and return the counter for a game that is starting."""
        self._counter.games_started += 1
        self.save()
        return self._counter.games_started
