"""
Leaderboard of finished games, persisted as JSON in a key/value score store
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel
from pydantic import Field
from pydantic import TypeAdapter
from pydantic import ValidationError
from pydantic import field_validator

from neon_pong.core.interfaces import ScoreStore

logger = logging.getLogger(__name__)

LEADERBOARD_KEY = "pong-leaderboard"
MAX_ENTRIES = 10
ANONYMOUS_NAME = "Anonymous"
VS_HUMAN = "vs Human"


class ScoreEntry(BaseModel):
    """One finished game"""

    name: str = Field(default=ANONYMOUS_NAME, description="Player name")
    player_score: int = Field(ge=0, description="Points of the left player")
    opponent_score: int = Field(ge=0, description="Points of the opponent")
    difficulty: str = Field(default=VS_HUMAN, description="AI tier, or 'vs Human'")
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Blank names are stored as anonymous"""
        return v.strip() or ANONYMOUS_NAME


_entries_adapter = TypeAdapter(list[ScoreEntry])


class InMemoryScoreStore:
    """Dictionary-backed score store"""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileScoreStore:
    """Score store persisted as one JSON object in a file"""

    def __init__(self, filepath: str):
        self.path = Path(filepath)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                logger.warning(f"Ignoring unreadable score file {self.path}: {e}")
                return {}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)


class Leaderboard:
    """Top scores sorted by player score, best first"""

    def __init__(
        self, store: ScoreStore, key: str = LEADERBOARD_KEY, max_entries: int = MAX_ENTRIES
    ):
        """
        Args:
            store: Key/value store holding the serialized board
            key: Key the board is stored under
            max_entries: Number of entries kept
        """
        self.store = store
        self.key = key
        self.max_entries = max_entries

    def load(self) -> list[ScoreEntry]:
        """Stored entries, an unreadable board counts as empty"""
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            return _entries_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Failed to load leaderboard: {e}")
            return []

    def save(self, entries: list[ScoreEntry]) -> None:
        self.store.set(self.key, _entries_adapter.dump_json(entries).decode())

    def add_score(
        self,
        name: str,
        player_score: int,
        opponent_score: int,
        difficulty: str | None = None,
    ) -> list[ScoreEntry]:
        """
        Record a finished game and return the updated board.

        Args:
            name: Player name, blank for anonymous
            player_score: Points of the left player
            opponent_score: Points of the opponent
            difficulty: AI tier, None for a game between two humans
        """
        entry = ScoreEntry(
            name=name,
            player_score=player_score,
            opponent_score=opponent_score,
            difficulty=difficulty or VS_HUMAN,
        )
        entries = sorted(
            [*self.load(), entry], key=lambda e: e.player_score, reverse=True
        )[: self.max_entries]
        self.save(entries)
        logger.debug(f"Recorded score {player_score}-{opponent_score} for {entry.name}")
        return entries

    def is_high_score(self, player_score: int) -> bool:
        """Checks if a score would enter the board"""
        entries = self.load()
        if len(entries) < self.max_entries:
            return True
        return player_score > entries[-1].player_score
