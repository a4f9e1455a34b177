"""
Storage protocol - opaque key/value persistence for scores
"""

from typing import Protocol


class ScoreStore(Protocol):
    """Key/value store holding serialized data (browser storage, file, memory...)"""

    def get(self, key: str) -> str | None:
        """Returns the stored value, or None when the key is missing"""
        ...

    def set(self, key: str, value: str) -> None: ...
