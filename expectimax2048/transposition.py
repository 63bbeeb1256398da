from enum import IntEnum
from typing import Dict, NamedTuple, Optional

__all__ = ["NodeKind", "SearchKey", "TranspositionTable"]


class NodeKind(IntEnum):
    DECISION = 0
    CHANCE = 1


class SearchKey(NamedTuple):
    board: int
    depth: int
    kind: NodeKind


class TranspositionTable:
    """
    Bounded memo of search values for a single move decision.

    When full, the whole table is dropped before the next insert; capacity 0
    turns storing off entirely.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity: int = max(0, capacity)
        self._storage: Dict[SearchKey, float] = {}

    def get(self, key: SearchKey) -> Optional[float]:
        return self._storage.get(key)

    def store(self, key: SearchKey, value: float) -> None:
        if self.capacity == 0:
            return
        if len(self._storage) >= self.capacity:
            self._storage.clear()
        self._storage[key] = value

    def reset(self) -> None:
        self._storage.clear()

    def __len__(self) -> int:
        return len(self._storage)

    def __contains__(self, key: object) -> bool:
        return key in self._storage
