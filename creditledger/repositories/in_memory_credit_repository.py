from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from creditledger.domain.credit import Credit


@dataclass
class InMemoryCreditRepository:
    """
    Repo en mémoire.
    - Déterministe
    - Facile à tester
    - save_count permet de vérifier qu'une mutation a bien été persistée
    """
    _items: list[Credit] = field(default_factory=list)
    save_count: int = 0

    def load(self) -> list[Credit]:
        return list(self._items)

    def save(self, credits: Sequence[Credit]) -> None:
        ids = [c.id for c in credits]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate credit id in collection")
        self._items = list(credits)
        self.save_count += 1
