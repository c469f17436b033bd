from __future__ import annotations

from typing import Protocol, Sequence

from creditledger.domain.credit import Credit


class CreditRepository(Protocol):
    """
    Port de persistance du ledger : chargement complet au démarrage,
    réécriture complète après chaque mutation (last writer wins).
    """

    def load(self) -> list[Credit]:
        ...

    def save(self, credits: Sequence[Credit]) -> None:
        ...
