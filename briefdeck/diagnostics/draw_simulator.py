"""Draw simulation helpers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from random import Random
from typing import Dict

from ..app import BriefApp
from ..domain.cards import CATEGORY_ORDER, Category
from ..domain.draw import CardDrawEngine


@dataclass(slots=True)
class SimulationResult:
    draws: int
    frequencies: Dict[Category, Counter] = field(default_factory=dict)
    rerolls: int = 0
    unchanged_rerolls: int = 0
    complete_briefs: int = 0

    def share(self, category: Category, card_id: int) -> float:
        if not self.draws:
            return 0.0
        return self.frequencies.get(category, Counter())[card_id] / self.draws


class DrawSimulator:
    """Monte-Carlo run of draws and rerolls to inspect fairness."""

    def __init__(self, app: BriefApp, *, rng: Random | None = None) -> None:
        self._app = app
        self._engine = CardDrawEngine(rng or Random())

    def simulate(self, *, draws: int = 1000, reroll: bool = True) -> SimulationResult:
        catalog = self._app.cards.catalog.grouped()
        result = SimulationResult(
            draws=draws, frequencies={category: Counter() for category in CATEGORY_ORDER}
        )
        for _ in range(draws):
            drawn = self._engine.draw_all(catalog)
            if drawn.is_complete():
                result.complete_briefs += 1
            for category in CATEGORY_ORDER:
                card = drawn[category]
                if card is None:
                    continue
                result.frequencies[category][card.card_id] += 1
                if reroll:
                    replacement = self._engine.reroll(catalog, category, card)
                    result.rerolls += 1
                    if replacement.card_id == card.card_id:
                        result.unchanged_rerolls += 1
        return result
