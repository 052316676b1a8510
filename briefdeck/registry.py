"""Runtime registries for cards and badges."""

from __future__ import annotations

from .domain.badges import Badge, BadgeCatalog, BadgeRequirement
from .domain.cards import Card, CardCatalog, Category, Difficulty


class CardRegistry:
    """Facade around CardCatalog with chainable API."""

    def __init__(self) -> None:
        self.catalog = CardCatalog()

    def card(self, card: Card) -> "CardRegistry":
        self.catalog.register_card(card)
        return self

    def prompt(
        self,
        category: Category | str,
        prompt_text: str,
        back_content: str = "",
        difficulty: Difficulty | str = Difficulty.BEGINNER,
    ) -> "CardRegistry":
        """Register a card, letting the catalog assign its id."""
        self.catalog.create_card(category, prompt_text, back_content, difficulty)
        return self


class BadgeRegistry:
    """Facade around BadgeCatalog with chainable API."""

    def __init__(self) -> None:
        self.catalog = BadgeCatalog()

    def badge(self, badge: Badge) -> "BadgeRegistry":
        self.catalog.register_badge(badge)
        return self

    def requirement(
        self,
        name: str,
        requirement: BadgeRequirement | str,
        required_count: int,
        *,
        description: str = "",
        icon: str = "award",
    ) -> "BadgeRegistry":
        self.catalog.create_badge(name, description, icon, requirement, required_count)
        return self


__all__ = ["BadgeRegistry", "CardRegistry"]
