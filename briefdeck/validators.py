"""Validation utilities for BriefDeck applications."""

from __future__ import annotations

from .app import BriefApp
from .domain.cards import CATEGORY_ORDER


def validate_app(app: BriefApp) -> list[str]:
    """Return list of validation errors discovered in configured app."""
    errors: list[str] = []

    grouped = app.cards.catalog.grouped()
    for category in CATEGORY_ORDER:
        cards = grouped[category]
        if not cards:
            errors.append(f"No cards registered in category '{category.value}'.")
        prompts = [card.prompt_text.lower() for card in cards]
        duplicates = sorted({prompt for prompt in prompts if prompts.count(prompt) > 1})
        for prompt in duplicates:
            errors.append(f"Category '{category.value}' repeats prompt '{prompt}'.")

    badge_names: set[str] = set()
    for badge in app.badges.catalog.all():
        if badge.required_count <= 0:
            errors.append(f"Badge '{badge.name}' has non-positive requiredCount '{badge.required_count}'.")
        if badge.name in badge_names:
            errors.append(f"Badge name '{badge.name}' is used more than once.")
        badge_names.add(badge.name)

    progress = app.config.progress
    for name in ("design_points", "badge_points", "cancel_penalty"):
        if getattr(progress, name) < 0:
            errors.append(f"Progress configuration '{name}' cannot be negative.")
    if progress.max_timer_minutes <= 0:
        errors.append("Progress configuration 'max_timer_minutes' must be positive.")
    for minutes in progress.timer_presets:
        if minutes <= 0 or minutes > progress.max_timer_minutes:
            errors.append(
                f"Timer preset {minutes} must be between 1 and {progress.max_timer_minutes} minutes."
            )

    return errors


__all__ = ["validate_app"]
