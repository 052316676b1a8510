"""Load prompt cards and badges from JSON definitions."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence, TYPE_CHECKING

from ..domain.badges import Badge, BadgeRequirement
from ..domain.cards import Card, Category, Difficulty

if TYPE_CHECKING:
    from ..app import BriefApp


@dataclass(slots=True)
class CatalogDefinition:
    cards: Sequence[Card]
    badges: Sequence[Badge]


def load_catalog_from_json(app: "BriefApp", path: str | Path) -> CatalogDefinition:
    """Load cards and badges from a JSON file and register them on the app."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    definition = parse_catalog_dict(data)
    app.cards.catalog.register_cards(definition.cards)
    for badge in definition.badges:
        app.badges.badge(badge)
    return definition


def parse_catalog_dict(data: dict[str, Any]) -> CatalogDefinition:
    """Parse a decoded JSON dict into domain objects.

    Entries without an ``id`` are numbered after the highest explicit id.
    """
    errors = validate_catalog_dict(data)
    if errors:
        raise ValueError(_format_errors("Catalog validation failed", errors))
    cards_raw = data.get("cards", [])
    badges_raw = data.get("badges", [])
    card_ids = _assign_ids(cards_raw)
    badge_ids = _assign_ids(badges_raw)
    cards = tuple(parse_card(entry, card_id) for entry, card_id in zip(cards_raw, card_ids))
    badges = tuple(parse_badge(entry, badge_id) for entry, badge_id in zip(badges_raw, badge_ids))
    return CatalogDefinition(cards=cards, badges=badges)


def parse_card(entry: dict[str, Any], card_id: int) -> Card:
    return Card(
        card_id=card_id,
        category=Category.parse(entry["category"]),
        prompt_text=entry["prompt"].strip(),
        back_content=entry.get("back", ""),
        difficulty=Difficulty.parse(entry.get("difficulty", Difficulty.BEGINNER.value)),
    )


def parse_badge(entry: dict[str, Any], badge_id: int) -> Badge:
    return Badge(
        badge_id=badge_id,
        name=entry["name"],
        description=entry.get("description", ""),
        icon=entry.get("icon", "award"),
        requirement=BadgeRequirement(entry["requirement"]),
        required_count=int(entry["requiredCount"]),
    )


def validate_catalog_file(path: str | Path) -> list[str]:
    """Validate catalog JSON file and return a list of errors."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return validate_catalog_dict(data)


def validate_catalog_dict(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Catalog must be a JSON object."]

    cards_raw = data.get("cards")
    if not isinstance(cards_raw, list) or not cards_raw:
        errors.append("Catalog must contain non-empty 'cards' array.")
    else:
        seen_ids: set[int] = set()
        seen_categories: set[str] = set()
        for idx, entry in enumerate(cards_raw, start=1):
            if not isinstance(entry, dict):
                errors.append(f"Card #{idx} must be an object.")
                continue
            card_id = entry.get("id")
            if card_id is not None:
                if isinstance(card_id, bool) or not isinstance(card_id, int) or card_id <= 0:
                    errors.append(f"Card #{idx} has invalid 'id' value '{card_id}'.")
                elif card_id in seen_ids:
                    errors.append(f"Card id '{card_id}' defined multiple times.")
                else:
                    seen_ids.add(card_id)

            category = entry.get("category")
            if category not in {member.value for member in Category}:
                errors.append(f"Card #{idx} has invalid category '{category}'.")
            else:
                seen_categories.add(category)

            prompt = entry.get("prompt")
            if not isinstance(prompt, str) or not prompt.strip():
                errors.append(f"Card #{idx} must define non-empty 'prompt'.")

            back = entry.get("back", "")
            if not isinstance(back, str):
                errors.append(f"Card #{idx} 'back' must be a string.")

            difficulty = entry.get("difficulty", Difficulty.BEGINNER.value)
            if difficulty not in {member.value for member in Difficulty}:
                errors.append(f"Card #{idx} has invalid difficulty '{difficulty}'.")

        for category in Category:
            if category.value not in seen_categories:
                errors.append(f"Catalog has no cards in category '{category.value}'.")

    badges_raw = data.get("badges", [])
    if not isinstance(badges_raw, list):
        errors.append("Catalog 'badges' must be an array.")
    else:
        seen_badges: set[int] = set()
        for idx, entry in enumerate(badges_raw, start=1):
            if not isinstance(entry, dict):
                errors.append(f"Badge #{idx} must be an object.")
                continue
            badge_id = entry.get("id")
            if badge_id is not None:
                if isinstance(badge_id, bool) or not isinstance(badge_id, int) or badge_id <= 0:
                    errors.append(f"Badge #{idx} has invalid 'id' value '{badge_id}'.")
                elif badge_id in seen_badges:
                    errors.append(f"Badge id '{badge_id}' defined multiple times.")
                else:
                    seen_badges.add(badge_id)

            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                errors.append(f"Badge #{idx} must define non-empty 'name'.")

            requirement = entry.get("requirement")
            if requirement not in {member.value for member in BadgeRequirement}:
                errors.append(f"Badge #{idx} has unknown requirement '{requirement}'.")

            required_count = entry.get("requiredCount")
            if (
                isinstance(required_count, bool)
                or not isinstance(required_count, int)
                or required_count <= 0
            ):
                errors.append(f"Badge #{idx} 'requiredCount' must be a positive integer.")

    return errors


def _assign_ids(entries: Sequence[dict[str, Any]]) -> list[int]:
    explicit = [entry["id"] for entry in entries if entry.get("id") is not None]
    next_id = max(explicit, default=0) + 1
    assigned: list[int] = []
    for entry in entries:
        if entry.get("id") is not None:
            assigned.append(entry["id"])
        else:
            assigned.append(next_id)
            next_id += 1
    return assigned


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
