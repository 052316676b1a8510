import json
from pathlib import Path

import pytest

from briefdeck.app import BriefApp
from briefdeck.config import BriefDeckConfig
from briefdeck.domain.badges import BadgeRequirement
from briefdeck.domain.cards import Category, Difficulty
from briefdeck.loaders import (
    load_catalog_from_json,
    parse_catalog_dict,
    validate_catalog_dict,
    validate_catalog_file,
)


def catalog_payload() -> dict:
    return {
        "cards": [
            {"id": 10, "category": "Client", "prompt": "Florist", "back": "Fresh", "difficulty": "Beginner"},
            {"category": "Need", "prompt": "Business card"},
            {"category": "Challenge", "prompt": "Two colors only", "difficulty": "Advanced"},
            {"category": "Audience", "prompt": "Wedding planners", "difficulty": "Intermediate"},
        ],
        "badges": [
            {"name": "Florist Friend", "requirement": "challenges", "requiredCount": 2},
        ],
    }


def test_parse_catalog_dict_assigns_missing_ids():
    definition = parse_catalog_dict(catalog_payload())
    assert [card.card_id for card in definition.cards] == [10, 11, 12, 13]
    need = definition.cards[1]
    assert need.category is Category.NEED
    assert need.difficulty is Difficulty.BEGINNER
    assert need.back_content == ""
    badge = definition.badges[0]
    assert badge.badge_id == 1
    assert badge.requirement is BadgeRequirement.CHALLENGES
    assert badge.icon == "award"


def test_parse_catalog_dict_invalid_raises():
    payload = catalog_payload()
    payload["cards"][0]["category"] = "Budget"
    with pytest.raises(ValueError):
        parse_catalog_dict(payload)


def test_validate_catalog_dict_reports_every_problem():
    payload = catalog_payload()
    payload["cards"] = payload["cards"][:3]
    payload["cards"][1]["prompt"] = " "
    payload["cards"].append({"id": 10, "category": "Client", "prompt": "Dup", "difficulty": "Expert"})
    payload["badges"][0]["requiredCount"] = 0
    errors = validate_catalog_dict(payload)
    assert "Catalog has no cards in category 'Audience'." in errors
    assert any("non-empty 'prompt'" in err for err in errors)
    assert "Card id '10' defined multiple times." in errors
    assert any("invalid difficulty 'Expert'" in err for err in errors)
    assert any("'requiredCount' must be a positive integer" in err for err in errors)


def test_validate_catalog_dict_requires_object():
    assert validate_catalog_dict([]) == ["Catalog must be a JSON object."]


def test_load_catalog_from_json_registers_entities(tmp_path: Path):
    json_path = tmp_path / "catalog.json"
    json_path.write_text(json.dumps(catalog_payload()), encoding="utf-8")
    assert validate_catalog_file(json_path) == []

    app = BriefApp(BriefDeckConfig(bot_token="test"))
    load_catalog_from_json(app, json_path)

    grouped = app.cards.catalog.grouped()
    assert all(len(cards) == 1 for cards in grouped.values())
    assert [badge.name for badge in app.badges.catalog.all()] == ["Florist Friend"]
    # Ids continue after the loaded ones.
    assert app.cards.catalog.create_card("Client", "Bakery").card_id == 14


def test_example_catalog_is_valid():
    path = Path(__file__).parent.parent / "examples" / "catalog" / "cards.json"
    assert validate_catalog_file(path) == []
