from random import Random

import pytest

from briefdeck.domain.cards import CATEGORY_ORDER, Card, Category
from briefdeck.domain.draw import CardDrawEngine, DrawResult
from briefdeck.domain.exceptions import InvalidArgument, NotFound
from briefdeck.testing import CardFactory


def client(card_id: int) -> Card:
    return Card(card_id=card_id, category=Category.CLIENT, prompt_text=f"Client {card_id}")


@pytest.fixture()
def engine() -> CardDrawEngine:
    return CardDrawEngine(Random(7))


def test_reroll_picks_the_only_alternative(engine):
    catalog = {Category.CLIENT: [client(1), client(2)]}
    for _ in range(20):
        assert engine.reroll(catalog, "Client", client(1)).card_id == 2


def test_reroll_single_card_falls_back(engine):
    catalog = {Category.CLIENT: [client(1)]}
    assert engine.reroll(catalog, Category.CLIENT, client(1)).card_id == 1


def test_reroll_never_repeats_current_card(engine):
    cards = [client(card_id) for card_id in range(1, 6)]
    catalog = {Category.CLIENT: cards}
    current = cards[0]
    for _ in range(200):
        replacement = engine.reroll(catalog, Category.CLIENT, current)
        assert replacement.card_id != current.card_id
        current = replacement


def test_reroll_without_current_card_chooses_any(engine):
    catalog = {Category.CLIENT: [client(1), client(2)]}
    seen = {engine.reroll(catalog, Category.CLIENT, None).card_id for _ in range(50)}
    assert seen == {1, 2}


def test_reroll_empty_category_raises_not_found(engine):
    with pytest.raises(NotFound):
        engine.reroll({Category.CLIENT: []}, Category.CLIENT, None)


def test_reroll_absent_category_is_invalid(engine):
    with pytest.raises(InvalidArgument):
        engine.reroll({Category.CLIENT: [client(1)]}, Category.NEED, None)


def test_reroll_rejects_card_from_other_category(engine):
    need = Card(card_id=9, category=Category.NEED, prompt_text="Logo design")
    with pytest.raises(InvalidArgument):
        engine.reroll({Category.CLIENT: [client(1), client(2)]}, Category.CLIENT, need)


def test_reroll_rejects_unknown_category_name(engine):
    with pytest.raises(InvalidArgument):
        engine.reroll({Category.CLIENT: [client(1)]}, "Budget", None)


def test_draw_all_is_complete_for_full_catalog(engine):
    cards = CardFactory(rng=Random(3)).deck(per_category=3)
    catalog = {category: [card for card in cards if card.category is category] for category in CATEGORY_ORDER}
    for _ in range(50):
        drawn = engine.draw_all(catalog)
        assert drawn.is_complete()
        for category in drawn:
            assert drawn[category].category is category


def test_draw_all_on_empty_catalog_returns_all_none(engine):
    drawn = engine.draw_all({})
    assert [drawn[category] for category in CATEGORY_ORDER] == [None] * 4
    assert not drawn.is_complete()
    assert drawn.card_ids() == []


def test_draw_all_leaves_missing_categories_empty(engine):
    drawn = engine.draw_all({Category.CLIENT: [client(1)], Category.NEED: []})
    assert drawn[Category.CLIENT].card_id == 1
    assert drawn["need"] is None


def test_draw_does_not_mutate_catalog(engine):
    cards = [client(1), client(2), client(3)]
    catalog = {Category.CLIENT: cards}
    engine.draw_all(catalog)
    engine.reroll(catalog, Category.CLIENT, cards[0])
    assert catalog[Category.CLIENT] == [client(1), client(2), client(3)]


def test_draw_result_with_card_replaces_one_category():
    drawn = DrawResult(cards={Category.CLIENT: client(1)})
    updated = drawn.with_card(client(2))
    assert drawn[Category.CLIENT].card_id == 1
    assert updated[Category.CLIENT].card_id == 2


def test_seeded_engines_are_reproducible():
    catalog = {Category.CLIENT: [client(card_id) for card_id in range(1, 20)]}
    first = [CardDrawEngine(Random(99)).draw_all(catalog).card_ids() for _ in range(3)]
    second = [CardDrawEngine(Random(99)).draw_all(catalog).card_ids() for _ in range(3)]
    assert first == second
