from datetime import timedelta

import pytest

from briefdeck.domain.briefs import Brief, compose_brief, remaining_seconds
from briefdeck.domain.cards import Category
from briefdeck.domain.draw import DrawResult
from briefdeck.domain.events import BRIEF_CANCELLED
from briefdeck.domain.exceptions import InvalidArgument, NotFound, StaleBrief


def sample_draw(app, card_ids=(1, 4, 7, 10)) -> DrawResult:
    cards = [app.cards.catalog.get_card(card_id) for card_id in card_ids]
    return DrawResult(cards={card.category: card for card in cards})


def test_compose_brief_uses_every_category(memory_app):
    brief = compose_brief(sample_draw(memory_app))
    assert brief == Brief(
        text=(
            "Create a Logo design for a Local coffee shop with Limited color palette "
            "(2 colors only), targeting Gen Z trendsetters."
        ),
        card_ids=(1, 4, 7, 10),
    )


def test_compose_brief_needs_all_cards(memory_app):
    drawn = sample_draw(memory_app, card_ids=(1, 4, 7))
    assert drawn[Category.AUDIENCE] is None
    assert compose_brief(drawn) is None


@pytest.mark.asyncio()
async def test_accept_with_timer_counts_down(memory_app):
    await memory_app.progress_service.ensure_user(1)
    brief = compose_brief(sample_draw(memory_app))
    record = await memory_app.brief_service.accept(1, brief, time_limit_minutes=60)

    assert await memory_app.brief_service.active(1) == record
    later = record.accepted_at + timedelta(minutes=10)
    assert remaining_seconds(record, now=later) == 50 * 60
    assert remaining_seconds(record, now=record.accepted_at + timedelta(hours=2)) == 0


@pytest.mark.asyncio()
async def test_accept_without_timer_has_no_deadline(memory_app):
    await memory_app.progress_service.ensure_user(1)
    record = await memory_app.brief_service.accept(1, compose_brief(sample_draw(memory_app)))
    assert remaining_seconds(record) is None


@pytest.mark.asyncio()
@pytest.mark.parametrize("minutes", [0, -5, 24 * 60 + 1])
async def test_accept_rejects_out_of_range_timer(memory_app, minutes):
    await memory_app.progress_service.ensure_user(1)
    with pytest.raises(InvalidArgument):
        await memory_app.brief_service.accept(
            1, compose_brief(sample_draw(memory_app)), time_limit_minutes=minutes
        )
    assert await memory_app.brief_service.active(1) is None


@pytest.mark.asyncio()
async def test_accept_requires_known_user(memory_app):
    with pytest.raises(NotFound):
        await memory_app.brief_service.accept(9, compose_brief(sample_draw(memory_app)))


@pytest.mark.asyncio()
async def test_new_acceptance_replaces_previous(memory_app):
    await memory_app.progress_service.ensure_user(1)
    await memory_app.brief_service.accept(1, compose_brief(sample_draw(memory_app)))
    second = compose_brief(sample_draw(memory_app, card_ids=(2, 5, 8, 11)))
    await memory_app.brief_service.accept(1, second)
    assert (await memory_app.brief_service.active(1)).brief == second.text


@pytest.mark.asyncio()
async def test_cancel_charges_penalty_and_lowers_level(memory_app):
    cancelled = []

    async def listener(payload):
        cancelled.append(payload["user_id"])

    memory_app.event_bus.subscribe(BRIEF_CANCELLED, listener)
    await memory_app.progress_service.ensure_user(1)
    await memory_app.progress_service.award_points(1, 110)
    await memory_app.brief_service.accept(1, compose_brief(sample_draw(memory_app)))

    progress = await memory_app.brief_service.cancel(1)
    assert (progress.points, progress.level) == (60, 2)
    assert cancelled == [1]
    assert await memory_app.brief_service.active(1) is None
    with pytest.raises(NotFound):
        await memory_app.brief_service.cancel(1)


@pytest.mark.asyncio()
async def test_cancel_never_goes_below_zero(memory_app):
    await memory_app.progress_service.ensure_user(1)
    await memory_app.brief_service.accept(1, compose_brief(sample_draw(memory_app)))
    progress = await memory_app.brief_service.cancel(1)
    assert (progress.points, progress.level) == (0, 1)


@pytest.mark.asyncio()
async def test_complete_submits_design_and_clears_brief(memory_app):
    await memory_app.progress_service.ensure_user(1)
    brief = compose_brief(sample_draw(memory_app))
    await memory_app.brief_service.accept(1, brief, time_limit_minutes=30)

    outcome = await memory_app.brief_service.complete(
        1, title="Coffee mark", image_url="https://example.com/mark.png"
    )
    assert outcome.design.brief == brief.text
    assert list(outcome.design.card_ids) == [1, 4, 7, 10]
    assert outcome.progress.points == 25
    assert await memory_app.brief_service.active(1) is None


@pytest.mark.asyncio()
async def test_complete_without_brief_raises(memory_app):
    await memory_app.progress_service.ensure_user(1)
    with pytest.raises(NotFound):
        await memory_app.brief_service.complete(1, title="t", image_url="u")


def test_timer_presets_follow_config(memory_app):
    assert tuple(memory_app.brief_service.timer_presets()) == (30, 60, 120)


@pytest.mark.asyncio()
async def test_accept_rejects_brief_with_removed_card(memory_app):
    await memory_app.progress_service.ensure_user(1)
    brief = compose_brief(sample_draw(memory_app))
    memory_app.cards.catalog.remove_card(4)
    with pytest.raises(NotFound):
        await memory_app.brief_service.accept(1, brief)
    assert await memory_app.brief_service.active(1) is None


@pytest.mark.asyncio()
async def test_complete_drops_brief_with_removed_card_without_penalty(memory_app):
    await memory_app.progress_service.ensure_user(1)
    await memory_app.progress_service.award_points(1, 60)
    await memory_app.brief_service.accept(1, compose_brief(sample_draw(memory_app)))
    memory_app.cards.catalog.remove_card(7)

    with pytest.raises(StaleBrief):
        await memory_app.brief_service.complete(1, title="t", image_url="u")
    assert await memory_app.brief_service.active(1) is None
    assert (await memory_app.progress_service.fetch(1)).points == 60
    assert await memory_app.design_service.gallery() == []
