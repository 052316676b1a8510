import asyncio
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import select

from briefdeck.app import BriefApp
from briefdeck.config import BriefDeckConfig, StorageConfig
from briefdeck.domain.briefs import compose_brief
from briefdeck.domain.exceptions import NotFound
from briefdeck.storage.base import AcceptedBriefRecord, UserBadgeRecord
from briefdeck.storage.sqlalchemy import AuditTable


@pytest_asyncio.fixture()
async def sql_app(tmp_path: Path):
    dsn = f"sqlite+aiosqlite:///{(tmp_path / 'briefdeck.db').as_posix()}"
    app = BriefApp(
        BriefDeckConfig(
            bot_token="test",
            storage=StorageConfig(backend="sqlalchemy", dsn=dsn),
            seed_sample_data=True,
        )
    )
    await app.init_backend()
    yield app
    await app.close()


@pytest.mark.asyncio()
async def test_user_roundtrip_keeps_progress(sql_app):
    await sql_app.progress_service.ensure_user(1, "designer")
    await sql_app.progress_service.award_points(1, 130)
    record = await sql_app.stores.users.get(1)
    assert (record.username, record.points, record.level) == ("designer", 130, 3)
    assert record.created_at.tzinfo is not None
    assert await sql_app.stores.users.get(2) is None


@pytest.mark.asyncio()
async def test_brief_flow_on_database(sql_app):
    await sql_app.progress_service.ensure_user(1)
    drawn = sql_app.draw()
    brief = compose_brief(drawn)
    await sql_app.brief_service.accept(1, brief, time_limit_minutes=60)

    active = await sql_app.brief_service.active(1)
    assert isinstance(active, AcceptedBriefRecord)
    assert active.brief == brief.text
    assert active.card_ids == list(brief.card_ids)
    assert active.accepted_at.tzinfo is not None

    outcome = await sql_app.brief_service.complete(1, title="Mark", image_url="tg://file/abc")
    assert outcome.design.design_id == 1
    assert await sql_app.brief_service.active(1) is None
    with pytest.raises(NotFound):
        await sql_app.brief_service.cancel(1)


@pytest.mark.asyncio()
async def test_likes_comments_and_badges_persist(sql_app):
    await sql_app.progress_service.ensure_user(1)
    await sql_app.progress_service.ensure_user(2)
    outcome = await sql_app.design_service.submit(
        1, title="Poster", image_url="p.png", brief="b", card_ids=[2, 5, 8, 11]
    )
    design_id = outcome.design.design_id
    await sql_app.design_service.like(design_id)
    await sql_app.design_service.comment(design_id, 2, "Great type")

    assert (await sql_app.design_service.get(design_id)).likes == 1
    assert [c.content for c in await sql_app.design_service.comments(design_id)] == ["Great type"]
    assert await sql_app.stores.comments.count_for_user(2) == 1

    assert await sql_app.badge_service.award(2, 4) is True
    assert await sql_app.badge_service.award(2, 4) is False
    assert [item.badge.badge_id for item in await sql_app.badge_service.earned(2)] == [4]

    await sql_app.design_service.delete(design_id)
    assert await sql_app.design_service.gallery() == []


@pytest.mark.asyncio()
async def test_concurrent_point_awards_are_all_kept(sql_app):
    await sql_app.progress_service.ensure_user(1)
    await asyncio.gather(*(sql_app.progress_service.award_points(1, 10) for _ in range(5)))
    record = await sql_app.stores.users.get(1)
    assert (record.points, record.level) == (50, 2)


@pytest.mark.asyncio()
async def test_concurrent_badge_awards_grant_once(sql_app):
    await sql_app.progress_service.ensure_user(1)
    results = await asyncio.gather(
        sql_app.badge_service.award(1, 1), sql_app.badge_service.award(1, 1)
    )
    assert sorted(results) == [False, True]
    assert [item.badge.badge_id for item in await sql_app.badge_service.earned(1)] == [1]
    assert (await sql_app.progress_service.fetch(1)).points == 50


@pytest.mark.asyncio()
async def test_badge_store_reports_duplicate_insert(sql_app):
    store = sql_app.stores.awards
    assert await store.add(UserBadgeRecord(user_id=3, badge_id=2)) is True
    assert await store.add(UserBadgeRecord(user_id=3, badge_id=2)) is False


@pytest.mark.asyncio()
async def test_admin_flag_does_not_clobber_concurrent_points(sql_app):
    await sql_app.progress_service.ensure_user(1)
    await asyncio.gather(
        sql_app.progress_service.award_points(1, 30),
        sql_app.progress_service.set_admin(1, True),
        sql_app.progress_service.award_points(1, 20),
    )
    record = await sql_app.stores.users.get(1)
    assert (record.points, record.is_admin) == (50, True)


@pytest.mark.asyncio()
async def test_audit_entries_are_stored(sql_app):
    await sql_app.stores.audit.add_entry("create_card", {"card_id": 13})
    async with sql_app._sqlalchemy_storage.session() as session:
        rows = (await session.execute(select(AuditTable))).scalars().all()
    assert [(row.action, row.payload) for row in rows] == [("create_card", {"card_id": 13})]


def test_sqlalchemy_backend_uses_default_dsn():
    assert StorageConfig(backend="sqlalchemy").resolve_dsn() == "sqlite+aiosqlite:///./briefdeck.db"
    assert StorageConfig().resolve_dsn() is None


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        BriefApp(BriefDeckConfig(storage=StorageConfig(backend="redis")))
