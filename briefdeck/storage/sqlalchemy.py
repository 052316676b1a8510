"""SQLAlchemy storage backend for BriefDeck."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Sequence

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .base import (
    AcceptedBriefRecord,
    AuditStore,
    BadgeAwardStore,
    BriefStore,
    CommentRecord,
    CommentStore,
    DesignRecord,
    DesignStore,
    UserBadgeRecord,
    UserRecord,
    UserStore,
)


class Base(DeclarativeBase):
    pass


class UserTable(Base):
    __tablename__ = "briefdeck_users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    points: Mapped[int] = mapped_column(Integer, default=0)
    level: Mapped[int] = mapped_column(Integer, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class DesignTable(Base):
    __tablename__ = "briefdeck_designs"

    design_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    title: Mapped[str] = mapped_column(String(255))
    image_url: Mapped[str] = mapped_column(Text)
    brief: Mapped[str] = mapped_column(Text)
    card_ids: Mapped[list[int]] = mapped_column(JSON)
    description: Mapped[str] = mapped_column(Text, default="")
    likes: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class CommentTable(Base):
    __tablename__ = "briefdeck_comments"

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    design_id: Mapped[int] = mapped_column(Integer, index=True)
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class UserBadgeTable(Base):
    __tablename__ = "briefdeck_user_badges"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    badge_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    earned_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))


class AcceptedBriefTable(Base):
    __tablename__ = "briefdeck_accepted_briefs"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    brief: Mapped[str] = mapped_column(Text)
    card_ids: Mapped[list[int]] = mapped_column(JSON)
    accepted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    time_limit_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)


class AuditTable(Base):
    __tablename__ = "briefdeck_audit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    action: Mapped[str] = mapped_column(String(128))
    payload: Mapped[dict] = mapped_column(JSON)


class AsyncSQLAlchemyStorage:
    """Bundle of async stores backed by SQLAlchemy."""

    def __init__(self, dsn: str, *, echo: bool = False) -> None:
        self._engine = create_async_engine(dsn, echo=echo)
        self._session_factory = async_sessionmaker(self._engine, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    async def init_models(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()

    def user_store(self) -> "AsyncSQLAlchemyUserStore":
        return AsyncSQLAlchemyUserStore(self._session_factory)

    def design_store(self) -> "AsyncSQLAlchemyDesignStore":
        return AsyncSQLAlchemyDesignStore(self._session_factory)

    def comment_store(self) -> "AsyncSQLAlchemyCommentStore":
        return AsyncSQLAlchemyCommentStore(self._session_factory)

    def badge_store(self) -> "AsyncSQLAlchemyBadgeAwardStore":
        return AsyncSQLAlchemyBadgeAwardStore(self._session_factory)

    def brief_store(self) -> "AsyncSQLAlchemyBriefStore":
        return AsyncSQLAlchemyBriefStore(self._session_factory)

    def audit_store(self) -> "AsyncSQLAlchemyAuditStore":
        return AsyncSQLAlchemyAuditStore(self._session_factory)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AsyncSQLAlchemyUserStore(UserStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, user_id: int) -> UserRecord | None:
        async with self._session_factory() as session:
            row = await session.get(UserTable, user_id)
            return self._to_record(row) if row else None

    async def get_or_create(self, user_id: int, username: str | None = None) -> UserRecord:
        async with self._session_factory() as session:
            row = await session.get(UserTable, user_id)
            if not row:
                row = UserTable(
                    user_id=user_id,
                    username=username,
                    is_admin=False,
                    points=0,
                    level=1,
                    created_at=datetime.now(timezone.utc),
                )
                session.add(row)
                await session.commit()
            elif username and row.username != username:
                row.username = username
                await session.commit()
            return self._to_record(row)

    async def save(self, record: UserRecord) -> None:
        async with self._session_factory() as session:
            row = await session.get(UserTable, record.user_id)
            if not row:
                row = UserTable(user_id=record.user_id, created_at=record.created_at)
                session.add(row)
            row.username = record.username
            row.is_admin = record.is_admin
            row.points = record.points
            row.level = record.level
            await session.commit()

    async def all(self) -> Sequence[UserRecord]:
        async with self._session_factory() as session:
            rows = (await session.execute(select(UserTable))).scalars().all()
            return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: UserTable) -> UserRecord:
        return UserRecord(
            user_id=row.user_id,
            username=row.username,
            is_admin=row.is_admin,
            points=row.points,
            level=row.level,
            created_at=_as_utc(row.created_at),
        )


class AsyncSQLAlchemyDesignStore(DesignStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add(self, record: DesignRecord) -> DesignRecord:
        async with self._session_factory() as session:
            row = DesignTable(
                user_id=record.user_id,
                title=record.title,
                image_url=record.image_url,
                brief=record.brief,
                card_ids=list(record.card_ids),
                description=record.description,
                likes=record.likes,
                created_at=record.created_at,
            )
            session.add(row)
            await session.commit()
            return self._to_record(row)

    async def get(self, design_id: int) -> DesignRecord | None:
        async with self._session_factory() as session:
            row = await session.get(DesignTable, design_id)
            return self._to_record(row) if row else None

    async def save(self, record: DesignRecord) -> None:
        if record.design_id is None:
            raise ValueError("Cannot save a design without an id")
        async with self._session_factory() as session:
            row = await session.get(DesignTable, record.design_id)
            if not row:
                raise ValueError(f"Design {record.design_id} does not exist")
            row.title = record.title
            row.image_url = record.image_url
            row.brief = record.brief
            row.card_ids = list(record.card_ids)
            row.description = record.description
            row.likes = record.likes
            await session.commit()

    async def delete(self, design_id: int) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(DesignTable).where(DesignTable.design_id == design_id)
            )
            await session.commit()
            return result.rowcount > 0

    async def for_user(self, user_id: int) -> Sequence[DesignRecord]:
        async with self._session_factory() as session:
            stmt = (
                select(DesignTable)
                .where(DesignTable.user_id == user_id)
                .order_by(DesignTable.design_id)
            )
            rows = (await session.execute(stmt)).scalars().all()
            return [self._to_record(row) for row in rows]

    async def recent(self, limit: int = 20) -> Sequence[DesignRecord]:
        async with self._session_factory() as session:
            stmt = select(DesignTable).order_by(DesignTable.design_id.desc()).limit(limit)
            rows = (await session.execute(stmt)).scalars().all()
            return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: DesignTable) -> DesignRecord:
        return DesignRecord(
            design_id=row.design_id,
            user_id=row.user_id,
            title=row.title,
            image_url=row.image_url,
            brief=row.brief,
            card_ids=list(row.card_ids),
            description=row.description or "",
            likes=row.likes,
            created_at=_as_utc(row.created_at),
        )


class AsyncSQLAlchemyCommentStore(CommentStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add(self, record: CommentRecord) -> CommentRecord:
        async with self._session_factory() as session:
            row = CommentTable(
                design_id=record.design_id,
                user_id=record.user_id,
                content=record.content,
                created_at=record.created_at,
            )
            session.add(row)
            await session.commit()
            return CommentRecord(
                comment_id=row.comment_id,
                design_id=row.design_id,
                user_id=row.user_id,
                content=row.content,
                created_at=record.created_at,
            )

    async def for_design(self, design_id: int) -> Sequence[CommentRecord]:
        async with self._session_factory() as session:
            stmt = (
                select(CommentTable)
                .where(CommentTable.design_id == design_id)
                .order_by(CommentTable.comment_id)
            )
            rows = (await session.execute(stmt)).scalars().all()
            return [
                CommentRecord(
                    comment_id=row.comment_id,
                    design_id=row.design_id,
                    user_id=row.user_id,
                    content=row.content,
                    created_at=_as_utc(row.created_at),
                )
                for row in rows
            ]

    async def count_for_user(self, user_id: int) -> int:
        async with self._session_factory() as session:
            stmt = select(func.count()).select_from(CommentTable).where(CommentTable.user_id == user_id)
            return int((await session.execute(stmt)).scalar_one())


class AsyncSQLAlchemyBadgeAwardStore(BadgeAwardStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add(self, record: UserBadgeRecord) -> bool:
        async with self._session_factory() as session:
            existing = await session.get(UserBadgeTable, (record.user_id, record.badge_id))
            if existing:
                return False
            session.add(
                UserBadgeTable(
                    user_id=record.user_id,
                    badge_id=record.badge_id,
                    earned_at=record.earned_at,
                )
            )
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                return False
            return True

    async def for_user(self, user_id: int) -> Sequence[UserBadgeRecord]:
        async with self._session_factory() as session:
            stmt = select(UserBadgeTable).where(UserBadgeTable.user_id == user_id)
            rows = (await session.execute(stmt)).scalars().all()
            return [
                UserBadgeRecord(
                    user_id=row.user_id,
                    badge_id=row.badge_id,
                    earned_at=_as_utc(row.earned_at),
                )
                for row in rows
            ]


class AsyncSQLAlchemyBriefStore(BriefStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def set_active(self, record: AcceptedBriefRecord) -> None:
        async with self._session_factory() as session:
            row = await session.get(AcceptedBriefTable, record.user_id)
            if not row:
                row = AcceptedBriefTable(user_id=record.user_id)
                session.add(row)
            row.brief = record.brief
            row.card_ids = list(record.card_ids)
            row.accepted_at = record.accepted_at
            row.time_limit_minutes = record.time_limit_minutes
            await session.commit()

    async def get_active(self, user_id: int) -> AcceptedBriefRecord | None:
        async with self._session_factory() as session:
            row = await session.get(AcceptedBriefTable, user_id)
            if not row:
                return None
            return AcceptedBriefRecord(
                user_id=row.user_id,
                brief=row.brief,
                card_ids=list(row.card_ids),
                accepted_at=_as_utc(row.accepted_at),
                time_limit_minutes=row.time_limit_minutes,
            )

    async def clear(self, user_id: int) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(AcceptedBriefTable).where(AcceptedBriefTable.user_id == user_id)
            )
            await session.commit()
            return result.rowcount > 0


class AsyncSQLAlchemyAuditStore(AuditStore):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add_entry(self, action: str, payload: dict) -> None:
        async with self._session_factory() as session:
            session.add(
                AuditTable(
                    created_at=datetime.now(timezone.utc),
                    action=action,
                    payload=dict(payload),
                )
            )
            await session.commit()
