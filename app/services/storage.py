"""
Data-access gateway for the catalog, accounts, favorites and listening progress.

Every read and write against the database goes through DatabaseStorage. Absence is
reported as None / False, never as an exception. Mutating calls commit their own
transaction so multi-step writes (progress + user stats) land together or not at all.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from app.models.favorite import Favorite
from app.models.progress import UserProgress
from app.models.session import Session
from app.models.teacher import Teacher
from app.models.user import User
from app.services.streaks import daily_index, day_of_year, next_streak

logger = logging.getLogger(__name__)

POPULAR_LIMIT = 10


class EmailAlreadyRegistered(Exception):
    """Raised when the unique index on users.email rejects an insert."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DatabaseStorage:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ─────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────
    async def get_user(self, user_id: int) -> User | None:
        res = await self.db.execute(select(User).where(User.id == user_id))
        return res.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> User | None:
        res = await self.db.execute(select(User).where(User.email == email))
        return res.scalar_one_or_none()

    async def create_user(self, email: str, password_hash: str, name: str, is_premium: bool = False) -> User:
        user = User(email=email, password=password_hash, name=name, is_premium=is_premium)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            raise EmailAlreadyRegistered(email) from exc
        await self.db.refresh(user)
        return user

    async def _apply_listen(self, user_id: int, minutes: int, now: datetime) -> bool:
        res = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        user = res.scalar_one_or_none()
        if user is None:
            return False

        user.current_streak = next_streak(user.current_streak, user.last_session_date, now)
        user.total_minutes = (user.total_minutes or 0) + minutes
        user.last_session_date = now
        await self.db.flush()
        return True

    async def update_user_stats(self, user_id: int, minutes: int, now: datetime | None = None) -> None:
        """Add `minutes` to the user's total and advance the day streak. Unknown users are ignored."""
        if await self._apply_listen(user_id, minutes, now or _utcnow()):
            await self.db.commit()

    # ─────────────────────────────────────────────────────────────
    # Teachers
    # ─────────────────────────────────────────────────────────────
    async def get_teachers(self) -> list[Teacher]:
        res = await self.db.execute(select(Teacher).order_by(Teacher.id.asc()))
        return list(res.scalars().all())

    async def get_teacher(self, teacher_id: int) -> Teacher | None:
        res = await self.db.execute(select(Teacher).where(Teacher.id == teacher_id))
        return res.scalar_one_or_none()

    async def get_teacher_with_sessions(self, teacher_id: int) -> tuple[Teacher, list[Session]] | None:
        teacher = await self.get_teacher(teacher_id)
        if teacher is None:
            return None
        return teacher, await self.get_sessions_by_teacher(teacher_id)

    async def create_teacher(self, data: dict[str, Any]) -> Teacher:
        teacher = Teacher(**data)
        self.db.add(teacher)
        await self.db.commit()
        await self.db.refresh(teacher)
        return teacher

    async def update_teacher(self, teacher_id: int, data: dict[str, Any]) -> Teacher | None:
        teacher = await self.get_teacher(teacher_id)
        if teacher is None:
            return None
        for key, value in data.items():
            setattr(teacher, key, value)
        await self.db.commit()
        await self.db.refresh(teacher)
        return teacher

    async def delete_teacher(self, teacher_id: int) -> bool:
        # Sessions survive their teacher; detach them first (SQLite does not enforce ON DELETE SET NULL)
        await self.db.execute(
            update(Session).where(Session.teacher_id == teacher_id).values(teacher_id=None)
        )
        res = await self.db.execute(delete(Teacher).where(Teacher.id == teacher_id))
        await self.db.commit()
        return res.rowcount > 0

    # ─────────────────────────────────────────────────────────────
    # Sessions
    # ─────────────────────────────────────────────────────────────
    def _with_teacher(self):
        # many-to-one joinedload renders a LEFT OUTER JOIN on teachers; rows already in the session are refreshed
        return (
            select(Session)
            .options(joinedload(Session.teacher))
            .execution_options(populate_existing=True)
        )

    async def get_sessions(
        self,
        category: str | None = None,
        duration: int | None = None,
        search: str | None = None,
        featured: bool = False,
    ) -> list[Session]:
        stmt = self._with_teacher()

        if category:
            stmt = stmt.where(Session.category == category)

        if duration:
            stmt = stmt.where(Session.duration == duration)

        if search and search.strip():
            term = search.strip()
            stmt = stmt.where(
                or_(
                    Session.title.icontains(term, autoescape=True),
                    Session.description.icontains(term, autoescape=True),
                )
            )

        if featured:
            stmt = stmt.where(Session.is_featured == True)  # noqa: E712

        stmt = stmt.order_by(Session.id.asc())
        res = await self.db.execute(stmt)
        return list(res.scalars().all())

    async def get_session(self, session_id: int) -> Session | None:
        res = await self.db.execute(
            self._with_teacher().where(Session.id == session_id)
        )
        return res.scalar_one_or_none()

    async def _session_exists(self, session_id: int) -> bool:
        res = await self.db.execute(select(Session.id).where(Session.id == session_id))
        return res.first() is not None

    async def get_sessions_by_teacher(self, teacher_id: int) -> list[Session]:
        res = await self.db.execute(
            select(Session).where(Session.teacher_id == teacher_id).order_by(Session.id.asc())
        )
        return list(res.scalars().all())

    async def create_session(self, data: dict[str, Any]) -> Session:
        row = Session(**data)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def update_session(self, session_id: int, data: dict[str, Any]) -> Session | None:
        res = await self.db.execute(select(Session).where(Session.id == session_id))
        row = res.scalar_one_or_none()
        if row is None:
            return None
        for key, value in data.items():
            setattr(row, key, value)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def delete_session(self, session_id: int) -> bool:
        # favorites/progress hold mandatory FKs to the session
        await self.db.execute(delete(Favorite).where(Favorite.session_id == session_id))
        await self.db.execute(delete(UserProgress).where(UserProgress.session_id == session_id))
        res = await self.db.execute(delete(Session).where(Session.id == session_id))
        await self.db.commit()
        return res.rowcount > 0

    async def increment_play_count(self, session_id: int) -> Session | None:
        """Single UPDATE ... SET play_count = play_count + 1, safe under concurrent plays."""
        res = await self.db.execute(
            update(Session)
            .where(Session.id == session_id)
            .values(play_count=Session.play_count + 1)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount == 0:
            return None
        await self.db.commit()

        res = await self.db.execute(
            select(Session)
            .where(Session.id == session_id)
            .execution_options(populate_existing=True)
        )
        return res.scalar_one_or_none()

    async def get_daily_session(self, today: date | None = None) -> Session | None:
        sessions = await self.get_sessions()
        if not sessions:
            return None
        today = today or _utcnow().date()
        return sessions[daily_index(day_of_year(today), len(sessions))]

    async def get_featured_sessions(self) -> list[Session]:
        return await self.get_sessions(featured=True)

    async def get_popular_sessions(self, limit: int = POPULAR_LIMIT) -> list[Session]:
        res = await self.db.execute(
            self._with_teacher()
            .order_by(Session.play_count.desc(), Session.id.asc())
            .limit(limit)
        )
        return list(res.scalars().all())

    # ─────────────────────────────────────────────────────────────
    # Favorites
    # ─────────────────────────────────────────────────────────────
    async def get_favorites(self, user_id: int) -> list[Session]:
        res = await self.db.execute(
            self._with_teacher()
            .join(Favorite, Favorite.session_id == Session.id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.id.asc())
        )
        return list(res.scalars().all())

    async def is_favorite(self, user_id: int, session_id: int) -> bool:
        res = await self.db.execute(
            select(Favorite.id).where(
                Favorite.user_id == user_id,
                Favorite.session_id == session_id,
            )
        )
        return res.first() is not None

    async def toggle_favorite(self, user_id: int, session_id: int) -> bool | None:
        """
        Flip the favorite flag for (user, session) and return the new state.
        None when the session does not exist.

        No read-then-write: the DELETE reports whether a row existed, and the INSERT
        relies on uq_favorite_user_session, so two racing toggles cannot create duplicates.
        """
        if not await self._session_exists(session_id):
            return None

        res = await self.db.execute(
            delete(Favorite).where(
                Favorite.user_id == user_id,
                Favorite.session_id == session_id,
            )
        )
        if res.rowcount > 0:
            await self.db.commit()
            return False

        try:
            async with self.db.begin_nested():
                self.db.add(Favorite(user_id=user_id, session_id=session_id))
        except IntegrityError:
            # a concurrent toggle inserted the same pair first
            logger.info("favorite (%s, %s) already present", user_id, session_id)
        await self.db.commit()
        return True

    # ─────────────────────────────────────────────────────────────
    # Progress & stats
    # ─────────────────────────────────────────────────────────────
    async def record_progress(
        self,
        user_id: int,
        session_id: int,
        minutes: int,
        now: datetime | None = None,
    ) -> bool:
        """
        Append a progress row and update the user's totals in one transaction.
        Returns False (nothing written) when the session does not exist.
        """
        if not await self._session_exists(session_id):
            return False

        now = now or _utcnow()
        self.db.add(
            UserProgress(
                user_id=user_id,
                session_id=session_id,
                minutes_listened=minutes,
                completed_at=now,
            )
        )
        await self._apply_listen(user_id, minutes, now)
        await self.db.commit()
        return True

    async def get_user_stats(self, user_id: int) -> dict:
        user = await self.get_user(user_id)
        res = await self.db.execute(
            select(func.count(UserProgress.id)).where(UserProgress.user_id == user_id)
        )
        return {
            "total_minutes": (user.total_minutes if user else 0) or 0,
            "current_streak": (user.current_streak if user else 0) or 0,
            "sessions_completed": int(res.scalar_one() or 0),
        }

    async def get_usage_stats(self) -> dict:
        user_count = (await self.db.execute(select(func.count(User.id)))).scalar_one()
        rows = await self.db.execute(
            select(Session.id, Session.title, Session.play_count)
            .order_by(Session.play_count.desc(), Session.id.asc())
        )
        return {
            "user_count": int(user_count or 0),
            "sessions": [
                {"id": r.id, "title": r.title, "play_count": r.play_count or 0}
                for r in rows
            ],
        }
