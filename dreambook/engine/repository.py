"""Persistence access — async repositories over the ORM tables.

Each mutating call commits its own transaction and then publishes a
ChangeEvent. Read calls return detached Pydantic models, never ORM rows.
"""

from __future__ import annotations

import logging
from typing import Literal

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dreambook.engine.events import ChangeEvent, ChangeFeed
from dreambook.engine.models import (
    Dream,
    DreamCategory,
    DreamStep,
    DreamUpdate,
    OnboardingRequest,
    UserProfile,
)
from dreambook.engine.tables import DreamRow, ProfileRow

logger = logging.getLogger(__name__)

SortKey = Literal["newest", "oldest", "priority", "title"]

_SORTS = {
    "newest": (DreamRow.created_at.desc(),),
    "oldest": (DreamRow.created_at.asc(),),
    "priority": (DreamRow.priority.desc(), DreamRow.created_at.desc()),
    "title": (func.lower(DreamRow.title).asc(),),
}

# Fields an edit may explicitly clear by sending null
_CLEARABLE = {"target_date", "journal_notes"}


class DreamNotFound(LookupError):
    def __init__(self, dream_id: str):
        super().__init__(f"Unknown dream: {dream_id}")
        self.dream_id = dream_id


class ProfileNotFound(LookupError):
    def __init__(self) -> None:
        super().__init__("No profile; complete onboarding first")


class ProfileExists(ValueError):
    def __init__(self) -> None:
        super().__init__("A profile already exists; reset it first")


class _Repository:
    def __init__(self, session: AsyncSession, feed: ChangeFeed | None = None):
        self.session = session
        self.feed = feed

    def _publish(self, entity: str, action: str, entity_id: str | None = None) -> None:
        logger.debug("%s %s id=%s", entity, action, entity_id)
        if self.feed is not None:
            self.feed.publish(ChangeEvent(entity=entity, action=action, entity_id=entity_id))


class ProfileRepository(_Repository):
    async def _row(self) -> ProfileRow | None:
        result = await self.session.execute(select(ProfileRow).order_by(ProfileRow.id).limit(1))
        return result.scalar_one_or_none()

    async def get(self) -> UserProfile | None:
        row = await self._row()
        return row.to_model() if row is not None else None

    async def require(self) -> UserProfile:
        profile = await self.get()
        if profile is None:
            raise ProfileNotFound()
        return profile

    async def create(self, request: OnboardingRequest) -> UserProfile:
        """Complete onboarding. Only one profile may exist per installation."""
        if await self._row() is not None:
            raise ProfileExists()
        profile = UserProfile(
            name=request.name,
            age=request.age,
            skills=request.skills,
            interests=request.interests,
            onboarding_completed=True,
        )
        row = ProfileRow(
            name=profile.name,
            age=profile.age,
            skills=profile.skills,
            interests=profile.interests,
            onboarding_completed=True,
            created_at=profile.created_at,
        )
        self.session.add(row)
        await self.session.commit()
        self._publish("profile", "created", str(row.id))
        return profile

    async def reset(self) -> int:
        """Delete the profile and every dream in one transaction.

        Returns the number of dreams removed.
        """
        result = await self.session.execute(delete(DreamRow))
        await self.session.execute(delete(ProfileRow))
        await self.session.commit()
        removed = result.rowcount or 0
        logger.info("profile reset, %d dreams removed", removed)
        self._publish("profile", "deleted")
        return removed


class DreamRepository(_Repository):
    async def list(
        self,
        search: str | None = None,
        category: DreamCategory | None = None,
        completed: bool | None = None,
        sort: SortKey = "newest",
    ) -> list[Dream]:
        """Filtered, sorted dreams. `search` is a case-insensitive title match."""
        stmt = select(DreamRow)
        if search:
            stmt = stmt.where(func.lower(DreamRow.title).contains(search.lower(), autoescape=True))
        if category is not None:
            stmt = stmt.where(DreamRow.category_raw == category.value)
        if completed is not None:
            stmt = stmt.where(DreamRow.completed == completed)
        stmt = stmt.order_by(*_SORTS[sort])

        result = await self.session.execute(stmt)
        return [row.to_model() for row in result.scalars().all()]

    async def titles(self) -> list[str]:
        result = await self.session.execute(select(DreamRow.title))
        return list(result.scalars().all())

    async def _row(self, dream_id: str) -> DreamRow:
        row = await self.session.get(DreamRow, dream_id)
        if row is None:
            raise DreamNotFound(dream_id)
        return row

    async def get(self, dream_id: str) -> Dream:
        return (await self._row(dream_id)).to_model()

    async def add(self, dream: Dream) -> Dream:
        self.session.add(DreamRow.from_model(dream))
        await self.session.commit()
        self._publish("dream", "created", dream.id)
        return dream

    async def _save(self, row: DreamRow, dream: Dream) -> Dream:
        row.apply(dream)
        await self.session.commit()
        self._publish("dream", "updated", dream.id)
        return dream

    async def update(self, dream_id: str, changes: DreamUpdate) -> Dream:
        """Apply a partial edit. Appended steps never re-open a completed dream."""
        row = await self._row(dream_id)
        dream = row.to_model()

        for field, value in changes.model_dump(exclude_unset=True, exclude={"add_steps"}).items():
            if value is None and field not in _CLEARABLE:
                continue
            setattr(dream, field, value)
        dream.steps.extend(DreamStep(title=s) for s in changes.add_steps)

        return await self._save(row, dream)

    async def toggle_step(self, dream_id: str, index: int) -> Dream:
        """Flip one step. Raises IndexError when the step does not exist."""
        row = await self._row(dream_id)
        dream = row.to_model()
        dream.toggle_step(index)
        return await self._save(row, dream)

    async def toggle_completed(self, dream_id: str) -> Dream:
        row = await self._row(dream_id)
        dream = row.to_model()
        dream.completed = not dream.completed
        return await self._save(row, dream)

    async def delete(self, dream_id: str) -> None:
        row = await self._row(dream_id)
        await self.session.delete(row)
        await self.session.commit()
        self._publish("dream", "deleted", dream_id)
