"""SQLAlchemy ORM tables for the profile and dreams.

Steps and tags live in JSON columns; category and mood are stored as
their display strings and parsed leniently on read.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from dreambook.engine.models import Dream, DreamCategory, DreamMood, DreamStep, UserProfile


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, including on SQLite which drops the offset."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class ProfileRow(Base):
    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=25)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    interests: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    onboarding_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_utcnow)

    def to_model(self) -> UserProfile:
        return UserProfile.model_validate(self)


class DreamRow(Base):
    __tablename__ = "dreams"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category_raw: Mapped[str] = mapped_column(String(50), nullable=False)
    mood_raw: Mapped[str] = mapped_column(String(50), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    steps: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=_utcnow)
    target_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    ai_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ai_insight: Mapped[str | None] = mapped_column(Text, nullable=True)
    journal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    lucidity_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    @classmethod
    def from_model(cls, dream: Dream) -> DreamRow:
        row = cls(id=dream.id, created_at=dream.created_at)
        row.apply(dream)
        return row

    def apply(self, dream: Dream) -> None:
        """Copy every mutable field from the domain model onto this row."""
        self.title = dream.title
        self.description = dream.description
        self.category_raw = dream.category.value
        self.mood_raw = dream.mood.value
        self.priority = dream.priority
        # Reassign rather than mutate so the JSON columns are flagged dirty
        self.steps = [s.model_dump() for s in dream.steps]
        self.tags = list(dream.tags)
        self.completed = dream.completed
        self.target_date = dream.target_date
        self.ai_generated = dream.ai_generated
        self.ai_insight = dream.ai_insight
        self.journal_notes = dream.journal_notes
        self.lucidity_level = dream.lucidity_level

    def to_model(self) -> Dream:
        return Dream(
            id=self.id,
            title=self.title,
            description=self.description,
            category=DreamCategory.parse(self.category_raw),
            mood=DreamMood.parse(self.mood_raw),
            priority=min(max(self.priority, 1), 3),
            steps=[DreamStep(**s) for s in self.steps or []],
            tags=list(self.tags or []),
            completed=self.completed,
            created_at=self.created_at,
            target_date=self.target_date,
            ai_generated=self.ai_generated,
            ai_insight=self.ai_insight,
            journal_notes=self.journal_notes,
            lucidity_level=min(max(self.lucidity_level, 1), 5),
        )
