"""Dreambook domain contract — Pydantic v2 models."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, computed_field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DreamCategory(str, Enum):
    career = "Career"
    health = "Health"
    education = "Education"
    creative = "Creative"
    travel = "Travel"
    financial = "Financial"
    personal_growth = "Personal Growth"
    technology = "Technology"
    social = "Social"
    adventure = "Adventure"

    @classmethod
    def parse(cls, raw: str | None) -> DreamCategory:
        """Stored value → category; unknown codes fall back to Personal Growth."""
        try:
            return cls(raw)
        except ValueError:
            return cls.personal_growth

    @property
    def icon(self) -> str:
        return _CATEGORY_STYLE[self][0]

    @property
    def color(self) -> str:
        return _CATEGORY_STYLE[self][1]


class DreamMood(str, Enum):
    peaceful = "Peaceful"
    joyful = "Joyful"
    anxious = "Anxious"
    mysterious = "Mysterious"
    fearful = "Fearful"
    exciting = "Exciting"
    sad = "Sad"
    neutral = "Neutral"
    surreal = "Surreal"
    nostalgic = "Nostalgic"

    @classmethod
    def parse(cls, raw: str | None) -> DreamMood:
        """Stored value → mood; unknown codes fall back to Neutral."""
        try:
            return cls(raw)
        except ValueError:
            return cls.neutral

    @property
    def icon(self) -> str:
        return _MOOD_STYLE[self][0]

    @property
    def color(self) -> str:
        return _MOOD_STYLE[self][1]


# (icon, color) references; rendering is up to the client
_CATEGORY_STYLE: dict[DreamCategory, tuple[str, str]] = {
    DreamCategory.career: ("briefcase.fill", "blue"),
    DreamCategory.health: ("heart.fill", "red"),
    DreamCategory.education: ("book.fill", "orange"),
    DreamCategory.creative: ("paintbrush.fill", "purple"),
    DreamCategory.travel: ("airplane", "teal"),
    DreamCategory.financial: ("dollarsign.circle.fill", "green"),
    DreamCategory.personal_growth: ("leaf.fill", "mint"),
    DreamCategory.technology: ("laptopcomputer", "indigo"),
    DreamCategory.social: ("person.2.fill", "pink"),
    DreamCategory.adventure: ("figure.hiking", "brown"),
}

_MOOD_STYLE: dict[DreamMood, tuple[str, str]] = {
    DreamMood.peaceful: ("moon.stars.fill", "cyan"),
    DreamMood.joyful: ("sun.max.fill", "yellow"),
    DreamMood.anxious: ("cloud.bolt.fill", "orange"),
    DreamMood.mysterious: ("eye.fill", "purple"),
    DreamMood.fearful: ("bolt.fill", "red"),
    DreamMood.exciting: ("flame.fill", "pink"),
    DreamMood.sad: ("cloud.rain.fill", "blue"),
    DreamMood.neutral: ("circle.fill", "gray"),
    DreamMood.surreal: ("sparkles", "indigo"),
    DreamMood.nostalgic: ("clock.fill", "brown"),
}


def unique_trimmed(values: list[str], lower: bool = False) -> list[str]:
    """Strip, drop blanks and duplicates; first occurrence wins."""
    seen: list[str] = []
    for v in values:
        key = v.strip().lower() if lower else v.strip()
        if key and key not in seen:
            seen.append(key)
    return seen


def normalize_tags(values: list[str]) -> list[str]:
    return unique_trimmed(values, lower=True)


def _require_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_require_text)]


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class UserProfile(BaseModel):
    name: str = ""
    age: int = Field(default=25, gt=0)
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    onboarding_completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)

    model_config = {"from_attributes": True}

    @field_validator("skills", "interests")
    @classmethod
    def _lowercase(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)


class OnboardingRequest(BaseModel):
    name: NonBlankStr
    age: int = Field(default=25, gt=0)
    skills: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Dreams
# ---------------------------------------------------------------------------


class DreamStep(BaseModel):
    title: str
    completed: bool = False


class Dream(BaseModel):
    """A goal record. `progress` is derived, never stored."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str
    description: str = ""
    category: DreamCategory = DreamCategory.personal_growth
    mood: DreamMood = DreamMood.neutral
    priority: int = Field(default=2, ge=1, le=3)
    steps: list[DreamStep] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    target_date: date | None = None
    ai_generated: bool = False
    ai_insight: str | None = None
    journal_notes: str | None = None
    lucidity_level: int = Field(default=1, ge=1, le=5)

    model_config = {"from_attributes": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def progress(self) -> float:
        if not self.steps:
            return 1.0 if self.completed else 0.0
        return sum(1 for s in self.steps if s.completed) / len(self.steps)

    def toggle_step(self, index: int) -> None:
        """Flip one step; finishing the last open step completes the dream.

        One-way: un-checking a step of a completed dream leaves it completed.
        Raises IndexError for an out-of-range index.
        """
        if index < 0:
            raise IndexError(index)
        step = self.steps[index]
        step.completed = not step.completed
        if all(s.completed for s in self.steps):
            self.completed = True


class DreamCreate(BaseModel):
    title: NonBlankStr
    description: str = ""
    category: DreamCategory = DreamCategory.personal_growth
    mood: DreamMood = DreamMood.neutral
    priority: int = Field(default=2, ge=1, le=3)
    steps: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    target_date: date | None = None
    lucidity_level: int = Field(default=1, ge=1, le=5)

    @field_validator("steps")
    @classmethod
    def _drop_blank_steps(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s.strip()]

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, v: list[str]) -> list[str]:
        return unique_trimmed(v)

    def to_dream(self) -> Dream:
        return Dream(
            title=self.title,
            description=self.description.strip(),
            category=self.category,
            mood=self.mood,
            priority=self.priority,
            steps=[DreamStep(title=s) for s in self.steps],
            tags=self.tags,
            target_date=self.target_date,
            lucidity_level=self.lucidity_level,
        )


class DreamUpdate(BaseModel):
    """Partial edit. Steps may be appended but never re-open a completed dream."""

    title: NonBlankStr | None = None
    description: str | None = None
    category: DreamCategory | None = None
    mood: DreamMood | None = None
    priority: int | None = Field(default=None, ge=1, le=3)
    add_steps: list[str] = Field(default_factory=list)
    tags: list[str] | None = None
    target_date: date | None = None
    journal_notes: str | None = None
    lucidity_level: int | None = Field(default=None, ge=1, le=5)

    @field_validator("add_steps")
    @classmethod
    def _drop_blank_steps(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s.strip()]

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else unique_trimmed(v)


# ---------------------------------------------------------------------------
# Ephemeral outputs
# ---------------------------------------------------------------------------


class PatternInsight(BaseModel):
    title: str
    description: str
    icon: str
    color: str


class ChatMessage(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    content: str
    is_user: bool
    timestamp: datetime = Field(default_factory=_utcnow)


class ChatRequest(BaseModel):
    text: NonBlankStr


class ChatState(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)
    is_typing: bool = False
