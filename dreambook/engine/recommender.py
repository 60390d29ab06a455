"""Template recommendations — pure functions over the static catalog."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from dreambook.engine.catalog import TEMPLATES, DreamTemplate
from dreambook.engine.models import Dream, DreamCategory, DreamStep, UserProfile

SKILL_WEIGHT = 3
INTEREST_WEIGHT = 2


def score_template(template: DreamTemplate, skills: set[str], interests: set[str]) -> int:
    """3 points per shared skill, 2 per shared interest. Inputs must be lowercase."""
    skill_match = len(template.relevant_skills & skills)
    interest_match = len(template.relevant_interests & interests)
    return skill_match * SKILL_WEIGHT + interest_match * INTEREST_WEIGHT


def suggest_scored(
    profile: UserProfile,
    existing_titles: Iterable[str] = (),
    templates: Sequence[DreamTemplate] = TEMPLATES,
) -> list[tuple[DreamTemplate, int]]:
    """Eligible templates with their scores, best first.

    Drops titles the user already has and templates outside the profile's
    age. The sort is stable, so equal scores keep catalog order.
    """
    skills = {s.lower() for s in profile.skills}
    interests = {i.lower() for i in profile.interests}
    existing = set(existing_titles)

    eligible = [
        t for t in templates
        if t.title not in existing and t.fits_age(profile.age)
    ]
    scored = [(t, score_template(t, skills, interests)) for t in eligible]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def suggest(
    profile: UserProfile,
    existing_titles: Iterable[str] = (),
    templates: Sequence[DreamTemplate] = TEMPLATES,
) -> list[DreamTemplate]:
    return [t for t, _ in suggest_scored(profile, existing_titles, templates)]


def group_by_category(
    templates: Iterable[DreamTemplate],
    per_category: int | None = None,
) -> dict[DreamCategory, list[DreamTemplate]]:
    """Bucket templates by category in enum order, keeping the first N of each."""
    buckets: dict[DreamCategory, list[DreamTemplate]] = {}
    for t in templates:
        buckets.setdefault(t.category, []).append(t)

    return {
        cat: buckets[cat][:per_category] if per_category is not None else buckets[cat]
        for cat in DreamCategory
        if buckets.get(cat)
    }


def dream_from_template(template: DreamTemplate) -> Dream:
    """New dream record for an accepted suggestion."""
    return Dream(
        title=template.title,
        description=template.description,
        category=template.category,
        mood=template.mood,
        priority=2,
        steps=[DreamStep(title=s) for s in template.suggested_steps],
        ai_generated=True,
        ai_insight=template.insight,
    )
