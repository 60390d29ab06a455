"""Discover & insights endpoints — recommendations and pattern analysis."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from dreambook.auth import verify_api_key
from dreambook.config import settings
from dreambook.deps import get_dreams, get_profiles
from dreambook.engine import features
from dreambook.engine.catalog import AVAILABLE_INTERESTS, AVAILABLE_SKILLS, DreamTemplate, get_template
from dreambook.engine.models import Dream, DreamCategory, DreamMood, PatternInsight
from dreambook.engine.recommender import dream_from_template, group_by_category, suggest_scored
from dreambook.engine.repository import DreamRepository, ProfileRepository

router = APIRouter(tags=["discover"], dependencies=[Depends(verify_api_key)])


class AcceptRequest(BaseModel):
    title: str


def _template_dict(template: DreamTemplate, score: int | None = None) -> dict:
    out = {
        "title": template.title,
        "description": template.description,
        "category": template.category.value,
        "mood": template.mood.value,
        "suggested_steps": list(template.suggested_steps),
        "insight": template.insight,
        "icon": template.category.icon,
        "color": template.category.color,
    }
    if score is not None:
        out["score"] = score
    return out


@router.get("/onboarding/options")
async def onboarding_options() -> dict:
    """Vocabularies offered during onboarding and on the add-dream form."""
    return {
        "skills": list(AVAILABLE_SKILLS),
        "interests": list(AVAILABLE_INTERESTS),
        "categories": [{"value": c.value, "icon": c.icon, "color": c.color} for c in DreamCategory],
        "moods": [{"value": m.value, "icon": m.icon, "color": m.color} for m in DreamMood],
    }


@router.get("/discover")
async def discover(
    profiles: ProfileRepository = Depends(get_profiles),
    dreams: DreamRepository = Depends(get_dreams),
) -> dict:
    """Top picks plus per-category suggestions. Empty without a profile."""
    profile = await profiles.get()
    if profile is None:
        return {"top_picks": [], "categories": []}

    scored = suggest_scored(profile, await dreams.titles())
    scores = {t.title: s for t, s in scored}
    grouped = group_by_category((t for t, _ in scored), settings.per_category_limit)

    return {
        "top_picks": [_template_dict(t, s) for t, s in scored[: settings.top_picks_limit]],
        "categories": [
            {
                "category": cat.value,
                "icon": cat.icon,
                "color": cat.color,
                "templates": [_template_dict(t, scores[t.title]) for t in templates],
            }
            for cat, templates in grouped.items()
        ],
    }


@router.post("/discover/accept", response_model=Dream, status_code=201)
async def accept_suggestion(
    body: AcceptRequest,
    dreams: DreamRepository = Depends(get_dreams),
) -> Dream:
    template = get_template(body.title)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Unknown template: {body.title}")
    return await dreams.add(dream_from_template(template))


@router.get("/insights/patterns", response_model=list[PatternInsight])
async def pattern_insights(dreams: DreamRepository = Depends(get_dreams)) -> list[PatternInsight]:
    return features.analyze_patterns(
        await dreams.list(sort="oldest"),
        focus_check_threshold=settings.focus_check_threshold,
    )


@router.get("/insights/stats")
async def dream_stats(dreams: DreamRepository = Depends(get_dreams)) -> dict:
    return features.dream_stats(await dreams.list())
