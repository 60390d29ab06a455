"""Profile & dreams HTTP router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from dreambook.auth import verify_api_key
from dreambook.deps import get_dreams, get_profiles
from dreambook.engine.features import generate_insight
from dreambook.engine.models import (
    Dream,
    DreamCategory,
    DreamCreate,
    DreamUpdate,
    OnboardingRequest,
    UserProfile,
)
from dreambook.engine.repository import (
    DreamNotFound,
    DreamRepository,
    ProfileExists,
    ProfileRepository,
    SortKey,
)

router = APIRouter(tags=["dreams"], dependencies=[Depends(verify_api_key)])


async def _load(dreams: DreamRepository, dream_id: str) -> Dream:
    try:
        return await dreams.get(dream_id)
    except DreamNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))


# ---------------------------------------------------------------------------
# /profile
# ---------------------------------------------------------------------------


@router.get("/profile", response_model=UserProfile)
async def get_profile(profiles: ProfileRepository = Depends(get_profiles)) -> UserProfile:
    profile = await profiles.get()
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile; complete onboarding first")
    return profile


@router.post("/profile", response_model=UserProfile, status_code=201)
async def complete_onboarding(
    body: OnboardingRequest,
    profiles: ProfileRepository = Depends(get_profiles),
) -> UserProfile:
    try:
        return await profiles.create(body)
    except ProfileExists as exc:
        raise HTTPException(status_code=409, detail=str(exc))


@router.delete("/profile", status_code=204)
async def reset_profile(profiles: ProfileRepository = Depends(get_profiles)) -> Response:
    """Delete the profile and all dreams; the client returns to onboarding."""
    await profiles.reset()
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# /dreams
# ---------------------------------------------------------------------------


@router.get("/dreams", response_model=list[Dream])
async def list_dreams(
    dreams: DreamRepository = Depends(get_dreams),
    search: str | None = Query(default=None, description="Case-insensitive title match"),
    category: DreamCategory | None = Query(default=None),
    completed: bool | None = Query(default=None),
    sort: SortKey = Query(default="newest"),
) -> list[Dream]:
    return await dreams.list(search=search, category=category, completed=completed, sort=sort)


@router.post("/dreams", response_model=Dream, status_code=201)
async def create_dream(
    body: DreamCreate,
    dreams: DreamRepository = Depends(get_dreams),
) -> Dream:
    return await dreams.add(body.to_dream())


@router.get("/dreams/{dream_id}", response_model=Dream)
async def get_dream(dream_id: str, dreams: DreamRepository = Depends(get_dreams)) -> Dream:
    return await _load(dreams, dream_id)


@router.patch("/dreams/{dream_id}", response_model=Dream)
async def edit_dream(
    dream_id: str,
    body: DreamUpdate,
    dreams: DreamRepository = Depends(get_dreams),
) -> Dream:
    try:
        return await dreams.update(dream_id, body)
    except DreamNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.delete("/dreams/{dream_id}", status_code=204)
async def delete_dream(dream_id: str, dreams: DreamRepository = Depends(get_dreams)) -> Response:
    try:
        await dreams.delete(dream_id)
    except DreamNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return Response(status_code=204)


@router.post("/dreams/{dream_id}/steps/{index}/toggle", response_model=Dream)
async def toggle_step(
    dream_id: str,
    index: int,
    dreams: DreamRepository = Depends(get_dreams),
) -> Dream:
    try:
        return await dreams.toggle_step(dream_id, index)
    except DreamNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except IndexError:
        raise HTTPException(status_code=404, detail=f"Unknown step {index} for dream {dream_id}")


@router.post("/dreams/{dream_id}/complete", response_model=Dream)
async def toggle_completed(dream_id: str, dreams: DreamRepository = Depends(get_dreams)) -> Dream:
    """Mark complete, or reopen a completed dream."""
    try:
        return await dreams.toggle_completed(dream_id)
    except DreamNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get("/dreams/{dream_id}/insight")
async def dream_insight(
    dream_id: str,
    dreams: DreamRepository = Depends(get_dreams),
    profiles: ProfileRepository = Depends(get_profiles),
) -> dict:
    dream = await _load(dreams, dream_id)
    profile = await profiles.get()
    return {"dream_id": dream.id, "insight": generate_insight(dream, profile)}
