"""Pure stateless feature functions over dreams — never raises."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Hashable, Iterable, Sequence
from typing import TypeVar

from dreambook.engine.catalog import get_template
from dreambook.engine.models import Dream, PatternInsight, UserProfile

K = TypeVar("K", bound=Hashable)

FOCUS_CHECK_THRESHOLD = 5
HIGH_PRIORITY = 3

GETTING_STARTED = PatternInsight(
    title="Getting Started",
    description=(
        "Add more dreams to unlock personalized pattern analysis. "
        "Your dream collection tells a story. Let's write it together."
    ),
    icon="sparkles",
    color="purple",
)


def percent(fraction: float) -> int:
    """Fraction → whole percent, rounding halves up."""
    return int(math.floor(fraction * 100.0 + 0.5))


def most_common(values: Iterable[K]) -> tuple[K, int] | None:
    """Most frequent value and its count. Ties go to the value seen first."""
    counts = Counter(values)
    if not counts:
        return None
    # Counter keeps insertion order and most_common() sorts stably
    return counts.most_common(1)[0]


def active_dreams(dreams: Iterable[Dream]) -> list[Dream]:
    return [d for d in dreams if not d.completed]


def completed_dreams(dreams: Iterable[Dream]) -> list[Dream]:
    return [d for d in dreams if d.completed]


def high_priority_active(dreams: Iterable[Dream]) -> list[Dream]:
    return [d for d in dreams if d.priority == HIGH_PRIORITY and not d.completed]


def average_progress(dreams: Sequence[Dream]) -> float:
    """Mean progress; 0.0 for an empty sequence."""
    if not dreams:
        return 0.0
    return sum(d.progress for d in dreams) / len(dreams)


def dream_stats(dreams: Sequence[Dream]) -> dict[str, float | int]:
    """Totals shown on the profile screen and in chat snapshots."""
    active = active_dreams(dreams)
    return {
        "total": len(dreams),
        "completed": len(dreams) - len(active),
        "active": len(active),
        "high_priority_active": len(high_priority_active(dreams)),
        "average_active_progress": percent(average_progress(active)),
    }


# ---------------------------------------------------------------------------
# Pattern analysis
# ---------------------------------------------------------------------------

def analyze_patterns(
    dreams: Sequence[Dream],
    focus_check_threshold: int = FOCUS_CHECK_THRESHOLD,
) -> list[PatternInsight]:
    """Up to five observations in fixed order, or a single fallback.

    Order: focus area, completion rate, emotional pattern, focus check,
    priority dreams. An empty input yields only "Getting Started".
    """
    if not dreams:
        return [GETTING_STARTED.model_copy()]

    insights: list[PatternInsight] = []
    total = len(dreams)

    top_category = most_common(d.category for d in dreams)
    if top_category is not None:
        cat, count = top_category
        insights.append(PatternInsight(
            title="Your Focus Area",
            description=(
                f"You're drawn to {cat.value} dreams: {count} out of {total}. "
                "This reveals a core drive in your aspirations."
            ),
            icon=cat.icon,
            color=cat.color,
        ))

    completed = completed_dreams(dreams)
    if completed:
        rate = percent(len(completed) / total)
        tone = "Outstanding consistency!" if rate > 50 else "Every completed dream builds momentum for the next."
        insights.append(PatternInsight(
            title="Completion Rate",
            description=f"You've achieved {rate}% of your dreams. {tone}",
            icon="chart.line.uptrend.xyaxis",
            color="green",
        ))

    top_mood = most_common(d.mood for d in dreams)
    if top_mood is not None:
        mood = top_mood[0]
        insights.append(PatternInsight(
            title="Emotional Pattern",
            description=(
                f"Your dreams tend to feel {mood.value.lower()}. "
                "This emotional signature reveals what truly motivates you."
            ),
            icon=mood.icon,
            color=mood.color,
        ))

    active = active_dreams(dreams)
    if len(active) > focus_check_threshold:
        insights.append(PatternInsight(
            title="Focus Check",
            description=(
                f"You have {len(active)} active dreams. "
                "Consider focusing on 3-5 at a time for deeper progress on each."
            ),
            icon="scope",
            color="orange",
        ))

    urgent = high_priority_active(dreams)
    if urgent:
        n = len(urgent)
        noun = "dream needs" if n == 1 else "dreams need"
        insights.append(PatternInsight(
            title="Priority Dreams",
            description=(
                f"{n} high-priority {noun} your attention. "
                "Start each day with one small step toward these."
            ),
            icon="flame.fill",
            color="red",
        ))

    return insights or [GETTING_STARTED.model_copy()]


# ---------------------------------------------------------------------------
# Per-dream insight text
# ---------------------------------------------------------------------------

def generate_insight(dream: Dream, profile: UserProfile | None = None) -> str:
    """Catalog insight for template titles, else progress-based encouragement."""
    template = get_template(dream.title)
    if template is not None:
        return template.insight

    if dream.completed:
        return (
            f"Congratulations on achieving this dream! Completing '{dream.title}' "
            "demonstrates real commitment. Consider how this accomplishment can "
            "fuel your next aspiration."
        )

    name = (profile.name if profile else "") or "you"
    pct = dream.progress * 100.0
    shown = percent(dream.progress)

    if pct > 70:
        return (
            f"You're {shown}% through '{dream.title}': the finish line is in sight, {name}. "
            "The final stretch often feels hardest, but momentum is on your side."
        )
    if pct > 30:
        return (
            f"Solid progress at {shown}%, {name}. You've built real momentum with "
            f"'{dream.title}'. Focus on one step at a time to maintain consistency."
        )
    return (
        f"Every dream starts with a single step, {name}. '{dream.title}' is waiting "
        "for you to begin. Break it into small, actionable pieces and start today."
    )
