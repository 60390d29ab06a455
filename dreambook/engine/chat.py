"""Dream Assistant — scripted keyword chat.

Replies come from fixed template sets. Input is lowercased and tested
against an ordered list of intents; the first match wins. Where an intent
has several phrasings one is picked with the injected random source, so
tests can pin the variant with a seeded ``random.Random``.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable, Sequence

from dreambook.engine import features
from dreambook.engine.models import ChatMessage, ChatState, Dream, UserProfile
from dreambook.engine.recommender import suggest

logger = logging.getLogger(__name__)

WELCOME = (
    "Hi there! I'm your Dream Assistant. I can help you discover new dreams, "
    "track your progress, and stay motivated. What's on your mind?"
)

GREETINGS = (
    "Hey {name}! Great to see you. What dreams are we working on today?",
    "Hello {name}! Ready to make some progress on your goals?",
    "Hi {name}! I'm here to help. What would you like to focus on?",
)

MOTIVATION = (
    "Remember, {name}: every expert was once a beginner. Your dreams are valid and absolutely achievable!",
    "The fact that you're here working on your dreams puts you ahead of most people. Keep going!",
    "Think about where you'll be a year from now if you keep taking small steps every day. You've got this, {name}!",
    "Dreams don't work unless you do. The good news? You're already doing the work!",
    "Every step forward, no matter how small, is real progress. Be proud of yourself, {name}!",
)

THANKS = (
    "You're welcome, {name}! I'm always here when you need a boost.",
    "Anytime! That's what I'm here for. Keep dreaming big!",
    "My pleasure! Let me know if there's anything else I can help with.",
)

FALLBACKS = (
    "That's an interesting thought, {name}! What dream does this connect to?",
    "I love your energy! Have you checked your dream progress lately? You might be closer than you think.",
    "Great point! Remember, achieving your dreams is a journey. Every day counts.",
    "What's the one thing you could do today to move closer to your biggest dream, {name}?",
    "Thanks for sharing! Is there a specific dream you'd like to focus on right now?",
)

NO_DREAMS_PROGRESS = (
    "You haven't added any dreams yet! Head to the Discover tab. I've curated "
    "personalized suggestions based on your skills and interests."
)

NO_DREAMS_PATTERNS = (
    "I need a few dreams before I can spot patterns. Add some and ask me again!"
)

DISCOVER_HINT = (
    "Check out the Discover tab. I've curated personalized dream suggestions "
    "just for you based on your skills and interests!"
)

HELP = (
    "I can help you with:\n\n"
    "• Track your dream progress\n"
    "• Discover new dreams and goals\n"
    "• Break down big dreams into steps\n"
    "• Stay motivated and focused\n"
    "• Review your achievements\n\n"
    "Just ask me anything!"
)


# ---------------------------------------------------------------------------
# Intent matching
# ---------------------------------------------------------------------------

def _contains_any(text: str, words: Sequence[str]) -> bool:
    return any(w in text for w in words)


def _is_greeting(text: str) -> bool:
    return text.startswith(("hi", "hello", "hey")) or _contains_any(text, ("good morning", "good evening"))


def _is_motivation(text: str) -> bool:
    if _contains_any(text, ("motivat", "inspire", "encourage")):
        return True
    return "feel" in text and _contains_any(text, ("down", "stuck"))


INTENTS: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("greeting", _is_greeting),
    ("progress", lambda t: _contains_any(t, ("progress", "how am i", "status", "update"))),
    ("patterns", lambda t: _contains_any(t, ("pattern", "insight", "analy", "trend"))),
    ("motivation", _is_motivation),
    ("suggestion", lambda t: _contains_any(t, ("suggest", "recommend", "idea", "new dream"))),
    ("help", lambda t: _contains_any(t, ("help", "what can you"))),
    ("thanks", lambda t: "thank" in t),
    ("completion", lambda t: _contains_any(t, ("complete", "finish", "done", "achieve"))),
    ("priority", lambda t: _contains_any(t, ("priority", "focus", "important", "urgent"))),
)


def classify(text: str) -> str | None:
    """Name of the first matching intent, or None."""
    lower = text.strip().lower()
    for name, matches in INTENTS:
        if matches(lower):
            return name
    return None


# ---------------------------------------------------------------------------
# Replies
# ---------------------------------------------------------------------------

def _progress_reply(name: str, dreams: Sequence[Dream]) -> str:
    if not dreams:
        return NO_DREAMS_PROGRESS
    stats = features.dream_stats(dreams)
    return (
        f"Here's your snapshot, {name}:\n\n"
        f"{stats['total']} total dreams\n"
        f"{stats['completed']} completed\n"
        f"{stats['active']} in progress\n"
        f"{stats['average_active_progress']}% average progress\n\n"
        "Keep pushing forward! Every step counts."
    )


def _patterns_reply(name: str, dreams: Sequence[Dream], focus_check_threshold: int) -> str:
    if not dreams:
        return NO_DREAMS_PATTERNS
    insights = features.analyze_patterns(dreams, focus_check_threshold=focus_check_threshold)
    lines = [f"• {i.title}: {i.description}" for i in insights]
    return f"Here's what I'm noticing, {name}:\n\n" + "\n".join(lines)


def _suggestion_reply(profile: UserProfile | None, dreams: Sequence[Dream], limit: int) -> str:
    if profile is not None:
        top = suggest(profile, (d.title for d in dreams))[:limit]
        if top:
            listing = "\n".join(f"  • {t.title}" for t in top)
            return (
                "Based on your profile, here are some dreams that might excite you:\n\n"
                f"{listing}\n\nCheck the Discover tab for the full list!"
            )
    return DISCOVER_HINT


def _completion_reply(dreams: Sequence[Dream]) -> str:
    done = features.completed_dreams(dreams)
    if not done:
        return (
            "You're working hard toward your first completed dream! Keep at it. "
            "The feeling of achievement will be incredible."
        )
    n = len(done)
    return (
        f"Amazing work! You've already completed {n} dream{'' if n == 1 else 's'}. "
        "Each one is proof that you can achieve anything you set your mind to!"
    )


def _priority_reply(name: str, dreams: Sequence[Dream], focus_check_threshold: int) -> str:
    urgent = features.high_priority_active(dreams)
    if not urgent:
        return (
            f"None of your active dreams are marked high priority right now, {name}. "
            "Pick the one that matters most and give it a boost!"
        )
    listing = "\n".join(f"  • {d.title} ({features.percent(d.progress)}%)" for d in urgent)
    reply = f"These high-priority dreams deserve your focus today:\n\n{listing}"
    active = len(features.active_dreams(dreams))
    if active > focus_check_threshold:
        reply += f"\n\nWith {active} active dreams, narrowing down to 3-5 will help."
    return reply


def generate_response(
    text: str,
    profile: UserProfile | None,
    dreams: Sequence[Dream],
    rng: random.Random | None = None,
    suggestion_limit: int = 3,
    focus_check_threshold: int = features.FOCUS_CHECK_THRESHOLD,
) -> str:
    rng = rng or random.Random()
    name = (profile.name if profile else "") or "friend"
    intent = classify(text)
    logger.debug("chat intent=%s", intent)

    if intent == "greeting":
        return rng.choice(GREETINGS).format(name=name)
    if intent == "progress":
        return _progress_reply(name, dreams)
    if intent == "patterns":
        return _patterns_reply(name, dreams, focus_check_threshold)
    if intent == "motivation":
        return rng.choice(MOTIVATION).format(name=name)
    if intent == "suggestion":
        return _suggestion_reply(profile, dreams, suggestion_limit)
    if intent == "help":
        return HELP
    if intent == "thanks":
        return rng.choice(THANKS).format(name=name)
    if intent == "completion":
        return _completion_reply(dreams)
    if intent == "priority":
        return _priority_reply(name, dreams, focus_check_threshold)
    return rng.choice(FALLBACKS).format(name=name)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

class ChatSession:
    """Append-only conversation with a simulated typing delay.

    User messages land immediately; each reply is composed in a background
    task after a random delay. Replies are serialized through one lock, so
    they arrive in submission order even when the user sends again while
    the assistant is still typing.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        delay_ms: tuple[int, int] = (600, 1600),
        suggestion_limit: int = 3,
        focus_check_threshold: int = features.FOCUS_CHECK_THRESHOLD,
    ) -> None:
        self.messages: list[ChatMessage] = [ChatMessage(content=WELCOME, is_user=False)]
        self._rng = rng or random.Random()
        self._delay_ms = delay_ms
        self._suggestion_limit = suggestion_limit
        self._focus_check_threshold = focus_check_threshold
        self._lock = asyncio.Lock()
        self._composing = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def is_typing(self) -> bool:
        return self._composing > 0

    def state(self) -> ChatState:
        return ChatState(messages=list(self.messages), is_typing=self.is_typing)

    def submit(
        self,
        text: str,
        profile: UserProfile | None,
        dreams: Sequence[Dream],
    ) -> ChatMessage | None:
        """Record the user's message and schedule a reply. Blank text is ignored.

        Must be called from a running event loop. The profile and dreams are
        snapshotted now; the reply reflects them, not later edits.
        """
        trimmed = text.strip()
        if not trimmed:
            return None

        message = ChatMessage(content=trimmed, is_user=True)
        self.messages.append(message)
        self._composing += 1

        task = asyncio.get_running_loop().create_task(self._reply(trimmed, profile, list(dreams)))
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return message

    def _finished(self, task: asyncio.Task[None]) -> None:
        # Runs even when the task was cancelled before it first ran
        self._tasks.discard(task)
        self._composing -= 1

    async def _reply(self, text: str, profile: UserProfile | None, dreams: list[Dream]) -> None:
        async with self._lock:
            low, high = self._delay_ms
            await asyncio.sleep(self._rng.uniform(low, high) / 1000.0)
            content = generate_response(
                text,
                profile,
                dreams,
                self._rng,
                suggestion_limit=self._suggestion_limit,
                focus_check_threshold=self._focus_check_threshold,
            )
            self.messages.append(ChatMessage(content=content, is_user=False))

    async def drain(self) -> None:
        """Wait until every scheduled reply has been appended."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        """Cancel pending replies (application shutdown)."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("chat session closed, %d pending replies cancelled", len(tasks))
