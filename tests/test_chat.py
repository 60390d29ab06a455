"""Tests for the scripted Dream Assistant."""

from __future__ import annotations

import asyncio
import random

import pytest

from dreambook.engine.chat import (
    DISCOVER_HINT,
    FALLBACKS,
    GREETINGS,
    HELP,
    MOTIVATION,
    NO_DREAMS_PATTERNS,
    NO_DREAMS_PROGRESS,
    THANKS,
    WELCOME,
    ChatSession,
    classify,
    generate_response,
)
from dreambook.engine.models import Dream, DreamStep, UserProfile

PROFILE = UserProfile(name="Riley", age=30, skills=["programming"], interests=["technology"])


def _filled(templates: tuple[str, ...], name: str = "Riley") -> set[str]:
    return {t.format(name=name) for t in templates}


def _dream(title: str = "Sail solo", completed: bool = False, priority: int = 2, done: list[bool] | None = None) -> Dream:
    return Dream(
        title=title,
        completed=completed,
        priority=priority,
        steps=[DreamStep(title=f"s{i}", completed=d) for i, d in enumerate(done or [])],
    )


class TestClassify:
    @pytest.mark.parametrize(
        "text, intent",
        [
            ("hello", "greeting"),
            ("Hey there", "greeting"),
            ("Well, good morning!", "greeting"),
            ("what's my progress", "progress"),
            ("How am I doing with my dreams?", "progress"),
            ("show me my patterns", "patterns"),
            ("any insights?", "patterns"),
            ("I need some motivation!", "motivation"),
            ("I feel stuck", "motivation"),
            ("Can you suggest some new dreams for me?", "suggestion"),
            ("What can you help me with?", "help"),
            ("thanks a lot", "thanks"),
            ("I finished one", "completion"),
            ("what's my top priority", "priority"),
            ("where should I focus", "priority"),
            ("blue whales are big", None),
        ],
    )
    def test_intents(self, text, intent):
        assert classify(text) == intent

    def test_first_match_wins(self):
        # greeting beats progress
        assert classify("hello, how am I doing?") == "greeting"


class TestGenerateResponse:
    def test_greeting_from_greeting_set(self):
        for seed in range(10):
            reply = generate_response("hello", PROFILE, [], random.Random(seed))
            assert reply in _filled(GREETINGS)
            assert reply not in _filled(MOTIVATION)
            assert reply != HELP

    def test_greeting_name_fallback(self):
        reply = generate_response("hello", None, [], random.Random(1))
        assert reply in _filled(GREETINGS, name="friend")

    def test_seeded_choice_is_deterministic(self):
        a = generate_response("hello", PROFILE, [], random.Random(42))
        b = generate_response("hello", PROFILE, [], random.Random(42))
        assert a == b

    def test_progress_without_dreams(self):
        reply = generate_response("what's my progress", PROFILE, [], random.Random(0))
        assert reply == NO_DREAMS_PROGRESS
        assert "%" not in reply

    def test_progress_snapshot(self):
        dreams = [_dream(completed=True), _dream(done=[True, False]), _dream()]
        reply = generate_response("what's my progress", PROFILE, dreams, random.Random(0))
        assert reply.startswith("Here's your snapshot, Riley:")
        assert "3 total dreams" in reply
        assert "1 completed" in reply
        assert "2 in progress" in reply
        assert "25% average progress" in reply

    def test_patterns_without_dreams(self):
        assert generate_response("any patterns?", PROFILE, [], random.Random(0)) == NO_DREAMS_PATTERNS

    def test_patterns_with_dreams(self):
        reply = generate_response("any patterns?", PROFILE, [_dream()], random.Random(0))
        assert "Your Focus Area" in reply
        assert "Emotional Pattern" in reply

    def test_motivation(self):
        reply = generate_response("inspire me", PROFILE, [], random.Random(3))
        assert reply in _filled(MOTIVATION)

    def test_suggestion_lists_top_three(self):
        reply = generate_response("suggest something", PROFILE, [], random.Random(0))
        assert "• Launch a Side Business" in reply
        assert "• Build Your First App" in reply
        assert "• Learn AI & Machine Learning" in reply
        assert reply.count("•") == 3

    def test_suggestion_skips_existing(self):
        reply = generate_response("suggest something", PROFILE, [_dream(title="Launch a Side Business")], random.Random(0))
        assert "Launch a Side Business" not in reply

    def test_suggestion_limit(self):
        reply = generate_response("suggest something", PROFILE, [], random.Random(0), suggestion_limit=1)
        assert reply.count("•") == 1

    def test_suggestion_without_profile(self):
        assert generate_response("any ideas?", None, [], random.Random(0)) == DISCOVER_HINT

    def test_help(self):
        assert generate_response("what can you do", PROFILE, [], random.Random(0)) == HELP

    def test_thanks(self):
        assert generate_response("thank you", PROFILE, [], random.Random(0)) in _filled(THANKS)

    def test_completion_none_yet(self):
        reply = generate_response("have I finished anything", PROFILE, [_dream()], random.Random(0))
        assert "first completed dream" in reply

    def test_completion_counts(self):
        one = generate_response("achievements?", PROFILE, [_dream(completed=True)], random.Random(0))
        two = generate_response("achievements?", PROFILE, [_dream(completed=True)] * 2, random.Random(0))
        assert "completed 1 dream." in one
        assert "completed 2 dreams." in two

    def test_priority_none(self):
        reply = generate_response("what's my priority", PROFILE, [_dream()], random.Random(0))
        assert reply.startswith("None of your active dreams are marked high priority")

    def test_priority_lists_urgent(self):
        dreams = [_dream(title="Big one", priority=3, done=[True, False]), _dream(title="Done", priority=3, completed=True)]
        reply = generate_response("what's my priority", PROFILE, dreams, random.Random(0))
        assert "• Big one (50%)" in reply
        assert "Done" not in reply

    def test_priority_focus_note_uses_threshold(self):
        dreams = [_dream(title="Big one", priority=3), _dream(), _dream()]
        default = generate_response("what's my priority", PROFILE, dreams, random.Random(0))
        strict = generate_response(
            "what's my priority", PROFILE, dreams, random.Random(0), focus_check_threshold=2
        )
        assert "narrowing down" not in default
        assert "With 3 active dreams, narrowing down to 3-5 will help." in strict

    def test_patterns_focus_check_uses_threshold(self):
        reply = generate_response("any patterns?", PROFILE, [_dream(), _dream()], random.Random(0), focus_check_threshold=1)
        assert "Focus Check" in reply

    def test_fallback(self):
        reply = generate_response("blue whales are big", PROFILE, [], random.Random(5))
        assert reply in _filled(FALLBACKS)


class TestChatSession:
    @pytest.mark.asyncio
    async def test_starts_with_welcome(self, chat):
        assert [m.content for m in chat.messages] == [WELCOME]
        assert chat.is_typing is False

    @pytest.mark.asyncio
    async def test_blank_is_ignored(self, chat):
        assert chat.submit("   ", PROFILE, []) is None
        assert len(chat.messages) == 1
        assert chat.is_typing is False

    @pytest.mark.asyncio
    async def test_user_message_is_immediate(self, chat):
        msg = chat.submit("  hello  ", PROFILE, [])
        assert msg is not None
        assert msg.content == "hello"
        assert msg.is_user is True
        assert chat.messages[-1] is msg
        assert chat.is_typing is True

        await chat.drain()
        assert len(chat.messages) == 3
        assert chat.messages[-1].is_user is False
        assert chat.messages[-1].content in _filled(GREETINGS)
        assert chat.is_typing is False

    @pytest.mark.asyncio
    async def test_reply_waits_for_delay(self):
        session = ChatSession(rng=random.Random(1), delay_ms=(50, 50))
        session.submit("hello", PROFILE, [])
        await asyncio.sleep(0)
        assert len(session.messages) == 2
        assert session.is_typing is True
        await session.drain()
        assert len(session.messages) == 3

    @pytest.mark.asyncio
    async def test_replies_serialized_in_submission_order(self):
        session = ChatSession(rng=random.Random(2), delay_ms=(1, 20))
        session.submit("hello", PROFILE, [])
        session.submit("thanks", PROFILE, [])
        session.submit("what can you do", PROFILE, [])
        await session.drain()

        contents = [m.content for m in session.messages]
        assert contents[1:4] == ["hello", "thanks", "what can you do"]
        assert contents[4] in _filled(GREETINGS)
        assert contents[5] in _filled(THANKS)
        assert contents[6] == HELP
        assert session.is_typing is False

    @pytest.mark.asyncio
    async def test_reply_uses_snapshot(self, chat):
        dreams = [_dream(completed=True)]
        chat.submit("achievements?", PROFILE, dreams)
        dreams.append(_dream(completed=True))
        await chat.drain()
        assert "completed 1 dream." in chat.messages[-1].content

    @pytest.mark.asyncio
    async def test_aclose_cancels_pending(self):
        session = ChatSession(rng=random.Random(0), delay_ms=(10_000, 10_000))
        session.submit("hello", PROFILE, [])
        await asyncio.sleep(0)
        await session.aclose()
        assert len(session.messages) == 2
        assert session.is_typing is False

    @pytest.mark.asyncio
    async def test_state(self, chat):
        chat.submit("hello", PROFILE, [])
        state = chat.state()
        assert state.is_typing is True
        assert len(state.messages) == 2
        await chat.drain()
        assert chat.state().is_typing is False

    @pytest.mark.asyncio
    async def test_aclose_before_reply_starts(self):
        session = ChatSession(rng=random.Random(0), delay_ms=(10_000, 10_000))
        session.submit("hello", PROFILE, [])
        session.submit("thanks", PROFILE, [])
        await session.aclose()
        assert session.is_typing is False
        assert len(session.messages) == 3

    @pytest.mark.asyncio
    async def test_threshold_reaches_reply(self):
        session = ChatSession(rng=random.Random(0), delay_ms=(0, 0), focus_check_threshold=1)
        session.submit("what's my priority", PROFILE, [_dream(priority=3), _dream()])
        await session.drain()
        assert "With 2 active dreams" in session.messages[-1].content
