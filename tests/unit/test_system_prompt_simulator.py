# -*- coding: utf-8 -*-

"""
Unit tests for the system prompt simulator middleware.
"""

import pytest

from modelware.middleware.system_prompt_simulator import (
    SimulateSystemPromptOptions,
    rewrite_system_prompt,
    simulate_system_prompt,
)
from modelware.types import GenerateRequest, Message, Part


def _system_then_user() -> GenerateRequest:
    return GenerateRequest(
        messages=[
            Message(role="system", content=[Part(text="I am a system message")]),
            Message(role="user", content=[Part(text="hello")]),
        ]
    )


class TestRewriteSystemPrompt:
    """Tests for rewrite_system_prompt() function."""

    def test_returns_same_request_without_system_message(self):
        """
        What it does: Verifies a request not starting with system is returned as-is.
        Purpose: No copy and no rewrite when there is nothing to simulate.
        """
        request = GenerateRequest(messages=[Message(role="user", content=[Part(text="hello")])])

        assert rewrite_system_prompt(request) is request

    def test_empty_messages_returned_as_is(self):
        """What it does: Verifies an empty conversation is not an error."""
        request = GenerateRequest(messages=[])
        assert rewrite_system_prompt(request) is request

    def test_rewrites_leading_system_message(self):
        """
        What it does: Verifies the exact rewritten message sequence.
        Purpose: system X + user hello -> user [preface, X], model ack, user hello.
        """
        print("Setup: system + user request...")
        request = _system_then_user()

        print("Action: rewriting...")
        result = rewrite_system_prompt(request)

        print(f"Result: {result.to_dict()}")
        assert result.to_dict() == {
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"text": "SYSTEM INSTRUCTIONS:\n"},
                        {"text": "I am a system message"},
                    ],
                },
                {"role": "model", "content": [{"text": "Understood."}]},
                {"role": "user", "content": [{"text": "hello"}]},
            ]
        }

    def test_does_not_mutate_input(self):
        """
        What it does: Verifies the caller's request is left untouched.
        Purpose: Stages must produce copies, not mutate shared objects.
        """
        request = _system_then_user()
        before = request.to_dict()

        rewrite_system_prompt(request)

        assert request.to_dict() == before
        assert request.messages[0].role == "system"

    def test_message_count_grows_by_one(self):
        """What it does: Verifies (n - 1) + 2 messages after the rewrite."""
        request = _system_then_user()
        request.messages.append(Message(role="model", content=[Part(text="hi")]))

        result = rewrite_system_prompt(request)

        assert len(result.messages) == len(request.messages) + 1
        assert [m.role for m in result.messages] == ["user", "model", "user", "model"]

    def test_later_system_message_left_in_place(self):
        """
        What it does: Verifies only the leading system message is rewritten.
        Purpose: System messages elsewhere are out of scope.
        """
        request = GenerateRequest(
            messages=[
                Message(role="user", content=[Part(text="hello")]),
                Message(role="system", content=[Part(text="late instructions")]),
            ]
        )

        assert rewrite_system_prompt(request) is request

    def test_keeps_non_text_system_parts(self):
        """What it does: Verifies every system part follows the preface in order."""
        request = GenerateRequest(
            messages=[
                Message(
                    role="system",
                    content=[Part(text="a"), Part(data={"k": 1}), Part(text="b")],
                )
            ]
        )

        result = rewrite_system_prompt(request)

        content = result.messages[0].content
        assert [p.text for p in content] == ["SYSTEM INSTRUCTIONS:\n", "a", None, "b"]
        assert content[2].data == {"k": 1}


class TestSimulateSystemPrompt:
    """Tests for the simulate_system_prompt() middleware stage."""

    @pytest.mark.asyncio
    async def test_forwards_request_without_system_prompt(self, recording_next):
        """
        What it does: Verifies simulate(req) == req without a leading system message.
        Purpose: Idempotence on inputs that need no rewrite.
        """
        request = GenerateRequest(messages=[Message(role="user", content=[Part(text="hello")])])

        await simulate_system_prompt()(request, recording_next)

        assert recording_next.last_request == request

    @pytest.mark.asyncio
    async def test_forwards_rewritten_request(self, recording_next):
        """What it does: Verifies next() receives the rewritten conversation."""
        await simulate_system_prompt()(_system_then_user(), recording_next)

        forwarded = recording_next.last_request
        assert forwarded.messages[0].content[0].text == "SYSTEM INSTRUCTIONS:\n"
        assert forwarded.messages[1].text == "Understood."
        assert forwarded.messages[2].text == "hello"

    @pytest.mark.asyncio
    async def test_custom_preface_and_acknowledgement(self, recording_next):
        """
        What it does: Verifies option overrides are used.
        Purpose: Callers can adapt the wording to the model's language.
        """
        options = SimulateSystemPromptOptions(
            preface="Follow these rules:\n",
            acknowledgement="OK.",
        )

        await simulate_system_prompt(options)(_system_then_user(), recording_next)

        forwarded = recording_next.last_request
        assert forwarded.messages[0].content[0].text == "Follow these rules:\n"
        assert forwarded.messages[1].text == "OK."

    @pytest.mark.asyncio
    async def test_idempotent_when_applied_twice(self, recording_next):
        """What it does: Verifies a second pass leaves the rewritten request alone."""
        stage = simulate_system_prompt()
        await stage(_system_then_user(), recording_next)
        first = recording_next.last_request

        await stage(first, recording_next)

        assert recording_next.last_request is first
