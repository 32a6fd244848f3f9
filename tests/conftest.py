# -*- coding: utf-8 -*-

"""
Shared pytest fixtures for Modelware tests.
"""

from typing import List

import pytest

from modelware.types import (
    Document,
    GenerateRequest,
    GenerateResponse,
    MediaRef,
    Message,
    Part,
    ToolDefinition,
)


class RecordingNext:
    """
    Continuation that records every request it receives.

    Used in place of the model action to observe what a middleware
    stage forwarded.
    """

    def __init__(self):
        self.requests: List[GenerateRequest] = []

    @property
    def called(self) -> bool:
        return bool(self.requests)

    @property
    def last_request(self) -> GenerateRequest:
        return self.requests[-1]

    async def __call__(self, request: GenerateRequest) -> GenerateResponse:
        self.requests.append(request)
        return GenerateResponse(finish_reason="stop", custom=request)


@pytest.fixture
def recording_next() -> RecordingNext:
    """Fresh recording continuation per test."""
    return RecordingNext()


def user(text: str) -> Message:
    return Message(role="user", content=[Part(text=text)])


@pytest.fixture
def multiturn_request() -> GenerateRequest:
    """Three-message conversation."""
    return GenerateRequest(
        messages=[
            user("hello"),
            Message(role="model", content=[Part(text="hi")]),
            user("how are you"),
        ]
    )


@pytest.fixture
def media_request() -> GenerateRequest:
    """Single user message carrying an image."""
    return GenerateRequest(
        messages=[
            Message(
                role="user",
                content=[Part(media=MediaRef(url="https://example.com/image.png"))],
            )
        ]
    )


@pytest.fixture
def tools_request() -> GenerateRequest:
    """Single text message with one declared tool."""
    return GenerateRequest(
        messages=[user("hello world")],
        tools=[
            ToolDefinition(
                name="someTool",
                description="hello world",
                input_schema={"type": "object"},
            )
        ],
    )


@pytest.fixture
def two_docs() -> List[Document]:
    """Two documents without any metadata identifiers."""
    return [
        Document.from_text("i am context"),
        Document.from_text("i am more context"),
    ]
