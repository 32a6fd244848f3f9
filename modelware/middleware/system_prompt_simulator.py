# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
System prompt simulator middleware.

Some models reject messages with role "system". For those, a leading system
message is rewritten into a user/model exchange:

    [system: X, user: hello]
      ->
    [user: "SYSTEM INSTRUCTIONS:\\n" + X, model: "Understood.", user: hello]

Only the first message is considered. System messages appearing later in the
conversation are left untouched.
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from modelware.config import SYSTEM_PROMPT_ACKNOWLEDGEMENT, SYSTEM_PROMPT_PREFACE
from modelware.middleware.base import Decision, Forward, ModelMiddleware, as_middleware
from modelware.types import GenerateRequest, Message, Part


@dataclass
class SimulateSystemPromptOptions:
    """
    Options for simulate_system_prompt().

    Attributes:
        preface: Text part placed before the system instructions
            (None uses SYSTEM_PROMPT_PREFACE from config)
        acknowledgement: Text of the synthetic model reply
            (None uses SYSTEM_PROMPT_ACKNOWLEDGEMENT from config)
    """

    preface: Optional[str] = None
    acknowledgement: Optional[str] = None


def rewrite_system_prompt(
    request: GenerateRequest,
    preface: str = SYSTEM_PROMPT_PREFACE,
    acknowledgement: str = SYSTEM_PROMPT_ACKNOWLEDGEMENT,
) -> GenerateRequest:
    """
    Replace a leading system message with a user/model message pair.

    Args:
        request: Request to rewrite (never modified)
        preface: Text part prepended to the system instructions
        acknowledgement: Text of the inserted model message

    Returns:
        The same request if it does not start with a system message,
        otherwise a rewritten copy
    """
    if not request.messages or request.messages[0].role != "system":
        return request

    system_message = request.messages[0]
    instructions = Message(
        role="user",
        content=[Part(text=preface)]
        + [part.model_copy(deep=True) for part in system_message.content],
    )
    reply = Message(role="model", content=[Part(text=acknowledgement)])

    return request.with_messages([instructions, reply] + list(request.messages[1:]))


def simulate_system_prompt(
    options: Optional[SimulateSystemPromptOptions] = None,
) -> ModelMiddleware:
    """
    Build a middleware stage that simulates a system prompt.

    Args:
        options: Optional preface/acknowledgement overrides

    Returns:
        Middleware forwarding the rewritten (or untouched) request
    """
    options = options or SimulateSystemPromptOptions()
    preface = options.preface if options.preface is not None else SYSTEM_PROMPT_PREFACE
    acknowledgement = (
        options.acknowledgement
        if options.acknowledgement is not None
        else SYSTEM_PROMPT_ACKNOWLEDGEMENT
    )

    def simulate(request: GenerateRequest) -> Decision:
        rewritten = rewrite_system_prompt(request, preface, acknowledgement)
        if rewritten is request:
            logger.debug("[SystemPromptSimulator] No leading system message, forwarding unchanged")
        else:
            logger.info(
                "[SystemPromptSimulator] Rewrote system message: {} -> {} messages",
                len(request.messages),
                len(rewritten.messages),
            )
        return Forward(rewritten)

    return as_middleware(simulate)
