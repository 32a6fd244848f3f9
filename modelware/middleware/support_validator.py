# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Support validator middleware.

Rejects requests that use a capability the target model explicitly declares
as unsupported. Only an explicit False in ModelInfo.supports is enforced;
undeclared flags (None) and a missing supports record impose no constraint.

Checks run in a fixed order and only the first violation is reported:
  1. media      - any message contains a media part
  2. tool use   - the request declares tools
  3. multiturn  - the request has more than one message
"""

from loguru import logger

from modelware.errors import Capability, UnsupportedCapabilityError
from modelware.middleware.base import Decision, Fail, Forward, ModelMiddleware, as_middleware
from modelware.types import GenerateRequest, ModelInfo


def check_support(model_info: ModelInfo, request: GenerateRequest) -> Decision:
    """
    Check a request against the model's declared capabilities.

    Args:
        model_info: Model descriptor with optional supports flags
        request: Request to inspect (never modified)

    Returns:
        Forward(request) if every check passes, Fail(UnsupportedCapabilityError) otherwise
    """
    supports = model_info.supports
    if supports is None:
        return Forward(request)

    if supports.media is False and any(message.has_media() for message in request.messages):
        return Fail(
            UnsupportedCapabilityError(model_info.name, Capability.MEDIA, "media was provided")
        )

    if supports.tools is False and request.tools:
        return Fail(
            UnsupportedCapabilityError(
                model_info.name,
                Capability.TOOLS,
                f"{len(request.tools)} tool(s) were provided",
            )
        )

    if supports.multiturn is False and len(request.messages) > 1:
        return Fail(
            UnsupportedCapabilityError(
                model_info.name,
                Capability.MULTITURN,
                f"{len(request.messages)} messages were provided",
            )
        )

    return Forward(request)


def validate_support(model_info: ModelInfo) -> ModelMiddleware:
    """
    Build a middleware stage validating requests against model capabilities.

    Args:
        model_info: Model descriptor; its supports record drives the checks

    Returns:
        Middleware that forwards unchanged or raises UnsupportedCapabilityError
    """

    def validate(request: GenerateRequest) -> Decision:
        decision = check_support(model_info, request)
        if isinstance(decision, Fail):
            logger.warning(
                "[SupportValidator] Rejected request for model '{}': {}",
                model_info.name,
                decision.error.capability.value,
            )
        return decision

    return as_middleware(validate)
