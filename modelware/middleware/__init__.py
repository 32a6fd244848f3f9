# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Request middleware for generative model backends.

Architecture:
    Each middleware is an async callable (request, next) -> response. It
    either forwards a (possibly rewritten) copy of the request to next()
    exactly once, or raises without calling it. Stages are chained around
    the final model invocation by MiddlewarePipeline.

Middleware:
    1. SupportValidator      - Reject capabilities the model declares unsupported
    2. SystemPromptSimulator - Rewrite a leading system message for models without system role
    3. ContextAugmenter      - Merge retrieved documents into the last user message
"""

from modelware.middleware.base import (
    Decision,
    Fail,
    Forward,
    ModelAction,
    ModelMiddleware,
    NextFn,
    as_middleware,
)
from modelware.middleware.context_augmenter import (
    AugmentWithContextOptions,
    augment_with_context,
    render_context,
    resolve_citation_key,
)
from modelware.middleware.pipeline import (
    MiddlewarePipeline,
    build_model_middleware,
    run_model_middleware,
)
from modelware.middleware.support_validator import check_support, validate_support
from modelware.middleware.system_prompt_simulator import (
    SimulateSystemPromptOptions,
    simulate_system_prompt,
)

__all__ = [
    "Decision",
    "Fail",
    "Forward",
    "ModelAction",
    "ModelMiddleware",
    "NextFn",
    "as_middleware",
    "AugmentWithContextOptions",
    "augment_with_context",
    "render_context",
    "resolve_citation_key",
    "MiddlewarePipeline",
    "build_model_middleware",
    "run_model_middleware",
    "check_support",
    "validate_support",
    "SimulateSystemPromptOptions",
    "simulate_system_prompt",
]
