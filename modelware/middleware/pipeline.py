# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Middleware pipeline orchestrator.

Composes middleware stages around a model action. The first stage in the
list is the outermost one: it sees the request first and the response last.

Default chain for a model (build_model_middleware):
  1. SupportValidator       - Always, so rejected requests fail before any rewrite
  2. SystemPromptSimulator  - Only for models declaring systemRole=false
  3. ContextAugmenter       - Unless the model declares native context support
"""

from typing import List, Optional

from loguru import logger

from modelware.config import (
    CONTEXT_AUGMENTER_ENABLED,
    SUPPORT_VALIDATOR_ENABLED,
    SYSTEM_PROMPT_SIMULATOR_ENABLED,
)
from modelware.errors import MiddlewareChainError
from modelware.middleware.base import ModelAction, ModelMiddleware, NextFn
from modelware.middleware.context_augmenter import (
    AugmentWithContextOptions,
    augment_with_context,
)
from modelware.middleware.support_validator import validate_support
from modelware.middleware.system_prompt_simulator import (
    SimulateSystemPromptOptions,
    simulate_system_prompt,
)
from modelware.types import GenerateRequest, GenerateResponse, ModelInfo


class MiddlewarePipeline:
    """
    Ordered chain of middleware stages wrapped around a model action.

    Each run() builds a fresh chain, so a pipeline may be shared across
    requests. A stage calling next() more than once raises
    MiddlewareChainError.

    Example:
        >>> pipeline = MiddlewarePipeline([validate_support(info)], model_action)
        >>> response = await pipeline.run(request)
    """

    def __init__(self, stages: List[ModelMiddleware], action: ModelAction):
        self.stages = list(stages)
        self.action = action

    def _dispatch(self, index: int) -> NextFn:
        called = False

        async def next_fn(request: GenerateRequest) -> GenerateResponse:
            nonlocal called
            if called:
                raise MiddlewareChainError(
                    f"Middleware stage {index - 1} called next() more than once"
                )
            called = True
            if index == len(self.stages):
                return await self.action(request)
            stage = self.stages[index]
            logger.debug("[Pipeline] Running stage {}: {}", index, getattr(stage, "__name__", stage))
            return await stage(request, self._dispatch(index + 1))

        return next_fn

    async def run(self, request: GenerateRequest) -> GenerateResponse:
        """
        Run the request through every stage and the model action.

        Args:
            request: Incoming generation request

        Returns:
            Response of the model action

        Raises:
            ModelwareError: Raised by any stage; remaining stages are skipped
        """
        return await self._dispatch(0)(request)


def build_model_middleware(
    model_info: ModelInfo,
    enable_support_validation: Optional[bool] = None,
    enable_system_prompt_simulation: Optional[bool] = None,
    enable_context_augmentation: Optional[bool] = None,
    system_prompt_options: Optional[SimulateSystemPromptOptions] = None,
    context_options: Optional[AugmentWithContextOptions] = None,
) -> List[ModelMiddleware]:
    """
    Derive the default middleware chain for a model from its capabilities.

    Each stage is independently toggleable. Toggles left as None fall back
    to the *_ENABLED settings from config.

    Args:
        model_info: Model descriptor
        enable_support_validation: Include the support validator
        enable_system_prompt_simulation: Include the simulator when systemRole is false
        enable_context_augmentation: Include the augmenter when context is not native
        system_prompt_options: Options for the simulator
        context_options: Options for the augmenter

    Returns:
        Ordered list of middleware stages
    """
    if enable_support_validation is None:
        enable_support_validation = SUPPORT_VALIDATOR_ENABLED
    if enable_system_prompt_simulation is None:
        enable_system_prompt_simulation = SYSTEM_PROMPT_SIMULATOR_ENABLED
    if enable_context_augmentation is None:
        enable_context_augmentation = CONTEXT_AUGMENTER_ENABLED

    supports = model_info.supports
    stages: List[ModelMiddleware] = []
    names: List[str] = []

    # 1. Reject unsupported capabilities before rewriting anything
    if enable_support_validation:
        stages.append(validate_support(model_info))
        names.append("SupportValidator")

    # 2. Rewrite leading system message for models without system role
    if enable_system_prompt_simulation and supports is not None and supports.system_role is False:
        stages.append(simulate_system_prompt(system_prompt_options))
        names.append("SystemPromptSimulator")

    # 3. Merge docs into the prompt unless the model consumes them natively
    if enable_context_augmentation and not (supports is not None and supports.context is True):
        stages.append(augment_with_context(context_options))
        names.append("ContextAugmenter")

    logger.debug(
        "[Pipeline] Middleware for model '{}': {}",
        model_info.name,
        ", ".join(names) or "none",
    )
    return stages


async def run_model_middleware(
    request: GenerateRequest,
    model_info: ModelInfo,
    action: ModelAction,
    use: Optional[List[ModelMiddleware]] = None,
) -> GenerateResponse:
    """
    Run a request through the model's default chain plus caller stages.

    Caller-supplied stages run before the default ones.

    Args:
        request: Incoming generation request
        model_info: Model descriptor
        action: Terminal model invocation
        use: Extra stages to run first

    Returns:
        Response of the model action
    """
    stages = list(use or []) + build_model_middleware(model_info)
    return await MiddlewarePipeline(stages, action).run(request)
