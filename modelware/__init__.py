# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""
Modelware - request middleware for generative model backends.

This package rewrites generation requests before they reach a model,
compensating for model capability gaps and injecting retrieval context.

Modules:
    - config: Configuration and default texts
    - types: Request, message, document and model descriptor records
    - errors: Error taxonomy
    - middleware: Middleware stages and the pipeline orchestrator
"""

# Version is imported from config.py - the single source of truth
from modelware.config import APP_VERSION as __version__

# Data model
from modelware.types import (
    Document,
    GenerateRequest,
    GenerateResponse,
    MediaRef,
    Message,
    ModelInfo,
    ModelSupports,
    OutputConfig,
    Part,
    ToolDefinition,
    ToolRequest,
    ToolResponse,
)

# Errors
from modelware.errors import (
    Capability,
    MiddlewareChainError,
    ModelwareError,
    RequestDecodeError,
    UnsupportedCapabilityError,
)

# Middleware
from modelware.middleware import (
    AugmentWithContextOptions,
    MiddlewarePipeline,
    SimulateSystemPromptOptions,
    augment_with_context,
    build_model_middleware,
    run_model_middleware,
    simulate_system_prompt,
    validate_support,
)

__all__ = [
    # Version
    "__version__",

    # Data model
    "Document",
    "GenerateRequest",
    "GenerateResponse",
    "MediaRef",
    "Message",
    "ModelInfo",
    "ModelSupports",
    "OutputConfig",
    "Part",
    "ToolDefinition",
    "ToolRequest",
    "ToolResponse",

    # Errors
    "Capability",
    "MiddlewareChainError",
    "ModelwareError",
    "RequestDecodeError",
    "UnsupportedCapabilityError",

    # Middleware
    "AugmentWithContextOptions",
    "MiddlewarePipeline",
    "SimulateSystemPromptOptions",
    "augment_with_context",
    "build_model_middleware",
    "run_model_middleware",
    "simulate_system_prompt",
    "validate_support",
]
