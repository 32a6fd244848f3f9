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
Error types raised by the middleware chain.

Architecture:
- Capability: Enum of capabilities the support validator can reject
- ModelwareError: Base class for every error raised by this package
- UnsupportedCapabilityError: Request uses a capability the model lacks
- RequestDecodeError: Wire document could not be decoded into a request
- MiddlewareChainError: A stage broke the chain contract

Example:
    >>> error = UnsupportedCapabilityError("gemini-nano", Capability.MEDIA, "media was provided")
    >>> str(error)
    "Model 'gemini-nano' does not support media, but media was provided."
"""

from enum import Enum
from typing import Optional


class Capability(str, Enum):
    """
    Capabilities checked by the support validator.

    The value is the phrase used in error messages.
    """

    MEDIA = "media"
    TOOLS = "tool use"
    MULTITURN = "multiple messages"


class ModelwareError(Exception):
    """Base class for all errors raised by this package."""


class UnsupportedCapabilityError(ModelwareError):
    """
    Raised when a request uses a capability the target model does not support.

    Always surfaced to the caller; never retried.

    Attributes:
        model_name: Name of the model that rejected the request
        capability: The offending capability
        detail: Short description of what the request supplied
    """

    def __init__(self, model_name: str, capability: Capability, detail: Optional[str] = None):
        self.model_name = model_name
        self.capability = capability
        self.detail = detail
        message = f"Model '{model_name}' does not support {capability.value}"
        if detail:
            message = f"{message}, but {detail}"
        super().__init__(f"{message}.")


class RequestDecodeError(ModelwareError, ValueError):
    """Raised when a wire document cannot be decoded into a request."""


class MiddlewareChainError(ModelwareError):
    """Raised when a middleware stage violates the chain contract."""
