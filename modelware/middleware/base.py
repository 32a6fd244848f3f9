# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Middleware stage contract.

A stage is an async callable ``(request, next) -> response``. It either
forwards a (possibly rewritten) request to ``next`` exactly once and returns
its result, or raises without calling ``next``.

Request transformations are written as pure functions returning a
Forward | Fail decision. ``as_middleware()`` adapts such a function to the
stage contract, so the decision logic can be tested without an event loop.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Union

from modelware.errors import ModelwareError
from modelware.types import GenerateRequest, GenerateResponse

NextFn = Callable[[GenerateRequest], Awaitable[GenerateResponse]]
ModelAction = NextFn
ModelMiddleware = Callable[[GenerateRequest, NextFn], Awaitable[GenerateResponse]]


@dataclass(frozen=True)
class Forward:
    """Continue the chain with this request."""

    request: GenerateRequest


@dataclass(frozen=True)
class Fail:
    """Stop the chain and surface this error to the caller."""

    error: ModelwareError


Decision = Union[Forward, Fail]
Transform = Callable[[GenerateRequest], Decision]


def as_middleware(transform: Transform) -> ModelMiddleware:
    """
    Wrap a pure request transform into a middleware stage.

    Args:
        transform: Function mapping a request to Forward or Fail

    Returns:
        Async middleware calling next() on Forward and raising on Fail
    """

    async def middleware(request: GenerateRequest, next: NextFn) -> GenerateResponse:
        decision = transform(request)
        if isinstance(decision, Fail):
            raise decision.error
        return await next(decision.request)

    middleware.__name__ = getattr(transform, "__name__", "middleware")
    return middleware
