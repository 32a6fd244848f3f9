# -*- coding: utf-8 -*-

# Modelware
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Context augmenter middleware.

Merges retrieved reference documents (request.docs) into the last user
message as a single text part tagged with metadata {"purpose": "context"}:

    <preface>- [key0]: text of doc 0
    - [key1]: text of doc 1
    <blank line>

Placement rules for the target message's parts:
  - materialized context part present -> request forwarded unchanged
  - pending context part present      -> replaced in place
  - no context part                   -> new part appended

Citation keys are resolved per document: configured citation_key field,
then metadata "ref", then metadata "id", then the document position.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from loguru import logger

from modelware.config import CONTEXT_CITATION_KEY, CONTEXT_PREFACE
from modelware.middleware.base import Decision, Forward, ModelMiddleware, as_middleware
from modelware.types import (
    CONTEXT_PURPOSE,
    PURPOSE_KEY,
    Document,
    GenerateRequest,
    Message,
    Part,
)

ItemTemplate = Callable[[Document, str], str]

# Metadata fields tried after the configured citation key
_FALLBACK_CITATION_FIELDS = ("ref", "id")


def default_item_template(doc: Document, key: str) -> str:
    """Render one document as "- [key]: text\\n"."""
    return f"- [{key}]: {doc.text}\n"


@dataclass
class AugmentWithContextOptions:
    """
    Options for augment_with_context().

    Attributes:
        preface: Text placed before the item list. None or "" elides it.
        item_template: Renders one document line from (doc, key)
        citation_key: Metadata field used as citation key when present
            (None uses CONTEXT_CITATION_KEY from config)
    """

    preface: Optional[str] = CONTEXT_PREFACE
    item_template: ItemTemplate = default_item_template
    citation_key: Optional[str] = None


def _is_present(value: object) -> bool:
    return value is not None and value != ""


def resolve_citation_key(
    doc: Document,
    index: int,
    citation_key: Optional[str] = None,
) -> str:
    """
    Resolve the display key of a document.

    Precedence: metadata[citation_key] (if configured and present),
    metadata["ref"], metadata["id"], then the zero-based index.

    Args:
        doc: Document to resolve
        index: Position of the document in request.docs
        citation_key: Optional metadata field name to try first

    Returns:
        Citation key as string
    """
    metadata = doc.metadata or {}
    fields = ((citation_key,) if citation_key else ()) + _FALLBACK_CITATION_FIELDS
    for field_name in fields:
        value = metadata.get(field_name)
        if _is_present(value):
            return str(value)
    return str(index)


def render_context(
    docs: List[Document],
    preface: Optional[str] = CONTEXT_PREFACE,
    item_template: ItemTemplate = default_item_template,
    citation_key: Optional[str] = None,
) -> str:
    """
    Render documents into the context block text.

    Args:
        docs: Documents in citation order
        preface: Leading text; None or "" elides it
        item_template: Line renderer
        citation_key: Optional metadata field used as key

    Returns:
        preface + one rendered line per document + trailing newline
    """
    lines = [
        item_template(doc, resolve_citation_key(doc, index, citation_key))
        for index, doc in enumerate(docs)
    ]
    return (preface or "") + "".join(lines) + "\n"


def find_context_part(parts: List[Part]) -> Optional[int]:
    """Return the index of the first context-carrier part, or None."""
    for index, part in enumerate(parts):
        if part.is_context:
            return index
    return None


def find_last_user_message(messages: List[Message]) -> Optional[int]:
    """Return the index of the last message with role "user", or None."""
    for index in range(len(messages) - 1, -1, -1):
        if messages[index].role == "user":
            return index
    return None


def splice_context_part(message: Message, context_part: Part) -> Message:
    """
    Return a copy of message with context_part placed into it.

    A pending context part is replaced at its position; otherwise the part
    is appended. The input message is not modified.
    """
    parts = list(message.content)
    position = find_context_part(parts)
    if position is None:
        parts.append(context_part)
    else:
        parts[position] = context_part
    return Message(role=message.role, content=parts, metadata=message.metadata)


def augment_request(
    request: GenerateRequest,
    options: AugmentWithContextOptions,
) -> GenerateRequest:
    """
    Merge request.docs into the last user message.

    Args:
        request: Request to augment (never modified)
        options: Rendering options

    Returns:
        The same request when there is nothing to do, otherwise an augmented copy
    """
    if not request.docs:
        return request

    target_index = find_last_user_message(request.messages)
    if target_index is None:
        logger.debug("[ContextAugmenter] No user message to augment, forwarding unchanged")
        return request

    target = request.messages[target_index]
    existing = find_context_part(target.content)
    if existing is not None and not target.content[existing].is_pending:
        logger.debug(
            "[ContextAugmenter] Message {} already carries context, forwarding unchanged",
            target_index,
        )
        return request

    citation_key = options.citation_key or CONTEXT_CITATION_KEY or None
    text = render_context(request.docs, options.preface, options.item_template, citation_key)
    context_part = Part(text=text, metadata={PURPOSE_KEY: CONTEXT_PURPOSE})

    messages = list(request.messages)
    messages[target_index] = splice_context_part(target, context_part)

    logger.info(
        "[ContextAugmenter] Merged {} document(s) into message {} ({})",
        len(request.docs),
        target_index,
        "replaced pending part" if existing is not None else "appended part",
    )
    return request.with_messages(messages)


def augment_with_context(
    options: Optional[AugmentWithContextOptions] = None,
) -> ModelMiddleware:
    """
    Build a middleware stage merging request docs into the prompt.

    Args:
        options: Preface, item template and citation key settings

    Returns:
        Middleware forwarding the augmented (or untouched) request
    """
    options = options or AugmentWithContextOptions()

    def augment(request: GenerateRequest) -> Decision:
        return Forward(augment_request(request, options))

    return as_middleware(augment)
