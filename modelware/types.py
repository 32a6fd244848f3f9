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
Pydantic models for generation requests.

Defines the records that flow through the middleware chain:
- GenerateRequest / GenerateResponse: the request going to a model and its result
- Message / Part: ordered conversation content
- Document: a retrieved reference document
- ModelInfo / ModelSupports: static capability descriptor of a model

Fields use snake_case in Python and camelCase on the wire (toolRequest,
toolResponse, systemRole, ...). Decoding goes through from_dict(), which
reports every validation problem as a RequestDecodeError; to_dict() omits
fields set to None.

Example:
    >>> request = GenerateRequest.from_dict(
    ...     {"messages": [{"role": "user", "content": [{"text": "hello"}]}]}
    ... )
    >>> request.messages[0].content[0].text
    'hello'
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from modelware.errors import RequestDecodeError

Role = Literal["system", "user", "model", "tool"]

# Reserved part metadata keys
PURPOSE_KEY = "purpose"
PENDING_KEY = "pending"
CONTEXT_PURPOSE = "context"


def _format_validation_error(model_name: str, error: ValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        problems.append(f"{location}: {item['msg']} (got {item.get('input')!r})")
    return f"Invalid {model_name}: " + "; ".join(problems)


class WireModel(BaseModel):
    """
    Base class for all wire records.

    Accepts both camelCase aliases and snake_case field names on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_dict(cls, data: Any):
        """
        Decode a wire document.

        Raises:
            RequestDecodeError: The document does not match the model
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise RequestDecodeError(_format_validation_error(cls.__name__, e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Encode to the camelCase wire shape, omitting None fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ==================================================================================================
# Part payloads
# ==================================================================================================


class MediaRef(WireModel):
    """Reference to a media object (remote URL or data: URL)."""

    url: str
    content_type: Optional[str] = None


class ToolRequest(WireModel):
    """A tool invocation emitted by a model."""

    name: str
    input: Any = None
    ref: Optional[str] = None


class ToolResponse(WireModel):
    """The output of a tool invocation, sent back to the model."""

    name: str
    output: Any = None
    ref: Optional[str] = None


# ==================================================================================================
# Part / Message / Document
# ==================================================================================================


class Part(WireModel):
    """
    One piece of message or document content.

    Exactly one payload field is normally set (text, media, tool_request,
    tool_response or data). A part carrying only metadata is allowed: it is
    how a pending context slot is represented.

    Attributes:
        text: Plain text content
        media: Media reference
        tool_request: Tool call emitted by a model
        tool_response: Tool result sent to a model
        data: Arbitrary structured payload
        metadata: Open mapping; "purpose" and "pending" are reserved keys
    """

    text: Optional[str] = None
    media: Optional[MediaRef] = None
    tool_request: Optional[ToolRequest] = None
    tool_response: Optional[ToolResponse] = None
    data: Any = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def is_context(self) -> bool:
        """True if this part is marked as a context carrier."""
        return bool(self.metadata) and self.metadata.get(PURPOSE_KEY) == CONTEXT_PURPOSE

    @property
    def is_pending(self) -> bool:
        return bool(self.metadata) and bool(self.metadata.get(PENDING_KEY))


class Message(WireModel):
    """
    A single conversation turn.

    Attributes:
        role: One of system, user, model, tool
        content: Ordered list of parts
        metadata: Optional message-level metadata
    """

    role: Role
    content: List[Part] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        return "".join(part.text or "" for part in self.content)

    def has_media(self) -> bool:
        return any(part.media is not None for part in self.content)


class Document(WireModel):
    """
    A retrieved reference document.

    Attributes:
        content: Ordered content parts
        metadata: Open mapping; "ref" and "id" are used as citation keys
    """

    content: List[Part] = Field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None

    @property
    def text(self) -> str:
        """Concatenation of all text parts."""
        return "".join(part.text or "" for part in self.content)

    @classmethod
    def from_text(cls, text: str, metadata: Optional[Dict[str, Any]] = None) -> "Document":
        return cls(content=[Part(text=text)], metadata=metadata)


# ==================================================================================================
# Request / Response
# ==================================================================================================


class ToolDefinition(WireModel):
    """A tool the model may call."""

    name: str
    description: Optional[str] = None
    input_schema: Optional[Dict[str, Any]] = None


class OutputConfig(WireModel):
    """Requested output format. Opaque to the middleware chain."""

    format: Optional[str] = None
    json_schema: Optional[Dict[str, Any]] = Field(default=None, alias="schema")


class GenerateRequest(WireModel):
    """
    A generation request on its way to a model.

    Middleware never mutates a request it received; it forwards a copy
    produced with with_messages() instead.

    Attributes:
        messages: Ordered conversation
        tools: Tools declared for this request
        output: Output format configuration
        docs: Retrieved reference documents
        config: Backend-specific generation config
    """

    messages: List[Message]
    tools: Optional[List[ToolDefinition]] = None
    output: Optional[OutputConfig] = None
    docs: Optional[List[Document]] = None
    config: Optional[Dict[str, Any]] = None

    def with_messages(self, messages: List[Message]) -> "GenerateRequest":
        """Return a copy of this request with a replaced message list."""
        return self.model_copy(
            update={
                "messages": list(messages),
                "tools": list(self.tools) if self.tools is not None else None,
                "docs": list(self.docs) if self.docs is not None else None,
                "config": dict(self.config) if self.config is not None else None,
            }
        )


class GenerateResponse(WireModel):
    """
    Result returned by a model action.

    Attributes:
        message: Generated message, if any
        finish_reason: Why generation stopped (stop, length, blocked, ...)
        custom: Backend-specific payload
    """

    message: Optional[Message] = None
    finish_reason: Optional[str] = None
    custom: Any = None


# ==================================================================================================
# Model capability descriptor
# ==================================================================================================


class ModelSupports(WireModel):
    """
    Capability flags declared by a model.

    Every flag defaults to None, meaning "not declared": no constraint is
    enforced and no compensating middleware is added for it. Only an explicit
    False marks a capability as unsupported.

    Attributes:
        media: Accepts media parts
        tools: Accepts tool definitions
        multiturn: Accepts more than one message
        system_role: Accepts messages with role "system"
        context: Consumes request docs natively
        output: Supported output formats (e.g. ["text", "json"])
    """

    media: Optional[bool] = None
    tools: Optional[bool] = None
    multiturn: Optional[bool] = None
    system_role: Optional[bool] = None
    context: Optional[bool] = None
    output: Optional[List[str]] = None


class ModelInfo(WireModel):
    """
    Static descriptor of a model.

    Attributes:
        name: Model name, used in error messages
        supports: Capability flags; None means nothing is declared
    """

    name: str = Field(min_length=1)
    supports: Optional[ModelSupports] = None
