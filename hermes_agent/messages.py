"""Chat message types exchanged with OpenAI-compatible chat completion APIs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolFunction:
    """The function part of a tool call: its name and JSON-encoded arguments."""

    name: str
    arguments: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolFunction":
        try:
            return cls(name=data["name"], arguments=data["arguments"])
        except KeyError as exc:
            raise ValueError(f"tool function is missing field {exc.args[0]!r}") from exc


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""

    id: str
    function: ToolFunction
    type: str | None = None
    index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": self.function.to_dict(),
            "index": self.index,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolCall":
        if "id" not in data:
            raise ValueError("tool call is missing field 'id'")
        if "function" not in data:
            raise ValueError("tool call is missing field 'function'")
        return cls(
            id=data["id"],
            function=ToolFunction.from_dict(data["function"]),
            type=data.get("type"),
            index=data.get("index"),
        )


@dataclass
class Message:
    """One chat message; absent optional fields are left out when serialised."""

    role: str
    content: str | None = None
    tool_calls: list[ToolCall] | None = None
    tool_call_id: str | None = None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role}
        if self.content is not None:
            data["content"] = self.content
        if self.tool_calls is not None:
            data["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        if "role" not in data:
            raise ValueError("message is missing field 'role'")
        raw_calls = data.get("tool_calls")
        return cls(
            role=data["role"],
            content=data.get("content"),
            tool_calls=None if raw_calls is None else [ToolCall.from_dict(c) for c in raw_calls],
            tool_call_id=data.get("tool_call_id"),
            name=data.get("name"),
        )


@dataclass
class ChatResponse:
    """The final answer of a conversation run."""

    content: str
    tool_calls: list[ToolCall] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"content": self.content}
        if self.tool_calls is not None:
            data["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        return data