"""Parsing of server-sent event streams from OpenAI-compatible chat completion APIs."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from hermes_agent.messages import ToolCall, ToolFunction

_DATA_PREFIX = "data: "
_DONE_MARKER = "[DONE]"


def _decode(chunk: bytes | str) -> str:
    if isinstance(chunk, str):
        return chunk
    return bytes(chunk).decode("utf-8", errors="replace")


def iter_sse_payloads(chunk: bytes | str) -> Iterator[Any]:
    """Yield the parsed JSON payload of every ``data:`` line in a chunk.

    Lines that are not data lines, the ``[DONE]`` marker and payloads that
    are not valid JSON are skipped.
    """
    for raw_line in _decode(chunk).split("\n"):
        line = raw_line.strip()
        if not line.startswith(_DATA_PREFIX):
            continue
        data = line[len(_DATA_PREFIX):]
        if data == _DONE_MARKER:
            continue
        try:
            yield json.loads(data)
        except ValueError:
            continue


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class StreamAccumulator:
    """Collects content, tool calls and the finish reason from streamed deltas."""

    def __init__(self) -> None:
        self.content = ""
        self.tool_calls: list[ToolCall] = []
        self.finish_reason: str | None = None
        self._tc_id: str | None = None
        self._tc_name: str | None = None
        self._tc_args = ""
        self._in_tool_call = False

    @property
    def wants_tools(self) -> bool:
        """True when the model asked for tool calls."""
        return self.finish_reason == "tool_calls" or bool(self.tool_calls)

    def feed(self, chunk: bytes | str) -> list[str]:
        """Consume one chunk of the stream and return the content tokens it held."""
        tokens: list[str] = []
        for payload in iter_sse_payloads(chunk):
            if not isinstance(payload, dict):
                continue
            choices = payload.get("choices")
            if not isinstance(choices, list) or not choices:
                continue
            choice = choices[0]
            if not isinstance(choice, dict):
                continue

            reason = _str_or_none(choice.get("finish_reason"))
            if reason is not None:
                self.finish_reason = reason

            delta = choice.get("delta")
            if not isinstance(delta, dict):
                continue
            token = _str_or_none(delta.get("content"))
            if token is not None:
                self.content += token
                tokens.append(token)

            tool_items = delta.get("tool_calls")
            if isinstance(tool_items, list):
                for item in tool_items:
                    if isinstance(item, dict):
                        self._feed_tool_call(item)
        return tokens

    def _feed_tool_call(self, item: dict[str, Any]) -> None:
        this_id = _str_or_none(item.get("id"))
        if (
            self._in_tool_call
            and self._tc_name is not None
            and self._tc_id is not None
            and this_id is not None
            and self._tc_id != this_id
        ):
            self._flush()

        if this_id is not None:
            self._tc_id = this_id
            self._in_tool_call = True
        function = item.get("function")
        if isinstance(function, dict):
            name = _str_or_none(function.get("name"))
            if name is not None:
                self._tc_name = name
            args = _str_or_none(function.get("arguments"))
            if args is not None:
                self._tc_args += args

    def _flush(self) -> None:
        name, call_id = self._tc_name, self._tc_id
        if name and call_id:
            self.tool_calls.append(
                ToolCall(id=call_id, function=ToolFunction(name=name, arguments=self._tc_args.strip()))
            )
        self._tc_args = ""
        self._tc_name = None
        self._tc_id = None
        self._in_tool_call = False

    def finish(self) -> list[ToolCall]:
        """Complete any pending tool call and return all tool calls collected."""
        if self._in_tool_call and self._tc_name is not None and self._tc_id is not None:
            self._flush()
        return list(self.tool_calls)