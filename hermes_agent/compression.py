"""Context compression: shrink long conversations while keeping the head and tail."""

from __future__ import annotations

import dataclasses
import hashlib
from collections.abc import Sequence

from hermes_agent.messages import Message

ANTI_THRASHING_THRESHOLD = 0.10
ANTI_THRASHING_CONSECUTIVE_LIMIT = 2
_COLLAPSE_MIN_BYTES = 300


def estimate_tokens(text: str) -> int:
    """Rough token estimate from word count plus multi-byte characters."""
    words = len(text.split())
    wide = sum(1 for ch in text if ord(ch) > 0x7F)
    return (words * 4 + wide // 2) // 4


def message_tokens(message: Message) -> int:
    """Estimated tokens of a message's content and its tool calls."""
    total = estimate_tokens(message.content) if message.content is not None else 0
    for call in message.tool_calls or ():
        total += estimate_tokens(call.function.name)
        total += estimate_tokens(call.function.arguments)
    return total


def _total_tokens(messages: Sequence[Message]) -> int:
    return sum(message_tokens(m) for m in messages)


def _lines(content: str) -> list[str]:
    parts = content.split("\n")
    if parts[-1] == "":
        parts.pop()
    return [p[:-1] if p.endswith("\r") else p for p in parts]


def tool_summary(tool_name: str | None, content: str) -> str:
    """A one-line summary standing in for a long tool output."""
    lines = _lines(content)
    errors = min(content.count("Error"), 99)
    size = len(content.encode("utf-8"))

    if tool_name in ("terminal", "process_spawn"):
        if errors > 0:
            summary = f"[{errors} errors, {len(lines)} lines, {size} bytes]"
        elif len(lines) <= 3:
            first = lines[0] if lines else "no output"
            summary = f"{first}: {len(lines)} lines"
        else:
            summary = f"{len(lines)} lines, {size} bytes"
    elif tool_name in ("file_read", "execute_file_write"):
        summary = f"{content.count('---') + 1} file(s), {size} bytes"
    elif tool_name == "list_directory":
        summary = f"{max(len(lines) - 1, 0)} item(s)"
    elif tool_name == "search_files":
        summary = f"{content.count('-->')} match(es)"
    elif tool_name in ("web_search", "web_extract"):
        summary = f"{content.count('URL:') + 1} result(s), {size} bytes"
    elif errors > 0:
        summary = f"[{errors} error(s)]"
    elif len(lines) <= 2:
        summary = content[:80]
    else:
        summary = f"{len(lines)} lines, {size} bytes"

    return f"[{tool_name or 'tool'}] {summary}"


class ContextCompressor:
    """Deduplicates, collapses and thins out the middle of a conversation."""

    def __init__(
        self,
        threshold: float = 0.6,
        target_ratio: float = 0.3,
        protect_head: int = 3,
        protect_tail: int = 20,
    ) -> None:
        self.threshold = threshold
        self.target_ratio = target_ratio
        self.protect_head = protect_head
        self.protect_tail = protect_tail
        self._consecutive_low_savings = 0

    def should_compress(self, messages: Sequence[Message], context_limit: int) -> bool:
        """True when the conversation exceeds the threshold share of the limit."""
        if self._consecutive_low_savings >= ANTI_THRASHING_CONSECUTIVE_LIMIT:
            return False
        return _total_tokens(messages) > int(context_limit * self.threshold)

    def compress(self, messages: Sequence[Message]) -> tuple[list[Message], float, int]:
        """Return the compressed messages, the share of tokens saved and the tokens saved."""
        total_before = _total_tokens(messages)
        if len(messages) <= self.protect_head + self.protect_tail:
            return list(messages), 0.0, 0

        result = self._prune_middle(self._collapse_tool_outputs(self._deduplicate(messages)))

        saved = max(total_before - _total_tokens(result), 0)
        ratio = saved / total_before if total_before > 0 else 0.0

        if ratio < ANTI_THRASHING_THRESHOLD:
            self._consecutive_low_savings += 1
        else:
            self._consecutive_low_savings = 0
        return result, ratio, saved

    @staticmethod
    def _deduplicate(messages: Sequence[Message]) -> list[Message]:
        out: list[Message] = []
        last_hash: bytes | None = None
        for msg in messages:
            if msg.role == "tool":
                if msg.content is not None:
                    digest = hashlib.md5(msg.content.encode("utf-8")).digest()
                    if digest == last_hash:
                        continue
                    last_hash = digest
            else:
                last_hash = None
            out.append(msg)
        return out

    @staticmethod
    def _collapse_tool_outputs(messages: Sequence[Message]) -> list[Message]:
        out: list[Message] = []
        for msg in messages:
            if (
                msg.role == "tool"
                and msg.content is not None
                and len(msg.content.encode("utf-8")) > _COLLAPSE_MIN_BYTES
            ):
                msg = dataclasses.replace(msg, content=tool_summary(msg.name, msg.content))
            out.append(msg)
        return out

    def _prune_middle(self, messages: Sequence[Message]) -> list[Message]:
        target_tokens = int(_total_tokens(messages) * self.target_ratio)
        result = list(messages[: self.protect_head])

        last_user_idx = next(
            (i for i in range(len(messages) - 1, -1, -1) if messages[i].role == "user"),
            None,
        )
        tail_floor = max(len(messages) - self.protect_tail, 0)
        tail_start = tail_floor if last_user_idx is None else max(last_user_idx, tail_floor)

        if tail_start > self.protect_head:
            middle = messages[self.protect_head : tail_start]
            middle_target = int(target_tokens * 0.5)
            step = 3 if _total_tokens(middle) > middle_target * 3 else 2
            result.extend(middle[::step])

        result.extend(messages[tail_start:])
        return result