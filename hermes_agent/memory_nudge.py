"""Periodic reminders asking the agent to save what it has learned to memory."""

from __future__ import annotations

from dataclasses import dataclass, field

_DEFAULT_TEMPLATE = (
    "Before continuing, consider saving any important facts, patterns, or user preferences "
    "you've learned to your memory. Use the memory tool with action 'add' to persist knowledge "
    "that would be useful in future sessions."
)


@dataclass
class NudgeConfig:
    """How often, and how many times per session, a memory nudge is given."""

    interval_turns: int = 8
    max_nudge_per_session: int = 5
    template: str = _DEFAULT_TEMPLATE


@dataclass
class MemoryNudge:
    """Tracks turns and memory activity to decide when a nudge is due."""

    config: NudgeConfig = field(default_factory=NudgeConfig)
    nudge_count: int = 0
    turns_since_nudge: int = 0
    turns_since_memory: int = 0

    def should_nudge(self, turn_count: int) -> bool:
        if self.nudge_count >= self.config.max_nudge_per_session:
            return False
        if self.turns_since_memory < 2:
            return False
        return turn_count > 0 and turn_count % self.config.interval_turns == 0

    def get_nudge_message(self) -> str:
        return self.config.template

    def record_nudge(self) -> None:
        self.nudge_count += 1
        self.turns_since_nudge = 0

    def record_turn(self) -> None:
        self.turns_since_nudge += 1
        self.turns_since_memory += 1

    def record_memory_activity(self) -> None:
        self.turns_since_memory = 0

    def reset(self) -> None:
        self.nudge_count = 0
        self.turns_since_nudge = 0
        self.turns_since_memory = 0


class NudgeInjector:
    """Produces a nudge message on the turns where one is due."""

    def __init__(self, nudge: MemoryNudge | None = None) -> None:
        self.nudge = nudge if nudge is not None else MemoryNudge()

    def check_and_generate_nudge(self, turn_count: int, has_recent_memory_activity: bool) -> str | None:
        self.nudge.record_turn()
        if has_recent_memory_activity:
            self.nudge.record_memory_activity()
        if not self.nudge.should_nudge(turn_count):
            return None
        message = self.nudge.get_nudge_message()
        self.nudge.record_nudge()
        return message

    def notify_memory_activity(self) -> None:
        self.nudge.record_memory_activity()

    def reset(self) -> None:
        self.nudge.reset()