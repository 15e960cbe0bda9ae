"""Slash commands that map to skills stored in the skills directory."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path


def get_skills_dir() -> Path:
    """The skills directory, ~/.hermes/skills."""
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(".")
    return home / ".hermes" / "skills"


@dataclass
class SkillCommand:
    """A command name, its aliases, and the skill file it resolves to."""

    name: str
    skill_name: str
    aliases: list[str] = field(default_factory=list)


class SkillCommandRegistry:
    """Commands discovered from the skill metadata files in a skills directory."""

    def __init__(self, skills_dir: str | os.PathLike[str] | None = None) -> None:
        self.skills_dir = Path(skills_dir) if skills_dir is not None else get_skills_dir()
        self.commands: dict[str, SkillCommand] = {}
        self.reload()

    def resolve(self, name: str) -> str | None:
        """Return the skill text for a command (with or without a leading '/')."""
        cmd = self.commands.get(name[1:] if name.startswith("/") else name)
        if cmd is None:
            return None
        try:
            return (self.skills_dir / f"{cmd.skill_name}.md").read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def list_commands(self) -> str:
        """A JSON listing of the registered commands."""
        commands = [
            {
                "name": f"/{cmd.name}",
                "aliases": [f"/{a}" for a in cmd.aliases],
                "skill": cmd.skill_name,
            }
            for cmd in sorted(self.commands.values(), key=lambda c: c.name)
        ]
        return json.dumps(
            {"count": len(commands), "commands": commands},
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
        )

    def reload(self) -> int:
        """Rescan the skills directory; return how many metadata files were loaded."""
        self.commands.clear()
        if not self.skills_dir.exists():
            try:
                self.skills_dir.mkdir(parents=True, exist_ok=True)
            except OSError:
                pass
            return 0

        try:
            paths = sorted(self.skills_dir.iterdir())
        except OSError:
            return 0

        count = 0
        for path in paths:
            if path.suffix != ".json":
                continue
            stem = path.stem
            try:
                meta = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, ValueError):
                continue
            if not isinstance(meta, dict):
                meta = {}
            declared = meta.get("name")
            command_name = declared if isinstance(declared, str) else stem
            raw_aliases = meta.get("aliases")
            aliases = (
                [a for a in raw_aliases if isinstance(a, str)]
                if isinstance(raw_aliases, list)
                else []
            )
            self.commands[command_name] = SkillCommand(
                name=command_name, skill_name=stem, aliases=aliases
            )
            count += 1
        return count