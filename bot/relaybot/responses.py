"""Canned replies for bot commands, loaded once from a JSON file."""

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND_REPLY = "Unknown command"


class ResponseTable(Mapping[str, str]):
    """Read-only mapping of lowercase command name to reply text."""

    def __init__(self, replies: Mapping[str, str], default: str = UNKNOWN_COMMAND_REPLY):
        self._replies = {name.lower(): text for name, text in replies.items()}
        self.default = default

    def __getitem__(self, command: str) -> str:
        return self._replies[command.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._replies)

    def __len__(self) -> int:
        return len(self._replies)

    def reply_for(self, command: str) -> str:
        """Return the reply for a command, or the fallback text if unknown."""
        return self._replies.get(command.lower(), self.default)


def _unique_commands(pairs: list[tuple[str, object]]) -> dict[str, object]:
    seen: dict[str, str] = {}
    for name, _ in pairs:
        key = name.lower()
        if key in seen:
            raise ValueError(f"duplicate command {name!r}, already defined as {seen[key]!r}")
        seen[key] = name
    return dict(pairs)


def load_responses(path: Path) -> ResponseTable:
    """Read the response table from a JSON object of strings.

    Raises OSError if the file can't be read and ValueError if it isn't a
    JSON object mapping strings to strings, or if two commands differ only
    in case.
    """
    data = json.loads(
        Path(path).read_text(encoding="utf-8"), object_pairs_hook=_unique_commands
    )

    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    for name, text in data.items():
        if not isinstance(text, str):
            raise ValueError(f"reply for {name!r} is not a string: {text!r}")

    logger.info("Loaded %d command responses from %s", len(data), path)
    return ResponseTable(data)
