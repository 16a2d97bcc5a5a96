"""
Read-only text snapshot handed to the resolvers.

Editors hand us a document and a cursor; the resolvers only ever need
line-indexed text, so the snapshot is a list of lines plus a few helpers.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based cursor position (line, character offset)."""

    line: int
    character: int

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> "Position":
        return Position(self.line + line_delta, self.character + character_delta)


class TextDocument:
    """An immutable snapshot of a script document."""

    def __init__(self, text: str):
        self.text = text
        self.lines = [line.rstrip("\r") for line in text.split("\n")]

    @classmethod
    def from_lines(cls, lines: list[str]) -> "TextDocument":
        return cls("\n".join(lines))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line_at(self, index: int) -> str:
        """Return the text of a line, or an empty string outside the document."""
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    def clamp(self, position: Position) -> Position:
        """Clamp a position to the document bounds."""
        if not self.lines:
            return Position(0, 0)
        line = min(max(position.line, 0), len(self.lines) - 1)
        character = min(max(position.character, 0), len(self.lines[line]))
        return Position(line, character)

    def get_text(self, start: Position | None = None, end: Position | None = None) -> str:
        """Return the text between two positions (whole document by default)."""
        if start is None and end is None:
            return "\n".join(self.lines)
        start = self.clamp(start or Position(0, 0))
        if end is None:
            end = Position(len(self.lines) - 1, len(self.lines[-1]))
        end = self.clamp(end)
        if end < start:
            return ""
        if start.line == end.line:
            return self.lines[start.line][start.character : end.character]
        parts = [self.lines[start.line][start.character :]]
        parts.extend(self.lines[start.line + 1 : end.line])
        parts.append(self.lines[end.line][: end.character])
        return "\n".join(parts)

    def text_before(self, position: Position) -> str:
        """Text of the cursor line up to the cursor."""
        return self.line_at(position.line)[: max(position.character, 0)]

    def word_range_at(self, position: Position, pattern: re.Pattern[str]) -> tuple[int, int] | None:
        """Find the match of pattern on the cursor line that touches the cursor.

        Returns the (start, end) character offsets, or None when the cursor is
        not on a match.
        """
        line = self.line_at(position.line)
        for match in pattern.finditer(line):
            if match.start() <= position.character <= match.end() and match.end() > match.start():
                return match.start(), match.end()
        return None

    def word_at(self, position: Position, pattern: re.Pattern[str]) -> str | None:
        span = self.word_range_at(position, pattern)
        if span is None:
            return None
        return self.line_at(position.line)[span[0] : span[1]]
