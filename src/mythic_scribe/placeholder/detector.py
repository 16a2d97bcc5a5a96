"""
Detector for placeholder expressions in script text.
"""

import re
from dataclasses import dataclass


@dataclass
class PlaceholderExpression:
    """A detected <a.b.c> expression."""

    path: str
    line: int
    start: int  # offset of "<"
    end: int  # offset after ">", or the cursor for an open expression
    complete: bool

    @property
    def segments(self) -> list[str]:
        return self.path.split(".") if self.path else []

    def __repr__(self) -> str:
        state = "complete" if self.complete else "open"
        return f"PlaceholderExpression(<{self.path}>, line={self.line}, {state})"


class PlaceholderDetector:
    """Detects placeholder expressions in script lines."""

    COMPLETE = re.compile(r"<([^<>\s]+)>")
    OPEN = re.compile(r"<([^<>\s]*)$")

    @classmethod
    def detect(cls, content: str) -> list[PlaceholderExpression]:
        """Detect all complete placeholder expressions in content."""
        expressions = []
        for line_num, line in enumerate(content.split("\n")):
            for match in cls.COMPLETE.finditer(line):
                expressions.append(
                    PlaceholderExpression(
                        path=match.group(1),
                        line=line_num,
                        start=match.start(),
                        end=match.end(),
                        complete=True,
                    )
                )
        return expressions

    @classmethod
    def expression_at(
        cls, line_text: str, character: int, line: int = 0
    ) -> PlaceholderExpression | None:
        """Return the expression being typed right before the cursor, if any."""
        before = line_text[:character]
        match = cls.OPEN.search(before)
        if not match:
            return None
        return PlaceholderExpression(
            path=match.group(1),
            line=line,
            start=match.start(),
            end=character,
            complete=False,
        )

    @classmethod
    def has_placeholders(cls, content: str) -> bool:
        return bool(cls.detect(content))

    @classmethod
    def extract_paths(cls, content: str) -> list[str]:
        """Extract just the dotted paths of all complete expressions."""
        return [expression.path for expression in cls.detect(content)]
