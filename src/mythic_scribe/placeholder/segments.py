"""Placeholder path segments.

A literal segment matches its own identifier, case-insensitively. A scripted
segment is registered under a bracketed name such as {integer} and matches
arbitrary text through a predicate.
"""

import re
from collections.abc import Callable

from loguru import logger

from mythic_scribe.schema.utils import generate_numbers_in_range

INTEGER = re.compile(r"[+-]?\d+")
FLOAT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
MAP = re.compile(r"\w+=[^;=]*(?:;\w+=[^;=]*)*;?")


class PlaceholderSegment:
    """A literal path segment."""

    scripted = False

    def __init__(self, identifier: str):
        self.identifier = identifier

    @property
    def key(self) -> str:
        """Identity of the segment among its siblings."""
        return self.identifier.lower()

    def candidates(self) -> list[str]:
        return [self.identifier]

    def owns(self, value: str) -> bool:
        return value.lower() == self.key

    def __str__(self) -> str:
        return self.identifier

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r})"


class ScriptedSegment(PlaceholderSegment):
    """A segment whose values are computed rather than listed."""

    scripted = True

    def __init__(
        self,
        identifier: str,
        candidates: Callable[[], list[str]],
        owns: Callable[[str], bool] | None = None,
    ):
        super().__init__(identifier)
        self._candidates = candidates
        self._owns = owns

    def candidates(self) -> list[str]:
        return self._candidates()

    def owns(self, value: str) -> bool:
        if self._owns is not None:
            return self._owns(value)
        lowered = value.lower()
        return any(candidate.lower() == lowered for candidate in self.candidates())


class SegmentRegistry:
    """Scripted segments by bracketed identifier (case-insensitive)."""

    def __init__(self) -> None:
        self._segments: dict[str, ScriptedSegment] = {}

    def register(self, segment: ScriptedSegment) -> ScriptedSegment:
        self._segments[segment.key] = segment
        return segment

    def get(self, identifier: str) -> ScriptedSegment | None:
        return self._segments.get(identifier.lower())

    def segment_for(self, raw: str) -> PlaceholderSegment:
        """Scripted segment registered under raw, or a literal segment."""
        return self.get(raw) or PlaceholderSegment(raw)

    def identifiers(self) -> list[str]:
        return [segment.identifier for segment in self._segments.values()]

    def __contains__(self, identifier: str) -> bool:
        return identifier.lower() in self._segments


def _is_integer(value: str) -> bool:
    return INTEGER.fullmatch(value) is not None


def _is_float(value: str) -> bool:
    return FLOAT.fullmatch(value) is not None


def _is_map(value: str) -> bool:
    return MAP.fullmatch(value) is not None


def default_segment_registry(
    custom_placeholders: Callable[[], list[str]] | None = None,
) -> SegmentRegistry:
    """Registry with the built-in scripted segments.

    Args:
        custom_placeholders: Names of user-declared placeholders, read on each
            completion request.
    """
    registry = SegmentRegistry()
    registry.register(
        ScriptedSegment("{integer}", lambda: generate_numbers_in_range(0, 10, 1), _is_integer)
    )
    registry.register(
        ScriptedSegment("{float}", lambda: generate_numbers_in_range(0, 10, 0.5, True), _is_float)
    )
    registry.register(ScriptedSegment("{map}", lambda: [], _is_map))
    registry.register(
        ScriptedSegment("{custom_placeholder}", custom_placeholders or (lambda: []))
    )
    logger.debug(f"Registered scripted segments: {', '.join(registry.identifiers())}")
    return registry
