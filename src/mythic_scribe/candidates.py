"""Completion candidates produced by the resolvers.

Rendering is up to the caller. Insert texts use the editor snippet syntax
($0, ${1|a,b|}) because that is what the schema handlers produce.
"""

from dataclasses import dataclass
from enum import Enum


class CandidateKind(Enum):
    """What a candidate represents, for the caller's icon choice."""

    FIELD = "field"
    FILE = "file"
    PROPERTY = "property"
    ENUM = "enum"
    ENUM_MEMBER = "enum_member"
    OPERATOR = "operator"
    SNIPPET = "snippet"


@dataclass
class Candidate:
    """A single completion candidate."""

    label: str
    insert_text: str
    kind: CandidateKind = CandidateKind.ENUM_MEMBER
    detail: str | None = None
    sort_text: str | None = None
    retrigger: bool = False  # caller should re-open completion after inserting

    def __repr__(self) -> str:
        return f"Candidate({self.label!r} -> {self.insert_text!r})"
