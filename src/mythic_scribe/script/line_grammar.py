"""
Line grammar scanner for mechanic lines.

A mechanic line reads, in order:

  - mechanic{attr=value;...} @targeter{...} ~onTrigger ?condition ?!other{...}

Lines are scanned, never parsed: the text is usually incomplete because the
user is typing it, so every helper here degrades to an empty result instead
of raising.
"""

import re
from typing import TypedDict

from mythic_scribe.document import Position, TextDocument


class MechanicLineParts(TypedDict, total=False):
    """Tokens of one mechanic line. A missing key means "not on this line"."""

    mechanic: str
    targeter: str
    trigger: str
    conditions: str


# One token of a mechanic line. Braced and bracketed groups may hold spaces;
# a group still open at the end of the line runs to the end.
_TOKEN_PART = r"(?:[^\s{\[]|\{[^}]*\}?|\[[^\]]*\]?)"

MECHANIC_LINE = re.compile(
    rf"^-\s+({_TOKEN_PART}+)(\s+@{_TOKEN_PART}*)?(\s+~{_TOKEN_PART}*)?"
    rf"((?:\s+\?~?!?{_TOKEN_PART}*)*)"
)

# Trailing identifier before an unbalanced opener, with its optional sigil:
# @targeter, ~trigger, ?cond, ?!cond, ?~cond, ?~!cond
OBJECT_TOKEN = re.compile(r"(?:^|(?<=[ =]))(?:[@~]|\?~?!?)?[\w:\-]+$")

ATTRIBUTE_BEFORE_VALUE = re.compile(r"[{;]\s*\b(\w+)\b\s*=[^;]*$")

OPENERS = "{["
CLOSERS = "}]"


class PreviousSymbol:
    """Patterns for previous_symbol."""

    NONSPACE = re.compile(r"([^\w\s:])[\w\s:]*$")
    DEFAULT = re.compile(r"([^\w:])[\w:]*$")
    BRACKET = re.compile(r"([()\[\]{}])[^()\[\]{}]*$")


def parse_mechanic_line(line_text: str) -> MechanicLineParts:
    """Split a mechanic line into its mechanic, targeter, trigger and conditions.

    Returns an empty mapping when the line is not a dash-prefixed mechanic line.
    """
    parts: MechanicLineParts = {}
    match = MECHANIC_LINE.match(line_text.strip())
    if not match:
        return parts

    mechanic, targeter, trigger, conditions = match.groups()
    parts["mechanic"] = mechanic.strip()
    if targeter:
        parts["targeter"] = targeter.strip()
    if trigger:
        parts["trigger"] = trigger.strip()
    if conditions and conditions.strip():
        parts["conditions"] = conditions.strip()
    return parts


def find_unbalanced_opener(text: str) -> int | None:
    """Index of the innermost delimiter still open at the end of text.

    Walks backwards keeping a balance over {} and []: closers increment it,
    openers decrement it, and the first opener that drives it negative is the
    scope the end of the text sits in. Closed inner scopes net to zero.
    """
    balance = 0
    for i in range(len(text) - 1, -1, -1):
        char = text[i]
        if char in CLOSERS:
            balance += 1
        elif char in OPENERS:
            balance -= 1
            if balance < 0:
                return i
    return None


def find_enclosing_object_token(text_before_cursor: str) -> str | None:
    """Return the object (with sigil) whose delimited scope encloses the cursor.

    "- damage{amount=1;" -> "damage", "@Ring{radius=2;p={a=1};" -> "@Ring".
    None when the cursor is not inside any delimited scope, or when no
    identifier precedes the opener.
    """
    index = find_unbalanced_opener(text_before_cursor)
    if index is None:
        return None
    match = OBJECT_TOKEN.search(text_before_cursor[:index].strip())
    if match:
        return match.group(0)
    return None


def find_attribute_linked_to_value(text_before_cursor: str) -> str | None:
    """Return the attribute whose value is being typed ("{amount=1" -> "amount")."""
    match = ATTRIBUTE_BEFORE_VALUE.search(text_before_cursor)
    if match:
        return match.group(1)
    return None


def strip_sigil(token: str) -> str:
    """Remove the leading @ ~ ? ! sigils from an object token."""
    return token.lstrip("@~?!")


def previous_symbol(
    document: TextDocument,
    position: Position,
    pattern: re.Pattern[str] = PreviousSymbol.DEFAULT,
    depth: int = 0,
) -> str:
    """Return the nearest special symbol before the cursor.

    With depth > 0 the search continues onto previous lines; blank lines do not
    consume depth.
    """
    line = document.line_at(position.line)
    match = pattern.search(line[: position.character])
    if match:
        return match.group(1)
    if depth > 0 and position.line > 0:
        if line.strip() == "":
            return previous_symbol(document, position.translate(-1), pattern, depth)
        previous_line = position.line - 1
        end_of_previous = Position(previous_line, len(document.line_at(previous_line)))
        return previous_symbol(document, end_of_previous, pattern, depth - 1)
    return ""


def is_after_comment(text_before_cursor: str) -> bool:
    """Check whether a # comment starts before the cursor on this line."""
    return re.search(r"\s#", text_before_cursor) is not None
