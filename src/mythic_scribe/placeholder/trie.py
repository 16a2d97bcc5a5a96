"""Placeholder trie.

A prefix tree over dotted placeholder paths ("caster.var.{custom_placeholder}").
Children are keyed by lowercased segment identifier. Lookup tries the literal
key first, then asks each scripted child in insertion order whether it owns
the value.

Merging never modifies a node reachable from the source or from an earlier
graft: children missing on the target are attached by reference, and children
present on both sides are replaced by merged copies. A grafted subtree keeps
showing what the source held at graft time, and several parents can share it.
"""

from dataclasses import dataclass, field

from mythic_scribe.candidates import Candidate, CandidateKind
from mythic_scribe.placeholder.segments import PlaceholderSegment, SegmentRegistry

ROOT_SEGMENT = "root"


@dataclass(eq=False)
class PlaceholderNode:
    """One segment of the trie."""

    segment: PlaceholderSegment
    children: dict[str, "PlaceholderNode"] = field(default_factory=dict)
    is_end: bool = False
    description: str | None = None

    @classmethod
    def root(cls) -> "PlaceholderNode":
        return cls(PlaceholderSegment(ROOT_SEGMENT))

    @property
    def key(self) -> str:
        return self.segment.key

    def child(self, value: str) -> "PlaceholderNode | None":
        """Child matching a typed segment value."""
        node = self.children.get(value.lower())
        if node is not None:
            return node
        for candidate in self.children.values():
            if candidate.segment.scripted and candidate.segment.owns(value):
                return candidate
        return None

    def copy(self) -> "PlaceholderNode":
        """Shallow copy: a new children mapping over the same child nodes."""
        return PlaceholderNode(self.segment, dict(self.children), self.is_end, self.description)

    def __repr__(self) -> str:
        marker = "*" if self.is_end else ""
        identifier = self.segment.identifier
        return f"PlaceholderNode({identifier!r}{marker}, children={len(self.children)})"


def _segment(raw: str, segments: SegmentRegistry | None) -> PlaceholderSegment:
    return segments.segment_for(raw) if segments else PlaceholderSegment(raw)


def path_keys(path: str, segments: SegmentRegistry | None = None) -> list[str]:
    """Child keys insert_path uses for path, from the root down."""
    return [_segment(raw, segments).key for raw in path.split(".")]


def insert_path(
    root: PlaceholderNode,
    path: str,
    segments: SegmentRegistry | None = None,
    description: str | None = None,
) -> PlaceholderNode:
    """Insert a dotted path and return its terminal node.

    Existing children are matched by segment identity (their key), never by
    predicate. The terminal is marked is_end.
    """
    node = root
    for raw in path.split("."):
        segment = _segment(raw, segments)
        existing = node.children.get(segment.key)
        if existing is None:
            existing = PlaceholderNode(segment)
            node.children[segment.key] = existing
        node = existing
    node.is_end = True
    if description:
        node.description = description
    return node


def lookup(root: PlaceholderNode, path: str) -> PlaceholderNode | None:
    """Follow a typed dotted path. None as soon as a segment matches nothing."""
    node = root
    for value in path.split("."):
        next_node = node.child(value)
        if next_node is None:
            return None
        node = next_node
    return node


def merge_subtree(target: PlaceholderNode, source: PlaceholderNode) -> None:
    """Graft every child of source onto target.

    Only target's own children mapping changes. A child missing on target is
    attached by reference; a child present on both sides is replaced by a
    merged copy, recursively. Merging a node into itself does nothing.
    """
    if target is source:
        return
    _merge_children(target, source, {})


def _merge_children(
    target: PlaceholderNode,
    source: PlaceholderNode,
    merged: dict[tuple[int, int], PlaceholderNode],
) -> None:
    for key, child in source.children.items():
        existing = target.children.get(key)
        if existing is None:
            target.children[key] = child
        elif existing is not child:
            target.children[key] = _merged_node(existing, child, merged)


def _merged_node(
    existing: PlaceholderNode,
    child: PlaceholderNode,
    merged: dict[tuple[int, int], PlaceholderNode],
) -> PlaceholderNode:
    # registered before its children are filled, so cyclic inputs terminate
    pair = (id(existing), id(child))
    if pair in merged:
        return merged[pair]
    node = existing.copy()
    node.is_end = existing.is_end or child.is_end
    node.description = existing.description or child.description
    merged[pair] = node
    _merge_children(node, child, merged)
    return node


def graft(root: PlaceholderNode, keys: list[str], source: PlaceholderNode) -> PlaceholderNode:
    """Return a copy of root with source merged under the node at keys.

    root and every node below it are left as they are; only the nodes on the
    key path are copied.
    """
    node = root.copy()
    if not keys:
        merge_subtree(node, source)
        return node
    head, rest = keys[0], keys[1:]
    node.children[head] = graft(root.children[head], rest, source)
    return node


def generate_node_completions(node: PlaceholderNode) -> list[Candidate]:
    """Candidates for the segment after node.

    A child with children continues with "." and asks for completion again. A
    childless child closes the placeholder with ">". A child that is both a
    valid end and a prefix offers both.
    """
    candidates: list[Candidate] = []
    for child in node.children.values():
        for value in child.segment.candidates():
            if child.children:
                candidates.append(
                    Candidate(
                        label=value,
                        insert_text=f"{value}.",
                        kind=CandidateKind.FIELD,
                        detail=child.description,
                        retrigger=True,
                    )
                )
            if not child.children or child.is_end:
                candidates.append(
                    Candidate(
                        label=value,
                        insert_text=f"{value}>",
                        kind=CandidateKind.FIELD,
                        detail=child.description,
                    )
                )
    return candidates


def placeholder_completions(root: PlaceholderNode, text_before_cursor: str) -> list[Candidate]:
    """Complete the placeholder being typed at the end of text_before_cursor.

    Right after "<" (or while typing the first segment) the root's children
    are offered. After a "." the text between "<" and the last "." is looked
    up and that node's children are offered.
    """
    start = text_before_cursor.rfind("<")
    if start == -1:
        return []
    expression = text_before_cursor[start + 1 :]
    if ">" in expression:
        return []

    dot = expression.rfind(".")
    if dot == -1:
        return generate_node_completions(root)

    node = lookup(root, expression[:dot])
    if node is None:
        return []
    return generate_node_completions(node)
