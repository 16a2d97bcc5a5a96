"""Placeholder trie construction and meta keyword cross-linking.

Meta keywords are chains such as "size" or "contains.{custom_placeholder}"
that may follow a placeholder of a given type. Each keyword declares the type
it applies to (origin) and the type it produces (return); "ALL" is the
universal tag. Linking runs three passes over the keywords, each applied
exactly once and in this order:

  1. keywords with origin ALL are grafted under every other keyword's end
  2. keywords with return ALL get every other keyword grafted under their end
  3. for each ordered pair where A.origin equals B.return, A is grafted under
     B's end

Every pass grafts the chains as they stood when the pass started, so the
iteration order inside a pass does not matter. A graft is a snapshot: a chain
changed by a later pass does not change the copies grafted before.

Placeholders are then linked: every keyword whose origin is ALL or equals a
placeholder's return type is grafted under that placeholder's end.
"""

from dataclasses import dataclass

from loguru import logger

from mythic_scribe.datasets.models import ALL_TYPES, MetaKeywordData, PlaceholderData
from mythic_scribe.placeholder.segments import SegmentRegistry
from mythic_scribe.placeholder.trie import PlaceholderNode, graft, insert_path, path_keys


@dataclass
class MetaChain:
    """A meta keyword inserted into its own small trie."""

    data: MetaKeywordData
    root: PlaceholderNode  # holds the keyword's first segment as its only child
    keys: list[str]  # child keys from root down to the keyword's end

    @property
    def origin_type(self) -> str:
        return self.data.origin_type

    @property
    def return_type(self) -> str:
        return self.data.return_type

    @property
    def terminal(self) -> PlaceholderNode:
        node = self.root
        for key in self.keys:
            node = node.children[key]
        return node

    def attach(self, source: PlaceholderNode) -> None:
        """Merge source's children under this keyword's end."""
        self.root = graft(self.root, self.keys, source)


def build_meta_chains(
    keywords: list[MetaKeywordData], segments: SegmentRegistry | None = None
) -> list[MetaChain]:
    chains = []
    for keyword in keywords:
        root = PlaceholderNode.root()
        insert_path(root, keyword.keyword, segments, keyword.description)
        chains.append(MetaChain(keyword, root, path_keys(keyword.keyword, segments)))
    return chains


def link_meta_keywords(chains: list[MetaChain]) -> None:
    """Cross-link meta keyword chains in place (three single passes)."""
    universal_origin = [c for c in chains if c.origin_type == ALL_TYPES]
    snapshot = [c.root for c in chains]
    for chain, source in zip(chains, snapshot):
        if chain.origin_type != ALL_TYPES:
            continue
        for other in chains:
            if other is not chain:
                other.attach(source)

    universal_return = [c for c in chains if c.return_type == ALL_TYPES]
    snapshot = [c.root for c in chains]
    for chain in universal_return:
        for other, source in zip(chains, snapshot):
            if other is not chain:
                chain.attach(source)

    typed = 0
    snapshot = [c.root for c in chains]
    for chain, source in zip(chains, snapshot):
        if chain.origin_type == ALL_TYPES:
            continue
        for other in chains:
            if other is not chain and chain.origin_type == other.return_type:
                other.attach(source)
                typed += 1

    logger.debug(
        f"Linked {len(chains)} meta keywords: {len(universal_origin)} universal origin, "
        f"{len(universal_return)} universal return, {typed} typed links"
    )


def build_placeholder_trie(
    placeholders: list[PlaceholderData],
    meta_keywords: list[MetaKeywordData] | None = None,
    segments: SegmentRegistry | None = None,
) -> PlaceholderNode:
    """Build a complete trie from placeholder and meta keyword records.

    The returned root is fresh; callers publish it by swapping references.
    """
    root = PlaceholderNode.root()
    for placeholder in placeholders:
        insert_path(root, placeholder.path, segments, placeholder.description)

    chains = build_meta_chains(meta_keywords or [], segments)
    link_meta_keywords(chains)

    for placeholder in placeholders:
        keys = path_keys(placeholder.path, segments)
        for chain in chains:
            if chain.origin_type == ALL_TYPES or chain.origin_type == placeholder.return_type:
                root = graft(root, keys, chain.root)

    logger.debug(
        f"Built placeholder trie with {len(placeholders)} placeholders "
        f"and {len(chains)} meta keywords"
    )
    return root
