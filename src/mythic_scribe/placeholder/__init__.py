"""
Placeholder trie for <a.b.c> expressions.

Builds a prefix tree over known placeholder paths, cross-links meta keywords
into it, and completes the expression being typed.
"""

from mythic_scribe.placeholder.detector import PlaceholderDetector, PlaceholderExpression
from mythic_scribe.placeholder.meta import (
    MetaChain,
    build_meta_chains,
    build_placeholder_trie,
    link_meta_keywords,
)
from mythic_scribe.placeholder.segments import (
    PlaceholderSegment,
    ScriptedSegment,
    SegmentRegistry,
    default_segment_registry,
)
from mythic_scribe.placeholder.trie import (
    PlaceholderNode,
    generate_node_completions,
    graft,
    insert_path,
    lookup,
    merge_subtree,
    path_keys,
    placeholder_completions,
)

__all__ = [
    # Segments
    "PlaceholderSegment",
    "ScriptedSegment",
    "SegmentRegistry",
    "default_segment_registry",
    # Trie
    "PlaceholderNode",
    "generate_node_completions",
    "graft",
    "insert_path",
    "lookup",
    "merge_subtree",
    "path_keys",
    "placeholder_completions",
    # Meta keywords
    "MetaChain",
    "build_meta_chains",
    "build_placeholder_trie",
    "link_meta_keywords",
    # Detection
    "PlaceholderDetector",
    "PlaceholderExpression",
]
