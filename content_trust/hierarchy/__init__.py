"""Hierarchical source listings (publication -> article -> excerpt).

build_tree turns flat parent-pointer rows into a rooted, name-sorted forest.
"""

from content_trust.hierarchy.tree import (
    DuplicateNodeError,
    TreeCycleError,
    TreeValidationError,
    build_tree,
    find_path,
    flatten_tree,
    iter_tree,
)

__all__ = [
    "build_tree",
    "flatten_tree",
    "find_path",
    "iter_tree",
    "TreeValidationError",
    "DuplicateNodeError",
    "TreeCycleError",
]
