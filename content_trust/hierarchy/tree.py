"""Build a sorted forest from a flat list of sources with parent references.

Two passes over the input:
1. Index every node by id (so a parent may appear after its child)
2. Attach each node to its parent, or to the roots when it has no parent or
   the parent is not in the listing (dangling references become roots)

Every level is then sorted by name with the same comparator.

Inputs that cannot form a forest are rejected instead of silently mangled:
- Duplicate ids raise DuplicateNodeError
- Parent cycles (A -> B -> A, or a node parenting itself) raise TreeCycleError.
  Nodes on a cycle never reach a root, so they are found as the nodes left
  unvisited after walking down from the roots.
"""

from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from loguru import logger

from content_trust.schemas import SourceNode, TreeNode

NodeLike = Union[SourceNode, Mapping[str, Any]]

_log = logger.bind(component="TreeBuilder")


class TreeValidationError(ValueError):
    """Input rows cannot be assembled into a forest."""


class DuplicateNodeError(TreeValidationError):
    """Two input rows share the same id."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Duplicate node id: {node_id!r}")


class TreeCycleError(TreeValidationError):
    """Parent references form a cycle."""

    def __init__(self, node_ids: List[str]):
        self.node_ids = node_ids
        super().__init__(f"Parent cycle detected involving nodes: {', '.join(node_ids)}")


def name_sort_key(node: SourceNode) -> Tuple[str, str, str]:
    """
    Case-insensitive alphabetical order, independent of the process locale.

    The raw name and then the id break ties so ordering stays deterministic
    for names differing only in case, or for identical names.
    """
    return (node.name.casefold(), node.name, node.id)


def _as_node(node: NodeLike) -> SourceNode:
    if isinstance(node, SourceNode):
        return node
    return SourceNode.model_validate(node)


def _sort_forest(roots: List[TreeNode]) -> None:
    # Iterative so deep hierarchies do not hit the recursion limit
    roots.sort(key=name_sort_key)
    stack = list(roots)
    while stack:
        node = stack.pop()
        node.children.sort(key=name_sort_key)
        stack.extend(node.children)


def build_tree(nodes: Iterable[NodeLike]) -> List[TreeNode]:
    """
    Assemble flat source rows into an ordered forest.

    Args:
        nodes: SourceNode models or dicts with id, name and optional
               parent_id / parentId. Extra fields are kept on the output.

    Returns:
        Root TreeNodes sorted by name, children populated and sorted
        recursively

    Raises:
        DuplicateNodeError: If two rows share an id
        TreeCycleError: If parent references form a cycle
    """
    sources = [_as_node(node) for node in nodes]

    # First pass: index
    index: Dict[str, TreeNode] = {}
    for source in sources:
        if source.id in index:
            raise DuplicateNodeError(source.id)
        index[source.id] = TreeNode.from_source(source)

    # Second pass: link
    roots: List[TreeNode] = []
    for source in sources:
        node = index[source.id]
        parent = index.get(source.parent_id) if source.parent_id else None
        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)

    visited = {node.id for node in iter_tree(roots)}
    if len(visited) != len(index):
        orphaned = sorted(node_id for node_id in index if node_id not in visited)
        raise TreeCycleError(orphaned)

    _sort_forest(roots)

    _log.debug(f"Built forest: {len(roots)} roots, {len(index)} nodes")
    return roots


def iter_tree(roots: Iterable[TreeNode]):
    """Yield nodes depth-first in pre-order (parent before its children)."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten_tree(roots: Iterable[TreeNode]) -> List[TreeNode]:
    """Pre-order listing of a forest, as rendered in an expanded tree view."""
    return list(iter_tree(roots))


def find_path(roots: Iterable[TreeNode], node_id: str) -> List[TreeNode]:
    """
    Ancestry of a node, from its root down to the node itself.

    Used for breadcrumbs. Returns an empty list if the node is not in the forest.
    """
    stack: List[Tuple[TreeNode, List[TreeNode]]] = [
        (root, [root]) for root in reversed(list(roots))
    ]
    while stack:
        node, path = stack.pop()
        if node.id == node_id:
            return path
        for child in reversed(node.children):
            stack.append((child, path + [child]))
    return []


__all__ = [
    "TreeValidationError",
    "DuplicateNodeError",
    "TreeCycleError",
    "build_tree",
    "iter_tree",
    "flatten_tree",
    "find_path",
    "name_sort_key",
]
