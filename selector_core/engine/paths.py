"""
Path Extractor - where a node sits relative to an ancestor

Pure tree walks, no side effects. Paths are root-to-leaf; index ``i`` in
two paths taken from the same ancestor refers to the same depth.
"""

from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, List, Optional, Tuple

from ..exceptions import StructuralPreconditionError

ReservedClassPredicate = Callable[[str], bool]


def reserved_class_predicate(prefix: str) -> ReservedClassPredicate:
    """Predicate flagging class names owned by the selection overlay."""
    if not prefix:
        return lambda name: False
    return lambda name: name.startswith(prefix)


def no_reserved_classes(name: str) -> bool:
    return False


@dataclass(frozen=True)
class PathSegment:
    """One node's position among its parent's element children."""
    tag: str
    sibling_index: int
    same_tag_index: int
    same_tag_sibling_count: int
    classes: FrozenSet[str] = frozenset()


StructuralPath = Tuple[PathSegment, ...]


def _is_boundary(tree, node) -> bool:
    return node is tree.root or node is tree.document_element


def ancestor_path(tree, node) -> List[Any]:
    """
    Chain of nodes from just below the scoping root down to ``node``.

    Both the scoping root and the document element are excluded; ``node``
    itself is the last entry.
    """
    path = []
    current = node
    while current is not None and not _is_boundary(tree, current):
        path.append(current)
        current = tree.parent(current)
    path.reverse()
    return path


def element_classes(tree, node, is_reserved: ReservedClassPredicate = no_reserved_classes) -> List[str]:
    """Node classes in attribute order, reserved names removed."""
    return [name for name in tree.classes(node) if not is_reserved(name)]


def path_segment(tree, node, parent, is_reserved: ReservedClassPredicate = no_reserved_classes) -> PathSegment:
    siblings = tree.children(parent)
    tag = tree.tag(node)
    same_tag = [s for s in siblings if tree.tag(s) == tag]
    sibling_index = next(i for i, s in enumerate(siblings) if s is node)
    same_tag_index = next(i for i, s in enumerate(same_tag) if s is node)
    return PathSegment(
        tag=tag,
        sibling_index=sibling_index,
        same_tag_index=same_tag_index,
        same_tag_sibling_count=len(same_tag),
        classes=frozenset(element_classes(tree, node, is_reserved)),
    )


def relative_path(
    tree,
    node,
    ancestor,
    is_reserved: ReservedClassPredicate = no_reserved_classes,
    strict: bool = True,
) -> StructuralPath:
    """
    Segments from ``ancestor`` (exclusive) down to ``node`` (inclusive).

    Args:
        tree: DocumentTree the nodes belong to
        node: Target node
        ancestor: Node the path is relative to
        is_reserved: Class names to leave out of segments
        strict: Raise when ``ancestor`` is not above ``node``; otherwise
            return the partial path collected before running out of parents

    Raises:
        StructuralPreconditionError: ``ancestor`` is not an ancestor (strict)
    """
    segments = []
    current = node
    while current is not ancestor:
        parent = tree.parent(current)
        if parent is None:
            if strict:
                raise StructuralPreconditionError(
                    f"<{tree.tag(ancestor)}> is not an ancestor of <{tree.tag(node)}>"
                )
            break
        segments.append(path_segment(tree, current, parent, is_reserved))
        current = parent
    segments.reverse()
    return tuple(segments)


def relative_depth(tree, node, ancestor) -> Optional[int]:
    """Number of levels between ``ancestor`` and ``node``; None if unrelated."""
    depth = 0
    current = node
    while current is not ancestor:
        current = tree.parent(current)
        if current is None:
            return None
        depth += 1
    return depth
