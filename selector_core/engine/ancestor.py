"""
Ancestor Resolver - lowest common ancestor of two nodes
"""

import logging

from .paths import ancestor_path

logger = logging.getLogger(__name__)


def common_ancestor(tree, a, b):
    """
    Lowest common ancestor via the longest common prefix of root paths.

    Falls back to the scoping root when the paths share nothing. A node
    paired with itself resolves to its parent, never to the node, so the
    pair still describes a one-level pattern. Only a parentless node falls
    back to the scoping root.
    """
    if a is b:
        parent = tree.parent(a)
        return parent if parent is not None else tree.root

    path_a = ancestor_path(tree, a)
    path_b = ancestor_path(tree, b)

    ancestor = tree.root
    for node_a, node_b in zip(path_a, path_b):
        if node_a is not node_b:
            break
        ancestor = node_a
    return ancestor
