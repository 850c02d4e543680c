"""
Anchor Selector Builder - a query resolving to exactly one node

Builds a chain from the node up to the scoping root:
1. ID (stops ascending, ids are assumed page-unique)
2. Structural (tag + nth-of-type when same-tag siblings exist)
3. Up to two classes for extra specificity
"""

import logging
import re
from typing import Callable, Optional

from .paths import ReservedClassPredicate, element_classes, no_reserved_classes

logger = logging.getLogger(__name__)

IdentifierLookup = Callable[..., Optional[str]]

# Ids that look generated by a framework or build step
DYNAMIC_ID_PATTERN = re.compile(r"^\d|_\d{4,}|[a-f0-9]{8,}")


def css_escape(ident: str) -> str:
    """Escape a string for use as a CSS identifier (CSSOM ``CSS.escape``)."""
    out = []
    for i, ch in enumerate(ident):
        code = ord(ch)
        if code == 0:
            out.append("�")
        elif 0x01 <= code <= 0x1f or code == 0x7f:
            out.append(f"\\{code:x} ")
        elif i == 0 and ch.isdigit() and ch.isascii():
            out.append(f"\\{code:x} ")
        elif i == 1 and ch.isdigit() and ch.isascii() and ident[0] == "-":
            out.append(f"\\{code:x} ")
        elif i == 0 and ch == "-" and len(ident) == 1:
            out.append("\\-")
        elif code >= 0x80 or ch in "-_" or (ch.isascii() and ch.isalnum()):
            out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)


def plain_identifier(tree, node) -> Optional[str]:
    """The node's id attribute, if non-empty."""
    value = (tree.attribute(node, "id") or "").strip()
    return value or None


def stable_identifier(tree, node) -> Optional[str]:
    """The node's id attribute unless it looks dynamically generated."""
    value = plain_identifier(tree, node)
    if value and DYNAMIC_ID_PATTERN.search(value):
        return None
    return value


def anchor_selector(
    tree,
    node,
    is_reserved: ReservedClassPredicate = no_reserved_classes,
    identifier_of: IdentifierLookup = stable_identifier,
    max_classes: int = 2,
) -> str:
    """
    Build a selector that resolves to ``node`` alone.

    Args:
        tree: DocumentTree the node belongs to
        node: Node to anchor (usually the common ancestor)
        is_reserved: Class names never used in the selector
        identifier_of: Lookup returning a usable unique id, or None
        max_classes: Classes appended per level

    Returns:
        Child-combinator chain, rooted at ``body`` unless an id was found
    """
    if node is tree.root:
        return tree.tag(node)
    if node is tree.document_element:
        return "html"

    parts = []
    current = node
    anchored_by_id = False
    while current is not None and current is not tree.root and current is not tree.document_element:
        identifier = identifier_of(tree, current)
        if identifier:
            parts.append("#" + css_escape(identifier))
            anchored_by_id = True
            break

        tag = tree.tag(current)
        fragment = tag
        parent = tree.parent(current)
        if parent is not None:
            same_tag = [s for s in tree.children(parent) if tree.tag(s) == tag]
            if len(same_tag) > 1:
                position = next(i for i, s in enumerate(same_tag) if s is current) + 1
                fragment += f":nth-of-type({position})"

        classes = sorted(element_classes(tree, current, is_reserved))[:max_classes]
        fragment += "".join("." + css_escape(name) for name in classes)

        parts.append(fragment)
        current = parent

    if not anchored_by_id:
        parts.append(tree.tag(tree.root))

    selector = " > ".join(reversed(parts))
    logger.debug(f"Anchor selector: {selector}")
    return selector
