"""
Pattern Generalizer - two example paths, one reusable query

Per level:
- same tag: keep the tag plus the classes both examples share
- different tags: wildcard, and no class information at that level
"""

import logging
from dataclasses import dataclass

from .anchor import IdentifierLookup, anchor_selector, stable_identifier
from .paths import ReservedClassPredicate, StructuralPath, no_reserved_classes

logger = logging.getLogger(__name__)

CHILD = " > "
WILDCARD = "*"


@dataclass(frozen=True)
class Pattern:
    """Generalized query: the anchor scope and the pattern below it."""
    scope_selector: str
    relative_query: str
    full_query: str


def generalize_paths(path_a: StructuralPath, path_b: StructuralPath) -> str:
    """
    Merge two relative paths into a child-combinator query.

    Only the first ``min(len(a), len(b))`` levels are compared; extra depth
    in the longer path is dropped. Class names are emitted as-is, so a name
    that is not a valid CSS identifier yields an unparseable query.
    """
    parts = []
    for seg_a, seg_b in zip(path_a, path_b):
        if seg_a.tag != seg_b.tag:
            parts.append(WILDCARD)
            continue
        shared = sorted(seg_a.classes & seg_b.classes)
        parts.append(seg_a.tag + "".join("." + name for name in shared))
    return CHILD.join(parts) if parts else WILDCARD


def generalize(
    tree,
    path_a: StructuralPath,
    path_b: StructuralPath,
    anchor,
    is_reserved: ReservedClassPredicate = no_reserved_classes,
    identifier_of: IdentifierLookup = stable_identifier,
    max_classes: int = 2,
) -> Pattern:
    """Build the full Pattern for two paths taken below ``anchor``."""
    relative = generalize_paths(path_a, path_b)
    scope = anchor_selector(tree, anchor, is_reserved, identifier_of, max_classes)
    pattern = Pattern(
        scope_selector=scope,
        relative_query=relative,
        full_query=scope + CHILD + relative,
    )
    logger.debug(f"Generalized pattern: {pattern.full_query}")
    return pattern
