"""
Match Resolver - run a pattern under its anchor

Executes the relative query scoped to the anchor, keeps only nodes at the
expected depth, and falls back to the two example nodes when the query
cannot be parsed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence

from ..exceptions import QuerySyntaxError
from .generalizer import Pattern
from .paths import relative_depth

logger = logging.getLogger(__name__)


@dataclass
class MatchSet:
    """Matched nodes in document order."""
    nodes: List[Any] = field(default_factory=list)
    used_fallback: bool = False
    error: Optional[str] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.nodes)

    def __contains__(self, node) -> bool:
        return any(n is node for n in self.nodes)


def filter_by_depth(tree, nodes: Sequence[Any], anchor, expected_depth: int) -> List[Any]:
    """Keep nodes sitting exactly ``expected_depth`` levels below ``anchor``."""
    return [
        node for node in nodes
        if relative_depth(tree, node, anchor) == expected_depth
    ]


def resolve(tree, pattern: Pattern, anchor, expected_depth: int, selections: Sequence[Any] = ()) -> MatchSet:
    """
    Execute ``pattern`` below ``anchor``.

    Args:
        tree: DocumentTree to query
        pattern: Generalized pattern
        anchor: Scope node the relative query runs under
        expected_depth: Relative depth every match must have
        selections: The example nodes, returned as-is on fallback

    Returns:
        MatchSet; ``used_fallback`` is set when the query was rejected
    """
    try:
        raw = tree.query_all(pattern.relative_query, scope=anchor)
    except QuerySyntaxError as e:
        logger.warning(f"Invalid selector {pattern.relative_query!r}: {e.message}. Falling back to selections")
        return MatchSet(nodes=list(selections), used_fallback=True, error=e.message)

    nodes = filter_by_depth(tree, raw, anchor, expected_depth)
    logger.debug(
        f"Pattern {pattern.relative_query!r} matched {len(raw)} nodes, "
        f"{len(nodes)} at depth {expected_depth}"
    )
    return MatchSet(nodes=nodes)
