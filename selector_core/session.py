"""
Selection Session - the engine's surface for a selection overlay

Holds up to two picked nodes, the pattern inferred from them and the
authoritative match set. Hand-edited selectors validated as ``valid``
replace the generated pattern's matches and query.

Usage:
    tree = HtmlTree.from_html(html)
    session = SelectionSession(tree, scheduler=LogicalClock())
    session.select_node(tree.find("li:nth-child(1)"))
    session.select_node(tree.find("li:nth-child(3)"))
    print(session.final_query, len(session.matches))
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import Config, config as default_config
from .engine.anchor import IdentifierLookup, plain_identifier, stable_identifier
from .engine.ancestor import common_ancestor
from .engine.generalizer import Pattern, generalize
from .engine.matcher import MatchSet, resolve
from .engine.paths import (
    ReservedClassPredicate,
    ancestor_path,
    element_classes,
    relative_path,
    reserved_class_predicate,
)
from .engine.timer import AsyncioScheduler, Scheduler
from .engine.validator import IncrementalValidator, ValidationResult, validate
from .exceptions import QuerySyntaxError, SelectionIncompleteError

logger = logging.getLogger(__name__)

MAX_SELECTIONS = 2


@dataclass
class Selection:
    """A picked node and what we know about it"""
    node: Any = field(repr=False)
    tag: str
    classes: List[str] = field(default_factory=list)
    attributes: Dict[str, str] = field(default_factory=dict)
    path: List[Any] = field(default_factory=list, repr=False)
    depth: int = 0


@dataclass
class SessionState:
    """Summary handed to whatever UI shows the session"""
    is_active: bool
    selections: int
    matching_elements: int
    final_query: str
    validation_pending: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_active": self.is_active,
            "selections": self.selections,
            "matching_elements": self.matching_elements,
            "final_query": self.final_query,
            "validation_pending": self.validation_pending,
        }


class SelectionSession:
    """
    Two-example selector inference over one DocumentTree.

    Args:
        tree: DocumentTree the nodes belong to
        cfg: Engine configuration (module-level config by default)
        scheduler: Drives the edit debounce; defaults to the running asyncio
            loop, so build the session inside a coroutine or pass one
        is_reserved: Class names to ignore; defaults to the configured prefix
        identifier_of: Id lookup for anchors; defaults per ``skip_dynamic_ids``
        on_validation: Called with each delivered ValidationResult
        active: Whether the session accepts selections right away

    Raises:
        SelectorCoreError: no scheduler given and no event loop running
    """

    def __init__(
        self,
        tree,
        cfg: Optional[Config] = None,
        scheduler: Optional[Scheduler] = None,
        is_reserved: Optional[ReservedClassPredicate] = None,
        identifier_of: Optional[IdentifierLookup] = None,
        on_validation: Optional[Callable[[ValidationResult], None]] = None,
        active: bool = True,
    ):
        self.tree = tree
        self.config = cfg or default_config
        self.is_reserved = is_reserved or reserved_class_predicate(self.config.reserved_class_prefix)
        if identifier_of is None:
            identifier_of = stable_identifier if self.config.skip_dynamic_ids else plain_identifier
        self.identifier_of = identifier_of
        self.on_validation = on_validation
        self.validator = IncrementalValidator(
            tree,
            scheduler or AsyncioScheduler.running(),
            window=self.config.validation_debounce_seconds,
            on_result=self._apply_validation,
        )

        self.is_active = active
        self.selections: List[Selection] = []
        self.ancestor: Any = None
        self.pattern: Optional[Pattern] = None
        self.matches = MatchSet()
        self.final_query = ""

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Begin a fresh selection round."""
        self.reset()
        self.is_active = True
        logger.info("Selection started")

    def cancel(self) -> None:
        """Stop accepting selections; computed results stay readable."""
        self.validator.cancel()
        self.is_active = False
        logger.info("Selection cancelled")

    def reset(self) -> None:
        """Clear selections, pattern and matches. Safe to call repeatedly."""
        self.validator.cancel()
        self.selections = []
        self.ancestor = None
        self.pattern = None
        self.matches = MatchSet()
        self.final_query = ""

    def state(self) -> SessionState:
        return SessionState(
            is_active=self.is_active,
            selections=len(self.selections),
            matching_elements=len(self.matches),
            final_query=self.final_query,
            validation_pending=self.validator.pending,
        )

    # =========================================================================
    # Selection + inference
    # =========================================================================

    def select_node(self, node) -> bool:
        """
        Record ``node`` as the next example.

        Returns False when ignored: session inactive or both slots filled.
        The second selection triggers pattern inference.
        """
        if not self.is_active:
            return False
        if len(self.selections) >= MAX_SELECTIONS:
            logger.debug("Both selections filled, ignoring node until reset")
            return False

        self.selections.append(self._describe(node))
        if len(self.selections) == MAX_SELECTIONS:
            self.compute_pattern()
        return True

    def compute_pattern(self) -> Tuple[Pattern, MatchSet]:
        """
        Infer the pattern from both selections and resolve its matches.

        Raises:
            SelectionIncompleteError: fewer than two selections
        """
        if len(self.selections) < MAX_SELECTIONS:
            raise SelectionIncompleteError(
                f"Need {MAX_SELECTIONS} selections, have {len(self.selections)}"
            )
        tree = self.tree
        node_a, node_b = self.selections[0].node, self.selections[1].node

        ancestor = common_ancestor(tree, node_a, node_b)
        path_a = relative_path(tree, node_a, ancestor, self.is_reserved)
        path_b = relative_path(tree, node_b, ancestor, self.is_reserved)

        pattern = generalize(
            tree, path_a, path_b, ancestor,
            is_reserved=self.is_reserved,
            identifier_of=self.identifier_of,
            max_classes=self.config.anchor_max_classes,
        )
        matches = resolve(tree, pattern, ancestor, min(len(path_a), len(path_b)), [node_a, node_b])

        self.ancestor = ancestor
        self.pattern = pattern
        self.matches = matches
        self.final_query = pattern.full_query
        logger.info(f"Inferred {pattern.full_query!r} matching {len(matches)} elements")
        return pattern, matches

    # =========================================================================
    # Editing
    # =========================================================================

    def validate(self, text: str) -> ValidationResult:
        """Validate ``text`` now, superseding any pending debounced edit."""
        self.validator.cancel()
        result = validate(self.tree, text)
        self._apply_validation(result)
        return result

    def submit_edit(self, text: str) -> ValidationResult:
        """Debounced validation; returns the interim pending status."""
        return self.validator.submit(text)

    def preview(self, text: str) -> Optional[MatchSet]:
        """
        Replace the match set with whatever ``text`` selects, even nothing.

        Invalid or empty text leaves the current matches untouched.
        """
        selector = (text or "").strip()
        if not selector:
            return None
        try:
            nodes = self.tree.query_all(selector)
        except QuerySyntaxError as e:
            logger.info(f"Invalid selector for preview: {e.message}")
            return None
        self.matches = MatchSet(nodes=nodes)
        return self.matches

    def _apply_validation(self, result: ValidationResult) -> None:
        if result.is_valid:
            self.matches = MatchSet(nodes=list(result.matches))
            self.final_query = result.selector
        if self.on_validation is not None:
            self.on_validation(result)

    def _describe(self, node) -> Selection:
        tree = self.tree
        path = ancestor_path(tree, node)
        attributes = {}
        for name in self.config.relevant_attributes:
            value = tree.attribute(node, name)
            if value is not None:
                attributes[name] = value
        return Selection(
            node=node,
            tag=tree.tag(node),
            classes=element_classes(tree, node, self.is_reserved),
            attributes=attributes,
            path=path,
            depth=len(path),
        )
