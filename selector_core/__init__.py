"""
selector_core package: infer structural CSS selectors from two examples

Usage:
    from selector_core import HtmlTree, SelectionSession, LogicalClock

    tree = HtmlTree.from_html(html)
    session = SelectionSession(tree, scheduler=LogicalClock())
    session.select_node(first)
    session.select_node(second)
    session.final_query
"""
from .config import Config, config
from .exceptions import (
    QuerySyntaxError,
    SelectionIncompleteError,
    SelectorCoreError,
    SnapshotError,
    StructuralPreconditionError,
)
from .engine import (
    LogicalClock,
    MatchSet,
    Pattern,
    ValidationResult,
    ValidationStatus,
)
from .session import Selection, SelectionSession, SessionState
from .tree import DocumentTree, HtmlTree

__all__ = [
    # Core
    "Config",
    "config",
    "SelectionSession",
    "Selection",
    "SessionState",
    # Trees
    "DocumentTree",
    "HtmlTree",
    # Results
    "Pattern",
    "MatchSet",
    "ValidationResult",
    "ValidationStatus",
    "LogicalClock",
    # Errors
    "SelectorCoreError",
    "StructuralPreconditionError",
    "QuerySyntaxError",
    "SelectionIncompleteError",
    "SnapshotError",
]
