"""
Pattern engine - from two example nodes to one structural selector

Pipeline:
1. ancestor - lowest common ancestor of the two examples
2. paths - each example's structural path below it
3. generalizer + anchor - merged relative query and a unique scope
4. matcher - scoped execution, depth filter, fallback

The validator is a separate entry point for hand-edited selectors.
"""

from .paths import (
    PathSegment,
    StructuralPath,
    ancestor_path,
    element_classes,
    relative_depth,
    relative_path,
    reserved_class_predicate,
)
from .ancestor import common_ancestor
from .anchor import anchor_selector, css_escape, plain_identifier, stable_identifier
from .generalizer import Pattern, generalize, generalize_paths
from .matcher import MatchSet, filter_by_depth, resolve
from .timer import AsyncioScheduler, CancelableTimer, LogicalClock, Scheduler
from .validator import (
    IncrementalValidator,
    ValidationResult,
    ValidationStatus,
    validate,
)

__all__ = [
    # Paths
    'PathSegment',
    'StructuralPath',
    'ancestor_path',
    'element_classes',
    'relative_depth',
    'relative_path',
    'reserved_class_predicate',
    # Ancestor + anchor
    'common_ancestor',
    'anchor_selector',
    'css_escape',
    'plain_identifier',
    'stable_identifier',
    # Generalization + matching
    'Pattern',
    'generalize',
    'generalize_paths',
    'MatchSet',
    'filter_by_depth',
    'resolve',
    # Validation
    'AsyncioScheduler',
    'CancelableTimer',
    'LogicalClock',
    'Scheduler',
    'IncrementalValidator',
    'ValidationResult',
    'ValidationStatus',
    'validate',
]
