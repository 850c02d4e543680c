"""
Incremental Validator - check user-edited selectors

``validate`` is the synchronous check. ``IncrementalValidator`` debounces
rapid edits: each submission cancels the pending one, and only the latest
text is ever validated and reported.

Matches are counted among descendants of the tree's scoping root (``body``
for HTML documents). ``body``, ``html`` and anything under ``head`` never
count, so selectors such as ``title`` report a no-match warning even though
the element exists. Chains that start above the root (``body > ul``) still
match, as with ``querySelectorAll``.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import QuerySyntaxError
from .timer import CancelableTimer, Scheduler

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "empty"
PENDING_MESSAGE = "Validating..."
VALID_MESSAGE = "Valid selector"
NO_MATCH_MESSAGE = "Valid selector, but no elements matched"
GENERIC_SYNTAX_MESSAGE = "Invalid CSS selector syntax"

SYNTAX_MESSAGES = {
    "identifier": "Invalid identifier in selector",
    "syntax": "Invalid selector syntax",
    "unsupported": "Unsupported selector",
}


class ValidationStatus(str, Enum):
    VALID = "valid"
    WARNING = "warning"
    INVALID = "invalid"
    PENDING = "pending"


@dataclass
class ValidationResult:
    """Outcome of validating one selector string"""
    status: ValidationStatus
    match_count: int = 0
    message: str = ""
    selector: str = ""
    matches: List[Any] = field(default_factory=list, repr=False, compare=False)

    @property
    def is_valid(self) -> bool:
        return self.status == ValidationStatus.VALID

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "match_count": self.match_count,
            "message": self.message,
            "selector": self.selector,
        }


def syntax_message(error: QuerySyntaxError) -> str:
    return SYNTAX_MESSAGES.get(error.kind, GENERIC_SYNTAX_MESSAGE)


def validate(tree, text: str) -> ValidationResult:
    """
    Validate ``text`` against the descendants of the scoping root.

    Never raises for bad selector text: syntax failures come back as
    ``invalid`` results.
    """
    selector = (text or "").strip()
    if not selector:
        return ValidationResult(ValidationStatus.INVALID, 0, EMPTY_MESSAGE, selector="")

    try:
        matches = tree.query_all(selector)
    except QuerySyntaxError as e:
        logger.debug(f"Rejected selector {selector!r}: {e.message}")
        return ValidationResult(ValidationStatus.INVALID, 0, syntax_message(e), selector=selector)

    if not matches:
        return ValidationResult(ValidationStatus.WARNING, 0, NO_MATCH_MESSAGE, selector=selector)
    return ValidationResult(
        ValidationStatus.VALID,
        len(matches),
        VALID_MESSAGE,
        selector=selector,
        matches=list(matches),
    )


class IncrementalValidator:
    """
    Debounced validation of editor text.

    Args:
        tree: DocumentTree to validate against
        scheduler: Scheduler driving the quiescence timer
        window: Quiescence window in seconds
        on_result: Called with each delivered ValidationResult
    """

    def __init__(
        self,
        tree,
        scheduler: Scheduler,
        window: float = 0.5,
        on_result: Optional[Callable[[ValidationResult], None]] = None,
    ):
        self.tree = tree
        self.on_result = on_result
        self.last_result: Optional[ValidationResult] = None
        self._timer = CancelableTimer(scheduler, window)

    @property
    def pending(self) -> bool:
        return self._timer.pending

    def submit(self, text: str) -> ValidationResult:
        """Queue ``text`` for validation; returns the interim pending status."""
        self._timer.schedule(lambda: self._run(text))
        return ValidationResult(ValidationStatus.PENDING, 0, PENDING_MESSAGE, selector=(text or "").strip())

    def flush(self) -> bool:
        """Validate the pending text immediately."""
        return self._timer.flush()

    def cancel(self) -> bool:
        """Forget the pending text without validating it."""
        return self._timer.cancel()

    def _run(self, text: str) -> None:
        result = validate(self.tree, text)
        self.last_result = result
        logger.debug(f"Validated {result.selector!r}: {result.status.value} ({result.match_count})")
        if self.on_result is not None:
            self.on_result(result)
