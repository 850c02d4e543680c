"""
Selector core exceptions
"""


class SelectorCoreError(Exception):
    """Base exception for selector_core"""
    pass


class StructuralPreconditionError(SelectorCoreError):
    """Claimed ancestor is not an ancestor of the node"""
    pass


class QuerySyntaxError(SelectorCoreError):
    """
    Query primitive rejected a selector string.

    ``kind`` is one of ``syntax``, ``identifier`` or ``unsupported``.
    """

    def __init__(self, selector: str, message: str, kind: str = "syntax"):
        super().__init__(f"{message} (selector: {selector!r})")
        self.selector = selector
        self.message = message
        self.kind = kind


class SelectionIncompleteError(SelectorCoreError):
    """Pattern requested before both selections were made"""
    pass


class SnapshotError(SelectorCoreError):
    """Live page could not be captured"""
    pass
