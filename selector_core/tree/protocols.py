"""DocumentTree Protocol: the tree capabilities the engine consumes.

The engine never owns nodes. Every operation receives the tree explicitly,
so any backend with these methods can be plugged in, real document or
synthetic fixture alike.
"""

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class DocumentTree(Protocol):
    """Structural protocol for a queryable element tree.

    Node handles are opaque to the engine and are compared by identity.

    ``query_all`` must:
    - match ``selector`` document-wide and keep only descendants of ``scope``
      (the scoping root when ``scope`` is None);
    - return nodes in document order;
    - raise ``QuerySyntaxError`` when the selector cannot be parsed.
    """

    @property
    def root(self) -> Any: ...

    @property
    def document_element(self) -> Any: ...

    def parent(self, node: Any) -> Optional[Any]: ...

    def children(self, node: Any) -> List[Any]: ...

    def tag(self, node: Any) -> str: ...

    def classes(self, node: Any) -> List[str]: ...

    def attribute(self, node: Any, name: str) -> Optional[str]: ...

    def query_all(self, selector: str, scope: Optional[Any] = None) -> List[Any]: ...
