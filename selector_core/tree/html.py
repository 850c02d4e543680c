"""
HTML Tree - lxml-backed DocumentTree

Parses HTML with lxml and answers CSS queries through cssselect, mirroring
the browser's ``querySelectorAll`` semantics: the selector is matched
against the whole document and results are limited to descendants of the
scope element.
"""

import functools
import logging
from typing import List, Optional

import lxml.html
from cssselect import ExpressionError, SelectorError, SelectorSyntaxError
from lxml.cssselect import CSSSelector
from lxml.etree import XPathError

from ..exceptions import QuerySyntaxError

logger = logging.getLogger(__name__)

COMPILE_CACHE_SIZE = 256


def classify_selector_error(message: str) -> str:
    """Map parser error text onto a QuerySyntaxError kind."""
    if "ident" in (message or "").lower():
        return "identifier"
    return "syntax"


@functools.lru_cache(maxsize=COMPILE_CACHE_SIZE)
def compile_selector(selector: str) -> CSSSelector:
    """
    Compile ``selector`` for the HTML translator.

    Rejected selectors raise QuerySyntaxError and are not cached.
    """
    try:
        return CSSSelector(selector, translator="html")
    except SelectorSyntaxError as e:
        raise QuerySyntaxError(selector, str(e), classify_selector_error(str(e))) from e
    except ExpressionError as e:
        raise QuerySyntaxError(selector, str(e), "unsupported") from e
    except SelectorError as e:
        raise QuerySyntaxError(selector, str(e), "syntax") from e
    except XPathError as e:
        raise QuerySyntaxError(selector, str(e), "unsupported") from e


class HtmlTree:
    """
    DocumentTree over an lxml HTML document.

    Node handles are ``lxml.html.HtmlElement`` proxies. lxml reuses the
    same proxy for a node while any reference to it is alive, so identity
    comparison is stable for the nodes the engine holds on to.
    """

    def __init__(self, document: lxml.html.HtmlElement):
        self.document = document.getroottree().getroot()
        bodies = self.document.xpath("//body")
        self._root = bodies[0] if bodies else self.document

    @classmethod
    def from_html(cls, text: str) -> "HtmlTree":
        return cls(lxml.html.document_fromstring(text))

    # =========================================================================
    # DocumentTree
    # =========================================================================

    @property
    def root(self) -> lxml.html.HtmlElement:
        return self._root

    @property
    def document_element(self) -> lxml.html.HtmlElement:
        return self.document

    def parent(self, node) -> Optional[lxml.html.HtmlElement]:
        return node.getparent()

    def children(self, node) -> List[lxml.html.HtmlElement]:
        # Comments and processing instructions have a non-string tag
        return [child for child in node if isinstance(child.tag, str)]

    def tag(self, node) -> str:
        return node.tag.lower()

    def classes(self, node) -> List[str]:
        seen = []
        for name in (node.get("class") or "").split():
            if name not in seen:
                seen.append(name)
        return seen

    def attribute(self, node, name: str) -> Optional[str]:
        return node.get(name)

    def query_all(self, selector: str, scope=None) -> List[lxml.html.HtmlElement]:
        compiled = compile_selector(selector)
        try:
            matches = compiled(self.document)
        except XPathError as e:
            # e.g. namespace prefixes (svg|rect) compile but have no binding
            raise QuerySyntaxError(selector, str(e), "unsupported") from e
        scope = self._root if scope is None else scope
        return [match for match in matches if self._is_descendant(match, scope)]

    # =========================================================================
    # Helpers
    # =========================================================================

    def find(self, selector: str) -> Optional[lxml.html.HtmlElement]:
        """First node matching ``selector`` under the scoping root, or None."""
        matches = self.query_all(selector)
        return matches[0] if matches else None

    @staticmethod
    def _is_descendant(node, scope) -> bool:
        for ancestor in node.iterancestors():
            if ancestor is scope:
                return True
        return False
