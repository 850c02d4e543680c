"""
Document trees - what the engine reads from

The engine talks to a DocumentTree only. HtmlTree is the lxml backend;
the live module snapshots Playwright pages into it.
"""

from .protocols import DocumentTree
from .html import HtmlTree, classify_selector_error

__all__ = [
    'DocumentTree',
    'HtmlTree',
    'classify_selector_error',
]
