"""Tests for the lxml-backed DocumentTree."""

import pytest

from selector_core.exceptions import QuerySyntaxError
from selector_core.tree import DocumentTree, HtmlTree, classify_selector_error
from selector_core.tree.html import COMPILE_CACHE_SIZE, compile_selector


class TestHtmlTree:
    """Tree navigation over parsed HTML."""

    def test_satisfies_protocol(self, list_tree):
        assert isinstance(list_tree, DocumentTree)

    def test_root_is_body(self, list_tree):
        assert list_tree.tag(list_tree.root) == "body"
        assert list_tree.tag(list_tree.document_element) == "html"

    def test_children_skip_comments(self, list_tree):
        ul = list_tree.find("ul.items")
        children = list_tree.children(ul)
        assert [list_tree.tag(c) for c in children] == ["li", "li", "li", "li"]

    def test_classes_keep_order_without_duplicates(self):
        tree = HtmlTree.from_html('<p class="b a b  c">x</p>')
        assert tree.classes(tree.find("p")) == ["b", "a", "c"]

    def test_attribute(self, list_tree):
        li = list_tree.find("li.first")
        assert list_tree.attribute(li, "data-id") == "1"
        assert list_tree.attribute(li, "missing") is None

    def test_find_returns_none_without_match(self, list_tree):
        assert list_tree.find("table") is None


class TestQueryAll:
    """Scoped execution follows querySelectorAll semantics."""

    def test_document_order(self, list_tree):
        texts = [li.text for li in list_tree.query_all("li")]
        assert texts == ["One", "Two", "Three", "Four"]

    def test_default_scope_excludes_head(self, list_tree):
        assert list_tree.query_all("title") == []

    def test_selector_chain_may_start_outside_scope(self, list_tree):
        ul = list_tree.find("ul")
        assert len(list_tree.query_all("div#main li", scope=ul)) == 4

    def test_scope_itself_is_not_matched(self, list_tree):
        ul = list_tree.find("ul")
        assert list_tree.query_all("ul", scope=ul) == []

    def test_syntax_error(self, list_tree):
        with pytest.raises(QuerySyntaxError) as exc:
            list_tree.query_all("###not a selector")
        assert exc.value.kind == "syntax"
        assert exc.value.selector == "###not a selector"

    def test_identifier_error(self, list_tree):
        with pytest.raises(QuerySyntaxError) as exc:
            list_tree.query_all("div.")
        assert exc.value.kind == "identifier"

    def test_unsupported_pseudo_class(self, list_tree):
        with pytest.raises(QuerySyntaxError) as exc:
            list_tree.query_all("li:frobnicate")
        assert exc.value.kind == "unsupported"

    @pytest.mark.parametrize("selector", ["svg|rect", "ns|*", "[a|b]"])
    def test_namespace_prefix_is_unsupported(self, list_tree, selector):
        with pytest.raises(QuerySyntaxError) as exc:
            list_tree.query_all(selector)
        assert exc.value.kind == "unsupported"
        assert exc.value.selector == selector


class TestCompileSelector:
    """Compiled selectors are shared across trees in a bounded cache."""

    def test_same_selector_reuses_compiled_object(self):
        assert compile_selector("ul > li.item") is compile_selector("ul > li.item")

    def test_cache_is_bounded(self):
        assert compile_selector.cache_info().maxsize == COMPILE_CACHE_SIZE

    def test_shared_between_trees(self, list_tree, nested_tree):
        compile_selector.cache_clear()
        list_tree.query_all("li")
        nested_tree.query_all("li")
        info = compile_selector.cache_info()
        assert info.misses == 1
        assert info.hits == 1

    def test_rejected_selector_is_not_cached(self):
        compile_selector.cache_clear()
        with pytest.raises(QuerySyntaxError):
            compile_selector("div.")
        assert compile_selector.cache_info().currsize == 0


def test_classify_selector_error():
    assert classify_selector_error("Expected ident, got <EOF at 4>") == "identifier"
    assert classify_selector_error("Expected selector, got <DELIM '#' at 0>") == "syntax"
    assert classify_selector_error("") == "syntax"
