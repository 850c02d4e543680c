"""Tests for unique anchor selectors."""

from selector_core.engine.anchor import (
    anchor_selector,
    css_escape,
    plain_identifier,
    stable_identifier,
)
from selector_core.engine.paths import reserved_class_predicate
from selector_core.tree.html import HtmlTree


class TestAnchorSelector:

    def test_body(self, list_tree):
        assert anchor_selector(list_tree, list_tree.root) == "body"

    def test_stops_at_id(self, list_tree):
        ul = list_tree.find("ul")
        assert anchor_selector(list_tree, ul) == "#main > ul.items"

    def test_node_with_id(self, list_tree):
        assert anchor_selector(list_tree, list_tree.find("#main")) == "#main"

    def test_nth_of_type_only_with_same_tag_siblings(self):
        tree = HtmlTree.from_html("<div></div><div><p>x</p></div><div></div><span></span>")
        p = tree.find("p")
        assert anchor_selector(tree, p) == "body > div:nth-of-type(2) > p"

    def test_classes_sorted_and_capped(self):
        tree = HtmlTree.from_html('<div class="zeta alpha mid">x</div>')
        assert anchor_selector(tree, tree.find("div")) == "body > div.alpha.mid"

    def test_reserved_classes_skipped(self):
        tree = HtmlTree.from_html('<div class="element-selector-match card">x</div>')
        selector = anchor_selector(tree, tree.find("div"), reserved_class_predicate("element-selector-"))
        assert selector == "body > div.card"

    def test_dynamic_id_ignored(self):
        tree = HtmlTree.from_html('<div id="a1b2c3d4e5"><ul><li>x</li></ul></div>')
        assert anchor_selector(tree, tree.find("ul")) == "body > div > ul"

    def test_dynamic_id_kept_with_plain_lookup(self):
        tree = HtmlTree.from_html('<div id="a1b2c3d4e5"><ul><li>x</li></ul></div>')
        selector = anchor_selector(tree, tree.find("ul"), identifier_of=plain_identifier)
        assert selector == "#a1b2c3d4e5 > ul"

    def test_resolves_to_exactly_the_node(self, list_tree, divergent_tree, nested_tree):
        for tree in (list_tree, divergent_tree, nested_tree):
            for node in tree.query_all("*"):
                assert tree.query_all(anchor_selector(tree, node)) == [node]


class TestIdentifiers:

    def test_stable_identifier(self):
        tree = HtmlTree.from_html(
            '<div id="main"></div><div id="item_123456"></div><div id="9lives"></div><div id=" "></div>'
        )
        ids = [stable_identifier(tree, d) for d in tree.query_all("div")]
        assert ids == ["main", None, None, None]

    def test_plain_identifier(self):
        tree = HtmlTree.from_html('<div id="9lives"></div>')
        assert plain_identifier(tree, tree.find("div")) == "9lives"


class TestCssEscape:

    def test_plain_identifiers_untouched(self):
        assert css_escape("item-list_2") == "item-list_2"

    def test_leading_digit(self):
        assert css_escape("1abc") == "\\31 abc"

    def test_dash_digit(self):
        assert css_escape("-1a") == "-\\31 a"

    def test_lone_dash(self):
        assert css_escape("-") == "\\-"

    def test_punctuation(self):
        assert css_escape("a:b.c") == "a\\:b\\.c"

    def test_non_ascii_kept(self):
        assert css_escape("zażółć") == "zażółć"
