"""Tests for scoped pattern execution."""

from selector_core.engine.generalizer import Pattern, generalize
from selector_core.engine.matcher import MatchSet, filter_by_depth, resolve
from selector_core.engine.paths import relative_path
from selector_core.tree.html import HtmlTree


class TestResolve:

    def test_all_siblings_in_document_order(self, list_tree):
        ul = list_tree.find("ul")
        pattern = Pattern("#main > ul.items", "li.item", "#main > ul.items > li.item")

        matches = resolve(list_tree, pattern, ul, 1)

        assert [li.text for li in matches] == ["One", "Two", "Three", "Four"]
        assert not matches.used_fallback
        assert matches.error is None

    def test_depth_filter_drops_nested_matches(self, nested_tree):
        outer = nested_tree.find("ul.tree")
        pattern = Pattern("body > ul.tree", "li.node", "body > ul.tree > li.node")

        assert len(nested_tree.query_all("li.node", scope=outer)) == 3
        matches = resolve(nested_tree, pattern, outer, 1)

        assert [li.text for li in matches] == ["A", "B"]

    def test_malformed_query_falls_back_to_selections(self, list_tree):
        ul = list_tree.find("ul")
        first = list_tree.find("li.first")
        special = list_tree.find("li.special")
        pattern = Pattern("#main > ul.items", "li.item[", "#main > ul.items > li.item[")

        matches = resolve(list_tree, pattern, ul, 1, [first, special])

        assert matches.nodes == [first, special]
        assert matches.used_fallback
        assert matches.error

    def test_pathological_class_name_falls_back(self):
        tree = HtmlTree.from_html(
            '<ul><li class="foo@bar">a</li><li class="foo@bar">b</li><li class="foo@bar">c</li></ul>'
        )
        ul = tree.find("ul")
        a, _, c = tree.query_all("li")
        pattern = generalize(tree, relative_path(tree, a, ul), relative_path(tree, c, ul), ul)

        assert pattern.relative_query == "li.foo@bar"
        matches = resolve(tree, pattern, ul, 1, [a, c])
        assert matches.nodes == [a, c]
        assert matches.used_fallback

    def test_full_query_round_trip(self, list_tree, nested_tree):
        cases = [
            (list_tree, "li.first", "li.special"),
            (nested_tree, "ul.tree > li:nth-child(1)", "ul.tree > li:nth-child(2)"),
        ]
        for tree, first_sel, second_sel in cases:
            first, second = tree.find(first_sel), tree.find(second_sel)
            anchor = first.getparent()
            pattern = generalize(
                tree,
                relative_path(tree, first, anchor),
                relative_path(tree, second, anchor),
                anchor,
            )
            scoped = resolve(tree, pattern, anchor, 1)
            unscoped = filter_by_depth(tree, tree.query_all(pattern.full_query), anchor, 1)
            assert unscoped == scoped.nodes


class TestMatchSet:

    def test_container_behaviour(self, list_tree):
        lis = list_tree.query_all("li")
        matches = MatchSet(nodes=lis[:2])
        assert len(matches) == 2
        assert lis[0] in matches
        assert lis[3] not in matches
        assert list(matches) == lis[:2]

    def test_empty(self):
        assert len(MatchSet()) == 0
