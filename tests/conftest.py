"""
Shared HTML fixtures for selector_core tests
"""

import pytest

from selector_core.config import Config
from selector_core.engine.timer import LogicalClock
from selector_core.session import SelectionSession
from selector_core.tree.html import HtmlTree


LIST_HTML = """
<html><head><title>List</title></head><body>
<div id="main">
  <ul class="items">
    <li class="item first" data-id="1">One</li>
    <li class="item">Two</li>
    <!-- separator -->
    <li class="item special element-selector-selected">Three</li>
    <li class="item">Four</li>
  </ul>
</div>
</body></html>
"""

DIVERGENT_HTML = """
<html><body>
<section class="wrap">
  <div class="card"><div class="body a"><p class="text x">A</p></div></div>
  <div class="card"><span class="body b"><p class="text y">B</p></span></div>
</section>
</body></html>
"""

NESTED_HTML = """
<html><body>
<ul class="tree">
  <li class="node">A<ul><li class="node">A1</li></ul></li>
  <li class="node">B</li>
</ul>
</body></html>
"""


@pytest.fixture
def list_tree():
    return HtmlTree.from_html(LIST_HTML)


@pytest.fixture
def divergent_tree():
    return HtmlTree.from_html(DIVERGENT_HTML)


@pytest.fixture
def nested_tree():
    return HtmlTree.from_html(NESTED_HTML)


@pytest.fixture
def clock():
    return LogicalClock()


@pytest.fixture
def engine_config():
    return Config(
        reserved_class_prefix="element-selector-",
        validation_debounce_ms=500,
        anchor_max_classes=2,
        skip_dynamic_ids=True,
    )


@pytest.fixture
def session(list_tree, clock, engine_config):
    return SelectionSession(list_tree, cfg=engine_config, scheduler=clock)
