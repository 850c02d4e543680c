#!/usr/bin/env python3
"""
Selector Core CLI - infer and check selectors on a page

Usage:
    selector-core infer --html page.html --first "li:nth-child(1)" --second "li:nth-child(3)"
    selector-core infer --url https://example.com --first "#a" --second "#b" --json
    selector-core validate --html page.html "ul.items > li"
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from lxml.etree import ParserError

from .config import config
from .diagnostics import enable_diagnostics, get_logger
from .engine.timer import LogicalClock
from .engine.validator import ValidationStatus, validate
from .exceptions import QuerySyntaxError, SnapshotError
from .session import SelectionSession
from .tree.html import HtmlTree
from .tree.live import open_snapshot

logger = get_logger(__name__)

STATUS_ICONS = {
    ValidationStatus.VALID: "✓",
    ValidationStatus.WARNING: "⚠",
    ValidationStatus.INVALID: "✗",
    ValidationStatus.PENDING: "⟳",
}


def _configure_diagnostics(args):
    if getattr(args, "verbose", False):
        enable_diagnostics("DEBUG")
    elif getattr(args, "quiet", False):
        enable_diagnostics("ERROR")
    else:
        enable_diagnostics("WARNING")


def _load_tree(args) -> HtmlTree:
    if args.html:
        return HtmlTree.from_html(Path(args.html).read_text(encoding="utf-8"))
    return asyncio.run(open_snapshot(
        args.url,
        headless=config.headless,
        timeout_ms=config.navigation_timeout_ms,
    ))


def _find_node(tree: HtmlTree, selector: str, label: str):
    try:
        node = tree.find(selector)
    except QuerySyntaxError as e:
        raise ValueError(f"Invalid {label} selector: {e.message}") from e
    if node is None:
        raise ValueError(f"No element matches {label} selector {selector!r}")
    return node


def cmd_infer(args):
    """Infer a selector from two example elements"""
    _configure_diagnostics(args)
    try:
        tree = _load_tree(args)
        first = _find_node(tree, args.first, "first")
        second = _find_node(tree, args.second, "second")
    except (OSError, ParserError, SnapshotError, ValueError) as e:
        logger.error(e)
        return 1

    session = SelectionSession(tree, scheduler=LogicalClock())
    session.select_node(first)
    session.select_node(second)
    pattern, matches = session.pattern, session.matches

    result = {
        "full_query": pattern.full_query,
        "scope_selector": pattern.scope_selector,
        "relative_query": pattern.relative_query,
        "match_count": len(matches),
        "used_fallback": matches.used_fallback,
    }
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        print(f"Selector: {pattern.full_query}")
        print(f"  Scope:    {pattern.scope_selector}")
        print(f"  Pattern:  {pattern.relative_query}")
        print(f"  Matches:  {len(matches)}")
        if matches.used_fallback:
            print(f"⚠ Pattern could not be executed ({matches.error}); showing the two examples")
    return 0


def cmd_validate(args):
    """Validate a selector against a page"""
    _configure_diagnostics(args)
    try:
        tree = _load_tree(args)
    except (OSError, ParserError, SnapshotError) as e:
        logger.error(e)
        return 1

    result = validate(tree, args.selector)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"{STATUS_ICONS[result.status]} {result.message}")
        label = "element matched" if result.match_count == 1 else "elements matched"
        print(f"  {result.match_count} {label}")
    return 1 if result.status == ValidationStatus.INVALID else 0


def _add_source_args(parser):
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--html', help='Path to an HTML file')
    source.add_argument('--url', help='URL to load in a headless browser')
    parser.add_argument('--json', action='store_true', help='Print JSON')
    parser.add_argument('--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--quiet', '-q', action='store_true', help='Quiet mode')


def build_parser():
    parser = argparse.ArgumentParser(
        prog="selector-core",
        description="Infer CSS selectors from two example elements",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    infer_parser = subparsers.add_parser('infer', help='Infer a selector from two examples')
    _add_source_args(infer_parser)
    infer_parser.add_argument('--first', required=True, help='Selector of the first example element')
    infer_parser.add_argument('--second', required=True, help='Selector of the second example element')
    infer_parser.set_defaults(func=cmd_infer)

    validate_parser = subparsers.add_parser('validate', help='Validate a selector')
    _add_source_args(validate_parser)
    validate_parser.add_argument('selector', help='CSS selector to check')
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
