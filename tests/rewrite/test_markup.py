"""Tests for the HTML/JSX rules."""

from __future__ import annotations

from codeshift.rewrite.markup import html_to_jsx, jsx_to_html


def test_html_to_jsx_renames_attributes_and_closes_void_elements() -> None:
    text = (
        '<div class="box" style="font-size: 12px; color: red">'
        '<label for="x">Hi</label>'
        '<input type="checkbox" checked>'
        "<br>"
        "</div>"
    )

    assert html_to_jsx().apply(text) == (
        "<div className=\"box\" style={{fontSize: '12px', color: 'red'}}>"
        '<label htmlFor="x">Hi</label>'
        '<input type="checkbox" checked={true} />'
        "<br />"
        "</div>"
    )


def test_html_to_jsx_converts_comments_and_event_handlers() -> None:
    text = '<!-- note --><button onclick="go()" tabindex="1">Go</button>'

    assert html_to_jsx().apply(text) == (
        '{/* note */}<button onClick="go()" tabIndex="1">Go</button>'
    )


def test_jsx_to_html_reverses_props() -> None:
    text = (
        "<div className=\"box\" style={{fontSize: '12px', color: 'red'}}>"
        "<input checked={true} disabled={false} />"
        "<span />"
        "</div>"
    )

    assert jsx_to_html().apply(text) == (
        '<div class="box" style="font-size: 12px; color: red">'
        "<input checked>"
        "<span></span>"
        "</div>"
    )


def test_jsx_to_html_drops_expressions_and_fragments() -> None:
    text = '<><label htmlFor="x" tabIndex="2" onClick={handle}>{label}</label></>'

    assert jsx_to_html().apply(text) == '<label for="x" tabindex="2"></label>'
