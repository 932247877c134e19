"""Matchers that source rich-text values from block markup.

A matcher is a callable taking the block's root element (or its HTML) and
returning the value of the sub-element picked by ``selector``.
"""

from __future__ import annotations

from typing import Callable, List, Union

from .core.value import Value
from .create import CreateOptions, create_value
from .dom import Element, parse_html

__all__ = ["children", "node"]

Matcher = Callable[[Union[Element, str, None]], Union[Value, List[Value]]]


def _matcher(selector: str | None, multiline: str | None, options: CreateOptions | None) -> Matcher:
    def match(root: Element | str | None) -> Value | List[Value]:
        if isinstance(root, str):
            root = parse_html(root)
        target = root
        if selector and root is not None:
            target = root.find(selector)
        return create_value(target, multiline, options)

    return match


def children(selector: str | None = None, multiline: str | None = None, *, options: CreateOptions | None = None) -> Matcher:
    """Return a matcher for the contents of ``selector`` (or the root itself)."""

    return _matcher(selector, multiline, options)


def node(selector: str | None = None, *, options: CreateOptions | None = None) -> Matcher:
    """Return a single-block matcher for ``selector``."""

    return _matcher(selector, None, options)
