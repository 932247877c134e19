"""Markdown import: render with markdown-it-py, then convert the HTML."""

from __future__ import annotations

import logging
from typing import Dict, Union, cast

from markdown_it import MarkdownIt

from ..core.value import MultilineRecord, Record
from ..create import CreateOptions, create
from .settings import ConversionSettings

__all__ = ["render_markdown", "from_markdown", "from_markdown_inline"]

LOGGER = logging.getLogger(__name__)

_RENDERERS: Dict[bool, MarkdownIt] = {}


def _build_renderer(breaks: bool) -> MarkdownIt:
    renderer = _RENDERERS.get(breaks)
    if renderer is None:
        renderer = MarkdownIt("commonmark", {"html": False, "breaks": breaks})
        renderer.enable("table")
        renderer.enable("strikethrough")
        _RENDERERS[breaks] = renderer
    return renderer


def render_markdown(text: str, *, inline: bool = False, breaks: bool = True) -> str:
    """Render Markdown ``text`` to HTML; raw HTML in the source is escaped."""

    renderer = _build_renderer(breaks)
    source = text or ""
    if inline:
        return renderer.renderInline(source)
    return renderer.render(source)


def from_markdown(
    text: str,
    *,
    multiline_tag: str | None = "p",
    options: CreateOptions | None = None,
    settings: ConversionSettings | None = None,
) -> Union[Record, MultilineRecord]:
    """Convert Markdown into a record, one block per ``multiline_tag`` element.

    Blocks of other kinds (headings, lists, code) are skipped in multiline
    mode; pass ``multiline_tag=None`` to flatten the whole document into one
    value with block tags as formats.
    """

    breaks = settings.markdown_breaks if settings is not None else True
    if options is None and settings is not None:
        options = settings.to_options()
    markup = render_markdown(text, breaks=breaks)
    LOGGER.debug("Rendered %d characters of Markdown into %d characters of HTML", len(text or ""), len(markup))
    return create(markup, None, multiline_tag, options)


def from_markdown_inline(
    text: str,
    *,
    options: CreateOptions | None = None,
    settings: ConversionSettings | None = None,
) -> Record:
    """Convert inline Markdown (no paragraphs) into a single-block record."""

    breaks = settings.markdown_breaks if settings is not None else True
    if options is None and settings is not None:
        options = settings.to_options()
    return cast(Record, create(render_markdown(text, inline=True, breaks=breaks), None, None, options))
